"""
实时变更通知服务
"""

import asyncio
import json
from fastapi import WebSocket
from typing import List, Optional
from noticeboard.schemas.realtime_schemas import ChangeEvent

class ChangeNotifier:
    """表变更通知管理器（WebSocket连接 + SSE订阅队列）"""

    def __init__(self):
        # WebSocket订阅连接
        self.connections: List[WebSocket] = []
        # SSE订阅者队列
        self.queues: List[asyncio.Queue] = []

    async def connect(self, websocket: WebSocket):
        """接受WebSocket订阅"""
        await websocket.accept()
        # 检查是否已存在，避免重复连接
        if websocket not in self.connections:
            self.connections.append(websocket)
            print(f"新订阅连接加入，当前连接数: {len(self.connections)}")

    def disconnect(self, websocket: WebSocket):
        """断开WebSocket订阅"""
        if websocket in self.connections:
            self.connections.remove(websocket)
            print(f"订阅连接断开，当前连接数: {len(self.connections)}")

    def subscribe(self) -> asyncio.Queue:
        """注册SSE订阅队列"""
        queue: asyncio.Queue = asyncio.Queue()
        self.queues.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue):
        """移除SSE订阅队列"""
        if queue in self.queues:
            self.queues.remove(queue)

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """发送个人消息"""
        try:
            await websocket.send_text(json.dumps(message, ensure_ascii=False))
        except Exception as e:
            print(f"发送个人消息失败: {e}")

    async def publish(self, table: str, event: str, record_id: Optional[str] = None):
        """广播表变更事件，事件中只包含表名、事件类型和记录ID"""
        change = ChangeEvent(table=table, event=event, id=record_id)
        message = change.model_dump()

        for queue in self.queues.copy():
            queue.put_nowait(message)

        connections = self.connections.copy()  # 创建副本进行迭代
        if not connections:
            return

        message_text = json.dumps(message, ensure_ascii=False)
        failed_connections = []
        success_count = 0

        for connection in connections:
            try:
                await connection.send_text(message_text)
                success_count += 1
            except Exception as e:
                print(f"广播消息失败: {e}")
                failed_connections.append(connection)

        # 移除失败的连接
        for failed_connection in failed_connections:
            if failed_connection in self.connections:
                self.connections.remove(failed_connection)

        if failed_connections:
            print(f"移除 {len(failed_connections)} 个失效连接，剩余连接数: {len(self.connections)}")

        print(f"📡 {table} {event} 广播完成: {success_count} 成功, {len(failed_connections)} 失败")


# 使用全局变更通知管理器
_notifier = None

def get_change_notifier() -> ChangeNotifier:
    """获取全局变更通知管理器实例"""
    global _notifier
    if _notifier is None:
        _notifier = ChangeNotifier()
    return _notifier
