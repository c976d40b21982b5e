"""
实时变更通知API路由
"""

import asyncio
import json
from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import StreamingResponse
from noticeboard.core.config import settings
from noticeboard.services.realtime_service import get_change_notifier

router = APIRouter()

@router.websocket("/ws")
async def websocket_changes_endpoint(websocket: WebSocket):
    """变更通知WebSocket连接端点"""
    notifier = get_change_notifier()
    await notifier.connect(websocket)

    try:
        # 发送欢迎消息
        await notifier.send_personal_message({
            "type": "connected",
            "message": "Subscribed to board changes"
        }, websocket)

        # 监听消息
        while True:
            data = await websocket.receive_text()
            try:
                message_data = json.loads(data)
            except json.JSONDecodeError:
                print(f"收到无效JSON消息: {data}")
                continue

            if message_data.get("type") == "ping":
                await notifier.send_personal_message({
                    "type": "pong",
                    "timestamp": message_data.get("timestamp")
                }, websocket)

    except WebSocketDisconnect:
        notifier.disconnect(websocket)
    except Exception as e:
        print(f"WebSocket错误: {e}")
        notifier.disconnect(websocket)

@router.get("/stream")
async def change_stream(request: Request):
    """变更通知SSE端点"""
    notifier = get_change_notifier()
    queue = notifier.subscribe()

    async def generate():
        try:
            while True:
                if await request.is_disconnected():
                    break

                try:
                    event = await asyncio.wait_for(
                        queue.get(),
                        timeout=settings.REALTIME_HEARTBEAT_INTERVAL
                    )
                    yield f"data: {json.dumps(event)}\n\n"
                except asyncio.TimeoutError:
                    # 空闲时发送心跳
                    yield f"data: {json.dumps({'type': 'heartbeat'})}\n\n"
        finally:
            notifier.unsubscribe(queue)

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        }
    )
