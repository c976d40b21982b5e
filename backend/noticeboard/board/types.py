"""
公告板客户端视图模型

所有模型均为不可变对象，状态变更通过 model_copy 生成新对象。
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime

# 变更事件与后端推送共用同一个模式
from noticeboard.schemas.realtime_schemas import ChangeEvent

PostKind = Literal["query", "poll"]
Category = Literal["bullying", "mental-health", "academic", "safety", "other"]
Urgency = Literal["low", "medium", "high"]
Status = Literal["new", "reviewed", "resolved"]
Tab = Literal["feed", "anonymous", "admin"]
NoticeLevel = Literal["info", "success", "error"]


class Viewer(BaseModel):
    """当前会话用户；匿名用户没有ID，且永远不是管理员"""
    id: Optional[str] = None
    full_name: Optional[str] = None
    is_admin: bool = False

    @property
    def is_anonymous(self) -> bool:
        return self.id is None

    class Config:
        frozen = True


class PollOption(BaseModel):
    """投票选项"""
    id: str
    text: str
    votes: int = Field(0, ge=0)

    class Config:
        frozen = True


class Poll(BaseModel):
    """投票；total_votes 始终等于各选项票数之和"""
    question: str
    options: List[PollOption]
    total_votes: int = 0
    user_vote: Optional[str] = None

    @property
    def has_voted(self) -> bool:
        return self.user_vote is not None

    class Config:
        frozen = True


class FeedPost(BaseModel):
    """动态中的帖子

    user_liked 是服务端确认的点赞状态；pending_like 是尚未被重新拉取
    覆盖的本地点赞状态（None 表示与服务端一致）。
    """
    id: str
    author_name: str = "Anonymous"
    content: str = ""
    kind: PostKind = "query"
    created_at: datetime
    likes_count: int = 0
    replies_count: int = 0
    user_liked: bool = False
    pending_like: Optional[bool] = None
    poll: Optional[Poll] = None

    class Config:
        frozen = True


class Submission(BaseModel):
    """匿名提交（不含任何作者信息）"""
    id: str
    category: Category
    content: str
    urgency: Urgency = "medium"
    status: Status = "new"
    created_at: datetime
    updated_at: datetime

    class Config:
        frozen = True


class SubmissionDraft(BaseModel):
    """匿名表单提交的内容"""
    category: Category
    content: str
    urgency: Urgency = "medium"

    class Config:
        frozen = True


class PollDraft(BaseModel):
    question: str
    options: List[str]

    class Config:
        frozen = True


class PostDraft(BaseModel):
    """发帖组件提交的内容"""
    kind: PostKind
    content: str
    poll: Optional[PollDraft] = None

    class Config:
        frozen = True


class Notice(BaseModel):
    """界面提示消息"""
    level: NoticeLevel = "info"
    title: str
    message: str = ""

    class Config:
        frozen = True
