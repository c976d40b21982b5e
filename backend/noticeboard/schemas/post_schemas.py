"""
帖子相关的数据模式
"""

from pydantic import BaseModel, Field, field_serializer
from typing import Optional, List, Literal
from datetime import datetime

from noticeboard.core.utils import format_timestamp_with_timezone
from noticeboard.schemas.profile_schemas import ProfileResponse

class PostCreate(BaseModel):
    """创建帖子的请求"""
    content: str = Field("", description="正文（提问内容或投票说明）")
    kind: Literal["query", "poll"] = Field("query", description="帖子类型")
    poll_question: Optional[str] = Field(None, description="投票问题，仅poll类型需要")

class PostCreated(BaseModel):
    """创建帖子的响应，返回新帖子ID"""
    id: str
    kind: str
    created_at: datetime

    @field_serializer('created_at')
    def serialize_dt(self, dt: datetime) -> str:
        return format_timestamp_with_timezone(dt)

class PollOptionsCreate(BaseModel):
    """为投票帖子添加选项的请求"""
    options: List[str] = Field(..., description="选项文本列表（按显示顺序）")

class PollOptionResponse(BaseModel):
    """投票选项"""
    id: str
    text: str
    votes: int = 0

class PollResponse(BaseModel):
    """投票信息"""
    question: str
    options: List[PollOptionResponse]
    total_votes: int
    user_vote: Optional[str] = None  # 当前用户所选选项ID

class PostResponse(BaseModel):
    """帖子响应"""
    id: str
    author: Optional[ProfileResponse] = None
    author_name: str
    content: str
    kind: str
    created_at: datetime
    likes_count: int
    replies_count: int
    user_liked: bool = False
    poll: Optional[PollResponse] = None

    @field_serializer('created_at')
    def serialize_dt(self, dt: datetime) -> str:
        return format_timestamp_with_timezone(dt)

class VoteRequest(BaseModel):
    """投票请求"""
    option_id: str = Field(..., min_length=1, description="所选选项ID")

class LikeResponse(BaseModel):
    """点赞/取消点赞的结果"""
    post_id: str
    liked: bool
    likes_count: int
