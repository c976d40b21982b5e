"""
匿名提交相关的数据模式

注意：这里的任何模式都不包含用户字段。
"""

from pydantic import BaseModel, Field, field_serializer
from typing import Literal
from datetime import datetime

from noticeboard.core.utils import format_timestamp_with_timezone

Category = Literal["bullying", "mental-health", "academic", "safety", "other"]
Urgency = Literal["low", "medium", "high"]
Status = Literal["new", "reviewed", "resolved"]

class SubmissionCreate(BaseModel):
    """创建匿名提交的请求"""
    category: Category = Field(..., description="分类")
    content: str = Field(..., min_length=1, description="内容")
    urgency: Urgency = Field("medium", description="紧急程度")

class SubmissionStatusUpdate(BaseModel):
    """更新提交状态的请求（仅管理员）"""
    status: Status

class SubmissionResponse(BaseModel):
    """匿名提交的响应"""
    id: str
    category: str
    content: str
    urgency: str
    status: str
    created_at: datetime
    updated_at: datetime

    @field_serializer('created_at', 'updated_at')
    def serialize_dt(self, dt: datetime) -> str:
        return format_timestamp_with_timezone(dt)

    class Config:
        from_attributes = True
