"""
用户资料相关的数据模式
"""

from pydantic import BaseModel, Field
from typing import Optional

class ProfileCreate(BaseModel):
    """创建用户资料的请求"""
    full_name: str = Field(..., min_length=1, max_length=100, description="显示名称")
    email: Optional[str] = Field(None, description="邮箱（可选）")
    is_admin: bool = Field(False, description="是否为管理员")

class ProfileResponse(BaseModel):
    """用户资料的响应"""
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    is_admin: bool = False

    class Config:
        from_attributes = True
