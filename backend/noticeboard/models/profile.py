"""
用户资料数据模型
"""

import uuid
from sqlalchemy import Column, String, DateTime, Boolean
from noticeboard.core.database import Base
from noticeboard.core.utils import utcnow

class Profile(Base):
    """用户资料表"""
    __tablename__ = "profiles"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=True, unique=True)
    full_name = Column(String(100), nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
