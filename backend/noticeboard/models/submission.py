"""
匿名提交数据模型
"""

import uuid
from sqlalchemy import Column, String, DateTime, Text
from noticeboard.core.database import Base
from noticeboard.core.utils import utcnow

class AnonymousSubmission(Base):
    """匿名提交表，不保存任何用户字段"""
    __tablename__ = "anonymous_submissions"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    category = Column(String(30), nullable=False)      # bullying, mental-health, academic, safety, other
    content = Column(Text, nullable=False)
    urgency = Column(String(10), nullable=False, default="medium")  # low, medium, high
    status = Column(String(10), nullable=False, default="new")      # new, reviewed, resolved
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow)
