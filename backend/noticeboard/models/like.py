"""
点赞数据模型
"""

import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, UniqueConstraint
from noticeboard.core.database import Base
from noticeboard.core.utils import utcnow

class PostLike(Base):
    """点赞表，每个用户每个帖子最多一条"""
    __tablename__ = "post_likes"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_post_like_post_user"),
    )
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    post_id = Column(String(36), ForeignKey("posts.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
