"""
帖子与投票选项数据模型
"""

import uuid
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from noticeboard.core.database import Base
from noticeboard.core.utils import utcnow

class Post(Base):
    """帖子表（提问或投票）"""
    __tablename__ = "posts"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    author_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    content = Column(Text, nullable=False, default="")
    type = Column(String(10), nullable=False, default="query")  # query, poll
    poll_question = Column(Text, nullable=True)
    likes_count = Column(Integer, nullable=False, default=0)
    replies_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    
    # 关系
    author = relationship("Profile")
    options = relationship(
        "PollOption",
        back_populates="post",
        order_by="PollOption.position",
        cascade="all, delete-orphan"
    )

class PollOption(Base):
    """投票选项表"""
    __tablename__ = "poll_options"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    post_id = Column(String(36), ForeignKey("posts.id"), nullable=False, index=True)
    option_text = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, default=0)  # 创建顺序
    votes_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    
    # 关系
    post = relationship("Post", back_populates="options")
