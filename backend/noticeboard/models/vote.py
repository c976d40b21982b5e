"""
投票数据模型
"""

import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from noticeboard.core.database import Base
from noticeboard.core.utils import utcnow

class PollVote(Base):
    """投票记录表，每个用户每个投票最多一条"""
    __tablename__ = "poll_votes"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_poll_vote_post_user"),
    )
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    post_id = Column(String(36), ForeignKey("posts.id"), nullable=False, index=True)
    option_id = Column(String(36), ForeignKey("poll_options.id"), nullable=False)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    
    # 关系
    option = relationship("PollOption")
