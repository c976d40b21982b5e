"""
请求依赖：根据 X-Viewer-Id 请求头解析当前用户
"""

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session
from typing import Optional
from noticeboard.core.database import get_db
from noticeboard.models.profile import Profile
from noticeboard.services.profile_service import ProfileService

def get_viewer(
    x_viewer_id: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> Optional[Profile]:
    """获取当前用户，未携带或无效的ID视为匿名用户"""
    return ProfileService(db).find(x_viewer_id)

def require_viewer(viewer: Optional[Profile] = Depends(get_viewer)) -> Profile:
    """要求已识别的用户"""
    if viewer is None:
        raise HTTPException(status_code=401, detail="Sign in required")
    return viewer
