"""
用户资料API路由
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from noticeboard.api.deps import require_viewer
from noticeboard.core.database import get_db
from noticeboard.core.exceptions import ConflictError, NotFoundError
from noticeboard.models.profile import Profile
from noticeboard.services.profile_service import ProfileService
from noticeboard.schemas.profile_schemas import ProfileCreate, ProfileResponse

router = APIRouter()

@router.post("/", response_model=ProfileResponse)
async def create_profile(
    profile_data: ProfileCreate,
    db: Session = Depends(get_db)
):
    """创建用户资料"""
    service = ProfileService(db)
    try:
        return await service.create_profile(profile_data)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

@router.get("/me", response_model=ProfileResponse)
async def get_current_profile(viewer: Profile = Depends(require_viewer)):
    """获取当前用户资料"""
    return ProfileResponse.model_validate(viewer)

@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(
    profile_id: str,
    db: Session = Depends(get_db)
):
    """根据ID获取用户资料"""
    service = ProfileService(db)
    try:
        return await service.get_profile(profile_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
