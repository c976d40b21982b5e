"""
匿名提交API路由
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from noticeboard.api.deps import get_viewer
from noticeboard.core.database import get_db
from noticeboard.core.exceptions import AuthorizationError, NotFoundError
from noticeboard.models.profile import Profile
from noticeboard.services.submission_service import SubmissionService
from noticeboard.schemas.submission_schemas import (
    SubmissionCreate,
    SubmissionResponse,
    SubmissionStatusUpdate
)

router = APIRouter()

@router.post("/", response_model=SubmissionResponse)
async def create_submission(
    submission_data: SubmissionCreate,
    db: Session = Depends(get_db)
):
    """匿名提交（不读取当前用户）"""
    service = SubmissionService(db)
    try:
        return await service.create_submission(submission_data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to submit: {str(e)}")

@router.get("/", response_model=List[SubmissionResponse])
async def list_submissions(
    viewer: Optional[Profile] = Depends(get_viewer),
    db: Session = Depends(get_db)
):
    """获取匿名提交列表（仅管理员）"""
    service = SubmissionService(db)
    try:
        return await service.list_submissions(viewer)
    except AuthorizationError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.patch("/{submission_id}", response_model=SubmissionResponse)
async def update_submission_status(
    submission_id: str,
    status_data: SubmissionStatusUpdate,
    viewer: Optional[Profile] = Depends(get_viewer),
    db: Session = Depends(get_db)
):
    """更新提交状态（仅管理员）"""
    service = SubmissionService(db)
    try:
        return await service.update_status(submission_id, status_data.status, viewer)
    except AuthorizationError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
