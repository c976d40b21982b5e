"""
帖子API路由
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from noticeboard.api.deps import get_viewer, require_viewer
from noticeboard.core.database import get_db
from noticeboard.core.exceptions import AuthorizationError, ConflictError, NotFoundError
from noticeboard.models.profile import Profile
from noticeboard.services.post_service import PostService
from noticeboard.schemas.post_schemas import (
    PostCreate,
    PostCreated,
    PostResponse,
    PollOptionsCreate,
    PollOptionResponse,
    VoteRequest,
    LikeResponse
)

router = APIRouter()

@router.get("/", response_model=List[PostResponse])
async def list_posts(
    viewer: Optional[Profile] = Depends(get_viewer),
    db: Session = Depends(get_db)
):
    """获取帖子列表（最新在前）"""
    service = PostService(db)
    try:
        return await service.list_posts(viewer.id if viewer else None)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load posts: {str(e)}")

@router.post("/", response_model=PostCreated)
async def create_post(
    post_data: PostCreate,
    viewer: Profile = Depends(require_viewer),
    db: Session = Depends(get_db)
):
    """创建帖子"""
    service = PostService(db)
    try:
        return await service.create_post(viewer.id, post_data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create post: {str(e)}")

@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    viewer: Optional[Profile] = Depends(get_viewer),
    db: Session = Depends(get_db)
):
    """获取单个帖子"""
    service = PostService(db)
    try:
        return await service.get_post(post_id, viewer.id if viewer else None)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.post("/{post_id}/options", response_model=List[PollOptionResponse])
async def add_poll_options(
    post_id: str,
    options_data: PollOptionsCreate,
    viewer: Profile = Depends(require_viewer),
    db: Session = Depends(get_db)
):
    """为投票帖子添加选项"""
    service = PostService(db)
    try:
        return await service.add_poll_options(post_id, viewer.id, options_data.options)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AuthorizationError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.put("/{post_id}/vote", response_model=PostResponse)
async def vote(
    post_id: str,
    vote_data: VoteRequest,
    viewer: Profile = Depends(require_viewer),
    db: Session = Depends(get_db)
):
    """投票（每个用户每个投票一票）"""
    service = PostService(db)
    try:
        return await service.cast_vote(post_id, viewer.id, vote_data.option_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/{post_id}/like", response_model=LikeResponse)
async def like_post(
    post_id: str,
    viewer: Profile = Depends(require_viewer),
    db: Session = Depends(get_db)
):
    """点赞"""
    service = PostService(db)
    try:
        return await service.like_post(post_id, viewer.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.delete("/{post_id}/like", response_model=LikeResponse)
async def unlike_post(
    post_id: str,
    viewer: Profile = Depends(require_viewer),
    db: Session = Depends(get_db)
):
    """取消点赞"""
    service = PostService(db)
    try:
        return await service.unlike_post(post_id, viewer.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
