"""
API路由模块
"""

from fastapi import APIRouter
from .post_routes import router as post_router
from .submission_routes import router as submission_router
from .profile_routes import router as profile_router
from .realtime_routes import router as realtime_router

# 创建主路由器
api_router = APIRouter()

# 注册各个功能模块的路由
api_router.include_router(post_router, prefix="/posts", tags=["Feed"])
api_router.include_router(submission_router, prefix="/submissions", tags=["Anonymous submissions"])
api_router.include_router(profile_router, prefix="/profiles", tags=["Profiles"])
api_router.include_router(realtime_router, prefix="/realtime", tags=["Realtime"])
