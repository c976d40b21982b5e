"""
用户资料服务
"""

from sqlalchemy.orm import Session
from typing import Optional
from noticeboard.core.exceptions import ConflictError, NotFoundError
from noticeboard.models.profile import Profile
from noticeboard.schemas.profile_schemas import ProfileCreate, ProfileResponse

class ProfileService:
    """用户资料服务"""

    def __init__(self, db: Session):
        self.db = db

    async def create_profile(self, profile_data: ProfileCreate) -> ProfileResponse:
        """创建用户资料"""
        if profile_data.email:
            existing = self.db.query(Profile).filter(Profile.email == profile_data.email).first()
            if existing:
                raise ConflictError(f"Email '{profile_data.email}' is already registered")

        profile = Profile(
            full_name=profile_data.full_name,
            email=profile_data.email,
            is_admin=profile_data.is_admin
        )
        self.db.add(profile)
        self.db.commit()
        self.db.refresh(profile)
        return ProfileResponse.model_validate(profile)

    async def get_profile(self, profile_id: str) -> ProfileResponse:
        """根据ID获取用户资料"""
        profile = self.find(profile_id)
        if not profile:
            raise NotFoundError("Profile not found")
        return ProfileResponse.model_validate(profile)

    def find(self, profile_id: Optional[str]) -> Optional[Profile]:
        if not profile_id:
            return None
        return self.db.query(Profile).filter(Profile.id == profile_id).first()
