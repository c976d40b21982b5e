"""
匿名提交与管理员分诊服务
"""

from sqlalchemy.orm import Session
from typing import List, Optional
from noticeboard.core.exceptions import AuthorizationError, NotFoundError
from noticeboard.core.utils import utcnow
from noticeboard.models.profile import Profile
from noticeboard.models.submission import AnonymousSubmission
from noticeboard.schemas.submission_schemas import SubmissionCreate, SubmissionResponse
from noticeboard.services.realtime_service import ChangeNotifier, get_change_notifier

class SubmissionService:
    """匿名提交服务"""

    def __init__(self, db: Session, notifier: Optional[ChangeNotifier] = None):
        self.db = db
        self.notifier = notifier or get_change_notifier()

    async def create_submission(self, submission_data: SubmissionCreate) -> SubmissionResponse:
        """创建匿名提交，任何用户都可以提交，不记录提交者"""
        content = submission_data.content.strip()
        if not content:
            raise ValueError("Submission content is required")

        submission = AnonymousSubmission(
            category=submission_data.category,
            content=content,
            urgency=submission_data.urgency,
            status="new"
        )
        self.db.add(submission)
        self.db.commit()
        self.db.refresh(submission)

        print(f"🔒 收到匿名提交 {submission.id[:8]} ({submission.category}, {submission.urgency})")
        await self.notifier.publish("anonymous_submissions", "INSERT", submission.id)
        return SubmissionResponse.model_validate(submission)

    async def list_submissions(self, viewer: Optional[Profile]) -> List[SubmissionResponse]:
        """获取全部匿名提交（仅管理员），按创建时间倒序"""
        self._require_admin(viewer)
        submissions = self.db.query(AnonymousSubmission).order_by(
            AnonymousSubmission.created_at.desc()
        ).all()
        return [SubmissionResponse.model_validate(submission) for submission in submissions]

    async def update_status(self, submission_id: str, status: str, viewer: Optional[Profile]) -> SubmissionResponse:
        """更新提交状态（仅管理员）；任意状态之间都可以切换"""
        self._require_admin(viewer)
        submission = self.db.query(AnonymousSubmission).filter(
            AnonymousSubmission.id == submission_id
        ).first()
        if not submission:
            raise NotFoundError("Submission not found")

        submission.status = status
        submission.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(submission)

        await self.notifier.publish("anonymous_submissions", "UPDATE", submission.id)
        return SubmissionResponse.model_validate(submission)

    def _require_admin(self, viewer: Optional[Profile]):
        if viewer is None or not viewer.is_admin:
            raise AuthorizationError("Admin access required")
