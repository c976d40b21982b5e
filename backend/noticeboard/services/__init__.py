# 业务逻辑服务包
from .post_service import PostService
from .submission_service import SubmissionService
from .profile_service import ProfileService
from .realtime_service import ChangeNotifier, get_change_notifier

__all__ = ["PostService", "SubmissionService", "ProfileService", "ChangeNotifier", "get_change_notifier"]
