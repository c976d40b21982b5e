"""
异常定义
"""

from typing import Optional


class NoticeBoardError(Exception):
    """公告板基础异常"""


class ValidationError(NoticeBoardError):
    """必填字段缺失或为空，在表单组件内处理"""

    def __init__(self, message: str = "Please fill in all required fields.", field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class BackendError(NoticeBoardError):
    """后端请求失败"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthorizationError(NoticeBoardError):
    """非管理员访问管理员操作"""


class NotFoundError(NoticeBoardError):
    """记录不存在"""


class ConflictError(NoticeBoardError):
    """唯一约束冲突或不允许的状态变更"""
