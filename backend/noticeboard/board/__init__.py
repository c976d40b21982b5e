# 公告板客户端：表单、动态、分诊、页面状态与控制器
from .forms import SubmissionForm, PostComposer
from .state import AppState
from .backend_client import BackendClient
from .controller import PageController, open_board

__all__ = ["SubmissionForm", "PostComposer", "AppState", "BackendClient", "PageController", "open_board"]
