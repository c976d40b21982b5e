"""
页面应用状态与纯状态转移函数

每个转移函数接收旧状态和动作参数，返回新状态，不修改旧状态，
也不访问网络，因此投票、点赞和状态机可以脱离后端单独测试。
"""

from datetime import datetime
from typing import List, Optional, Sequence
from pydantic import BaseModel
from noticeboard.core.constants import ADMIN_TABS, TABS
from noticeboard.board import feed, triage
from noticeboard.board.types import FeedPost, Notice, Submission, Tab, Viewer


class AppState(BaseModel):
    """页面状态"""
    viewer: Viewer = Viewer()
    active_tab: Tab = "feed"
    posts: List[FeedPost] = []
    submissions: List[Submission] = []
    notices: List[Notice] = []

    class Config:
        frozen = True


def initial_state(viewer: Optional[Viewer] = None) -> AppState:
    return AppState(viewer=viewer or Viewer())


def available_tabs(viewer: Viewer) -> List[str]:
    """非管理员看不到管理员视图"""
    return [tab for tab in TABS if viewer.is_admin or tab not in ADMIN_TABS]


def select_tab(state: AppState, tab: str) -> AppState:
    if tab not in available_tabs(state.viewer):
        return state
    return state.model_copy(update={"active_tab": tab})


def posts_loaded(state: AppState, posts: Sequence[FeedPost]) -> AppState:
    """整体替换帖子列表（重新拉取后丢弃本地点赞增量）"""
    return state.model_copy(update={"posts": feed.sort_posts(posts)})


def submissions_loaded(state: AppState, submissions: Sequence[Submission]) -> AppState:
    if not state.viewer.is_admin:
        return state
    return state.model_copy(update={"submissions": triage.sort_submissions(submissions)})


def find_post(state: AppState, post_id: str) -> Optional[FeedPost]:
    return next((post for post in state.posts if post.id == post_id), None)


def find_submission(state: AppState, submission_id: str) -> Optional[Submission]:
    return next((s for s in state.submissions if s.id == submission_id), None)


def _replace_post(state: AppState, updated: FeedPost) -> AppState:
    posts = [updated if post.id == updated.id else post for post in state.posts]
    return state.model_copy(update={"posts": posts})


def vote_cast(
    state: AppState,
    post_id: str,
    option_id: str,
    allow_revision: bool = False,
    confirmed: Optional[FeedPost] = None
) -> AppState:
    """记录投票；有服务端确认的帖子时以其为准，否则在本地推导"""
    post = find_post(state, post_id)
    if post is None:
        return state
    if confirmed is not None and confirmed.id == post_id:
        return _replace_post(state, confirmed)
    updated = feed.apply_vote(post, option_id, allow_revision)
    if updated is post:
        return state
    return _replace_post(state, updated)


def like_toggled(state: AppState, post_id: str) -> AppState:
    post = find_post(state, post_id)
    if post is None:
        return state
    return _replace_post(state, feed.toggle_like(post))


def like_set(state: AppState, post_id: str, liked: bool) -> AppState:
    post = find_post(state, post_id)
    if post is None:
        return state
    return _replace_post(state, feed.set_liked(post, liked))


def status_changed(
    state: AppState,
    submission_id: str,
    status: str,
    now: Optional[datetime] = None,
    confirmed: Optional[Submission] = None
) -> AppState:
    """仅管理员可以修改提交状态；有服务端确认的提交时以其为准"""
    if not state.viewer.is_admin:
        return state
    submission = find_submission(state, submission_id)
    if submission is None:
        return state
    if confirmed is not None and confirmed.id == submission_id:
        updated = confirmed
    else:
        updated = triage.set_status(submission, status, now)
    submissions = [updated if s.id == submission_id else s for s in state.submissions]
    return state.model_copy(update={"submissions": submissions})


def notify(state: AppState, title: str, message: str = "", level: str = "info") -> AppState:
    notice = Notice(level=level, title=title, message=message)
    return state.model_copy(update={"notices": state.notices + [notice]})


def dismiss_notice(state: AppState, index: int = 0) -> AppState:
    notices = [notice for i, notice in enumerate(state.notices) if i != index]
    return state.model_copy(update={"notices": notices})


def signed_out(state: AppState) -> AppState:
    return initial_state()
