"""
页面控制器：持有页面状态，协调拉取、订阅和修改请求
"""

import asyncio
from typing import Optional
from noticeboard.core.config import settings
from noticeboard.core.constants import POST_TABLES, STATUSES, SUBMISSION_TABLE
from noticeboard.core.exceptions import BackendError
from noticeboard.board import state as transitions
from noticeboard.board import feed, triage
from noticeboard.board.backend_client import BackendClient
from noticeboard.board.state import AppState
from noticeboard.board.types import ChangeEvent, PostDraft, SubmissionDraft, Viewer

LIVE_UPDATES_LOST = "Live updates disconnected"


class PageController:
    """页面控制器

    后端请求失败时只追加一条错误提示，已有的本地状态保持不变，且不自动重试。
    管理员操作在这里单独校验，不依赖当前显示的视图。
    """

    def __init__(
        self,
        backend: BackendClient,
        viewer: Optional[Viewer] = None,
        allow_vote_revision: Optional[bool] = None
    ):
        self.backend = backend
        self.state: AppState = transitions.initial_state(viewer)
        self.allow_vote_revision = (
            settings.ALLOW_VOTE_REVISION if allow_vote_revision is None else allow_vote_revision
        )
        self._subscription: Optional[asyncio.Task] = None

    @property
    def is_admin(self) -> bool:
        return self.state.viewer.is_admin

    async def start(self, subscribe: bool = True):
        """拉取初始数据并订阅变更通知"""
        await self.refresh_posts()
        if self.is_admin:
            await self.refresh_submissions()
        if subscribe:
            self.subscribe()

    def _fail(self, title: str, error: BackendError):
        print(f"❌ {title}: {error.message}")
        self.state = transitions.notify(self.state, title, error.message, level="error")

    def _succeed(self, title: str, message: str):
        self.state = transitions.notify(self.state, title, message, level="success")

    # 拉取

    async def refresh_posts(self) -> bool:
        try:
            posts = await self.backend.fetch_posts()
        except BackendError as e:
            self._fail("Couldn't load posts", e)
            return False
        self.state = transitions.posts_loaded(self.state, posts)
        return True

    async def refresh_submissions(self) -> bool:
        if not self.is_admin:
            return False
        try:
            submissions = await self.backend.fetch_submissions()
        except BackendError as e:
            self._fail("Couldn't load submissions", e)
            return False
        self.state = transitions.submissions_loaded(self.state, submissions)
        return True

    # 动态

    async def create_post(self, draft: PostDraft) -> Optional[str]:
        """先插入帖子并取得ID，再插入投票选项"""
        try:
            post_id = await self.backend.insert_post(draft)
            if draft.kind == "poll" and draft.poll:
                await self.backend.insert_poll_options(post_id, draft.poll.options)
        except BackendError as e:
            self._fail("Couldn't create post", e)
            return None

        self._succeed(
            "Posted Successfully!",
            "Your query has been posted." if draft.kind == "query" else "Your poll has been created."
        )
        await self.refresh_posts()
        return post_id

    async def vote(self, post_id: str, option_id: str) -> bool:
        """投票；已投票（或不允许的改票）时不发请求也不改变计数"""
        post = transitions.find_post(self.state, post_id)
        if post is None or not feed.can_vote(post, option_id, self.allow_vote_revision):
            return False

        try:
            confirmed = await self.backend.cast_vote(post_id, option_id)
        except BackendError as e:
            self._fail("Vote failed", e)
            return False

        self.state = transitions.vote_cast(
            self.state, post_id, option_id, self.allow_vote_revision, confirmed=confirmed
        )
        self._succeed("Vote Recorded", "Thanks for participating in the poll!")
        return True

    async def toggle_like(self, post_id: str) -> bool:
        post = transitions.find_post(self.state, post_id)
        if post is None:
            return False

        liked = not feed.is_liked(post)
        try:
            if liked:
                await self.backend.like(post_id)
            else:
                await self.backend.unlike(post_id)
        except BackendError as e:
            self._fail("Like failed", e)
            return False

        self.state = transitions.like_set(self.state, post_id, liked)
        return True

    # 匿名提交与分诊

    async def submit_anonymous(self, draft: SubmissionDraft) -> bool:
        try:
            await self.backend.insert_submission(draft)
        except BackendError as e:
            self._fail("Submission failed", e)
            return False

        self._succeed(
            "Submission Received",
            "Your anonymous message has been sent securely to the administration."
        )
        if self.is_admin:
            await self.refresh_submissions()
        return True

    async def update_status(self, submission_id: str, status: str) -> bool:
        """修改提交状态；非管理员直接忽略"""
        if not self.is_admin:
            print(f"⛔ 非管理员尝试修改提交 {submission_id[:8]} 的状态，已忽略")
            return False
        if status not in STATUSES:
            return False

        try:
            confirmed = await self.backend.update_submission_status(submission_id, status)
        except BackendError as e:
            self._fail("Status update failed", e)
            return False

        self.state = transitions.status_changed(self.state, submission_id, status, confirmed=confirmed)
        self._succeed("Status Updated", f"Submission marked as {status}.")
        return True

    async def advance_status(self, submission_id: str) -> bool:
        submission = transitions.find_submission(self.state, submission_id)
        if submission is None:
            return False
        action = triage.next_action(submission)
        if action is None:
            return False
        return await self.update_status(submission_id, action.status)

    # 导航

    def select_tab(self, tab: str) -> bool:
        new_state = transitions.select_tab(self.state, tab)
        changed = new_state.active_tab == tab
        self.state = new_state
        return changed

    def dismiss_notice(self, index: int = 0):
        self.state = transitions.dismiss_notice(self.state, index)

    async def sign_out(self):
        await self.unsubscribe()
        self.backend.sign_out()
        self.state = transitions.signed_out(self.state)

    # 变更通知

    async def handle_change(self, event: ChangeEvent):
        """收到变更后整体重新拉取对应集合"""
        if event.table in POST_TABLES:
            await self.refresh_posts()
        elif event.table == SUBMISSION_TABLE and self.is_admin:
            await self.refresh_submissions()

    async def listen(self):
        """消费变更通知流；流异常中断或正常结束都会提示用户"""
        try:
            async for event in self.backend.changes():
                await self.handle_change(event)
        except BackendError as e:
            self._fail(LIVE_UPDATES_LOST, e)
        else:
            self._fail(LIVE_UPDATES_LOST, BackendError("The server closed the change stream."))

    def subscribe(self):
        if self._subscription is None or self._subscription.done():
            self._subscription = asyncio.create_task(self.listen())

    async def unsubscribe(self):
        task, self._subscription = self._subscription, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def close(self):
        await self.unsubscribe()
        await self.backend.close()


async def open_board(
    base_url: Optional[str] = None,
    viewer_id: Optional[str] = None,
    subscribe: bool = True,
    transport=None
) -> PageController:
    """创建客户端，解析当前用户并加载初始数据"""
    backend = BackendClient(base_url=base_url, viewer_id=viewer_id, transport=transport)
    try:
        viewer = await backend.fetch_viewer()
    except BackendError as e:
        print(f"⚠️ 无法识别当前用户，以匿名身份继续: {e.message}")
        backend.sign_out()
        viewer = Viewer()

    controller = PageController(backend, viewer)
    await controller.start(subscribe=subscribe)
    return controller
