"""
后端服务客户端

所有网络失败（连接错误、超时、非2xx响应）以及无法解析的响应体
统一转换为 BackendError。
"""

import json
import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError
from typing import Any, AsyncGenerator, List, Optional, Type, TypeVar
from noticeboard.core.config import settings
from noticeboard.core.exceptions import BackendError
from noticeboard.board.types import ChangeEvent, FeedPost, PostDraft, Submission, SubmissionDraft, Viewer

ModelT = TypeVar("ModelT", bound=BaseModel)


class BackendClient:
    """公告板后端API客户端"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        viewer_id: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.BACKEND_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.viewer_id = viewer_id
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport
        )

    def _headers(self) -> dict:
        return {"X-Viewer-Id": self.viewer_id} if self.viewer_id else {}

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, f"/api{path}", headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            raise BackendError(f"Network error: {e}") from e

        if response.status_code >= 400:
            raise BackendError(self._error_detail(response), response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(f"Invalid response from server: {e}", response.status_code) from e

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        detail = body.get("detail") if isinstance(body, dict) else None
        return str(detail or response.text or f"HTTP {response.status_code}")

    @staticmethod
    def _parse(model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise BackendError(f"Unexpected {model.__name__} payload from server: {e.error_count()} invalid field(s)") from e

    @classmethod
    def _parse_list(cls, model: Type[ModelT], data: Any) -> List[ModelT]:
        if not isinstance(data, list):
            raise BackendError(f"Expected a list of {model.__name__} from server")
        return [cls._parse(model, item) for item in data]

    async def fetch_viewer(self) -> Viewer:
        """获取当前用户资料；未识别的用户返回匿名用户"""
        if not self.viewer_id:
            return Viewer()
        return self._parse(Viewer, await self._request("GET", "/profiles/me"))

    async def fetch_posts(self) -> List[FeedPost]:
        return self._parse_list(FeedPost, await self._request("GET", "/posts/"))

    async def insert_post(self, draft: PostDraft) -> str:
        """插入帖子，返回新帖子ID"""
        payload = {
            "content": draft.content,
            "kind": draft.kind,
            "poll_question": draft.poll.question if draft.poll else None,
        }
        data = await self._request("POST", "/posts/", json=payload)
        if not isinstance(data, dict) or not data.get("id"):
            raise BackendError("Server did not return the new post id")
        return data["id"]

    async def insert_poll_options(self, post_id: str, options: List[str]) -> List[dict]:
        return await self._request("POST", f"/posts/{post_id}/options", json={"options": options})

    async def cast_vote(self, post_id: str, option_id: str) -> FeedPost:
        """投票，返回服务端确认后的帖子"""
        data = await self._request("PUT", f"/posts/{post_id}/vote", json={"option_id": option_id})
        return self._parse(FeedPost, data)

    async def like(self, post_id: str) -> dict:
        return await self._request("POST", f"/posts/{post_id}/like")

    async def unlike(self, post_id: str) -> dict:
        return await self._request("DELETE", f"/posts/{post_id}/like")

    async def fetch_submissions(self) -> List[Submission]:
        return self._parse_list(Submission, await self._request("GET", "/submissions/"))

    async def insert_submission(self, draft: SubmissionDraft) -> Submission:
        """插入匿名提交；请求中不携带用户字段"""
        data = await self._request("POST", "/submissions/", json=draft.model_dump())
        return self._parse(Submission, data)

    async def update_submission_status(self, submission_id: str, status: str) -> Submission:
        """修改提交状态，返回服务端确认后的提交"""
        data = await self._request("PATCH", f"/submissions/{submission_id}", json={"status": status})
        return self._parse(Submission, data)

    async def changes(self) -> AsyncGenerator[ChangeEvent, None]:
        """订阅变更通知（SSE），逐个产出变更事件，忽略心跳"""
        try:
            async with self._client.stream(
                "GET", "/api/realtime/stream", headers=self._headers(), timeout=None
            ) as response:
                if response.status_code >= 400:
                    raise BackendError(f"Subscription failed: HTTP {response.status_code}", response.status_code)

                async for line in response.aiter_lines():
                    if not line.startswith("data:"):
                        continue
                    try:
                        data = json.loads(line[5:].strip())
                    except json.JSONDecodeError:
                        # 忽略无法解析的行
                        continue
                    if not isinstance(data, dict) or data.get("type") != "change":
                        continue
                    yield self._parse(ChangeEvent, data)
        except httpx.HTTPError as e:
            raise BackendError(f"Subscription lost: {e}") from e

    def sign_out(self):
        self.viewer_id = None

    async def close(self):
        await self._client.aclose()
