"""
匿名提交表单与发帖组件

两个组件在必填项不满足时都抛出 ValidationError 且不提交，
校验错误在组件边界内处理，不会传到页面控制器。
"""

import inspect
from typing import Any, Callable, List, Optional
from noticeboard.core.config import settings
from noticeboard.core.constants import CATEGORIES, URGENCIES, DEFAULT_URGENCY, POST_KINDS
from noticeboard.core.exceptions import ValidationError
from noticeboard.board.types import SubmissionDraft, PostDraft, PollDraft

MISSING_INFORMATION = "Please fill in all required fields."


async def _emit(callback: Optional[Callable[[Any], Any]], draft: Any):
    if callback is None:
        return None
    result = callback(draft)
    if inspect.isawaitable(result):
        result = await result
    return result


class SubmissionForm:
    """匿名提交表单"""

    def __init__(self, on_submit: Optional[Callable[[SubmissionDraft], Any]] = None):
        self.on_submit = on_submit
        self.reset()

    def reset(self):
        self.category = ""
        self.content = ""
        self.urgency = DEFAULT_URGENCY

    def set_category(self, category: str):
        if category and category not in CATEGORIES:
            raise ValidationError(f"Unknown category: {category}", field="category")
        self.category = category

    def set_urgency(self, urgency: str):
        if urgency not in URGENCIES:
            raise ValidationError(f"Unknown urgency: {urgency}", field="urgency")
        self.urgency = urgency

    def set_content(self, content: str):
        self.content = content

    @property
    def char_count(self) -> int:
        return len(self.content)

    @property
    def over_soft_limit(self) -> bool:
        """超过软限制只用于显示，不阻止提交"""
        return self.char_count > settings.SUBMISSION_SOFT_LIMIT

    @property
    def counter_label(self) -> str:
        return f"{self.char_count}/{settings.SUBMISSION_SOFT_LIMIT} characters"

    @property
    def can_submit(self) -> bool:
        return bool(self.content.strip()) and self.category in CATEGORIES

    async def submit(self) -> SubmissionDraft:
        """校验并提交，成功后清空所有字段"""
        if self.category not in CATEGORIES:
            raise ValidationError(MISSING_INFORMATION, field="category")
        if not self.content.strip():
            raise ValidationError(MISSING_INFORMATION, field="content")

        draft = SubmissionDraft(
            category=self.category,
            content=self.content.strip(),
            urgency=self.urgency,
        )
        self.reset()
        await _emit(self.on_submit, draft)
        return draft


class PostComposer:
    """发帖组件（提问或投票）"""

    def __init__(self, on_submit: Optional[Callable[[PostDraft], Any]] = None):
        self.on_submit = on_submit
        self.reset()

    def reset(self):
        self.kind = "query"
        self.content = ""
        self.poll_question = ""
        self.poll_options: List[str] = [""] * settings.MIN_POLL_OPTIONS

    def set_kind(self, kind: str):
        if kind not in POST_KINDS:
            raise ValidationError(f"Unknown post kind: {kind}", field="kind")
        self.kind = kind

    @property
    def can_add_option(self) -> bool:
        return len(self.poll_options) < settings.MAX_POLL_OPTIONS

    @property
    def can_remove_option(self) -> bool:
        return len(self.poll_options) > settings.MIN_POLL_OPTIONS

    def add_option(self) -> bool:
        if not self.can_add_option:
            return False
        self.poll_options = self.poll_options + [""]
        return True

    def remove_option(self, index: int) -> bool:
        if not self.can_remove_option or not 0 <= index < len(self.poll_options):
            return False
        self.poll_options = [option for i, option in enumerate(self.poll_options) if i != index]
        return True

    def update_option(self, index: int, value: str):
        options = list(self.poll_options)
        options[index] = value
        self.poll_options = options

    @property
    def counter_label(self) -> str:
        return f"{len(self.content)}/{settings.POST_SOFT_LIMIT}"

    @property
    def submit_label(self) -> str:
        return "Post Query" if self.kind == "query" else "Create Poll"

    def _missing_field(self) -> Optional[str]:
        if self.kind == "query":
            return None if self.content.strip() else "content"
        if not self.poll_question.strip():
            return "poll_question"
        if not settings.MIN_POLL_OPTIONS <= len(self.poll_options) <= settings.MAX_POLL_OPTIONS:
            return "poll_options"
        if any(not option.strip() for option in self.poll_options):
            return "poll_options"
        return None

    @property
    def can_submit(self) -> bool:
        return self._missing_field() is None

    async def submit(self) -> PostDraft:
        """校验并提交，成功后恢复初始状态"""
        missing = self._missing_field()
        if missing:
            raise ValidationError(MISSING_INFORMATION, field=missing)

        poll = None
        if self.kind == "poll":
            poll = PollDraft(
                question=self.poll_question.strip(),
                options=[option.strip() for option in self.poll_options if option.strip()],
            )
        draft = PostDraft(kind=self.kind, content=self.content.strip(), poll=poll)
        self.reset()
        await _emit(self.on_submit, draft)
        return draft
