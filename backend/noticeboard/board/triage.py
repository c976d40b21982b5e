"""
管理员分诊：排序、状态机与统计
"""

from datetime import datetime
from typing import Dict, List, NamedTuple, Optional, Sequence
from noticeboard.core.constants import CATEGORIES, STATUSES, URGENCY_RANK
from noticeboard.core.utils import as_utc, utcnow
from noticeboard.board.types import Submission


class AdvanceAction(NamedTuple):
    """一键推进操作"""
    status: str
    label: str


# new -> reviewed -> resolved；resolved 之后不再显示推进按钮
ADVANCE_ACTIONS: Dict[str, AdvanceAction] = {
    "new": AdvanceAction("reviewed", "Start Review"),
    "reviewed": AdvanceAction("resolved", "Mark Resolved"),
}

STATUS_MENU = [
    ("new", "Mark as New"),
    ("reviewed", "Mark as Reviewed"),
    ("resolved", "Mark as Resolved"),
]


class TriageSummary(NamedTuple):
    total: int
    new: int
    reviewed: int
    resolved: int


class TriageRow(NamedTuple):
    """分诊列表中的一行"""
    submission: Submission
    short_id: str
    category_label: str
    urgency_label: str
    status_label: str
    timestamp: str
    advance: Optional[AdvanceAction]


def sort_submissions(submissions: Sequence[Submission]) -> List[Submission]:
    """紧急程度降序，同级按创建时间降序；两者都相同时保持原顺序"""
    return sorted(
        submissions,
        key=lambda submission: (URGENCY_RANK[submission.urgency], as_utc(submission.created_at)),
        reverse=True,
    )


def next_action(submission: Submission) -> Optional[AdvanceAction]:
    return ADVANCE_ACTIONS.get(submission.status)


def set_status(submission: Submission, status: str, now: Optional[datetime] = None) -> Submission:
    """任意状态之间都允许切换"""
    if status not in STATUSES:
        raise ValueError(f"Unknown status: {status}")
    return submission.model_copy(update={"status": status, "updated_at": now or utcnow()})


def advance(submission: Submission, now: Optional[datetime] = None) -> Submission:
    action = next_action(submission)
    if action is None:
        return submission
    return set_status(submission, action.status, now)


def summarize(submissions: Sequence[Submission]) -> TriageSummary:
    """每次渲染都从当前集合重新计算"""
    return TriageSummary(
        total=len(submissions),
        new=sum(1 for s in submissions if s.status == "new"),
        reviewed=sum(1 for s in submissions if s.status == "reviewed"),
        resolved=sum(1 for s in submissions if s.status == "resolved"),
    )


def format_timestamp(timestamp: datetime) -> str:
    return as_utc(timestamp).strftime("%Y-%m-%d %H:%M")


def build_rows(submissions: Sequence[Submission]) -> List[TriageRow]:
    return [
        TriageRow(
            submission=submission,
            short_id=submission.id[:8],
            category_label=CATEGORIES.get(submission.category, "Other"),
            urgency_label=f"{submission.urgency.capitalize()} Priority",
            status_label=submission.status.capitalize(),
            timestamp=format_timestamp(submission.created_at),
            advance=next_action(submission),
        )
        for submission in sort_submissions(submissions)
    ]
