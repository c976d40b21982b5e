"""
动态渲染：排序、相对时间、投票百分比，以及投票和点赞的状态机
"""

import math
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple
from noticeboard.core.utils import as_utc
from noticeboard.board.types import FeedPost, Poll, PollOption


def sort_posts(posts: Sequence[FeedPost]) -> List[FeedPost]:
    """按创建时间倒序；时间相同保持到达顺序"""
    return sorted(posts, key=lambda post: as_utc(post.created_at), reverse=True)


def format_relative_time(created_at: datetime, now: Optional[datetime] = None) -> str:
    """相对时间标签：now / 5m / 3h / 2d"""
    now = as_utc(now) if now else datetime.now(timezone.utc)
    seconds = (now - as_utc(created_at)).total_seconds()
    minutes = math.floor(seconds / 60)
    hours = math.floor(seconds / 3600)
    days = math.floor(seconds / 86400)

    if minutes < 1:
        return "now"
    if minutes < 60:
        return f"{minutes}m"
    if hours < 24:
        return f"{hours}h"
    return f"{days}d"


def option_percentage(option: PollOption, total_votes: int) -> int:
    """各选项独立四舍五入（0.5 向上），不保证合计为100"""
    if total_votes <= 0:
        return 0
    return math.floor(option.votes / total_votes * 100 + 0.5)


def poll_percentages(poll: Poll) -> List[Tuple[PollOption, int]]:
    return [(option, option_percentage(option, poll.total_votes)) for option in poll.options]


def vote_count_label(poll: Poll) -> str:
    return f"{poll.total_votes} vote{'' if poll.total_votes == 1 else 's'}"


def author_initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part).upper()


def can_vote(post: FeedPost, option_id: str, allow_revision: bool = False) -> bool:
    """NOT_VOTED 可以投任意选项；VOTED(x) 仅在允许改票时可改投其他选项"""
    poll = post.poll
    if poll is None or not any(option.id == option_id for option in poll.options):
        return False
    if not poll.has_voted:
        return True
    return allow_revision and poll.user_vote != option_id


def apply_vote(post: FeedPost, option_id: str, allow_revision: bool = False) -> FeedPost:
    """投票状态转移；不允许的投票原样返回帖子"""
    if not can_vote(post, option_id, allow_revision):
        return post

    poll = post.poll
    previous = poll.user_vote
    options = []
    for option in poll.options:
        votes = option.votes
        if option.id == option_id:
            votes += 1
        elif option.id == previous:
            votes = max(votes - 1, 0)
        options.append(option.model_copy(update={"votes": votes}))

    updated_poll = poll.model_copy(update={
        "options": options,
        "total_votes": sum(option.votes for option in options),
        "user_vote": option_id,
    })
    return post.model_copy(update={"poll": updated_poll})


def is_liked(post: FeedPost) -> bool:
    """本地显示的点赞状态"""
    return post.user_liked if post.pending_like is None else post.pending_like


def displayed_likes(post: FeedPost) -> int:
    """服务端确认的点赞数加上最多 1 的本地增量"""
    delta = int(is_liked(post)) - int(post.user_liked)
    return max(post.likes_count + delta, 0)


def set_liked(post: FeedPost, liked: bool) -> FeedPost:
    """设置本地点赞状态；与服务端状态一致时清除本地增量"""
    pending = None if liked == post.user_liked else liked
    return post.model_copy(update={"pending_like": pending})


def toggle_like(post: FeedPost) -> FeedPost:
    return set_liked(post, not is_liked(post))
