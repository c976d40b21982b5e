"""
帖子、投票与点赞服务
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Dict, Set
from noticeboard.core.config import settings
from noticeboard.core.exceptions import AuthorizationError, ConflictError, NotFoundError
from noticeboard.models.profile import Profile
from noticeboard.models.post import Post, PollOption
from noticeboard.models.vote import PollVote
from noticeboard.models.like import PostLike
from noticeboard.schemas.post_schemas import (
    PostCreate,
    PostCreated,
    PostResponse,
    PollResponse,
    PollOptionResponse,
    LikeResponse
)
from noticeboard.schemas.profile_schemas import ProfileResponse
from noticeboard.services.realtime_service import ChangeNotifier, get_change_notifier

class PostService:
    """帖子管理服务"""

    def __init__(self, db: Session, notifier: Optional[ChangeNotifier] = None):
        self.db = db
        self.notifier = notifier or get_change_notifier()

    async def list_posts(self, viewer_id: Optional[str] = None) -> List[PostResponse]:
        """获取全部帖子（按创建时间倒序），附带当前用户的投票和点赞状态"""
        posts = self.db.query(Post).order_by(Post.created_at.desc()).all()

        user_votes: Dict[str, str] = {}
        user_likes: Set[str] = set()
        if viewer_id:
            user_votes = {
                vote.post_id: vote.option_id
                for vote in self.db.query(PollVote).filter(PollVote.user_id == viewer_id).all()
            }
            user_likes = {
                row.post_id
                for row in self.db.query(PostLike.post_id).filter(PostLike.user_id == viewer_id).all()
            }

        return [
            self._build_response(post, user_votes.get(post.id), post.id in user_likes)
            for post in posts
        ]

    async def get_post(self, post_id: str, viewer_id: Optional[str] = None) -> PostResponse:
        """获取单个帖子"""
        post = self._get_post(post_id)
        return self._build_response(post, self._user_vote(post_id, viewer_id), self._user_liked(post_id, viewer_id))

    async def create_post(self, author_id: str, post_data: PostCreate) -> PostCreated:
        """创建帖子；投票选项需在帖子创建完成后单独添加"""
        author = self.db.query(Profile).filter(Profile.id == author_id).first()
        if not author:
            raise NotFoundError("Profile not found")

        content = post_data.content.strip()
        question = (post_data.poll_question or "").strip()
        if post_data.kind == "query" and not content:
            raise ValueError("Query content is required")
        if post_data.kind == "poll" and not question:
            raise ValueError("Poll question is required")

        post = Post(
            author_id=author_id,
            content=content,
            type=post_data.kind,
            poll_question=question if post_data.kind == "poll" else None
        )
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)

        print(f"📝 新帖子 {post.id} ({post.type}) 已创建")
        await self.notifier.publish("posts", "INSERT", post.id)
        return PostCreated(id=post.id, kind=post.type, created_at=post.created_at)

    async def add_poll_options(self, post_id: str, author_id: str, options: List[str]) -> List[PollOptionResponse]:
        """为投票帖子一次性添加全部选项，之后不可增删"""
        post = self._get_post(post_id)
        if post.author_id != author_id:
            raise AuthorizationError("Only the author can add poll options")
        if post.type != "poll":
            raise ValueError("Post is not a poll")
        if post.options:
            raise ConflictError("Poll options are fixed once created")

        texts = [text.strip() for text in options]
        if any(not text for text in texts):
            raise ValueError("Poll options cannot be empty")
        if not settings.MIN_POLL_OPTIONS <= len(texts) <= settings.MAX_POLL_OPTIONS:
            raise ValueError(
                f"A poll needs {settings.MIN_POLL_OPTIONS} to {settings.MAX_POLL_OPTIONS} options"
            )

        created = []
        for position, text in enumerate(texts):
            option = PollOption(post_id=post_id, option_text=text, position=position)
            self.db.add(option)
            created.append(option)
        self.db.commit()

        await self.notifier.publish("poll_options", "INSERT", post_id)
        return [PollOptionResponse(id=option.id, text=option.option_text, votes=0) for option in created]

    async def cast_vote(self, post_id: str, viewer_id: str, option_id: str) -> PostResponse:
        """投票或改票（以帖子和用户为键）"""
        post = self._get_post(post_id)
        if post.type != "poll":
            raise ValueError("Post is not a poll")
        if not any(option.id == option_id for option in post.options):
            raise ValueError("Unknown poll option")

        existing = self.db.query(PollVote).filter(
            PollVote.post_id == post_id,
            PollVote.user_id == viewer_id
        ).first()

        if existing and existing.option_id == option_id:
            # 重复投同一选项，不产生变化
            return self._build_response(post, option_id, self._user_liked(post_id, viewer_id))

        if existing and not settings.ALLOW_VOTE_REVISION:
            raise ConflictError("You have already voted on this poll")

        try:
            if existing:
                self._bump_option(existing.option_id, -1)
                existing.option_id = option_id
                event = "UPDATE"
            else:
                self.db.add(PollVote(post_id=post_id, option_id=option_id, user_id=viewer_id))
                event = "INSERT"
            self._bump_option(option_id, 1)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("You have already voted on this poll")

        await self.notifier.publish("poll_votes", event, post_id)
        self.db.refresh(post)
        return self._build_response(post, option_id, self._user_liked(post_id, viewer_id))

    async def like_post(self, post_id: str, viewer_id: str) -> LikeResponse:
        """点赞（重复点赞不产生变化）"""
        post = self._get_post(post_id)
        if self._user_liked(post_id, viewer_id):
            return LikeResponse(post_id=post_id, liked=True, likes_count=post.likes_count)

        try:
            self.db.add(PostLike(post_id=post_id, user_id=viewer_id))
            self.db.query(Post).filter(Post.id == post_id).update(
                {Post.likes_count: Post.likes_count + 1},
                synchronize_session=False
            )
            self.db.commit()
        except IntegrityError:
            # 并发点赞已由唯一约束拦截
            self.db.rollback()
        else:
            await self.notifier.publish("post_likes", "INSERT", post_id)

        self.db.refresh(post)
        return LikeResponse(post_id=post_id, liked=True, likes_count=post.likes_count)

    async def unlike_post(self, post_id: str, viewer_id: str) -> LikeResponse:
        """取消点赞（未点赞时不产生变化）"""
        post = self._get_post(post_id)
        deleted = self.db.query(PostLike).filter(
            PostLike.post_id == post_id,
            PostLike.user_id == viewer_id
        ).delete(synchronize_session=False)

        if deleted:
            self.db.query(Post).filter(Post.id == post_id, Post.likes_count > 0).update(
                {Post.likes_count: Post.likes_count - 1},
                synchronize_session=False
            )
            self.db.commit()
            await self.notifier.publish("post_likes", "DELETE", post_id)
            self.db.refresh(post)

        return LikeResponse(post_id=post_id, liked=False, likes_count=post.likes_count)

    def _get_post(self, post_id: str) -> Post:
        post = self.db.query(Post).filter(Post.id == post_id).first()
        if not post:
            raise NotFoundError("Post not found")
        return post

    def _bump_option(self, option_id: str, delta: int):
        self.db.query(PollOption).filter(PollOption.id == option_id).update(
            {PollOption.votes_count: PollOption.votes_count + delta},
            synchronize_session=False
        )

    def _user_vote(self, post_id: str, viewer_id: Optional[str]) -> Optional[str]:
        if not viewer_id:
            return None
        vote = self.db.query(PollVote).filter(
            PollVote.post_id == post_id,
            PollVote.user_id == viewer_id
        ).first()
        return vote.option_id if vote else None

    def _user_liked(self, post_id: str, viewer_id: Optional[str]) -> bool:
        if not viewer_id:
            return False
        return self.db.query(PostLike).filter(
            PostLike.post_id == post_id,
            PostLike.user_id == viewer_id
        ).first() is not None

    def _build_response(self, post: Post, user_vote: Optional[str], user_liked: bool) -> PostResponse:
        """组装帖子响应；投票总数由选项票数求和得到"""
        poll = None
        if post.type == "poll":
            options = [
                PollOptionResponse(id=option.id, text=option.option_text, votes=option.votes_count)
                for option in post.options
            ]
            poll = PollResponse(
                question=post.poll_question or "",
                options=options,
                total_votes=sum(option.votes for option in options),
                user_vote=user_vote
            )

        author = ProfileResponse.model_validate(post.author) if post.author else None
        return PostResponse(
            id=post.id,
            author=author,
            author_name=(author.full_name if author and author.full_name else "Anonymous"),
            content=post.content,
            kind=post.type,
            created_at=post.created_at,
            likes_count=post.likes_count,
            replies_count=post.replies_count,
            user_liked=user_liked,
            poll=poll
        )
