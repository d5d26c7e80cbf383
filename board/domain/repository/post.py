"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Collection, List, Optional, Tuple

from board.domain.model.post import Post
from board.domain.value import DeletionReason, Line, PostId

# (created_at, id) of the last post on a "new" page
NewFeedKey = Tuple[datetime, PostId]

# (score, created_at, id) of the last post on a "hot" page
HotFeedKey = Tuple[int, datetime, PostId]


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID, including soft-deleted posts.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def lock(self, post_id: PostId) -> Optional[Post]:
        """Load a post and hold a row lock until the transaction ends.

        Concurrent score updates on the same post serialize on this lock.

        Args:
            post_id: The post's unique identifier

        Returns:
            The locked post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a new post.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def update_score(self, post_id: PostId, score: int, vote_count: int) -> None:
        """Persist a recomputed score and vote count.

        Args:
            post_id: The post ID
            score: Sum of vote values
            vote_count: Number of votes
        """
        pass

    @abstractmethod
    async def soft_delete(
        self, post_id: PostId, reason: DeletionReason, deleted_at: datetime
    ) -> bool:
        """Soft-delete a post that is not already deleted.

        Args:
            post_id: The post ID
            reason: Why the post is being deleted
            deleted_at: Deletion timestamp

        Returns:
            True if the post was deleted by this call, False otherwise
        """
        pass

    @abstractmethod
    async def increment_comment_count(self, post_id: PostId) -> None:
        """Atomically increment comment_count by 1.

        Args:
            post_id: The post ID
        """
        pass

    @abstractmethod
    async def find_new(
        self,
        lines: Optional[Collection[Line]] = None,
        before: Optional[NewFeedKey] = None,
        limit: int = 20,
    ) -> List[Post]:
        """Find non-deleted posts ordered by created_at DESC, id DESC.

        Args:
            lines: Only include posts written under these lines (None for all)
            before: Only include posts strictly after this key in feed order
            limit: Maximum number of posts to return

        Returns:
            List of posts in feed order
        """
        pass

    @abstractmethod
    async def find_hot(
        self,
        since: datetime,
        lines: Optional[Collection[Line]] = None,
        before: Optional[HotFeedKey] = None,
        limit: Optional[int] = 20,
    ) -> List[Post]:
        """Find non-deleted recent posts ordered by score, created_at, id DESC.

        Args:
            since: Only include posts created at or after this time
            lines: Only include posts written under these lines (None for all)
            before: Only include posts strictly after this key in feed order
            limit: Maximum number of posts to return (None for no limit)

        Returns:
            List of posts in feed order
        """
        pass
