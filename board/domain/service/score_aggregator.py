"""Score aggregator."""

from uuid import UUID

import logfire

from board.domain.error import NotFoundError
from board.domain.model.event import ScoreChange
from board.domain.repository import CommentRepository, PostRepository, VoteRepository
from board.domain.value import CommentId, PostId, VotableType

from .base import Service


class ScoreAggregator(Service):
    """Recomputes an item's score from the full vote set.

    Always a full recount rather than a delta, so missed or repeated calls
    converge on the right value. The caller passes the target id, which
    stays valid when the vote row itself was just deleted.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
    ) -> None:
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository

    async def recompute(self, votable_type: VotableType, votable_id: UUID) -> ScoreChange:
        """Recount votes and persist score and vote_count onto the item.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The score transition

        Raises:
            NotFoundError: If the item does not exist
        """
        with logfire.span(
            "score_aggregator.recompute",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
        ):
            if votable_type == VotableType.POST:
                item = await self.post_repository.find_by_id(PostId(votable_id))
            else:
                item = await self.comment_repository.find_by_id(CommentId(votable_id))
            if not item:
                raise NotFoundError(votable_type.value.capitalize(), str(votable_id))

            score, vote_count = await self.vote_repository.tally(votable_type, votable_id)

            if votable_type == VotableType.POST:
                await self.post_repository.update_score(PostId(votable_id), score, vote_count)
            else:
                await self.comment_repository.update_score(
                    CommentId(votable_id), score, vote_count
                )

            return ScoreChange(
                votable_type=votable_type,
                votable_id=votable_id,
                previous_score=item.score,
                score=score,
                vote_count=vote_count,
            )
