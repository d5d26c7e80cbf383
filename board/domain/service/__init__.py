"""Domain services."""

from .actor_service import ActorService
from .base import Clock, Service, utcnow
from .comment_service import CommentService
from .content_policy import ContentPolicy
from .jwt_service import JWTService
from .moderation_gate import ModerationGate
from .notification_service import NotificationService
from .post_service import PostService
from .push_delivery_worker import PushDeliveryWorker, PushSender, build_push_message
from .push_subscription_service import PushSubscriptionService
from .rank_engine import HotFeedCache, RankEngine, hot_score
from .rate_limiter import RateLimiter
from .score_aggregator import ScoreAggregator
from .vote_service import Votable, VoteService

__all__ = [
    "ActorService",
    "Clock",
    "CommentService",
    "ContentPolicy",
    "HotFeedCache",
    "JWTService",
    "ModerationGate",
    "NotificationService",
    "PostService",
    "PushDeliveryWorker",
    "PushSender",
    "PushSubscriptionService",
    "RankEngine",
    "RateLimiter",
    "ScoreAggregator",
    "Service",
    "Votable",
    "VoteService",
    "build_push_message",
    "hot_score",
    "utcnow",
]
