from .comment_service import CommentService
from .confession_service import ConfessionService
from .engagement_aggregator import EngagementAggregator
from .identity_service import AnonymousIdentityProvider
from .legacy_migration import LegacyDeviceMigration, MigrationReport
from .ownership_policy import OwnershipPolicy
from .profile_service import PROFILE_FORMS, ProfileService
from .reaction_service import ReactionService
from .secondary_effects import SecondaryEffectQueue
from .single_flight import SingleFlight
from .topic_stats_service import TopicStatsService

__all__ = [
    "CommentService",
    "ConfessionService",
    "EngagementAggregator",
    "AnonymousIdentityProvider",
    "LegacyDeviceMigration",
    "MigrationReport",
    "OwnershipPolicy",
    "PROFILE_FORMS",
    "ProfileService",
    "ReactionService",
    "SecondaryEffectQueue",
    "SingleFlight",
    "TopicStatsService",
]
