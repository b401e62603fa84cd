"""FastAPI dependency injection — wires infrastructure to application layer.

This process acts for a single anonymous device, so the store client,
the identity provider and the services built on them are process-wide
singletons. Single-flight state (session, reaction toggles) and the
secondary-effect queue must be shared by every request.
"""

from functools import lru_cache

from unheard.config import get_settings
from unheard.application.services import (
    AnonymousIdentityProvider,
    CommentService,
    ConfessionService,
    EngagementAggregator,
    LegacyDeviceMigration,
    OwnershipPolicy,
    ProfileService,
    ReactionService,
    SecondaryEffectQueue,
    TopicStatsService,
)
from unheard.infrastructure.appwrite import AppwriteAccountGateway, AppwriteClient
from unheard.infrastructure.repositories import (
    AppwriteCommentRepository,
    AppwriteConfessionRepository,
    AppwriteReactionRepository,
)
from unheard.infrastructure.storage.json_key_value_store import JsonKeyValueStore


@lru_cache
def get_appwrite_client() -> AppwriteClient:
    settings = get_settings()
    return AppwriteClient(
        endpoint=settings.appwrite_endpoint,
        project_id=settings.appwrite_project_id,
        database_id=settings.appwrite_database_id,
        timeout=settings.appwrite_timeout_seconds,
        page_size=settings.appwrite_page_size,
    )


@lru_cache
def get_key_value_store() -> JsonKeyValueStore:
    return JsonKeyValueStore(get_settings().local_storage_file)


@lru_cache
def get_confession_repository() -> AppwriteConfessionRepository:
    return AppwriteConfessionRepository(
        get_appwrite_client(), get_settings().appwrite_confession_collection_id
    )


@lru_cache
def get_comment_repository() -> AppwriteCommentRepository:
    return AppwriteCommentRepository(
        get_appwrite_client(), get_settings().appwrite_comment_collection_id
    )


@lru_cache
def get_reaction_repository() -> AppwriteReactionRepository:
    return AppwriteReactionRepository(
        get_appwrite_client(), get_settings().appwrite_reaction_collection_id
    )


@lru_cache
def get_identity_provider() -> AnonymousIdentityProvider:
    """Provides the device identity and the shared anonymous session."""
    return AnonymousIdentityProvider(
        storage=get_key_value_store(),
        account=AppwriteAccountGateway(get_appwrite_client()),
        session_ttl_seconds=get_settings().session_cache_ttl_seconds,
    )


@lru_cache
def get_effect_queue() -> SecondaryEffectQueue:
    return SecondaryEffectQueue()


@lru_cache
def get_ownership_policy() -> OwnershipPolicy:
    return OwnershipPolicy(get_identity_provider())


@lru_cache
def get_profile_service() -> ProfileService:
    return ProfileService(get_key_value_store())


@lru_cache
def get_reaction_service() -> ReactionService:
    return ReactionService(
        repository=get_reaction_repository(),
        identity=get_identity_provider(),
        ownership=get_ownership_policy(),
    )


@lru_cache
def get_engagement_aggregator() -> EngagementAggregator:
    return EngagementAggregator(
        confession_repository=get_confession_repository(),
        comment_repository=get_comment_repository(),
        reactions=get_reaction_service(),
        effects=get_effect_queue(),
        highlight_threshold=get_settings().highlight_threshold,
    )


@lru_cache
def get_confession_service() -> ConfessionService:
    """Provides a ConfessionService with enrichment and secondary effects wired up."""
    return ConfessionService(
        repository=get_confession_repository(),
        identity=get_identity_provider(),
        aggregator=get_engagement_aggregator(),
        ownership=get_ownership_policy(),
        effects=get_effect_queue(),
        reactions=get_reaction_service(),
        profiles=get_profile_service(),
        min_words=get_settings().min_confession_words,
        comment_repository=get_comment_repository(),
        reaction_repository=get_reaction_repository(),
    )


@lru_cache
def get_comment_service() -> CommentService:
    return CommentService(
        repository=get_comment_repository(),
        confession_repository=get_confession_repository(),
        identity=get_identity_provider(),
        ownership=get_ownership_policy(),
        effects=get_effect_queue(),
        profiles=get_profile_service(),
    )


@lru_cache
def get_topic_stats_service() -> TopicStatsService:
    return TopicStatsService(get_confession_service())


def get_legacy_migration() -> LegacyDeviceMigration:
    return LegacyDeviceMigration(
        confessions=get_confession_repository(),
        comments=get_comment_repository(),
        reactions=get_reaction_repository(),
        identity=get_identity_provider(),
    )
