"""Concrete repository implementation for Reaction backed by Appwrite documents."""

import logging
from typing import Any

from unheard.application.interfaces import ReactionRepository
from unheard.domain.entities import Reaction, ReactionType
from unheard.domain.exceptions import DocumentStoreError
from unheard.infrastructure.appwrite import AppwriteClient, Query
from unheard.infrastructure.repositories._documents import format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)

_KNOWN_TYPES = {t.value for t in ReactionType}


class AppwriteReactionRepository(ReactionRepository):
    """Reaction rows; documents with a type outside the closed set are ignored."""

    def __init__(self, client: AppwriteClient, collection_id: str):
        self._client = client
        self._collection_id = collection_id

    def _to_entities(self, documents: list[dict[str, Any]]) -> list[Reaction]:
        reactions = []
        for document in documents:
            if document.get("type") not in _KNOWN_TYPES:
                logger.debug("Skipping reaction %s with unknown type %r", document.get("$id"), document.get("type"))
                continue
            reactions.append(
                Reaction(
                    id=document["$id"],
                    confession_id=document.get("confessionId", ""),
                    device_id=document.get("deviceId"),
                    type=ReactionType(document["type"]),
                    timestamp=parse_timestamp(document),
                )
            )
        return reactions

    async def list_for_confession(self, confession_id: str) -> list[Reaction]:
        documents = await self._client.list_all_documents(
            self._collection_id, [Query.equal("confessionId", confession_id)]
        )
        return self._to_entities(documents)

    async def find(
        self, confession_id: str, device_id: str, reaction_type: ReactionType
    ) -> list[Reaction]:
        documents = await self._client.list_all_documents(
            self._collection_id,
            [
                Query.equal("confessionId", confession_id),
                Query.equal("deviceId", device_id),
                Query.equal("type", reaction_type.value),
                Query.order_asc("$createdAt"),
            ],
        )
        return self._to_entities(documents)

    async def create(self, reaction: Reaction) -> Reaction:
        document = await self._client.create_document(
            self._collection_id,
            {
                "confessionId": reaction.confession_id,
                "deviceId": reaction.device_id,
                "type": reaction.type.value,
                "timestamp": format_timestamp(reaction.timestamp),
            },
        )
        return self._to_entities([document])[0]

    async def delete(self, reaction_id: str) -> bool:
        try:
            await self._client.delete_document(self._collection_id, reaction_id)
        except DocumentStoreError as e:
            if e.is_not_found:
                return False
            raise
        return True

    async def list_without_device_id(self) -> list[Reaction]:
        documents = await self._client.list_all_documents(
            self._collection_id, [Query.is_null("deviceId")]
        )
        return self._to_entities(documents)

    async def assign_device_id(self, reaction_id: str, device_id: str) -> None:
        await self._client.update_document(
            self._collection_id, reaction_id, {"deviceId": device_id}
        )
