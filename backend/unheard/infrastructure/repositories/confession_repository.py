"""Concrete repository implementation for Confession backed by Appwrite documents."""

from typing import Any

from unheard.application.interfaces import ConfessionRepository
from unheard.domain.entities import Confession, Mood, Tag
from unheard.domain.exceptions import DocumentStoreError
from unheard.infrastructure.appwrite import AppwriteClient, Query
from unheard.infrastructure.repositories._documents import format_timestamp, parse_timestamp

# Entity attribute → document attribute, for partial updates.
_FIELD_NAMES: dict[str, str] = {
    "text": "text",
    "tags": "tags",
    "username": "username",
    "avatar": "avatar",
    "device_id": "deviceId",
    "mood": "mood",
    "topic": "topic",
    "anonymous": "anonymous",
    "is_highlighted": "isHighlighted",
    "comments_count": "commentsCount",
}

_KNOWN_TAGS = {t.value for t in Tag}
_KNOWN_MOODS = {m.value for m in Mood}


class AppwriteConfessionRepository(ConfessionRepository):
    """Implements the ConfessionRepository port on an Appwrite collection."""

    def __init__(self, client: AppwriteClient, collection_id: str):
        self._client = client
        self._collection_id = collection_id

    def _to_entity(self, document: dict[str, Any]) -> Confession:
        """Map Appwrite document → domain entity."""
        mood = document.get("mood")
        return Confession(
            id=document["$id"],
            text=document.get("text", ""),
            tags=[Tag(t) for t in document.get("tags") or [] if t in _KNOWN_TAGS],
            username=document.get("username") or "",
            avatar=document.get("avatar") or "",
            device_id=document.get("deviceId"),
            mood=Mood(mood) if mood in _KNOWN_MOODS else None,
            topic=document.get("topic") or None,
            anonymous=bool(document.get("anonymous", False)),
            is_highlighted=bool(document.get("isHighlighted", False)),
            comments_count=int(document.get("commentsCount") or 0),
            timestamp=parse_timestamp(document),
        )

    def _to_document(self, entity: Confession) -> dict[str, Any]:
        """Map domain entity → Appwrite document data (for creation)."""
        return {
            "text": entity.text,
            "tags": [t.value for t in entity.tags],
            "timestamp": format_timestamp(entity.timestamp),
            "username": entity.username,
            "avatar": entity.avatar,
            "deviceId": entity.device_id,
            "mood": entity.mood.value if entity.mood else None,
            "topic": entity.topic,
            "anonymous": entity.anonymous,
            "isHighlighted": entity.is_highlighted,
            "commentsCount": entity.comments_count,
        }

    async def get_by_id(self, confession_id: str) -> Confession | None:
        try:
            document = await self._client.get_document(self._collection_id, confession_id)
        except DocumentStoreError as e:
            if e.is_not_found:
                return None
            raise
        return self._to_entity(document)

    async def get_all(
        self,
        *,
        tag: Tag | None = None,
        topic: str | None = None,
        highlighted: bool | None = None,
        newest_first: bool = True,
    ) -> list[Confession]:
        queries: list[str] = []
        if tag is not None:
            queries.append(Query.search("tags", tag.value))
        if topic is not None:
            queries.append(Query.equal("topic", topic))
        if highlighted is not None:
            queries.append(Query.equal("isHighlighted", highlighted))
        if newest_first:
            queries.append(Query.order_desc("timestamp"))

        documents = await self._client.list_all_documents(self._collection_id, queries)
        return [self._to_entity(d) for d in documents]

    async def create(self, confession: Confession) -> Confession:
        document = await self._client.create_document(
            self._collection_id, self._to_document(confession)
        )
        return self._to_entity(document)

    async def update_fields(self, confession_id: str, fields: dict[str, Any]) -> None:
        data: dict[str, Any] = {}
        for name, value in fields.items():
            if name not in _FIELD_NAMES:
                raise ValueError(f"Unknown confession field: {name}")
            if name == "tags":
                value = [t.value if isinstance(t, Tag) else t for t in value]
            elif name == "mood" and isinstance(value, Mood):
                value = value.value
            data[_FIELD_NAMES[name]] = value
        await self._client.update_document(self._collection_id, confession_id, data)

    async def delete(self, confession_id: str) -> bool:
        try:
            await self._client.delete_document(self._collection_id, confession_id)
        except DocumentStoreError as e:
            if e.is_not_found:
                return False
            raise
        return True

    async def list_without_device_id(self) -> list[Confession]:
        documents = await self._client.list_all_documents(
            self._collection_id, [Query.is_null("deviceId")]
        )
        return [self._to_entity(d) for d in documents]
