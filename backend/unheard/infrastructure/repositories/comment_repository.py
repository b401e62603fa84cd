"""Concrete repository implementation for Comment backed by Appwrite documents."""

from typing import Any

from unheard.application.interfaces import CommentRepository
from unheard.domain.entities import Comment
from unheard.domain.exceptions import DocumentStoreError
from unheard.infrastructure.appwrite import AppwriteClient, Query
from unheard.infrastructure.repositories._documents import format_timestamp, parse_timestamp


class AppwriteCommentRepository(CommentRepository):

    def __init__(self, client: AppwriteClient, collection_id: str):
        self._client = client
        self._collection_id = collection_id

    @staticmethod
    def _to_entity(document: dict[str, Any]) -> Comment:
        return Comment(
            id=document["$id"],
            confession_id=document.get("confessionId", ""),
            username=document.get("username") or "",
            text=document.get("text", ""),
            avatar=document.get("avatar") or "",
            device_id=document.get("deviceId"),
            timestamp=parse_timestamp(document),
        )

    async def get_by_id(self, comment_id: str) -> Comment | None:
        try:
            document = await self._client.get_document(self._collection_id, comment_id)
        except DocumentStoreError as e:
            if e.is_not_found:
                return None
            raise
        return self._to_entity(document)

    async def list_for_confession(self, confession_id: str) -> list[Comment]:
        documents = await self._client.list_all_documents(
            self._collection_id,
            [Query.equal("confessionId", confession_id), Query.order_desc("timestamp")],
        )
        return [self._to_entity(d) for d in documents]

    async def create(self, comment: Comment) -> Comment:
        document = await self._client.create_document(
            self._collection_id,
            {
                "confessionId": comment.confession_id,
                "text": comment.text,
                "username": comment.username,
                "avatar": comment.avatar,
                "deviceId": comment.device_id,
                "timestamp": format_timestamp(comment.timestamp),
            },
        )
        return self._to_entity(document)

    async def delete(self, comment_id: str) -> bool:
        try:
            await self._client.delete_document(self._collection_id, comment_id)
        except DocumentStoreError as e:
            if e.is_not_found:
                return False
            raise
        return True

    async def list_without_device_id(self) -> list[Comment]:
        documents = await self._client.list_all_documents(
            self._collection_id, [Query.is_null("deviceId")]
        )
        return [self._to_entity(d) for d in documents]

    async def assign_device_id(self, comment_id: str, device_id: str) -> None:
        await self._client.update_document(
            self._collection_id, comment_id, {"deviceId": device_id}
        )
