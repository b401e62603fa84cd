"""Appwrite implementation of the AccountGateway port."""

from typing import Any

from unheard.application.interfaces.account_gateway import AccountGateway
from unheard.domain.entities import AnonymousSession
from unheard.infrastructure.appwrite.appwrite_client import AppwriteClient


class AppwriteAccountGateway(AccountGateway):

    def __init__(self, client: AppwriteClient):
        self._client = client

    async def get_current_session(self) -> AnonymousSession:
        return self._to_session(await self._client.get_account_session("current"))

    async def get_session(self, session_id: str) -> AnonymousSession:
        return self._to_session(await self._client.get_account_session(session_id))

    async def create_anonymous_session(self) -> AnonymousSession:
        data, secret = await self._client.create_anonymous_session()
        self._client.set_session_secret(secret)
        return self._to_session(data, secret)

    def use_session_secret(self, secret: str | None) -> None:
        self._client.set_session_secret(secret)

    @staticmethod
    def _to_session(data: dict[str, Any], secret: str | None = None) -> AnonymousSession:
        return AnonymousSession(
            id=data["$id"],
            user_id=data.get("userId", ""),
            expire=data.get("expire"),
            secret=secret or data.get("secret") or None,
        )
