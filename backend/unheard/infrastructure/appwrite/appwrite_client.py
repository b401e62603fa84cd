"""Appwrite REST client — documents and account endpoints over httpx.

Only the slice of the Appwrite API this application uses is covered:
document CRUD and listing in one database, plus anonymous account
sessions. Errors are translated to the domain's store exceptions.
"""

import json
import logging
from typing import Any

import httpx

from unheard.domain.exceptions import DocumentStoreError, TransientStoreError
from unheard.infrastructure.appwrite.queries import DEFAULT_DOCUMENT_PERMISSIONS, Query

logger = logging.getLogger(__name__)


class AppwriteClient:
    """Infrastructure adapter for one Appwrite project and database.

    The session secret, once set, is sent on every request so writes are
    attributed to the anonymous session. The underlying ``httpx`` client is
    created on first use unless one is injected (tests pass one backed by
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        endpoint: str,
        project_id: str,
        database_id: str,
        *,
        timeout: float = 15.0,
        page_size: int = 100,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._endpoint = endpoint.rstrip("/")
        self._project_id = project_id
        self._database_id = database_id
        self._timeout = timeout
        self._page_size = page_size
        self._http_client = http_client
        self._owns_client = http_client is None
        self._session_secret: str | None = None

    @property
    def project_id(self) -> str:
        return self._project_id

    def set_session_secret(self, secret: str | None) -> None:
        self._session_secret = secret

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "X-Appwrite-Project": self._project_id,
        }
        if self._session_secret:
            headers["X-Appwrite-Session"] = self._session_secret
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def aclose(self) -> None:
        """Close the owned httpx client; injected clients are left alone."""
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    # ── Low-level request ────────────────────────────────────────────

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: list[tuple[str, str]] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a request and raise a store error for any non-2xx answer."""
        url = f"{self._endpoint}{path}"
        try:
            response = await self._get_client().request(
                method, url, headers=self._get_headers(), params=params, json=payload
            )
        except httpx.TransportError as e:
            logger.warning("Appwrite %s %s failed: %s", method, path, e)
            raise TransientStoreError(f"Could not reach the document store: {e}") from e

        if response.is_success:
            return response
        self._raise_store_error(response)

    @staticmethod
    def _raise_store_error(response: httpx.Response) -> None:
        try:
            data = response.json()
            message = data.get("message") or response.text
            error_type = data.get("type")
        except ValueError:
            message = response.text
            error_type = None

        logger.debug("Appwrite error %s (%s): %s", response.status_code, error_type, message)
        if response.status_code >= 500:
            raise TransientStoreError(message, status_code=response.status_code)
        raise DocumentStoreError(response.status_code, message, error_type)

    # ── Documents ────────────────────────────────────────────────────

    def _documents_path(self, collection_id: str) -> str:
        return f"/databases/{self._database_id}/collections/{collection_id}/documents"

    async def create_document(
        self,
        collection_id: str,
        data: dict[str, Any],
        permissions: list[str] | None = None,
    ) -> dict[str, Any]:
        payload = {
            "documentId": "unique()",
            "data": data,
            "permissions": permissions if permissions is not None else DEFAULT_DOCUMENT_PERMISSIONS,
        }
        response = await self.request("POST", self._documents_path(collection_id), payload=payload)
        return response.json()

    async def get_document(self, collection_id: str, document_id: str) -> dict[str, Any]:
        response = await self.request(
            "GET", f"{self._documents_path(collection_id)}/{document_id}"
        )
        return response.json()

    async def list_documents(
        self, collection_id: str, queries: list[str] | None = None
    ) -> dict[str, Any]:
        """One page of documents: ``{"total": int, "documents": [...]}``."""
        params = [("queries[]", q) for q in queries or []]
        response = await self.request("GET", self._documents_path(collection_id), params=params)
        return response.json()

    async def list_all_documents(
        self, collection_id: str, queries: list[str] | None = None
    ) -> list[dict[str, Any]]:
        """Every matching document, following cursors page by page."""
        documents: list[dict[str, Any]] = []
        cursor: str | None = None
        while True:
            page_queries = list(queries or []) + [Query.limit(self._page_size)]
            if cursor is not None:
                page_queries.append(Query.cursor_after(cursor))

            page = (await self.list_documents(collection_id, page_queries)).get("documents", [])
            documents.extend(page)
            if len(page) < self._page_size:
                return documents
            cursor = page[-1]["$id"]

    async def update_document(
        self, collection_id: str, document_id: str, data: dict[str, Any]
    ) -> dict[str, Any]:
        response = await self.request(
            "PATCH",
            f"{self._documents_path(collection_id)}/{document_id}",
            payload={"data": data},
        )
        return response.json()

    async def delete_document(self, collection_id: str, document_id: str) -> None:
        await self.request("DELETE", f"{self._documents_path(collection_id)}/{document_id}")

    # ── Account sessions ─────────────────────────────────────────────

    async def get_account_session(self, session_id: str = "current") -> dict[str, Any]:
        response = await self.request("GET", f"/account/sessions/{session_id}")
        return response.json()

    async def create_anonymous_session(self) -> tuple[dict[str, Any], str | None]:
        """Open an anonymous session. Returns the session and its secret.

        The secret comes back in the body for server-side callers, otherwise
        in the ``X-Fallback-Cookies`` header or the session cookie.
        """
        response = await self.request("POST", "/account/sessions/anonymous")
        data = response.json()
        return data, data.get("secret") or self._secret_from_response(response)

    def _secret_from_response(self, response: httpx.Response) -> str | None:
        cookie_name = f"a_session_{self._project_id}"
        fallback = response.headers.get("X-Fallback-Cookies")
        if fallback:
            try:
                secret = json.loads(fallback).get(cookie_name)
            except ValueError:
                secret = None
            if secret:
                return secret
        return response.cookies.get(cookie_name)
