"""Query and permission string builders for the Appwrite REST API.

Appwrite takes list filters as repeated ``queries[]`` parameters, each a
JSON object naming the method, the attribute and the values.
"""

import json
from typing import Any


def _query(method: str, attribute: str | None = None, values: list[Any] | None = None) -> str:
    payload: dict[str, Any] = {"method": method}
    if attribute is not None:
        payload["attribute"] = attribute
    if values is not None:
        payload["values"] = values
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


class Query:
    """Builders for the query methods this application needs."""

    @staticmethod
    def equal(attribute: str, value: Any) -> str:
        values = value if isinstance(value, list) else [value]
        return _query("equal", attribute, values)

    @staticmethod
    def search(attribute: str, value: str) -> str:
        return _query("search", attribute, [value])

    @staticmethod
    def is_null(attribute: str) -> str:
        return _query("isNull", attribute)

    @staticmethod
    def order_desc(attribute: str) -> str:
        return _query("orderDesc", attribute)

    @staticmethod
    def order_asc(attribute: str) -> str:
        return _query("orderAsc", attribute)

    @staticmethod
    def limit(value: int) -> str:
        return _query("limit", values=[value])

    @staticmethod
    def cursor_after(document_id: str) -> str:
        return _query("cursorAfter", values=[document_id])


# Anyone may read; any signed-in (including anonymous) user may write.
DEFAULT_DOCUMENT_PERMISSIONS: list[str] = [
    'read("any")',
    'write("users")',
    'update("users")',
    'delete("users")',
]
