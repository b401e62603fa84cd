"""Helpers shared by the Appwrite-backed repositories."""

from datetime import datetime, timezone
from typing import Any


def parse_timestamp(document: dict[str, Any]) -> datetime:
    """Read the document's ``timestamp`` attribute, falling back to ``$createdAt``."""
    raw = document.get("timestamp") or document.get("$createdAt")
    if not raw:
        return datetime.now(timezone.utc)
    parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
