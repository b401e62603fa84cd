"""Avatar URL rules — deterministic placeholders and the approved DiceBear styles."""

from urllib.parse import quote

DICEBEAR_BASE_URL = "https://api.dicebear.com/7.x/"
VALID_AVATAR_STYLES = ("avataaars", "pixel-art", "identicon", "bottts", "micah")
DEFAULT_AVATAR = f"{DICEBEAR_BASE_URL}avataaars/svg?seed=default"


def placeholder_avatar(seed: str) -> str:
    """Avatar URL derived from ``seed`` — the same seed always yields the same URL."""
    return f"{DICEBEAR_BASE_URL}avataaars/svg?seed={quote(seed, safe='')}"


def is_valid_avatar(url: str | None) -> bool:
    if not url or not url.startswith(DICEBEAR_BASE_URL):
        return False
    return any(f"/{style}/" in url for style in VALID_AVATAR_STYLES)


def resolve_avatar(url: str | None, seed: str) -> str:
    """Keep an approved avatar, otherwise fall back to the seeded placeholder."""
    if is_valid_avatar(url):
        return url  # type: ignore[return-value]
    return placeholder_avatar(seed)
