"""Colored engagement logger — ANSI-tagged console lines for the engagement flow.

Every line carries a stage tag so a terminal trace shows at a glance which
part of the confession / reaction / comment bookkeeping produced it.

Color scheme:
    🟣 Magenta — Session acquisition
    🟢 Green   — Confessions
    🟡 Yellow  — Reactions
    🔵 Blue    — Comments
    🟠 Cyan    — Highlight recompute
    ⚪ Gray    — Secondary effects / migration
    🔴 Red     — Failures
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

ENGAGEMENT_LOGGER_NAME = "unheard.engagement"


class _Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


class EngagementStage:
    """Stage label, color and icon triples."""

    SESSION = ("SESSION", _Colors.MAGENTA, "🔑")
    CONFESSION = ("CONFESSION", _Colors.GREEN, "🤫")
    REACTION = ("REACTION", _Colors.YELLOW, "❤️")
    COMMENT = ("COMMENT", _Colors.BLUE, "💬")
    HIGHLIGHT = ("HIGHLIGHT", _Colors.CYAN, "✨")
    SECONDARY = ("SECONDARY", _Colors.GRAY, "↪️")
    MIGRATION = ("MIGRATION", _Colors.GRAY, "🧳")


def _format_fields(fields: dict[str, Any]) -> str:
    if not fields:
        return ""
    joined = " | ".join(f"{k}={v}" for k, v in fields.items())
    return f" {_Colors.GRAY}({joined}){_Colors.RESET}"


class EngagementLogger:
    """Stage-tagged logger for one engagement component.

    Usage:
        log = EngagementLogger("CommentService")
        log.event(EngagementStage.COMMENT, "Comment added", confession_id=cid)
        log.failure(EngagementStage.SECONDARY, "Counter write skipped", error=exc)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(f"{ENGAGEMENT_LOGGER_NAME}.{component_name}")

    def event(self, stage: tuple[str, str, str], message: str, **fields: Any) -> None:
        label, color, icon = stage
        self._logger.info(
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}{_format_fields(fields)}"
        )

    def trace(self, stage: tuple[str, str, str], message: str, **fields: Any) -> None:
        """Low-importance detail, emitted at DEBUG."""
        label, _, _ = stage
        self._logger.debug(
            f"   {_Colors.GRAY}├─ [{label}] {message}{_Colors.RESET}{_format_fields(fields)}"
        )

    def failure(
        self,
        stage: tuple[str, str, str],
        message: str,
        error: BaseException | None = None,
        **fields: Any,
    ) -> None:
        """Log a tolerated failure at WARNING — the caller carries on."""
        label, _, icon = stage
        line = (
            f"{_Colors.RED}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error is not None:
            line += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.warning(line + _format_fields(fields))

    @contextmanager
    def timed(self, stage: tuple[str, str, str], message: str, **fields: Any) -> Iterator[None]:
        """Log completion (or failure) of the enclosed block with its elapsed time."""
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            self.failure(stage, f"{message} failed after {time.perf_counter() - start:.2f}s", error=e)
            raise
        self.event(stage, f"{message} ({time.perf_counter() - start:.2f}s)", **fields)
