"""Durable device-local key/value storage kept in a single JSON file."""

import json
import logging
import os
import tempfile
from pathlib import Path

from unheard.application.interfaces import KeyValueStore
from unheard.domain.exceptions import LocalStorageError

logger = logging.getLogger(__name__)


class JsonKeyValueStore(KeyValueStore):
    """Infrastructure adapter — string values persisted to ``<path>`` as JSON.

    The file is read once and then served from memory. Every change is
    written to a temporary file beside it and swapped in with
    ``os.replace``, so a crash mid-write leaves the previous contents.
    A missing file starts empty; a file that cannot be parsed raises
    ``LocalStorageError`` and is left untouched for the operator.
    """

    def __init__(self, path: str):
        self._path = Path(path)
        self._values: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("Local storage %s unreadable: %s", self._path, e)
            raise LocalStorageError(str(self._path), f"unreadable ({e})") from e
        if not isinstance(data, dict):
            logger.error("Local storage %s is not a JSON object", self._path)
            raise LocalStorageError(str(self._path), "not a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, values: dict[str, str]) -> None:
        payload = json.dumps(values, indent=2, ensure_ascii=False)
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise LocalStorageError(str(self._path), f"write failed ({e})") from e

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        values = {**self._values, key: value}
        self._write(values)
        self._values = values

    def remove(self, key: str) -> None:
        if key not in self._values:
            return
        values = {k: v for k, v in self._values.items() if k != key}
        self._write(values)
        self._values = values
