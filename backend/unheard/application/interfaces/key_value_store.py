"""Port for durable device-local key/value storage."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """String key/value storage that survives process restarts."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...
