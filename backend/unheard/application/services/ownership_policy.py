"""Ownership checks layered on top of the store's session-wide permissions.

The backend lets any session holder update or delete any record, so the
only thing standing between a device and someone else's content is this
comparison of device identifiers.
"""

from typing import Protocol

from unheard.application.services.identity_service import AnonymousIdentityProvider
from unheard.domain.exceptions import PermissionDeniedError


class OwnedRecord(Protocol):
    id: str | None

    def is_owned_by(self, device_id: str) -> bool: ...


class OwnershipPolicy:

    def __init__(self, identity: AnonymousIdentityProvider):
        self._identity = identity

    def is_owner(self, record: OwnedRecord) -> bool:
        return record.is_owned_by(self._identity.get_or_create_device_id())

    def ensure_owner(self, record: OwnedRecord, *, action: str, entity_type: str) -> None:
        """Raise PermissionDeniedError unless this device created ``record``."""
        if not self.is_owner(record):
            raise PermissionDeniedError(action, entity_type, record.id or "")
