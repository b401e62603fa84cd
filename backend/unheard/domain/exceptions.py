"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class PermissionDeniedError(Exception):
    """Raised when the acting device does not own the record it tries to change."""

    def __init__(self, action: str, entity_type: str, entity_id: str):
        self.action = action
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"You can only {action} your own {entity_type.lower()}s")


class SessionUnavailableError(Exception):
    """Raised when no backend session could be reused, recovered or created."""


class SubmissionRejectedError(Exception):
    """Raised when user input is refused before anything reaches the store."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class DocumentStoreError(Exception):
    """Raised when the document store answers with an error.

    Store-agnostic — carries the HTTP status and the backend's error type
    so callers can tell permission refusals from other failures.
    """

    def __init__(self, status_code: int, message: str, error_type: str | None = None):
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        super().__init__(f"[{status_code}] {message}")

    @property
    def is_permission_error(self) -> bool:
        return self.status_code in (401, 403)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class TransientStoreError(DocumentStoreError):
    """Network failure or 5xx from the store — the user may retry later."""

    def __init__(self, message: str, status_code: int = 503):
        super().__init__(status_code, message, error_type="transient")


class LocalStorageError(Exception):
    """Raised when device-local storage cannot be read back or written.

    The file holds the device identifier, so an unreadable file is never
    replaced with an empty one.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Local storage {path}: {reason}")
