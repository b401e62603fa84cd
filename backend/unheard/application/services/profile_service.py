"""Remembers the last display name/avatar used on each submission form."""

from unheard.application.interfaces import KeyValueStore
from unheard.domain.entities import DisplayProfile

PROFILE_FORMS = ("confession", "comment")


class ProfileService:
    """Reads and writes per-form display profiles in device-local storage."""

    def __init__(self, storage: KeyValueStore):
        self._storage = storage

    def recall(self, form: str) -> DisplayProfile:
        self._check_form(form)
        return DisplayProfile(
            form=form,
            username=self._storage.get(f"{form}Username"),
            avatar=self._storage.get(f"{form}Avatar"),
        )

    def remember(self, form: str, username: str | None, avatar: str | None = None) -> DisplayProfile:
        """Store the values that were given; ``None`` leaves the saved value untouched."""
        self._check_form(form)
        if username:
            self._storage.set(f"{form}Username", username)
        if avatar:
            self._storage.set(f"{form}Avatar", avatar)
        return self.recall(form)

    @staticmethod
    def _check_form(form: str) -> None:
        if form not in PROFILE_FORMS:
            raise ValueError(f"Unknown profile form '{form}'")
