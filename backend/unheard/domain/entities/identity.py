"""Anonymous identity entities — backend session and remembered display profile."""

from dataclasses import dataclass


@dataclass
class AnonymousSession:
    """A backend session that authenticates without any personal data.

    ``secret`` is the token sent back to the backend on later requests;
    it is only known for sessions created or restored by this process.
    """

    id: str
    user_id: str
    expire: str | None = None
    secret: str | None = None


@dataclass
class DisplayProfile:
    """Last username/avatar used on a submission form, for prefilling."""

    form: str
    username: str | None = None
    avatar: str | None = None
