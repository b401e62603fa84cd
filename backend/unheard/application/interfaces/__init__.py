from .account_gateway import AccountGateway
from .comment_repository import CommentRepository
from .confession_repository import ConfessionRepository
from .key_value_store import KeyValueStore
from .reaction_repository import ReactionRepository

__all__ = [
    "AccountGateway",
    "CommentRepository",
    "ConfessionRepository",
    "KeyValueStore",
    "ReactionRepository",
]
