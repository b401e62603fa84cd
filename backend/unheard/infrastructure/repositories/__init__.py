from .comment_repository import AppwriteCommentRepository
from .confession_repository import AppwriteConfessionRepository
from .reaction_repository import AppwriteReactionRepository

__all__ = [
    "AppwriteCommentRepository",
    "AppwriteConfessionRepository",
    "AppwriteReactionRepository",
]
