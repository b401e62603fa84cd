from .account_gateway import AppwriteAccountGateway
from .appwrite_client import AppwriteClient
from .queries import DEFAULT_DOCUMENT_PERMISSIONS, Query

__all__ = [
    "AppwriteAccountGateway",
    "AppwriteClient",
    "DEFAULT_DOCUMENT_PERMISSIONS",
    "Query",
]
