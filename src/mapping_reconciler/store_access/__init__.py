"""Document store access exports."""

from .store_client import DocumentStoreClient, HttpDocumentStoreClient, TransportFailure

__all__ = [
    "DocumentStoreClient",
    "HttpDocumentStoreClient",
    "TransportFailure",
]
