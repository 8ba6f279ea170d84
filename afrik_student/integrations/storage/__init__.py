"""Blob storage integration - local filesystem or S3."""

from .client import get_storage_client, StorageClient
from .local_storage import LocalStorageClient

__all__ = ["get_storage_client", "StorageClient", "LocalStorageClient"]
