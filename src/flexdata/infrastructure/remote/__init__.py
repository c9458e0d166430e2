"""Adapters between the client engine and the remote store."""

from flexdata.infrastructure.remote.base import RemoteSyncAdapter
from flexdata.infrastructure.remote.collection_client import CollectionClient
from flexdata.infrastructure.remote.http_sync_adapter import (
    FieldSyncAdapter,
    HttpSyncAdapter,
    RowSyncAdapter,
)

__all__ = [
    "CollectionClient",
    "FieldSyncAdapter",
    "HttpSyncAdapter",
    "RemoteSyncAdapter",
    "RowSyncAdapter",
]
