"""Application services."""

from flexdata.application.services.collection_workspace import CollectionWorkspace

__all__ = ["CollectionWorkspace"]
