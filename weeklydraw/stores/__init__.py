"""Interchangeable collection backends."""

from weeklydraw.stores.base import CollectionStore
from weeklydraw.stores.github_store import GitHubStore
from weeklydraw.stores.local_store import LocalStore
from weeklydraw.stores.mongo_store import MongoStore

__all__ = ["CollectionStore", "GitHubStore", "LocalStore", "MongoStore"]
