"""Store handle management.

One ``CollectionStore`` per app, chosen by ``STORE_BACKEND`` and kept in
``app.extensions``. Handlers and the scheduler receive it explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from flask import Flask, current_app

from weeklydraw.stores import CollectionStore, GitHubStore, LocalStore, MongoStore

logger = logging.getLogger(__name__)


def create_store(config: Mapping[str, Any]) -> CollectionStore:
    """Build the persistence adapter described by ``config``."""

    backend = str(config.get("STORE_BACKEND") or "local").lower().strip()
    timeout = float(config.get("STORE_TIMEOUT_SECONDS") or 10.0)

    if backend == "github":
        if not config.get("GITHUB_REPO") or not config.get("GITHUB_TOKEN"):
            logger.warning("GitHub store selected without GITHUB_REPO/GITHUB_TOKEN; store calls will fail")
        return GitHubStore(
            repo=str(config.get("GITHUB_REPO") or ""),
            token=str(config.get("GITHUB_TOKEN") or ""),
            branch=str(config.get("GITHUB_BRANCH") or "main"),
            path_prefix=str(config.get("GITHUB_PATH_PREFIX") or ""),
            api_url=str(config.get("GITHUB_API_URL") or "https://api.github.com"),
            timeout_seconds=timeout,
        )

    if backend == "mongo":
        return MongoStore.connect(
            str(config.get("MONGODB_URI") or "mongodb://localhost:27017"),
            str(config.get("MONGODB_DB") or "weeklydraw"),
            timeout_seconds=timeout,
        )

    if backend != "local":
        raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")
    return LocalStore(str(config.get("DATA_DIR") or "./data"))


def init_store(app: Flask, store: CollectionStore | None = None) -> CollectionStore:
    """Attach the store to the app (an injected one wins over config)."""

    if store is None:
        store = create_store(app.config)
    app.extensions["store"] = store
    logger.info("Using %s store", store.name)
    return store


def get_store() -> CollectionStore:
    """Get the store of the current app."""

    store: CollectionStore | None = current_app.extensions.get("store")
    if store is None:
        raise RuntimeError("Store not initialized")
    return store
