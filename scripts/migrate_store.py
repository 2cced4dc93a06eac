"""Copy collections from one store backend to another.

Copies:
- `history`, `names`, `prizes`
- every archive under `log/`

Usage:
  # source: local files in ./data, target: GitHub repo from GITHUB_* env vars
  python scripts/migrate_store.py --source local --target github

Notes:
- This does NOT delete anything from the source.
- Existing target collections are skipped unless `--overwrite` is given.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover
    load_dotenv = None  # type: ignore[assignment]

from weeklydraw.db import create_store
from weeklydraw.errors import AppError, NotFoundError
from weeklydraw.stores.base import CollectionStore

logger = logging.getLogger(__name__)

COLLECTIONS = ("history", "names", "prizes")
LOG_PREFIX = "log/"


def _store_for(backend: str, data_dir: str | None) -> CollectionStore:
    from weeklydraw.config import BaseConfig

    config: dict[str, Any] = asdict(BaseConfig())
    config["STORE_BACKEND"] = backend
    if data_dir:
        config["DATA_DIR"] = data_dir
    return create_store(config)


def _keys(source: CollectionStore) -> list[str]:
    keys = list(COLLECTIONS)
    try:
        keys.extend(LOG_PREFIX + name for name in source.list_keys(LOG_PREFIX))
    except NotFoundError:
        logger.info("No archives to copy")
    return keys


def copy_collection(source: CollectionStore, target: CollectionStore, key: str, overwrite: bool) -> bool:
    """Copy one key; returns False when it was skipped."""

    try:
        value, _ = source.read(key)
    except NotFoundError:
        logger.info("Source has no %s, skipping", key)
        return False

    try:
        _, token = target.read(key)
    except NotFoundError:
        token = None

    if token is not None and not overwrite:
        logger.info("Target already has %s, skipping", key)
        return False

    target.write(key, value, token)
    logger.info("Copied %s", key)
    return True


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Copy draw collections between store backends")
    parser.add_argument("--source", required=True, choices=("local", "github", "mongo"))
    parser.add_argument("--target", required=True, choices=("local", "github", "mongo"))
    parser.add_argument("--source-dir", dest="source_dir", default=None, help="DATA_DIR for a local source")
    parser.add_argument("--target-dir", dest="target_dir", default=None, help="DATA_DIR for a local target")
    parser.add_argument("--overwrite", action="store_true", help="Replace collections that already exist")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    if load_dotenv is not None:
        load_dotenv()

    if args.source == args.target and args.source_dir == args.target_dir:
        parser.error("source and target are the same store")

    source = _store_for(args.source, args.source_dir)
    target = _store_for(args.target, args.target_dir)

    copied = 0
    try:
        for key in _keys(source):
            if copy_collection(source, target, key, args.overwrite):
                copied += 1
    except AppError as exc:
        logger.error("Migration failed: %s (%s)", exc.message, exc.details)
        return 1
    finally:
        source.close()
        target.close()

    logger.info("Copied collections: %d", copied)
    logger.info("Done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
