"""Persistence contract shared by every collection backend."""

from __future__ import annotations

import abc
from typing import Any


class CollectionStore(abc.ABC):
    """Read/write whole JSON collections with version-token preconditions.

    ``read`` returns ``(value, token)``. ``write`` only succeeds when the
    supplied token still matches what is stored; ``token=None`` means the
    collection must not exist yet.

    Raises:
        NotFoundError: ``read`` of an absent collection.
        ConflictError: ``write`` with a stale token.
        StoreUnavailableError: transport, auth or decoding failure.
    """

    name = "abstract"

    @abc.abstractmethod
    def read(self, key: str) -> tuple[Any, str]:
        raise NotImplementedError

    @abc.abstractmethod
    def write(self, key: str, value: Any, token: str | None) -> str:
        """Write ``value`` and return the new version token."""

        raise NotImplementedError

    @abc.abstractmethod
    def list_keys(self, prefix: str) -> list[str]:
        """Names (without ``prefix``) of the collections stored under ``prefix``."""

        raise NotImplementedError

    def close(self) -> None:
        return None
