"""Conversions for values read back from stored collections."""

from __future__ import annotations

from typing import Any

from weeklydraw.errors import StoreUnavailableError


def stored_int(doc: dict[str, Any], key: str) -> int:
    """Integer field of a stored record; missing or empty reads as 0."""

    value = doc.get(key)
    try:
        return int(value or 0)
    except (TypeError, ValueError) as exc:
        raise StoreUnavailableError(
            message="Corrupt collection",
            details={"field": key, "value": repr(value)},
        ) from exc
