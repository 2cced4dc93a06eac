"""A claimed slot on the board."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from weeklydraw.models.coerce import stored_int


@dataclass(frozen=True)
class Reservation:
    number: int
    nickname: str

    @classmethod
    def from_dict(cls, doc: dict[str, Any]) -> "Reservation":
        return cls(number=stored_int(doc, "number"), nickname=str(doc.get("nickname") or ""))

    def to_dict(self) -> dict[str, Any]:
        return {"number": self.number, "nickname": self.nickname}

    @property
    def is_active(self) -> bool:
        return bool(self.nickname.strip())
