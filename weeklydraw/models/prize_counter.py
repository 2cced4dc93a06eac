"""Prize inventory line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from weeklydraw.models.coerce import stored_int


@dataclass
class PrizeCounter:
    prize: str
    count: int

    @classmethod
    def from_dict(cls, doc: dict[str, Any]) -> "PrizeCounter":
        return cls(prize=str(doc.get("prize") or ""), count=stored_int(doc, "count"))

    def to_dict(self) -> dict[str, Any]:
        return {"prize": self.prize, "count": self.count}
