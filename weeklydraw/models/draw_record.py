"""One historical draw.

Stored as JSON objects shaped like
``{"date": "07.10.2026", "number": 42, "name": "", "prize": ""}``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from weeklydraw.models.coerce import stored_int


@dataclass
class DrawRecord:
    date: str
    number: int
    name: str = ""
    prize: str = ""
    chosen_number: Any | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, doc: dict[str, Any]) -> "DrawRecord":
        known = {"date", "number", "name", "prize", "chosenNumber"}
        return cls(
            date=str(doc.get("date") or ""),
            number=stored_int(doc, "number"),
            name=str(doc.get("name") or ""),
            prize=str(doc.get("prize") or ""),
            chosen_number=doc.get("chosenNumber"),
            extra={k: v for k, v in doc.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self.extra)
        out.update({"date": self.date, "number": self.number, "name": self.name, "prize": self.prize})
        if self.chosen_number is not None:
            out["chosenNumber"] = self.chosen_number
        return out

    def matches(self, date: str, number: int) -> bool:
        return self.date == date and self.number == int(number)
