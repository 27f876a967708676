"""
data_model/goals.py — model celów wyciąganych ze strony.

Element    — jeden wyrenderowany element strony (własny tekst + prostokąt).
Candidate  — element/linia, która przeszła filtry (żyje jeden przebieg).
Goal       — wynik: id, tytuł, stan ukończenia, opcjonalny rodzic.
GoalList   — uporządkowana lista celów (kolejność pierwszego wystąpienia).

Format przewodowy Goal (klucze w tej kolejności):
  {"id": str, "title": str, "completed": bool, "parentId": str | null}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class Element:
    own_text: str        # tekst należący bezpośrednio do elementu (bez potomków)
    left: float
    top: float
    width: float
    height: float
    completed: bool = False

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def visible(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True, slots=True)
class Candidate:
    text: str            # tytuł po normalizacji
    left: float = 0.0
    top: float = 0.0
    completed: bool = False


@dataclass(frozen=True, slots=True)
class Goal:
    id: str
    title: str
    completed: bool = False
    parent_id: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "parentId": self.parent_id,
        }

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Goal:
        """Odtwarza Goal z obiektu JSON; brak parentId traktujemy jak null."""
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            completed=bool(data.get("completed", False)),
            parent_id=data.get("parentId"),
        )


# Wynik jednego przebiegu ekstrakcji, w kolejności pierwszego wystąpienia.
GoalList: TypeAlias = list[Goal]
