"""
extraction/sections.py — wyznaczanie granic sekcji „cele do zrobienia teraz”.

Strona nie oznacza przynależności do sekcji w znacznikach, więc granice
wyznaczamy po frazach nagłówków (extraction/markers.py).

Tekst (indeksy linii):
  start = linia PO pierwszym nagłówku startowym (nagłówek wyłączony)
  end   = pierwsza późniejsza linia zaczynająca się frazą końcową (wyłączona)

Geometria (współrzędne pionowe):
  top    = dolna krawędź nagłówka startowego
  bottom = górna krawędź najbliższego elementu poniżej top z frazą końcową
  element należy do sekcji, gdy top <= element.top < bottom

Brak nagłówka startowego → None (pusta sekcja → fallback na drugą strategię).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from data_model.goals import Element
from extraction.rules import DEFAULT_RULES, RuleSet


@dataclass(frozen=True, slots=True)
class SectionBounds:
    start: float
    end: float

    def contains(self, position: float) -> bool:
        return self.start <= position < self.end


# ---------------------------------------------------------------------------
# Strategia tekstowa
# ---------------------------------------------------------------------------

def is_section_start(line: str, rules: RuleSet = DEFAULT_RULES) -> bool:
    if all(term in line for term in rules.start_terms):
        return True
    return line == rules.start_bare


def is_section_end(line: str, rules: RuleSet = DEFAULT_RULES) -> bool:
    return line.startswith(rules.end_prefixes)


def find_text_section(
    lines: Sequence[str],
    rules: RuleSet = DEFAULT_RULES,
) -> SectionBounds | None:
    start: int | None = None
    for i, line in enumerate(lines):
        if is_section_start(line, rules):
            start = i + 1
            break
    if start is None:
        return None

    end = len(lines)
    for i in range(start, len(lines)):
        line = lines[i]
        # Powtórzony nagłówek startowy w środku sekcji nie kończy jej.
        if is_section_start(line, rules):
            continue
        if is_section_end(line, rules):
            end = i
            break
    return SectionBounds(start, end)


# ---------------------------------------------------------------------------
# Strategia geometryczna
# ---------------------------------------------------------------------------

def _find_top(elements: Sequence[Element], rules: RuleSet) -> float | None:
    for el in elements:
        if all(term in el.own_text for term in rules.start_terms):
            return el.bottom
    for el in elements:
        if el.own_text.strip() == rules.start_compact:
            return el.bottom
    return None


def find_geometry_section(
    elements: Sequence[Element],
    rules: RuleSet = DEFAULT_RULES,
) -> SectionBounds | None:
    top = _find_top(elements, rules)
    if top is None:
        return None

    bottom = math.inf
    for el in elements:
        if el.top <= top:
            continue
        if any(term in el.own_text for term in rules.end_terms):
            bottom = min(bottom, el.top)
    return SectionBounds(top, bottom)


def find_section_bounds(
    units: Sequence[str] | Sequence[Element],
    rules: RuleSet = DEFAULT_RULES,
) -> SectionBounds | None:
    """Wybiera wariant po typie jednostek: linie tekstu albo elementy."""
    if units and isinstance(units[0], Element):
        return find_geometry_section(units, rules)  # type: ignore[arg-type]
    return find_text_section(units, rules)  # type: ignore[arg-type]
