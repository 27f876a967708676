"""
extraction/filters.py — odrzucanie linii/elementów, które nie są celami.

Warunki weta (niezależne, kolejność bez znaczenia):
  - za krótki tekst po strip()     (tekst: < 4, geometria: < 3)
  - wygląda jak zakres dat         („〜3/25”, „3/25 …”)
  - wygląda jak pole wyszukiwania  („検索…”, „Q …”)
  - geometria: element niewyrenderowany (szerokość lub wysokość <= 0)
"""

from __future__ import annotations

from typing import Literal

from data_model.goals import Element
from extraction.rules import DEFAULT_RULES, RuleSet

Strategy = Literal["text", "geometry"]


def is_date_like(text: str, rules: RuleSet = DEFAULT_RULES) -> bool:
    return rules.date_like_re.search(text) is not None


def is_search_box(text: str, rules: RuleSet = DEFAULT_RULES) -> bool:
    return rules.search_re.search(text) is not None


def is_candidate(
    unit: str | Element,
    strategy: Strategy,
    rules: RuleSet = DEFAULT_RULES,
) -> bool:
    if isinstance(unit, Element):
        if strategy == "geometry" and not unit.visible:
            return False
        text = unit.own_text.strip()
    else:
        text = unit.strip()

    min_len = rules.min_element_length if strategy == "geometry" else rules.min_line_length
    if len(text) < min_len:
        return False
    if is_date_like(text, rules):
        return False
    if is_search_box(text, rules):
        return False
    return True
