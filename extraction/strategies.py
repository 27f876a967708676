"""
extraction/strategies.py — strategie ekstrakcji celów.

Każda strategia ma ten sam kontrakt: extract(page) -> GoalList.
Selektor (extraction/selector.py) nie zna szczegółów strategii, a nowe
strategie rejestruje się w STRATEGIES i włącza przez rules.strategy_order.

  geometry  elementy + prostokąty; sekcja po współrzędnych, hierarchia z wcięcia
  text      płaski widoczny tekst; sekcja po liniach, bez hierarchii
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from data_model.goals import Candidate, Goal, GoalList
from extraction.dedupe import dedupe
from extraction.errors import RulesError
from extraction.filters import is_candidate
from extraction.hierarchy import build_hierarchy
from extraction.normalizer import normalize
from extraction.rules import DEFAULT_RULES, RuleSet
from extraction.sections import (
    find_geometry_section,
    find_text_section,
    is_section_start,
)
from page.context import PageContext

log = logging.getLogger(__name__)


class ExtractionStrategy(ABC):
    name: str = ""

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self.rules = rules

    @abstractmethod
    def extract(self, page: PageContext) -> GoalList:
        """Zwraca cele z bieżącej strony; pusta lista = brak sekcji lub kandydatów."""


class GeometryStrategy(ExtractionStrategy):
    name = "geometry"

    def extract(self, page: PageContext) -> GoalList:
        rules = self.rules
        rendered = [
            el for el in page.get_elements()
            if el.visible and len(el.own_text.strip()) >= rules.min_element_length
        ]

        bounds = find_geometry_section(rendered, rules)
        if bounds is None:
            log.debug("geometry: brak nagłówka sekcji (%d elementów).", len(rendered))
            return []

        candidates: list[Candidate] = []
        for el in rendered:
            if not bounds.contains(el.top):
                continue
            if not is_candidate(el, "geometry", rules):
                continue
            title = normalize(el.own_text, rules)
            if len(title) < rules.min_geometry_title_length:
                continue
            candidates.append(Candidate(
                text=title,
                left=el.left,
                top=el.top,
                completed=el.completed,
            ))

        candidates = dedupe(candidates, key=lambda c: c.text)
        log.debug("geometry: %d kandydatów w sekcji %s.", len(candidates), bounds)
        return build_hierarchy(candidates, rules)


class PlainTextStrategy(ExtractionStrategy):
    name = "text"

    def extract(self, page: PageContext) -> GoalList:
        rules = self.rules
        lines = [line.strip() for line in page.get_page_text().split("\n")]
        lines = [line for line in lines if line]

        bounds = find_text_section(lines, rules)
        if bounds is None:
            log.debug("text: brak nagłówka sekcji (%d linii).", len(lines))
            return []

        titles: list[str] = []
        for line in lines[int(bounds.start):int(bounds.end)]:
            if is_section_start(line, rules):
                continue
            if not is_candidate(line, "text", rules):
                continue
            title = normalize(line, rules)
            if len(title) < rules.min_text_title_length:
                continue
            titles.append(title)

        titles = dedupe(titles)
        log.debug("text: %d celów w liniach %s.", len(titles), bounds)
        return [
            Goal(id=f"{rules.goal_id_prefix}{idx}", title=title)
            for idx, title in enumerate(titles)
        ]


STRATEGIES: dict[str, type[ExtractionStrategy]] = {
    GeometryStrategy.name: GeometryStrategy,
    PlainTextStrategy.name: PlainTextStrategy,
}


def build_strategies(rules: RuleSet = DEFAULT_RULES) -> list[ExtractionStrategy]:
    """Tworzy strategie w kolejności rules.strategy_order."""
    out: list[ExtractionStrategy] = []
    for name in rules.strategy_order:
        cls = STRATEGIES.get(name)
        if cls is None:
            raise RulesError(
                f"Nieznana strategia '{name}'. Dostępne: {', '.join(sorted(STRATEGIES))}"
            )
        out.append(cls(rules))
    return out
