"""
extraction/selector.py — liniowy fallback między strategiami.

  TryGeometry --(niepusty wynik)--> Done
  TryGeometry --(pusty wynik)-----> TryPlainText --> Done

Żaden stan nie jest powtarzany. Pusty wynik ostatniej strategii to poprawny
stan końcowy (lista pusta), nie błąd.
"""

from __future__ import annotations

import logging
from typing import Sequence

from data_model.goals import GoalList
from extraction.strategies import ExtractionStrategy
from page.context import PageContext

log = logging.getLogger(__name__)


def select_goals(page: PageContext, strategies: Sequence[ExtractionStrategy]) -> GoalList:
    goals: GoalList = []
    for strategy in strategies:
        goals = strategy.extract(page)
        if goals:
            log.info("Strategia %s: %d celów.", strategy.name, len(goals))
            return goals
        log.debug("Strategia %s: brak wyników, następna.", strategy.name)
    return goals
