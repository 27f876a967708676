"""
extraction/engine.py — jeden pełny przebieg ekstrakcji.

run_extraction():
  1. brak kontekstu strony → SessionContextError (bez emisji),
  2. bramka gotowości (ReadinessWaiter),
  3. strategie w kolejności rules.strategy_order, pierwszy niepusty wynik,
  4. dokładnie jedno wysłanie wyniku, także po nieoczekiwanym błędzie
     (wtedy []); kodowanie ładunku też jest objęte tą obsługą.

Błędy transportu z send() nie są połykane: to naruszenie warunku brzegowego,
a nie pudło heurystyki.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Sequence

from data_model.goals import GoalList
from extraction.errors import SessionContextError
from extraction.readiness import ReadinessWaiter
from extraction.rules import DEFAULT_RULES, RuleSet
from extraction.selector import select_goals
from extraction.strategies import ExtractionStrategy, build_strategies
from page.context import PageContext

if TYPE_CHECKING:
    from transport.emitter import ResultEmitter

log = logging.getLogger(__name__)


def waiter_for(rules: RuleSet, sleep: Callable[[float], None] | None = None) -> ReadinessWaiter:
    if sleep is None:
        return ReadinessWaiter(rules.min_content_length, rules.poll_interval, rules.max_attempts)
    return ReadinessWaiter(rules.min_content_length, rules.poll_interval, rules.max_attempts, sleep)


def run_extraction(
    page: PageContext | None,
    emitter: ResultEmitter,
    rules: RuleSet | None = None,
    waiter: ReadinessWaiter | None = None,
    strategies: Sequence[ExtractionStrategy] | None = None,
) -> GoalList:
    """
    Uruchamia przebieg i emituje wynik. Zwraca wyemitowaną listę.

    rules      — nadpisanie heurystyki (plik reguł); domyślnie DEFAULT_RULES
    waiter     — bramka gotowości; domyślnie z progów w rules
    strategies — gotowe strategie; domyślnie build_strategies(rules)
    """
    if page is None:
        raise SessionContextError()

    rules = rules or DEFAULT_RULES
    goals: GoalList
    try:
        ready = (waiter or waiter_for(rules)).wait_until_ready(page)
        if not ready:
            log.info("Strona nie osiągnęła progu gotowości — próbuję mimo to.")
        if strategies is None:
            strategies = build_strategies(rules)
        goals = select_goals(page, strategies)
        payload = emitter.encode(goals)
    except Exception:
        log.warning("Przebieg ekstrakcji przerwany błędem — emituję pustą listę.", exc_info=True)
        goals = []
        payload = emitter.encode(goals)

    emitter.send(payload)
    return goals
