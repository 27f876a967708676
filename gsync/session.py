"""
gsync/session.py — sesja synchronizacji: właściciel jednego kontekstu strony.

Zasady:
  - open() zamyka nieaktualny kontekst, zanim utworzy nowy,
  - fetch() bez otwartej sesji → SessionContextError („zaloguj się ponownie”),
  - równoległy fetch() na tej samej sesji → ExtractionInProgressError,
  - reload() przeładowuje stronę i uruchamia nowy przebieg (z nową bramką
    gotowości).
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from data_model.goals import GoalList
from extraction.engine import run_extraction
from extraction.errors import ExtractionInProgressError, SessionContextError
from extraction.readiness import ReadinessWaiter
from extraction.rules import DEFAULT_RULES, RuleSet
from page.context import PageContext
from transport.emitter import ResultEmitter

log = logging.getLogger(__name__)


class SyncSession:
    def __init__(
        self,
        page_factory: Callable[[], PageContext],
        emitter: ResultEmitter,
        rules: RuleSet = DEFAULT_RULES,
        waiter: ReadinessWaiter | None = None,
    ) -> None:
        self._page_factory = page_factory
        self.emitter = emitter
        self.rules = rules
        self.waiter = waiter
        self.page: PageContext | None = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self.page is not None

    def open(self) -> PageContext:
        if self.page is not None:
            log.debug("Zamykam nieaktualny kontekst strony przed otwarciem nowego.")
            self.close()
        self.page = self._page_factory()
        return self.page

    def close(self) -> None:
        self.page = None

    def fetch(self, rules: RuleSet | None = None) -> GoalList:
        if not self._lock.acquire(blocking=False):
            raise ExtractionInProgressError("Przebieg ekstrakcji dla tej sesji już trwa.")
        try:
            return run_extraction(
                self.page,
                self.emitter,
                rules=rules or self.rules,
                waiter=self.waiter,
            )
        finally:
            self._lock.release()

    def reload(self, rules: RuleSet | None = None) -> GoalList:
        if self.page is None:
            raise SessionContextError()
        self.page.reload_page()
        return self.fetch(rules)
