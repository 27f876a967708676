"""
extraction/readiness.py — bramka gotowości treści strony.

Strona doładowuje treść asynchronicznie. Przed ekstrakcją próbkujemy długość
widocznego tekstu co poll_interval sekund, aż osiągnie min_length albo
wyczerpie się limit max_attempts. Wynik False nie blokuje ekstrakcji —
gotowość to optymalizacja, nie warunek.

Funkcja sleep jest wstrzykiwana, więc testy symulują czas bez czekania.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from extraction import markers
from page.context import PageContext

log = logging.getLogger(__name__)


class ReadinessWaiter:
    def __init__(
        self,
        min_length: int = markers.MIN_CONTENT_LENGTH,
        poll_interval: float = markers.POLL_INTERVAL,
        max_attempts: int = markers.MAX_ATTEMPTS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_length = min_length
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self._sleep = sleep

    def wait_until_ready(self, page: PageContext) -> bool:
        attempts = 0
        while True:
            length = len(page.get_page_text())
            if length >= self.min_length:
                log.debug("Strona gotowa po %d próbach (%d znaków).", attempts, length)
                return True
            if attempts >= self.max_attempts:
                log.debug(
                    "Limit %d prób wyczerpany (%d znaków) — ekstrakcja mimo to.",
                    self.max_attempts, length,
                )
                return False
            attempts += 1
            self._sleep(self.poll_interval)


def wait_until_ready(
    page: PageContext,
    min_length: int = markers.MIN_CONTENT_LENGTH,
    poll_interval: float = markers.POLL_INTERVAL,
    max_attempts: int = markers.MAX_ATTEMPTS,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    return ReadinessWaiter(min_length, poll_interval, max_attempts, sleep).wait_until_ready(page)
