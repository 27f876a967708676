"""Wyjątki GoalSync.

Pusty wynik ekstrakcji NIE jest błędem. Wyjątki oznaczają naruszenie
warunków brzegowych (brak sesji, nieudana nawigacja, transport, plik reguł).
"""

from __future__ import annotations


class GoalSyncError(Exception):
    """Bazowy wyjątek pakietu."""


class SessionContextError(GoalSyncError):
    """Brak kontekstu strony — sesja nie została otwarta lub została zamknięta."""

    def __init__(self, message: str = "Brak otwartej sesji strony. Zaloguj się ponownie (reopen sign-in).") -> None:
        super().__init__(message)


class NavigationError(GoalSyncError):
    """Nie udało się pobrać / przeładować strony."""


class TransportError(GoalSyncError):
    """Nie udało się dostarczyć wyniku do strony odbierającej."""


class PayloadError(GoalSyncError):
    """Odebrany ładunek nie jest poprawną listą celów."""


class RulesError(GoalSyncError):
    """Niepoprawny plik reguł."""


class ExtractionInProgressError(GoalSyncError):
    """Przebieg ekstrakcji dla tej sesji już trwa."""
