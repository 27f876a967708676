"""
data_model — struktury danych GoalSync.

Użycie:
  from data_model import Element, Candidate, Goal, GoalList

Moduły:
  goals — Element, Candidate, Goal, GoalList
"""

from .goals import (
    Element,
    Candidate,
    Goal,
    GoalList,
)

__all__ = [
    "Element",
    "Candidate",
    "Goal",
    "GoalList",
]
