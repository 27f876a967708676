"""
extraction/hierarchy.py — rodzic/dziecko z wcięcia poziomego (tylko geometria).

Algorytm (jedno przejście, głębokość dokładnie 2):
  1. sortowanie stabilne po top (remis → kolejność w dokumencie),
  2. min_left = najmniejsze left wśród kandydatów,
  3. dziecko  ⇔ left > min_left + indent_threshold,
  4. dziecko dostaje id OSTATNIO widzianego celu najwyższego poziomu
     (kolejność pionowa, nie bliskość przestrzenna); dziecko przed
     pierwszym celem najwyższego poziomu zostaje sierotą (parent_id=None).
"""

from __future__ import annotations

from typing import Sequence

from data_model.goals import Candidate, Goal, GoalList
from extraction.rules import DEFAULT_RULES, RuleSet


def build_hierarchy(
    candidates: Sequence[Candidate],
    rules: RuleSet = DEFAULT_RULES,
) -> GoalList:
    if not candidates:
        return []

    ordered = sorted(candidates, key=lambda c: c.top)
    min_left = min(c.left for c in ordered)

    goals: GoalList = []
    last_parent_id: str | None = None
    for idx, c in enumerate(ordered):
        is_child = c.left > min_left + rules.indent_threshold
        goal_id = f"{rules.goal_id_prefix}{idx}"
        goals.append(Goal(
            id=goal_id,
            title=c.text,
            completed=c.completed,
            parent_id=last_parent_id if is_child else None,
        ))
        if not is_child:
            last_parent_id = goal_id
    return goals
