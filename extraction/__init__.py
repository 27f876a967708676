"""
extraction — silnik ekstrakcji celów ze strony bez API.

Publiczne API:
  run_extraction(page, emitter, rules, waiter, strategies) -> GoalList
  RuleSet, DEFAULT_RULES, load_rules(source, cache_dir, ttl)
  ReadinessWaiter, wait_until_ready(page, ...)
  GeometryStrategy, PlainTextStrategy, build_strategies(rules), select_goals(page, strategies)
  find_section_bounds, is_candidate, normalize, dedupe, build_hierarchy
"""

from .errors import (
    GoalSyncError,
    SessionContextError,
    NavigationError,
    TransportError,
    PayloadError,
    RulesError,
    ExtractionInProgressError,
)
from .rules import RuleSet, DEFAULT_RULES, load_rules
from .normalizer import normalize
from .filters import is_candidate
from .dedupe import dedupe
from .sections import SectionBounds, find_section_bounds
from .hierarchy import build_hierarchy
from .readiness import ReadinessWaiter, wait_until_ready
from .strategies import (
    ExtractionStrategy,
    GeometryStrategy,
    PlainTextStrategy,
    STRATEGIES,
    build_strategies,
)
from .selector import select_goals
from .engine import run_extraction

__all__ = [
    "GoalSyncError",
    "SessionContextError",
    "NavigationError",
    "TransportError",
    "PayloadError",
    "RulesError",
    "ExtractionInProgressError",
    "RuleSet",
    "DEFAULT_RULES",
    "load_rules",
    "normalize",
    "is_candidate",
    "dedupe",
    "SectionBounds",
    "find_section_bounds",
    "build_hierarchy",
    "ReadinessWaiter",
    "wait_until_ready",
    "ExtractionStrategy",
    "GeometryStrategy",
    "PlainTextStrategy",
    "STRATEGIES",
    "build_strategies",
    "select_goals",
    "run_extraction",
]
