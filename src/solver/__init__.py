"""Breadth-first search engine, its settings and event log."""

from .engine import ProblemSolver, SearchResult, SearchStats, solve
from .settings import SearchSettings, resolve_settings

__all__ = [
    "ProblemSolver",
    "SearchResult",
    "SearchSettings",
    "SearchStats",
    "resolve_settings",
    "solve",
]
