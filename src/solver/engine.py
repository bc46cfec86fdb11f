"""Generic breadth-first search over :class:`problems.state.Problem` values."""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import asdict, dataclass
from typing import Any, Callable, Deque, Dict, Mapping, Optional, Tuple

from contracts.errors import SearchBudgetExceeded
from problems.state import Problem

_LOGGER = logging.getLogger(__name__)

STATUS_SOLVED = "solved"
STATUS_EXHAUSTED = "exhausted"
STATUS_BUDGET = "budget_exhausted"

EVENT_TYPE = "search.completed.v1"

EventSink = Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True)
class SearchStats:
    """Counters collected while a search runs."""

    expanded: int
    generated: int
    max_frontier: int
    depth: int
    elapsed_ms: int


@dataclass(frozen=True)
class SearchResult:
    """Outcome of :meth:`ProblemSolver.search`."""

    status: str
    solution: Optional[Problem]
    stats: SearchStats
    reason: str | None = None

    @property
    def solved(self) -> bool:
        return self.status == STATUS_SOLVED


class ProblemSolver:
    """Breadth-first solver with an optional step and time budget.

    The engine keeps no visited set: states are responsible for not
    regenerating their own ancestors (the graph variant never revisits a node
    already on its path).  Without a budget a search over an infinite or
    cyclic state space does not return.
    """

    def __init__(
        self,
        *,
        max_steps: int | None = None,
        time_limit_s: float | None = None,
        event_sink: EventSink | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_steps is not None and max_steps < 0:
            raise ValueError("max_steps must be >= 0")
        if time_limit_s is not None and time_limit_s < 0:
            raise ValueError("time_limit_s must be >= 0")
        self.max_steps = max_steps or None
        self.time_limit_s = time_limit_s or None
        self.event_sink = event_sink
        self._clock = clock

    def search(self, initial: Problem) -> SearchResult:
        """Run the search and report status, solution and counters."""

        _LOGGER.debug(
            "Starting %s search (max_steps=%s, time_limit_s=%s)",
            initial.kind,
            self.max_steps,
            self.time_limit_s,
        )
        started = self._clock()
        # Each entry carries its depth so stats can report the solution depth.
        frontier: Deque[Tuple[Problem, int]] = deque([(initial, 0)])
        expanded = 0
        generated = 1
        max_frontier = 1
        status = STATUS_EXHAUSTED
        solution: Optional[Problem] = None
        depth = 0
        reason: str | None = None

        while frontier:
            budget_reason = self._budget_reason(expanded, started)
            if budget_reason is not None:
                status = STATUS_BUDGET
                reason = budget_reason
                break

            current, current_depth = frontier.popleft()
            expanded += 1
            depth = current_depth
            if current.is_terminal():
                status = STATUS_SOLVED
                solution = current
                break

            children = current.successors()
            generated += len(children)
            frontier.extend((child, current_depth + 1) for child in children)
            if len(frontier) > max_frontier:
                max_frontier = len(frontier)

        stats = SearchStats(
            expanded=expanded,
            generated=generated,
            max_frontier=max_frontier,
            depth=depth,
            elapsed_ms=int((self._clock() - started) * 1000),
        )
        result = SearchResult(status=status, solution=solution, stats=stats, reason=reason)
        _LOGGER.info(
            "%s search finished: %s after %d expansions (%d ms)",
            initial.kind,
            status,
            stats.expanded,
            stats.elapsed_ms,
        )
        self._emit(initial, result)
        return result

    def solve(self, initial: Problem) -> Optional[Problem]:
        """Return the first terminal state reached, or ``None``.

        Raises :class:`SearchBudgetExceeded` only when a budget was configured
        and ran out before the search finished.
        """

        result = self.search(initial)
        if result.status == STATUS_BUDGET:
            raise SearchBudgetExceeded(
                result.reason or STATUS_BUDGET,
                expanded=result.stats.expanded,
                elapsed_ms=result.stats.elapsed_ms,
            )
        return result.solution

    # Internal helpers -------------------------------------------------

    def _budget_reason(self, expanded: int, started: float) -> str | None:
        if self.max_steps is not None and expanded >= self.max_steps:
            return "max_steps"
        if self.time_limit_s is not None and self._clock() - started >= self.time_limit_s:
            return "time_limit"
        return None

    def _emit(self, initial: Problem, result: SearchResult) -> None:
        if self.event_sink is None:
            return
        event: Dict[str, Any] = {
            "type": EVENT_TYPE,
            "kind": initial.kind,
            "status": result.status,
            "stats": asdict(result.stats),
            "budget": {"max_steps": self.max_steps, "time_limit_s": self.time_limit_s},
        }
        if result.reason is not None:
            event["reason"] = result.reason
        self.event_sink(event)


def solve(
    initial: Problem,
    *,
    max_steps: int | None = None,
    time_limit_s: float | None = None,
) -> Optional[Problem]:
    """Solve ``initial`` with a throwaway :class:`ProblemSolver`."""

    return ProblemSolver(max_steps=max_steps, time_limit_s=time_limit_s).solve(initial)


__all__ = [
    "EVENT_TYPE",
    "STATUS_BUDGET",
    "STATUS_EXHAUSTED",
    "STATUS_SOLVED",
    "ProblemSolver",
    "SearchResult",
    "SearchStats",
    "solve",
]
