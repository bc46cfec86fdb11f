"""Capability set shared by every searchable problem state."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class Problem(ABC):
    """A candidate partial or full solution of a search problem.

    Implementations are immutable values: :meth:`successors` builds new
    states instead of mutating the receiver, so a search frontier may hold
    many of them at once without aliasing.
    """

    #: Short identifier of the concrete variant, for logs and presentation.
    kind: str = "problem"

    @abstractmethod
    def is_terminal(self) -> bool:
        """Return ``True`` when the state is a complete, valid solution."""

    @abstractmethod
    def successors(self) -> Sequence["Problem"]:
        """Return the states reachable by one unit of progress.

        The order of the returned sequence is part of the contract: breadth
        first search enqueues successors in this order, which fixes the
        tie-break between equally short solutions.
        """

    @abstractmethod
    def describe(self) -> str:
        """Return a human readable rendering of the state."""

    def __str__(self) -> str:
        return self.describe()


__all__ = ["Problem"]
