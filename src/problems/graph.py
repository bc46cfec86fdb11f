"""Path-prefix states for shortest route discovery in an unweighted graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from contracts.errors import InvalidProblemError

from .state import Problem

Adjacency = Tuple[Tuple[int, ...], ...]


def _check_node(name: str, node: int, node_count: int) -> None:
    if isinstance(node, bool) or not isinstance(node, int):
        raise InvalidProblemError(f"{name} must be an integer node id, got {node!r}")
    if not 0 <= node < node_count:
        raise InvalidProblemError(f"{name}={node} is outside 0..{node_count - 1}")


def adjacency_from_matrix(matrix: Sequence[Sequence[int]]) -> Adjacency:
    """Convert a square 0/1 matrix into ascending neighbour tuples.

    Any non-zero entry counts as an edge from the row node to the column node.
    """

    size = len(matrix)
    neighbours: List[Tuple[int, ...]] = []
    for idx, row in enumerate(matrix):
        if len(row) != size:
            raise InvalidProblemError(
                f"adjacency matrix must be square: row {idx} has {len(row)} entries, expected {size}"
            )
        neighbours.append(tuple(col for col, value in enumerate(row) if value))
    return tuple(neighbours)


def adjacency_from_edges(
    node_count: int,
    edges: Iterable[Sequence[int]],
    *,
    directed: bool = False,
) -> Adjacency:
    """Build neighbour tuples from an edge list over ``node_count`` nodes."""

    if node_count < 1:
        raise InvalidProblemError("graph must contain at least one node")
    buckets: List[set[int]] = [set() for _ in range(node_count)]
    for edge in edges:
        if len(edge) != 2:
            raise InvalidProblemError(f"edge {list(edge)!r} must have exactly two endpoints")
        src, dst = edge
        _check_node("edge source", src, node_count)
        _check_node("edge target", dst, node_count)
        buckets[src].add(dst)
        if not directed:
            buckets[dst].add(src)
    return tuple(tuple(sorted(bucket)) for bucket in buckets)


@dataclass(frozen=True)
class GraphState(Problem):
    """Simple path from ``start`` that is being extended toward ``goal``.

    ``adjacency`` is shared by every state derived from the same initial
    state; ``visited`` never repeats a node. Construction rejects an empty
    graph, out-of-range nodes and a path that does not begin at ``start``.
    """

    adjacency: Adjacency = field(repr=False)
    start: int
    goal: int
    visited: Tuple[int, ...] = ()

    kind = "graph"

    def __post_init__(self) -> None:
        node_count = len(self.adjacency)
        if not node_count:
            raise InvalidProblemError("graph must contain at least one node")
        _check_node("start", self.start, node_count)
        _check_node("goal", self.goal, node_count)
        if not self.visited:
            object.__setattr__(self, "visited", (self.start,))
            return
        if self.visited[0] != self.start:
            raise InvalidProblemError(
                f"path {list(self.visited)} must begin at start node {self.start}"
            )
        for node in self.visited[1:]:
            _check_node("path node", node, node_count)

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]], start: int, goal: int) -> "GraphState":
        return cls(adjacency=adjacency_from_matrix(matrix), start=start, goal=goal)

    @classmethod
    def from_edges(
        cls,
        node_count: int,
        edges: Iterable[Sequence[int]],
        start: int,
        goal: int,
        *,
        directed: bool = False,
    ) -> "GraphState":
        adjacency = adjacency_from_edges(node_count, edges, directed=directed)
        return cls(adjacency=adjacency, start=start, goal=goal)

    @property
    def node_count(self) -> int:
        return len(self.adjacency)

    @property
    def path(self) -> Tuple[int, ...]:
        return self.visited

    @property
    def edge_count(self) -> int:
        return len(self.visited) - 1

    def is_terminal(self) -> bool:
        return self.goal in self.visited

    def successors(self) -> List["GraphState"]:
        current = self.visited[-1]
        seen = set(self.visited)
        return [
            GraphState(
                adjacency=self.adjacency,
                start=self.start,
                goal=self.goal,
                visited=self.visited + (neighbour,),
            )
            for neighbour in self.adjacency[current]
            if neighbour not in seen
        ]

    def describe(self) -> str:
        return f"Visited: {list(self.visited)}"


__all__ = ["Adjacency", "GraphState", "adjacency_from_edges", "adjacency_from_matrix"]
