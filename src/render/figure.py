"""Matplotlib figures for solved boards and routes."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, Optional

from problems.graph import GraphState
from problems.state import Problem
from problems.sudoku import BOX, SIZE, SudokuState
from project_config import get_config

CONFIG = get_config()
RENDER_CONFIG = CONFIG.get("render", {})

FIGURE_SIZE_IN = float(RENDER_CONFIG.get("figure_size_in", 6.0))
FONT_SCALE = float(RENDER_CONFIG.get("font_scale", 0.65))
DPI = int(RENDER_CONFIG.get("dpi", 120))

ROUTE_COLOR = "tab:red"
EDGE_COLOR = "0.75"


def _draw_grid(ax, state: SudokuState, size_in: float) -> None:
    for idx in range(SIZE + 1):
        linewidth = 1.5 if idx % BOX else 3.0
        ax.axvline(idx / SIZE, color="k", linewidth=linewidth)
        ax.axhline(idx / SIZE, color="k", linewidth=linewidth)
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.axis("off")
    font_size = max(1, int(FONT_SCALE * size_in * 72 / SIZE))
    for r in range(SIZE):
        for c in range(SIZE):
            value = state.grid[r][c]
            if value:
                x = (c + 0.5) / SIZE
                y = 1 - (r + 0.5) / SIZE
                ax.text(x, y, str(value), ha="center", va="center", fontsize=font_size)


def _node_positions(node_count: int) -> Dict[int, tuple[float, float]]:
    positions: Dict[int, tuple[float, float]] = {}
    for node in range(node_count):
        angle = math.pi / 2 - 2 * math.pi * node / max(1, node_count)
        positions[node] = (0.5 + 0.4 * math.cos(angle), 0.5 + 0.4 * math.sin(angle))
    return positions


def _draw_route(ax, state: GraphState) -> None:
    positions = _node_positions(state.node_count)
    route_edges = set(zip(state.path, state.path[1:]))

    for src, neighbours in enumerate(state.adjacency):
        for dst in neighbours:
            on_route = (src, dst) in route_edges or (dst, src) in route_edges
            (x0, y0), (x1, y1) = positions[src], positions[dst]
            ax.plot(
                [x0, x1],
                [y0, y1],
                color=ROUTE_COLOR if on_route else EDGE_COLOR,
                linewidth=3.0 if on_route else 1.0,
                zorder=2 if on_route else 1,
            )

    on_path = set(state.path)
    for node, (x, y) in positions.items():
        ax.scatter([x], [y], s=500, color=ROUTE_COLOR if node in on_path else "white", edgecolors="k", zorder=3)
        ax.text(x, y, str(node), ha="center", va="center", fontsize=10, zorder=4)

    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_aspect("equal")
    ax.axis("off")
    ax.set_title(f"Route: {list(state.path)}")


def save_figure(state: Problem, path: str | Path, *, size_in: Optional[float] = None) -> Path:
    """Render ``state`` into an image or PDF at ``path`` and return the path.

    The output format follows the file suffix (``.png``, ``.pdf``, ``.svg``).
    """

    import matplotlib.pyplot as plt

    if not isinstance(state, (SudokuState, GraphState)):
        raise TypeError(f"Cannot draw states of kind {state.kind!r}")

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    size = size_in or FIGURE_SIZE_IN

    fig = plt.figure(figsize=(size, size))
    try:
        ax = fig.add_axes([0.05, 0.05, 0.9, 0.9], frameon=False)
        if isinstance(state, SudokuState):
            _draw_grid(ax, state, size * 0.9)
        else:
            _draw_route(ax, state)
        fig.savefig(out_path, dpi=DPI)
    finally:
        plt.close(fig)
    return out_path


__all__ = ["save_figure"]
