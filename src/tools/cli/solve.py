"""Command line entry point: solve a graph route or a Sudoku board."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional

from contracts.errors import InvalidProblemError, ProblemValidationError
from contracts.validator import load_problem_file
from problems import samples
from problems.state import Problem
from problems.sudoku import SudokuState
from render.text import render_result
from solver.log import EventLog
from solver.engine import STATUS_BUDGET, STATUS_SOLVED, ProblemSolver
from solver.settings import resolve_settings

EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_BUDGET = 3

_LOGGER = logging.getLogger(__name__)


def _cli_env(args: argparse.Namespace) -> Dict[str, str]:
    env: Dict[str, str] = {}
    if args.max_steps is not None:
        env["CLI_SEARCH_MAX_STEPS"] = str(args.max_steps)
    if args.time_limit is not None:
        env["CLI_SEARCH_TIME_LIMIT"] = str(args.time_limit)
    if args.trace is not None:
        env["CLI_SEARCH_TRACE"] = "1" if args.trace else "0"
    if args.log_dir:
        env["CLI_SEARCH_LOG_DIR"] = args.log_dir
    return env


def _build_problem(args: argparse.Namespace) -> Problem:
    if args.input:
        return load_problem_file(args.input)
    if args.kind == "sudoku":
        if args.grid:
            return SudokuState.from_string(args.grid)
        return samples.classic_sudoku()
    start = 0 if args.start is None else args.start
    goal = 3 if args.goal is None else args.goal
    return samples.sample_graph(start, goal)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="problem-solver",
        description="Breadth-first search for a graph route or a 9x9 Sudoku solution.",
    )
    parser.add_argument("kind", choices=("sudoku", "graph"), help="Problem type to solve.")
    parser.add_argument("--input", help="JSON problem document. Defaults to the built-in sample.")
    parser.add_argument("--grid", help="Sudoku as 81 characters, '0' or '.' for empty cells.")
    parser.add_argument("--start", type=int, help="Start node for the built-in sample graph.")
    parser.add_argument("--goal", type=int, help="Goal node for the built-in sample graph.")
    parser.add_argument("--profile", default="dev", help="Configuration profile (default: dev).")
    parser.add_argument("--max-steps", dest="max_steps", type=int, help="Stop after this many expansions (0 = unlimited).")
    parser.add_argument("--time-limit", dest="time_limit", type=float, help="Stop after this many seconds (0 = unlimited).")
    parser.add_argument("--trace", dest="trace", action="store_true", help="Append a search event to the JSONL log.")
    parser.add_argument("--no-trace", dest="trace", action="store_false", help="Disable the event log explicitly.")
    parser.set_defaults(trace=None)
    parser.add_argument("--log-dir", dest="log_dir", help="Directory for the JSONL event log.")
    parser.add_argument("--render", help="Also draw the result with matplotlib into this file (.png/.pdf/.svg).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.grid and args.kind != "sudoku":
        parser.error("--grid only applies to sudoku")
    if args.grid and args.input:
        parser.error("--grid and --input are mutually exclusive")
    if args.input and (args.start is not None or args.goal is not None):
        parser.error("--start and --goal only apply to the built-in sample graph, not --input")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = resolve_settings(args.profile, _cli_env(args))
    try:
        problem = _build_problem(args)
    except ProblemValidationError as exc:
        details = "; ".join(f"{issue.code} at {issue.path}: {issue.msg}" for issue in exc.report.errors)
        parser.error(f"invalid problem document: {details}")
    except (InvalidProblemError, OSError) as exc:
        parser.error(str(exc))
    if problem.kind != args.kind:
        parser.error(f"{args.input} describes a {problem.kind} problem, not {args.kind}")

    event_log = EventLog.from_settings(settings) if settings.trace_enabled else None

    solver = ProblemSolver(
        max_steps=settings.max_steps,
        time_limit_s=settings.time_limit_s,
        event_sink=event_log.append if event_log is not None else None,
    )
    result = solver.search(problem)

    if result.status == STATUS_BUDGET:
        print(f"Search stopped ({result.reason}) after {result.stats.expanded} expansions.")
        return EXIT_BUDGET

    print(render_result(result.solution, problem.kind))
    if result.status != STATUS_SOLVED:
        return EXIT_NO_SOLUTION

    if args.render:
        from render.figure import save_figure

        out_path = save_figure(result.solution, Path(args.render))
        print(f"Figure saved to: {out_path}")
    if event_log is not None:
        _LOGGER.debug("Search event written to %s", event_log.current_path)
    return EXIT_SOLVED


__all__ = ["build_parser", "main"]


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
