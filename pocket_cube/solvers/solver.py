'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Solver façade used by front ends: scramble, solve, verify.

'''
from __future__ import annotations

from typing import Iterable, Optional, Union

from pocket_cube.moves import MoveLike, apply_moves, parse_scramble
from pocket_cube.solvers.bfs import solve_bfs
from pocket_cube.solvers.ida_star import IDAStarSolver
from pocket_cube.solvers.pdb import HeuristicEngine, default_engine
from pocket_cube.solvers.result import SolveResult
from pocket_cube.state import CubeState, create_solved, is_solved

ScrambleLike = Union[str, Iterable[MoveLike]]

METHODS = ("ida*", "bfs")


def _normalise_method(method: str) -> str:
    m = method.strip().lower().replace("idastar", "ida*").replace("ida_star", "ida*")
    if m == "ida":
        m = "ida*"
    if m not in METHODS:
        raise ValueError(f"Unknown solve method {method!r}; expected one of {METHODS}")
    return m


def scramble(moves: ScrambleLike) -> CubeState:
    """State reached from solved by applying `moves` (a string or a move list)."""
    if isinstance(moves, str):
        moves = parse_scramble(moves)
    return apply_moves(create_solved(), moves)


def solve(
    state: CubeState,
    method: str = "ida*",
    engine: Optional[HeuristicEngine] = None,
    bfs_max_depth: Optional[int] = None,
) -> Optional[SolveResult]:
    """
    Solve `state` with the chosen method.

    Args:
        state: State to solve.
        method: "ida*" (default) or "bfs".
        engine: Heuristic engine for IDA*; the process-wide default when omitted.
        bfs_max_depth: Optional depth guard for BFS (defaults to the engine config).

    Returns:
        SolveResult, or None when no solution was found (anomalous input).
    """
    method = _normalise_method(method)
    if method == "bfs":
        if bfs_max_depth is None and engine is not None:
            bfs_max_depth = engine.config.bfs_max_depth
        return solve_bfs(state, max_depth=bfs_max_depth)
    return IDAStarSolver(engine or default_engine()).solve(state)


def solve_scramble(moves: ScrambleLike, method: str = "ida*",
                   engine: Optional[HeuristicEngine] = None) -> Optional[SolveResult]:
    return solve(scramble(moves), method=method, engine=engine)


def verify(initial: CubeState, solution: Iterable[MoveLike]) -> bool:
    """True iff applying `solution` to `initial` gives the solved state."""
    return is_solved(apply_moves(initial, solution))
