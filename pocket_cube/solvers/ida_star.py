'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Iterative-deepening A* (IDA*) guided by the pattern database heuristic.

'''
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from pocket_cube.config import SolverConfig
from pocket_cube.moves import Move
from pocket_cube.solvers.pdb import HeuristicEngine, default_engine
from pocket_cube.solvers.result import SolveResult
from pocket_cube.solvers.search_node import successors
from pocket_cube.state import CubeState, is_solved

logger = logging.getLogger(__name__)

FOUND = -1


@dataclass
class IDAStarSolver:
    """
    Depth-first search bounded by ``f = g + h``, with an increasing bound.

    Usage:
        solver = IDAStarSolver(engine)
        result = solver.solve(state)      # SolveResult or None

    Notes
    -----
    - The initial bound is ``h(root)``. An iteration that fails returns the
      smallest f that exceeded the bound; that becomes the next bound.
    - A bound above `max_depth` (default: the engine's) means the input is not
      a legal configuration: the solve is aborted, logged, and None returned.
    - Successors honour the pruning rule against the node's last move and are
      tried in declaration order, so among all minimal solutions the first one
      in that order is returned.
    - The move path is one buffer shared by the whole recursion (push on the
      way down, pop on the way back).
    - `nodes_explored` counts every visited node, the root included.
    """

    engine: HeuristicEngine = field(default_factory=default_engine)
    max_depth: Optional[int] = None

    # per-solve scratch
    _path: List[Move] = field(default_factory=list, init=False, repr=False)
    _nodes: int = field(default=0, init=False, repr=False)
    _h: Optional[Callable[[CubeState], int]] = field(default=None, init=False, repr=False)

    @property
    def depth_cap(self) -> int:
        return self.max_depth if self.max_depth is not None else self.engine.max_depth

    # --------------------- Public API ---------------------
    def solve(self, start: CubeState) -> Optional[SolveResult]:
        t0 = time.perf_counter()
        self._h = self.engine.lookup_function()
        self._path = []
        self._nodes = 0

        bound = self._h(start)
        while bound <= self.depth_cap:
            t = self._search(start, 0, bound, None)
            if t == FOUND:
                return SolveResult(tuple(self._path), self._nodes,
                                   (time.perf_counter() - t0) * 1000.0, "ida*")
            logger.debug("IDA*: bound %d → %s (%d nodes so far)", bound, t, self._nodes)
            bound = t

        logger.error(
            "IDA* bound %s exceeds the maximum depth %d after %d nodes; "
            "the input state is probably not a legal configuration (%s)",
            bound, self.depth_cap, self._nodes, start,
        )
        return None

    # --------------------- Internal: bounded DFS ---------------------
    def _search(self, state: CubeState, g: int, bound: int, last_move: Optional[Move]):
        self._nodes += 1
        f = g + self._h(state)
        if f > bound:
            return f
        if is_solved(state):
            return FOUND

        minimum = math.inf
        path = self._path
        for move, nxt in successors(state, last_move):
            path.append(move)
            t = self._search(nxt, g + 1, bound, move)
            if t == FOUND:
                return FOUND
            path.pop()
            if t < minimum:
                minimum = t
        return minimum


def solve_ida_star(
    start: CubeState,
    engine: Optional[HeuristicEngine] = None,
    config: Optional[SolverConfig] = None,
) -> Optional[SolveResult]:
    """
    Solve `start` with IDA*.

    Args:
        start: State to solve.
        engine: Heuristic engine; when omitted, a fresh engine is built from
            `config` if one is given, else the process-wide default is used.
        config: Solver configuration for a fresh engine.

    Returns:
        SolveResult, or None when the depth cap is exceeded (malformed input).
    """
    if engine is None:
        engine = HeuristicEngine(config) if config is not None else default_engine()
    return IDAStarSolver(engine).solve(start)
