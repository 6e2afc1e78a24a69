'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Exhaustive breadth-first solver, the ground-truth baseline for IDA*.

'''
from __future__ import annotations

import logging
import time
from collections import deque
from typing import Deque, Optional, Set

from pocket_cube.solvers.result import SolveResult
from pocket_cube.solvers.search_node import SearchNode, successors
from pocket_cube.state import CubeState, StateKey, is_solved

logger = logging.getLogger(__name__)


def solve_bfs(start: CubeState, max_depth: Optional[int] = None) -> Optional[SolveResult]:
    """
    Solve `start` by forward breadth-first search.

    Nodes are expanded by non-decreasing depth over unweighted edges, and the
    search stops at the first generated successor that is solved, so the
    returned solution is optimal. A visited set keyed by ``CubeState.key()``
    keeps states from being enqueued twice; successors honour the pruning rule.

    Memory grows with the number of visited states, which is why this solver
    is meant for shallow scrambles and for validating IDA*.

    Args:
        start: State to solve.
        max_depth: Optional bound on the solution length; None explores until
            the space is exhausted.

    Returns:
        SolveResult, or None if the search space (or the depth bound) is
        exhausted without reaching the solved state.
    """
    t0 = time.perf_counter()

    if is_solved(start):
        return SolveResult((), 1, (time.perf_counter() - t0) * 1000.0, "bfs")

    nodes_explored = 1
    queue: Deque[SearchNode] = deque([SearchNode(start)])
    visited: Set[StateKey] = {start.key()}

    while queue:
        node = queue.popleft()
        if max_depth is not None and node.depth >= max_depth:
            continue
        for move, nxt in successors(node.state, node.last_move):
            nodes_explored += 1
            if is_solved(nxt):
                return SolveResult(node.moves + (move,), nodes_explored,
                                   (time.perf_counter() - t0) * 1000.0, "bfs")
            key = nxt.key()
            if key not in visited:
                visited.add(key)
                queue.append(SearchNode(nxt, node.moves + (move,), move))

    logger.warning("BFS exhausted %d states without reaching the solved state", len(visited))
    return None
