'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Result record returned by the solvers.

'''
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from pocket_cube.moves import Move, moves_to_string


@dataclass(frozen=True)
class SolveResult:
    """
    Outcome of a successful solve.

    Attributes
    ----------
    moves : tuple[Move, ...]
        Solution, to be applied to the input state in order.
    nodes_explored : int
        Diagnostic node count (the root included); not part of correctness.
    time_ms : float
        Wall-clock time of the solve, in milliseconds.
    method : str
        "ida*" or "bfs".
    """
    moves: Tuple[Move, ...]
    nodes_explored: int
    time_ms: float
    method: str = ""

    @property
    def length(self) -> int:
        return len(self.moves)

    def labels(self) -> List[str]:
        return [m.label for m in self.moves]

    def to_dict(self) -> Dict[str, Any]:
        """Front-end shape: ``{"moves", "nodesExplored", "timeMs"}``."""
        return {
            "moves": self.labels(),
            "nodesExplored": self.nodes_explored,
            "timeMs": self.time_ms,
        }

    def __str__(self) -> str:
        return (f"{moves_to_string(self.moves) or '(already solved)'} "
                f"[{self.length} moves, {self.nodes_explored} nodes, {self.time_ms:.2f} ms]")
