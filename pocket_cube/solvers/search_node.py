'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Search tree node and successor generation under the canonical pruning rule.

'''
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from pocket_cube.moves import ALL_MOVES, TRANSITIONS, VALID_AFTER, Move
from pocket_cube.state import CubeState, N_CORNERS, is_solved

_RANGE = range(N_CORNERS)


def successors(state: CubeState, last_move: Optional[Move]) -> Iterator[Tuple[Move, CubeState]]:
    """
    Yield ``(move, next_state)`` for every move allowed after `last_move`.

    Moves come out in declaration order; this is the tie-break order of both
    solvers. No deduplication happens here.
    """
    allowed = ALL_MOVES if last_move is None else VALID_AFTER[last_move]
    cp, co = state.corner_permutation, state.corner_orientation
    for m in allowed:
        t = TRANSITIONS[m]
        perm, delta = t.perm, t.ori_delta
        yield m, CubeState(
            tuple([cp[perm[i]] for i in _RANGE]),
            tuple([(co[perm[i]] + delta[i]) % 3 for i in _RANGE]),
        )


class SearchNode:
    """
    Read-only node of a search tree.

    Attributes
    ----------
    state : CubeState
        Cube configuration at this node.
    moves : tuple[Move, ...]
        Path from the root.
    last_move : Move | None
        Move that produced this node; only used by the pruning rule.
    """

    __slots__ = ("state", "moves", "last_move")

    def __init__(self, state: CubeState, moves: Tuple[Move, ...] = (), last_move: Optional[Move] = None):
        self.state = state
        self.moves = tuple(moves)
        self.last_move = last_move if last_move is not None else (self.moves[-1] if self.moves else None)

    @property
    def depth(self) -> int:
        return len(self.moves)

    def is_goal(self) -> bool:
        return is_solved(self.state)

    def expand(self) -> List["SearchNode"]:
        """One child per move passing the pruning rule relative to `last_move`."""
        return [
            SearchNode(nxt, self.moves + (m,), m)
            for m, nxt in successors(self.state, self.last_move)
        ]

    def get_moves(self) -> List[Move]:
        return list(self.moves)

    def __repr__(self) -> str:
        path = " ".join(m.label for m in self.moves) or "-"
        return f"SearchNode(depth={self.depth}, path={path}, state={self.state})"
