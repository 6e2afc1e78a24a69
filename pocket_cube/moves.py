'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: The 18 face turns of the Pocket Cube, their transition tables and the
canonical move-pruning rule shared by scrambles and searches.

'''
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from pocket_cube.errors import InvalidMoveError
from pocket_cube.state import CubeState, N_CORNERS

# Clockwise base tables (on *slot indices*, not on piece ids):
#   new_perm[i] = old_perm[perm[i]]
#   new_ori[i]  = (old_ori[perm[i]] + ori[i]) % 3
CORN_PERM = {
    "U": [3, 0, 1, 2, 4, 5, 6, 7],
    "D": [0, 1, 2, 3, 5, 6, 7, 4],
    "R": [4, 1, 2, 0, 7, 5, 6, 3],
    "L": [0, 5, 1, 3, 4, 6, 2, 7],
    "F": [1, 5, 2, 3, 0, 4, 6, 7],
    "B": [0, 1, 3, 7, 4, 5, 2, 6],
}
CORN_ORI = {
    "U": [0] * 8,
    "D": [0] * 8,
    "R": [2, 0, 0, 1, 1, 0, 0, 2],
    "L": [0, 1, 2, 0, 0, 2, 1, 0],
    "F": [1, 2, 0, 0, 2, 1, 0, 0],
    "B": [0, 0, 1, 2, 0, 0, 2, 1],
}

FACES = "UDRLFB"
OPPOSITE_FACE = {"U": "D", "D": "U", "R": "L", "L": "R", "F": "B", "B": "F"}


class Move(IntEnum):
    """
    The 18 face turns, in declaration order.

    The order is also the search tie-break order: among solutions of equal
    length the solvers return the first one in this ordering.
    """
    U = 0
    U_PRIME = 1
    U2 = 2
    D = 3
    D_PRIME = 4
    D2 = 5
    R = 6
    R_PRIME = 7
    R2 = 8
    L = 9
    L_PRIME = 10
    L2 = 11
    F = 12
    F_PRIME = 13
    F2 = 14
    B = 15
    B_PRIME = 16
    B2 = 17

    @property
    def face(self) -> str:
        return self.name[0]

    @property
    def label(self) -> str:
        if self.name.endswith("_PRIME"):
            return self.face + "'"
        return self.name

    def __str__(self) -> str:
        return self.label


ALL_MOVES: Tuple[Move, ...] = tuple(Move)
MOVE_BY_LABEL: Dict[str, Move] = {m.label: m for m in ALL_MOVES}

MoveLike = Union[Move, str]


@dataclass(frozen=True)
class Transition:
    """Position permutation and orientation delta of a single move."""
    perm: Tuple[int, ...]
    ori_delta: Tuple[int, ...]


def invert_perm_and_delta(perm: Sequence[int], delta: Sequence[int], mod: int) -> tuple[list[int], list[int]]:
    """
    Invert a permutation table and its corresponding orientation deltas.

    Given a forward move permutation `perm` (mapping destination → source)
    and the list of orientation deltas `delta` applied to each destination,
    return their inverse counterparts such that:

        perm⁻¹[src] = dest
        delta⁻¹[src] = (-delta[dest]) % mod

    Args:
        perm: List of source indices per destination index.
        delta: List of orientation deltas corresponding to each destination index.
        mod: Modulus used for orientation arithmetic (3 for corners).

    Returns:
        A tuple (inv_perm, inv_delta) giving the inverse mapping and deltas.
    """
    inv_perm = [0] * len(perm)
    inv_delta = [0] * len(perm)
    for dest_idx, src_idx in enumerate(perm):
        inv_perm[src_idx] = dest_idx
        inv_delta[src_idx] = (-delta[dest_idx]) % mod
    return inv_perm, inv_delta


def compose_perm_and_delta(perm: Sequence[int], delta: Sequence[int], mod: int) -> tuple[list[int], list[int]]:
    """
    Compose a move table with itself (the half turn).

        perm²[i]  = perm[perm[i]]
        delta²[i] = (delta[i] + delta[perm[i]]) % mod
    """
    perm2 = [perm[perm[i]] for i in range(len(perm))]
    delta2 = [(delta[i] + delta[perm[i]]) % mod for i in range(len(perm))]
    return perm2, delta2


def _build_transitions() -> Tuple[Transition, ...]:
    table: Dict[Move, Transition] = {}
    for face in FACES:
        perm, delta = CORN_PERM[face], CORN_ORI[face]
        inv_perm, inv_delta = invert_perm_and_delta(perm, delta, 3)
        perm2, delta2 = compose_perm_and_delta(perm, delta, 3)
        table[MOVE_BY_LABEL[face]] = Transition(tuple(perm), tuple(delta))
        table[MOVE_BY_LABEL[face + "'"]] = Transition(tuple(inv_perm), tuple(inv_delta))
        table[MOVE_BY_LABEL[face + "2"]] = Transition(tuple(perm2), tuple(delta2))
    return tuple(table[m] for m in ALL_MOVES)


# Indexed by Move value
TRANSITIONS: Tuple[Transition, ...] = _build_transitions()


# ---------- parsing ----------
def parse_move(move: MoveLike) -> Move:
    """
    Resolve a move label (or pass a Move through).

    Raises:
        InvalidMoveError: If `move` is not one of the 18 labels.
    """
    if isinstance(move, Move):
        return move
    if isinstance(move, str):
        found = MOVE_BY_LABEL.get(move.strip())
        if found is not None:
            return found
    raise InvalidMoveError(move)


def parse_scramble(text: str) -> List[Move]:
    """
    Parse a whitespace-delimited scramble such as ``"R U2 R' U'"``.

    Blank text gives an empty list; any unknown label raises InvalidMoveError.
    """
    return [parse_move(tok) for tok in text.split()]


def moves_to_string(moves: Iterable[MoveLike]) -> str:
    return " ".join(parse_move(m).label for m in moves)


# ---------- application ----------
def apply_move(state: CubeState, move: MoveLike) -> CubeState:
    """
    Apply one face turn and return the new state (the input is untouched).

    Args:
        state: Current cube state.
        move: A Move or its label ("R", "U'", "F2", ...).

    Raises:
        InvalidMoveError: For an unknown label.
    """
    t = TRANSITIONS[parse_move(move)]
    cp, co = state.corner_permutation, state.corner_orientation
    perm, delta = t.perm, t.ori_delta
    return CubeState(
        tuple([cp[perm[i]] for i in range(N_CORNERS)]),
        tuple([(co[perm[i]] + delta[i]) % 3 for i in range(N_CORNERS)]),
    )


def apply_moves(state: CubeState, moves: Union[str, Iterable[MoveLike]]) -> CubeState:
    """Left fold of `apply_move`; a string is parsed as a scramble first."""
    if isinstance(moves, str):
        moves = parse_scramble(moves)
    for m in moves:
        state = apply_move(state, m)
    return state


def invert_move(move: MoveLike) -> Move:
    """X ↔ X', X2 ↔ X2."""
    m = parse_move(move)
    if m.name.endswith("2"):
        return m
    if m.name.endswith("_PRIME"):
        return MOVE_BY_LABEL[m.face]
    return MOVE_BY_LABEL[m.face + "'"]


def invert_sequence(moves: Iterable[MoveLike]) -> List[Move]:
    return [invert_move(m) for m in reversed(list(moves))]


# ---------- canonical pruning ----------
def can_follow(last: Optional[MoveLike], nxt: MoveLike) -> bool:
    """
    Canonical move pruning.

    - The same face never appears twice in a row.
    - Opposite faces commute, so only the alphabetically smaller face may come
      first (B before F, D before U, L before R).
    """
    if last is None:
        return True
    last_face = parse_move(last).face
    next_face = parse_move(nxt).face
    if last_face == next_face:
        return False
    if OPPOSITE_FACE[last_face] == next_face and last_face > next_face:
        return False
    return True


def _build_follow_table() -> Tuple[Tuple[Move, ...], ...]:
    return tuple(
        tuple(m for m in ALL_MOVES if can_follow(last, m)) for last in ALL_MOVES
    )


# VALID_AFTER[last] lists the allowed successors of `last`, in move order
VALID_AFTER: Tuple[Tuple[Move, ...], ...] = _build_follow_table()


def valid_moves(last: Optional[MoveLike]) -> Tuple[Move, ...]:
    if last is None:
        return ALL_MOVES
    return VALID_AFTER[parse_move(last)]


def random_scramble(length: int, rng: Optional[random.Random] = None) -> List[Move]:
    """
    Random move sequence honouring the pruning rule.

    Args:
        length: Number of moves (>= 0).
        rng: Optional random.Random for reproducibility.
    """
    if length < 0:
        raise ValueError(f"'length' must be >= 0, got {length}")
    rng = rng or random.Random()
    moves: List[Move] = []
    last: Optional[Move] = None
    for _ in range(length):
        m = rng.choice(valid_moves(last))
        moves.append(m)
        last = m
    return moves
