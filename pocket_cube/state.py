'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Immutable algebraic state of the Pocket Cube (corner permutation + orientation).

'''
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from pocket_cube.cubies import CORNER_SLOTS, CORNER_PIECE_COLORS, FACE_NAMES, CornerCubie
from pocket_cube.errors import InvalidStateError

N_CORNERS = 8

StateKey = Tuple[Tuple[int, ...], Tuple[int, ...]]


@dataclass(frozen=True)
class CubeState:
    """
    Snapshot of a Pocket Cube configuration.

    Attributes
    ----------
    corner_permutation : tuple[int, ...]
        ``corner_permutation[i]`` is the id of the corner occupying position ``i``
        (positions follow ``CORNER_SLOTS``).
    corner_orientation : tuple[int, ...]
        Twist (0, 1, 2) of the corner occupying position ``i``.

    Notes
    -----
    - Instances are frozen; applying a move always yields a new snapshot, so a
      state can be shared freely between a search frontier and its caller.
    - The constructor only normalises sequences to tuples. Reachability is a
      caller contract, checked on demand by ``validate()`` and on ingestion by
      ``from_dict(..., validate=True)``.
    """

    corner_permutation: Tuple[int, ...] = field(default_factory=lambda: tuple(range(N_CORNERS)))
    corner_orientation: Tuple[int, ...] = field(default_factory=lambda: (0,) * N_CORNERS)

    def __post_init__(self) -> None:
        # accept lists / numpy arrays from callers, store plain int tuples
        if type(self.corner_permutation) is not tuple:
            object.__setattr__(self, "corner_permutation", tuple(int(x) for x in self.corner_permutation))
        if type(self.corner_orientation) is not tuple:
            object.__setattr__(self, "corner_orientation", tuple(int(x) for x in self.corner_orientation))

    # short aliases used by the hot loops
    @property
    def cp(self) -> Tuple[int, ...]:
        return self.corner_permutation

    @property
    def co(self) -> Tuple[int, ...]:
        return self.corner_orientation

    def key(self) -> StateKey:
        """Canonical hashable serialisation, used for visited sets."""
        return (self.corner_permutation, self.corner_orientation)

    def is_solved(self) -> bool:
        return is_solved(self)

    # ---------- validation ----------
    def validate(self) -> "CubeState":
        """
        Check that this state is a legal Pocket Cube configuration.

        Every permutation of the eight corners is reachable on the 2x2x2 (there
        are no edges to impose a parity constraint), so the twist law
        ``sum(orientation) % 3 == 0`` is the only reachability condition.

        Returns:
            self, for chaining.

        Raises:
            InvalidStateError: On wrong lengths, a non-permutation, orientation
                values outside {0, 1, 2} or a violated twist law.
        """
        cp, co = self.corner_permutation, self.corner_orientation
        if len(cp) != N_CORNERS or len(co) != N_CORNERS:
            raise InvalidStateError(
                f"expected {N_CORNERS} corners, got permutation={len(cp)} orientation={len(co)}"
            )
        if sorted(cp) != list(range(N_CORNERS)):
            raise InvalidStateError(f"corner_permutation is not a permutation of 0..7: {list(cp)}")
        if any(o not in (0, 1, 2) for o in co):
            raise InvalidStateError(f"corner_orientation values must be in {{0,1,2}}: {list(co)}")
        if sum(co) % 3 != 0:
            raise InvalidStateError(f"twist law violated (sum of orientations % 3 = {sum(co) % 3})")
        return self

    # ---------- persistence ----------
    def to_dict(self) -> Dict[str, List[int]]:
        return {
            "corner_permutation": list(self.corner_permutation),
            "corner_orientation": list(self.corner_orientation),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], validate: bool = True) -> "CubeState":
        """
        Rebuild a state from its persisted snapshot.

        Args:
            data: Mapping with ``corner_permutation`` and ``corner_orientation``.
            validate: Reject unreachable states (default). Set False to trust the source.

        Raises:
            InvalidStateError: If keys are missing, a field is not a list of integers,
                or (with ``validate``) the state is illegal.
        """
        try:
            cp = data["corner_permutation"]
            co = data["corner_orientation"]
        except (KeyError, TypeError) as exc:
            raise InvalidStateError(f"malformed cube snapshot: {data!r}") from exc
        for name, values in (("corner_permutation", cp), ("corner_orientation", co)):
            # no int() coercion: "01234567", 1.9 and True must not pass as corners
            if not isinstance(values, (list, tuple)) or any(type(v) is not int for v in values):
                raise InvalidStateError(f"{name} must be a list of integers, got {values!r}")
        state = cls(tuple(cp), tuple(co))
        return state.validate() if validate else state

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str, validate: bool = True) -> "CubeState":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidStateError(f"cube snapshot is not valid JSON: {exc}") from exc
        return cls.from_dict(data, validate=validate)

    # ---------- views ----------
    def cubies(self) -> List[CornerCubie]:
        return [
            CornerCubie.at(i, self.corner_permutation[i], self.corner_orientation[i])
            for i in range(N_CORNERS)
        ]

    def __str__(self) -> str:
        return f"cp={list(self.corner_permutation)} co={list(self.corner_orientation)}"


def create_solved() -> CubeState:
    return CubeState()


def is_solved(state: CubeState) -> bool:
    """True iff every corner sits in its home position with orientation 0."""
    cp, co = state.corner_permutation, state.corner_orientation
    for i in range(N_CORNERS):
        if cp[i] != i or co[i] != 0:
            return False
    return True


def state_to_facelets(state: CubeState) -> List[str]:
    """
    Flatten the state into 24 face letters.

    Order: for each position 0..7, its three stickers in slot order
    (U/D face first, then clockwise).
    """
    letters: List[str] = []
    for cubie in state.cubies():
        letters.extend(FACE_NAMES[col] for col in cubie.stickers_in_slot_order())
    return letters


def facelets_are_consistent(letters: Sequence[str]) -> bool:
    """Every face letter must appear exactly four times on a 2x2x2."""
    return len(letters) == 24 and all(letters.count(f) == 4 for f in FACE_NAMES)


__all__ = [
    "N_CORNERS",
    "CORNER_SLOTS",
    "CORNER_PIECE_COLORS",
    "CubeState",
    "StateKey",
    "create_solved",
    "is_solved",
    "state_to_facelets",
    "facelets_are_consistent",
]
