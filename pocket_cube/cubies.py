'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Corner slot geometry of the 2x2x2 and the corner cubie used for rendering.

'''

from dataclasses import dataclass
from typing import Dict, List, Tuple, ClassVar, Iterator

# Face ids: 0=U, 1=R, 2=F, 3=D, 4=L, 5=B
FACE_NAMES = "URFDLB"

# Position i of the state vectors is CORNER_SLOTS[i]
CORNER_SLOTS = ["URF", "UFL", "ULB", "UBR", "DFR", "DLF", "DBL", "DRB"]

# Slot → faces in SLOT ORDER: U/D face first, then clockwise around the corner
SLOT2FACES_CORNER: Dict[str, Tuple[int, int, int]] = {
    "URF": (0, 1, 2),
    "UFL": (0, 2, 4),
    "ULB": (0, 4, 5),
    "UBR": (0, 5, 1),
    "DFR": (3, 2, 1),
    "DLF": (3, 4, 2),
    "DBL": (3, 5, 4),
    "DRB": (3, 1, 5),
}

# (face, row, col) of each slot sticker on the 2x2 face grids, in slot order
CORNER_FACELETS: Dict[str, List[Tuple[int, int, int]]] = {
    "URF": [(0, 1, 1), (1, 0, 0), (2, 0, 1)],
    "UFL": [(0, 1, 0), (2, 0, 0), (4, 0, 1)],
    "ULB": [(0, 0, 0), (4, 0, 0), (5, 0, 1)],
    "UBR": [(0, 0, 1), (5, 0, 0), (1, 0, 1)],
    "DFR": [(3, 0, 1), (2, 1, 1), (1, 1, 0)],
    "DLF": [(3, 0, 0), (4, 1, 1), (2, 1, 0)],
    "DBL": [(3, 1, 0), (5, 1, 1), (4, 1, 0)],
    "DRB": [(3, 1, 1), (1, 1, 1), (5, 1, 0)],
}

# canonical *piece* colors (piece id equals its home slot index)
CORNER_PIECE_COLORS: List[Tuple[int, int, int]] = [
    SLOT2FACES_CORNER[slot] for slot in CORNER_SLOTS
]


@dataclass
class CornerCubie:
    """
    A single corner piece of the Pocket Cube, seated in a slot.

    The cubie is a *view* over one position of a `CubeState`: it is created on
    demand for rendering and never drives the search.

        - `slot_name`: the current slot (e.g. "URF", "DBL", ...)
        - `ori`: twist relative to the piece's canonical sticker order (0..2)
        - `stickers`: the tuple of face color IDs that identify this piece
        - `piece_idx`: piece id 0..7 (its home slot index)
    """
    slot_name: str
    ori: int
    stickers: Tuple[int, int, int]
    piece_idx: int

    ORI_MOD: ClassVar[int] = 3
    SLOT2FACES: ClassVar[Dict[str, Tuple[int, ...]]] = SLOT2FACES_CORNER
    FACELETS: ClassVar[Dict[str, List[Tuple[int, int, int]]]] = CORNER_FACELETS

    @classmethod
    def at(cls, slot_idx: int, piece_idx: int, ori: int) -> "CornerCubie":
        return cls(
            slot_name=CORNER_SLOTS[slot_idx],
            ori=ori % cls.ORI_MOD,
            stickers=CORNER_PIECE_COLORS[piece_idx],
            piece_idx=piece_idx,
        )

    def stickers_in_slot_order(self) -> Tuple[int, ...]:
        """
        Return this cubie's sticker colors arranged in the slot's face order.

        The slot face `s` shows piece sticker `(s - ori) % 3`, i.e. the canonical
        tuple rotated clockwise by `ori`. This matches the orientation deltas of
        the move tables.
        """
        base = list(self.stickers)
        o = self.ori % 3
        if o == 0:
            return tuple(base)
        return tuple(base[-o:] + base[:-o])

    def placements_for_slot(self) -> Iterator[Tuple[int, int, int, int]]:
        """
        Yield the absolute placement of this cubie's stickers on the cube.

        Yields:
            Tuple[face_id, row, col, color] with row/col in {0, 1}.
        """
        colors = self.stickers_in_slot_order()
        for (face, r, c), col in zip(self.FACELETS[self.slot_name], colors):
            yield (face, r, c, col)

    def __repr__(self) -> str:
        return f"Corner: slot={self.slot_name} ori={self.ori} stickers={self.stickers} idx={self.piece_idx}"
