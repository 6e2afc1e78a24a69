'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Mutable Pocket Cube façade for front ends: applies moves to an immutable
CubeState, keeps the move history and renders the cube.

'''
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
import random

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from pocket_cube.moves import Move, MoveLike, apply_move, parse_move, parse_scramble, random_scramble
from pocket_cube.state import CubeState, create_solved, is_solved
from pocket_cube.solvers.pdb import HeuristicEngine
from pocket_cube.solvers.result import SolveResult
from pocket_cube.solvers.solver import solve

HISTORY_COLUMNS = ["step", "move", "phase"]


def track_history(method: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator for Cube.apply_move: logs every move into `self._history`,
    unless history is disabled. Phase is taken from `self._phase` ("scramble"/"solve").
    """
    @wraps(method)
    def wrapper(self, move: MoveLike) -> Any:
        # apply first (state change is primary; an invalid label raises before logging)
        result = method(self, move)

        if self._history_enabled:
            step = int(self._history.shape[0])
            self._history.loc[step] = {
                "step": step,
                "move": result.label,
                "phase": self._phase,
            }
        return result
    return wrapper


class Cube:
    """
    Pocket Cube state container for visualisation layers.

    The logical state is an immutable `CubeState`; this class swaps it for a
    new snapshot on every move, so states handed out by `get_logic_state()`
    are never modified afterwards.

    Key methods
    ------------
    apply_move(move) / apply_moves(seq)
        Apply one move (Move or label) / a sequence or scramble string.

    get_logic_state(), set_logic_state(state)
        Read or replace the current snapshot.

    scramble(length, seed)
        Random scramble honouring the pruning rule, recorded as phase "scramble".

    solve(method, apply=True)
        Run a solver on the current state and (optionally) replay the solution.

    to_facelets(), print_net(), plot_3d()
        Views: 6×2×2 facelet array, terminal net, 3D matplotlib render.

    snapshot(), Cube.from_snapshot(data)
        Persistence round trip of the two integer sequences.

    Notes
    -----
    Face ids follow the standard ordering 0=U, 1=R, 2=F, 3=D, 4=L, 5=B.

    Example
    -------
        c = Cube()
        c.apply_move("R")
        c.print_net()
    """

    _COLORS = {0: "white", 1: "blue", 2: "orange", 3: "yellow", 4: "green", 5: "red"}

    def __init__(self, state: Optional[CubeState] = None):
        self._state: CubeState = state if state is not None else create_solved()
        self._history = pd.DataFrame(columns=HISTORY_COLUMNS)
        self._scramble_len = 0
        self._history_enabled = True
        self._phase = "solve"

    # ---------- history ----------
    @contextmanager
    def history_phase(self, phase: str):
        """
        Temporarily set the history 'phase' for recorded moves ('scramble' or 'solve').
        Usage:
            with cube.history_phase('scramble'):
                cube.apply_move('R'); cube.apply_move("U'")
        """
        prev = self._phase
        self._phase = phase
        try:
            yield
        finally:
            self._phase = prev

    @contextmanager
    def no_history(self):
        """Temporarily disable history recording."""
        prev = self._history_enabled
        self._history_enabled = False
        try:
            yield
        finally:
            self._history_enabled = prev

    def clear_history(self) -> None:
        """Clear the history DataFrame and reset the scramble checkpoint."""
        self._history = pd.DataFrame(columns=HISTORY_COLUMNS)
        self._scramble_len = 0

    def moves_since_scramble(self) -> int:
        """Number of moves logged after the scramble checkpoint."""
        return max(0, int(self._history.shape[0]) - int(self._scramble_len))

    def get_history(self) -> pd.DataFrame:
        """
        Return a copy of the move history DataFrame.

        Columns:
            step (int)   : 0-based move index
            move (str)   : move label, e.g. "R", "U'", "F2"
            phase (str)  : 'scramble' or 'solve'
        """
        return self._history.copy()

    # ---------- state ----------
    @track_history
    def apply_move(self, move: MoveLike) -> Move:
        """
        Apply a face turn to the cube.

        Args:
            move: A Move or its label ("U", "U'", "U2", ...).

        Returns:
            The parsed Move.

        Raises:
            InvalidMoveError: For an unknown label; the state is left untouched.
        """
        m = parse_move(move)
        self._state = apply_move(self._state, m)
        return m

    def apply_moves(self, moves: Union[str, Iterable[MoveLike]]) -> None:
        if isinstance(moves, str):
            moves = parse_scramble(moves)
        for m in moves:
            self.apply_move(m)

    def get_logic_state(self) -> CubeState:
        return self._state

    def set_logic_state(self, state: CubeState) -> None:
        self._state = state

    def reset(self) -> None:
        self._state = create_solved()
        self.clear_history()

    def is_solved(self) -> bool:
        return is_solved(self._state)

    def scramble(self, length: int = 11, seed: Optional[int] = None) -> List[Move]:
        """
        Apply a random scramble and mark its length as the scramble checkpoint.

        Args:
            length: Number of moves to apply.
            seed: Optional RNG seed for reproducibility.

        Returns:
            The scramble that was applied.
        """
        moves = random_scramble(length, random.Random(seed))
        with self.history_phase("scramble"):
            self.apply_moves(moves)
        self._scramble_len = int(self._history.shape[0])
        return moves

    def solve(self, method: str = "ida*", engine: Optional[HeuristicEngine] = None,
              apply: bool = True) -> Optional[SolveResult]:
        """
        Solve the current state and, if `apply`, replay the solution on this cube.

        Returns:
            The SolveResult, or None when the solver found no solution.
        """
        result = solve(self._state, method=method, engine=engine)
        if result is not None and apply:
            with self.history_phase("solve"):
                self.apply_moves(result.moves)
        return result

    # ---------- persistence ----------
    def snapshot(self) -> Dict[str, List[int]]:
        return self._state.to_dict()

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any], validate: bool = True) -> "Cube":
        return cls(CubeState.from_dict(data, validate=validate))

    # ---------- VIEWS ----------
    def to_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """(corner_pos, corner_ori) as int8 arrays."""
        return (np.asarray(self._state.corner_permutation, dtype=np.int8),
                np.asarray(self._state.corner_orientation, dtype=np.int8))

    def to_facelets(self) -> np.ndarray:
        """
        Generate a 6×2×2 integer array of facelet colors from the corner state.

        Returns:
            A NumPy array F[6,2,2] of face color indices (0–5).
        """
        F = np.empty((6, 2, 2), dtype=int)
        for cubie in self._state.cubies():
            for face, r, c, col in cubie.placements_for_slot():
                F[face, r, c] = col
        return F

    def plot_3d(self, ax: Optional[plt.Axes] = None, figsize: tuple[int, int] = (6, 6), edgecolor: str = "k") -> None:
        """
        Render the cube in a 3D matplotlib view.

        The cube is centered at the origin with coordinates spanning [-1, 1]
        in each dimension.

        Args:
            ax: Optional matplotlib 3D axis to plot on. If None, creates a new figure.
            figsize: Size of the figure (if created internally).
            edgecolor: Edge color for square outlines.
        """
        F = self.to_facelets()

        fig = None
        if ax is None:
            fig = plt.figure(figsize=figsize)
            ax = fig.add_subplot(111, projection="3d")

        ax.set_box_aspect([1, 1, 1])

        # face: (origin, u-axis, v-axis) in 3D space
        step = 1.0
        half = 1.0
        face_defs = {
            0: ((-half, -half, half), (step, 0, 0), (0, step, 0)),  # U  (z = +)
            3: ((-half, -half, -half), (step, 0, 0), (0, step, 0)),  # D  (z = -)
            2: ((-half, half, -half), (step, 0, 0), (0, 0, step)),  # F  (y = +)
            5: ((half, -half, -half), (-step, 0, 0), (0, 0, step)),  # B  (y = -)
            1: ((half, -half, -half), (0, step, 0), (0, 0, step)),  # R  (x = +)
            4: ((-half, -half, -half), (0, step, 0), (0, 0, step)),  # L  (x = -)
        }

        for f, (origin, du, dv) in face_defs.items():
            for r in range(2):
                for c in range(2):
                    col = self._COLORS[int(F[f, r, c])]
                    corners = []
                    for u, v in [(c, r), (c + 1, r), (c + 1, r + 1), (c, r + 1)]:
                        x = origin[0] + du[0] * u + dv[0] * v
                        y = origin[1] + du[1] * u + dv[1] * v
                        z = origin[2] + du[2] * u + dv[2] * v
                        corners.append((x, y, z))
                    poly = Poly3DCollection([corners])
                    poly.set_facecolor(col)
                    poly.set_edgecolor(edgecolor)
                    ax.add_collection3d(poly)

        ax.set_axis_off()
        ax.set_xlim(-1.2, 1.2)
        ax.set_ylim(-1.2, 1.2)
        ax.set_zlim(-1.2, 1.2)
        if fig is not None:
            plt.show()

    def net_lines(self, use_color: bool = True) -> List[str]:
        """
        Text rows of the cube net:

              [U]
        [L] [F] [R] [B]
              [D]
        """
        F = self.to_facelets()
        layout = {
            0: (0, 1),  # U above F
            4: (1, 0),  # L F R B in a row
            2: (1, 1),
            1: (1, 2),
            5: (1, 3),
            3: (2, 1),  # D below F
        }

        COLOR_CODES = {
            0: "\033[97m",
            1: "\033[94m",
            2: "\033[95m",
            3: "\033[93m",
            4: "\033[92m",
            5: "\033[91m",
        }
        RESET = "\033[0m"

        SCALE = 2  # 2 stickers per face side
        rows = 3 * SCALE
        cols = 4 * SCALE
        grid = [[" " for _ in range(cols)] for _ in range(rows)]

        for face_id, (rt, ct) in layout.items():
            for r in range(SCALE):
                for c in range(SCALE):
                    val = int(F[face_id, r, c])
                    grid[rt * SCALE + r][ct * SCALE + c] = (
                        f"{COLOR_CODES[val]}{val}{RESET}" if use_color else str(val)
                    )
        return [" ".join(row).rstrip() for row in grid]

    def print_net(self, use_color: bool = True) -> None:
        """Print the cube net to the terminal (ANSI colors if `use_color`)."""
        for line in self.net_lines(use_color):
            print(line)

    def __repr__(self) -> str:
        return f"Cube({self._state})"
