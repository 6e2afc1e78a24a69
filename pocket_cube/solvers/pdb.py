'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Pattern databases (PDBs) for the Pocket Cube, built by backward BFS from
the solved state, and the heuristic engine that owns them.

'''

from __future__ import annotations

import itertools
import logging
import threading
import time
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable

import numpy as np
import psutil

from pocket_cube.config import PDBMode, SolverConfig
from pocket_cube.moves import ALL_MOVES, TRANSITIONS
from pocket_cube.state import CubeState, N_CORNERS

logger = logging.getLogger(__name__)

ORIENTATION_SIZE = 3 ** 7          # 2187
PERMUTATION_SIZE = 40320           # 8!
FULL_SIZE = PERMUTATION_SIZE * ORIENTATION_SIZE
FACTORIALS = [1, 1, 2, 6, 24, 120, 720, 5040]
UNASSIGNED = -1
N_MOVES = len(ALL_MOVES)


# =============================================================================
# ── Coordinates ───────────────────────────────────────────────────────────────
# =============================================================================

def orientation_index(state: CubeState) -> int:
    """First seven orientations read as a base-3 numeral, range [0, 2187)."""
    co = state.corner_orientation
    index = 0
    for i in range(7):
        index = index * 3 + co[i]
    return index


def permutation_index(state: CubeState) -> int:
    """Lehmer rank of the corner permutation, range [0, 40320)."""
    cp = state.corner_permutation
    index = 0
    for i in range(7):
        count = 0
        ci = cp[i]
        for j in range(i + 1, N_CORNERS):
            if cp[j] < ci:
                count += 1
        index += count * FACTORIALS[7 - i]
    return index


def combined_index(state: CubeState) -> int:
    return permutation_index(state) * ORIENTATION_SIZE + orientation_index(state)


# =============================================================================
# ── Coordinate move tables ────────────────────────────────────────────────────
# =============================================================================

def _rank_permutations(perms: np.ndarray) -> np.ndarray:
    idx = np.zeros(perms.shape[0], dtype=np.int64)
    for i in range(7):
        smaller = (perms[:, i + 1:] < perms[:, i:i + 1]).sum(axis=1)
        idx += smaller * FACTORIALS[7 - i]
    return idx


def _decode_orientations() -> np.ndarray:
    ori = np.zeros((ORIENTATION_SIZE, N_CORNERS), dtype=np.int64)
    k = np.arange(ORIENTATION_SIZE, dtype=np.int64)
    for i in range(6, -1, -1):
        ori[:, i] = k % 3
        k //= 3
    # the eighth twist is fixed by the twist law
    ori[:, 7] = (-ori[:, :7].sum(axis=1)) % 3
    return ori


def _encode_orientations(ori: np.ndarray) -> np.ndarray:
    idx = np.zeros(ori.shape[0], dtype=np.int64)
    for i in range(7):
        idx = idx * 3 + ori[:, i]
    return idx


@lru_cache(maxsize=1)
def permutation_move_table() -> np.ndarray:
    """
    Permutation coordinate transitions, shape (40320, 18).

    Row ``r`` is the permutation of Lehmer rank ``r``; lexicographic order of
    ``itertools.permutations`` coincides with that rank.
    """
    perms = np.array(list(itertools.permutations(range(N_CORNERS))), dtype=np.int8)
    table = np.empty((PERMUTATION_SIZE, N_MOVES), dtype=np.int32)
    for m in ALL_MOVES:
        moved = perms[:, list(TRANSITIONS[m].perm)]
        table[:, m] = _rank_permutations(moved)
    table.setflags(write=False)
    return table


@lru_cache(maxsize=1)
def orientation_move_table() -> np.ndarray:
    """Orientation coordinate transitions, shape (2187, 18)."""
    ori = _decode_orientations()
    table = np.empty((ORIENTATION_SIZE, N_MOVES), dtype=np.int32)
    for m in ALL_MOVES:
        t = TRANSITIONS[m]
        moved = (ori[:, list(t.perm)] + np.asarray(t.ori_delta, dtype=np.int64)) % 3
        table[:, m] = _encode_orientations(moved)
    table.setflags(write=False)
    return table


# =============================================================================
# ── Backward BFS ──────────────────────────────────────────────────────────────
# =============================================================================

def bfs_fill(
    size: int,
    neighbours: Callable[[np.ndarray, int], np.ndarray],
    max_depth: int,
    chunk_size: int = 4_000_000,
    label: str = "pdb",
) -> np.ndarray:
    """
    Exhaustive breadth-first enumeration of a coordinate space from index 0.

    Every unassigned neighbour of a frontier entry gets ``depth + 1``. The
    enumeration stops when the frontier empties or ``max_depth`` is reached.
    A move is a bijection on the coordinate space, so one move applied to a
    duplicate-free frontier never yields duplicates, and the table check
    removes the rest.

    Args:
        size: Number of coordinates; index 0 is the solved state.
        neighbours: ``neighbours(indices, move) -> indices`` (vectorised).
        max_depth: Distance bound.
        chunk_size: Frontier slice processed at once (bounds temporary memory).
        label: Name used in log lines.

    Returns:
        np.ndarray[int8] with the distance of each coordinate, -1 if unassigned.
    """
    table = np.full(size, UNASSIGNED, dtype=np.int8)
    table[0] = 0
    frontier = np.zeros(1, dtype=np.int32)
    depth = 0
    while frontier.size and depth < max_depth:
        found: List[np.ndarray] = []
        for start in range(0, frontier.size, chunk_size):
            chunk = frontier[start:start + chunk_size]
            for m in range(N_MOVES):
                nxt = neighbours(chunk, m)
                fresh = nxt[table[nxt] == UNASSIGNED]
                if fresh.size:
                    table[fresh] = depth + 1
                    found.append(fresh.astype(np.int32))
        frontier = np.concatenate(found) if found else np.zeros(0, dtype=np.int32)
        depth += 1
        logger.debug("%s: depth %d → %d new states", label, depth, frontier.size)
    return table


def build_orientation_pdb(max_depth: int, chunk_size: int = 4_000_000) -> np.ndarray:
    omove = orientation_move_table()
    return bfs_fill(ORIENTATION_SIZE, lambda idx, m: omove[idx, m].astype(np.int64), max_depth,
                    chunk_size=chunk_size, label="orientation")


def build_permutation_pdb(max_depth: int, chunk_size: int = 4_000_000) -> np.ndarray:
    pmove = permutation_move_table()
    return bfs_fill(PERMUTATION_SIZE, lambda idx, m: pmove[idx, m].astype(np.int64), max_depth,
                    chunk_size=chunk_size, label="permutation")


def build_combined_pdb(max_depth: int, chunk_size: int = 4_000_000) -> np.ndarray:
    pmove = permutation_move_table()
    omove = orientation_move_table()

    def neighbours(idx: np.ndarray, m: int) -> np.ndarray:
        p, o = np.divmod(idx, ORIENTATION_SIZE)
        return pmove[p, m].astype(np.int64) * ORIENTATION_SIZE + omove[o, m]

    return bfs_fill(FULL_SIZE, neighbours, max_depth, chunk_size=chunk_size, label="combined")


# States at distance 9, the widest BFS layer of the combined space
PEAK_LAYER_SIZE = 45_391_616
# int64 temporaries alive per chunk in `neighbours` and the freshness filter
_CHUNK_TEMPORARIES = 6


def combined_build_bytes(chunk_size: int = 4_000_000) -> int:
    """
    Upper estimate of the peak memory used by `build_combined_pdb`.

    Counts the int8 table, both coordinate move tables, and, for the widest
    layer, the int32 frontier, the per-chunk ``found`` arrays and their
    concatenated copy, plus the int64 temporaries of one chunk.
    """
    table = FULL_SIZE * np.dtype(np.int8).itemsize
    move_tables = (PERMUTATION_SIZE + ORIENTATION_SIZE) * N_MOVES * np.dtype(np.int32).itemsize
    layers = 3 * PEAK_LAYER_SIZE * np.dtype(np.int32).itemsize
    chunk = _CHUNK_TEMPORARIES * min(chunk_size, PEAK_LAYER_SIZE) * np.dtype(np.int64).itemsize
    return table + move_tables + layers + chunk


# =============================================================================
# ── Heuristic tables ──────────────────────────────────────────────────────────
# =============================================================================

@runtime_checkable
class HeuristicTable(Protocol):
    """
    Capability shared by every table variant.

        - ``mode``: which variant this is.
        - ``lookup(state) -> int``: admissible distance, 0 iff solved.
    """
    mode: PDBMode

    def lookup(self, state: CubeState) -> int: ...


@dataclass
class CombinedTable:
    """One exact table over ``perm_index * 2187 + ori_index`` (~88 MB)."""
    table: np.ndarray
    max_depth: int
    mode: PDBMode = field(default=PDBMode.COMBINED, init=False)

    def lookup(self, state: CubeState) -> int:
        v = int(self.table[combined_index(state)])
        return self.max_depth if v < 0 else v

    @property
    def nbytes(self) -> int:
        return int(self.table.nbytes)

    def histogram(self) -> Dict[int, int]:
        return _histogram(self.table)


@dataclass
class DisjointTables:
    """
    Orientation-only and permutation-only tables; h = max of both.

    Weaker than the combined table because it ignores how the two components
    interact, but still admissible.
    """
    orientation: np.ndarray
    permutation: np.ndarray
    max_depth: int
    mode: PDBMode = field(default=PDBMode.DISJOINT, init=False)

    def __post_init__(self) -> None:
        # plain lists: faster scalar reads than numpy on the search hot path
        self._ori = [self.max_depth if v < 0 else v for v in self.orientation.tolist()]
        self._perm = [self.max_depth if v < 0 else v for v in self.permutation.tolist()]

    def lookup(self, state: CubeState) -> int:
        a = self._ori[orientation_index(state)]
        b = self._perm[permutation_index(state)]
        return a if a > b else b

    @property
    def nbytes(self) -> int:
        return int(self.orientation.nbytes + self.permutation.nbytes)

    def histogram(self) -> Dict[str, Dict[int, int]]:
        return {"orientation": _histogram(self.orientation), "permutation": _histogram(self.permutation)}


def _histogram(table: np.ndarray) -> Dict[int, int]:
    values, counts = np.unique(table, return_counts=True)
    return {int(v): int(c) for v, c in zip(values, counts)}


# =============================================================================
# ── Engine ────────────────────────────────────────────────────────────────────
# =============================================================================

class HeuristicEngine:
    """
    Owner of the pattern databases: built once on first use, then frozen.

    The engine is constructed explicitly and handed to every search call, so
    each test (or each front end) controls its own cache. Construction is
    guarded by a lock; after ``build()`` returns the tables are read-only and
    safe to share across threads.

    Parameters
    ----------
    config : SolverConfig, optional
        ``max_depth``, ``pdb_mode`` and the memory budget.

    Examples
    --------
    >>> engine = HeuristicEngine(SolverConfig(pdb_mode=PDBMode.DISJOINT))
    >>> engine.heuristic(create_solved())
    0
    """

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config or SolverConfig()
        self._lock = threading.Lock()
        self._table: Optional[HeuristicTable] = None
        self._build_seconds: float = 0.0

    # --------------------- mode selection ---------------------
    def available_memory(self) -> int:
        if self.config.memory_budget_bytes is not None:
            return int(self.config.memory_budget_bytes)
        return int(psutil.virtual_memory().available) - int(self.config.memory_reserve_bytes)

    def choose_mode(self) -> PDBMode:
        """
        Decide the table mode before allocating anything.

        AUTO → COMBINED iff the peak cost of building the combined table
        (see `combined_build_bytes`) fits the memory budget, DISJOINT
        otherwise. Explicit modes are returned as-is.
        """
        mode = self.config.pdb_mode
        if mode is not PDBMode.AUTO:
            return mode
        need = combined_build_bytes(self.config.bfs_chunk_size)
        have = self.available_memory()
        chosen = PDBMode.COMBINED if need <= have else PDBMode.DISJOINT
        logger.info("PDB mode AUTO → %s (need %d bytes, budget %d bytes)", chosen.value, need, have)
        return chosen

    # --------------------- construction ---------------------
    @property
    def is_built(self) -> bool:
        return self._table is not None

    @property
    def mode(self) -> Optional[PDBMode]:
        return self._table.mode if self._table is not None else None

    @property
    def max_depth(self) -> int:
        return self.config.max_depth

    def build(self) -> HeuristicTable:
        """Build the tables if needed (single builder) and return them."""
        table = self._table
        if table is not None:
            return table
        with self._lock:
            if self._table is None:
                t0 = time.perf_counter()
                self._table = self._build_tables(self.choose_mode())
                self._build_seconds = time.perf_counter() - t0
                logger.info("PDB ready: mode=%s in %.2fs", self._table.mode.value, self._build_seconds)
            return self._table

    def _build_tables(self, mode: PDBMode) -> HeuristicTable:
        depth = self.config.max_depth
        if mode is PDBMode.COMBINED:
            logger.info("Generating combined PDB (%d entries, max depth %d)...", FULL_SIZE, depth)
            try:
                return CombinedTable(build_combined_pdb(depth, self.config.bfs_chunk_size), depth)
            except MemoryError:
                logger.warning("Not enough memory for the combined PDB, falling back to disjoint tables.")
        logger.info("Generating disjoint PDBs (max depth %d)...", depth)
        chunk = self.config.bfs_chunk_size
        return DisjointTables(build_orientation_pdb(depth, chunk), build_permutation_pdb(depth, chunk), depth)

    # --------------------- queries ---------------------
    def heuristic(self, state: CubeState) -> int:
        """Admissible lower bound on the moves needed to solve `state`."""
        table = self._table or self.build()
        return table.lookup(state)

    __call__ = heuristic

    def lookup_function(self) -> Callable[[CubeState], int]:
        """Bound ``lookup`` of the built table, for tight search loops."""
        return self.build().lookup

    def stats(self) -> Dict[str, object]:
        table = self.build()
        return {
            "mode": table.mode.value,
            "max_depth": self.config.max_depth,
            "nbytes": table.nbytes,
            "build_seconds": round(self._build_seconds, 3),
            "histogram": table.histogram(),
        }


@lru_cache(maxsize=1)
def default_engine() -> HeuristicEngine:
    """Process-wide engine with the default configuration, for callers that do not own one."""
    return HeuristicEngine(SolverConfig())
