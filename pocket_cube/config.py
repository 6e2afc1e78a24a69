'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Solver configuration (depth cap, pattern database mode, memory budget).

'''
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Maximum optimal solution length of the 2x2x2 in the half-turn metric.
GODS_NUMBER = 11


class PDBMode(Enum):
    AUTO = "auto"
    COMBINED = "combined"
    DISJOINT = "disjoint"


@dataclass
class SolverConfig:
    """
    Configuration for the pattern database and the search strategies.

    Key ideas:
    - One value, `max_depth`, bounds the backward BFS that fills the pattern
      databases *and* caps the IDA* f-bound. Unassigned table entries read as
      `max_depth`, which keeps the heuristic admissible.
    - The table mode is decided once, before anything is allocated. AUTO picks
      the combined table when it fits the memory budget, disjoint otherwise.

    Tuning tips:
    - Tests and quick experiments: `pdb_mode=PDBMode.DISJOINT` builds in well
      under a second and still solves every scramble, only with more nodes.
    - A reduced `max_depth` gives a cheap combined table for shallow scrambles.
    """

    max_depth: int = GODS_NUMBER
    # BFS bound for the tables and IDA* abort threshold.

    pdb_mode: PDBMode = PDBMode.AUTO
    # AUTO / COMBINED (~88 MB, exact) / DISJOINT (~42 KB, weaker bound).

    memory_budget_bytes: Optional[int] = None
    # Bytes the combined table may use. None → ask psutil for available memory.

    memory_reserve_bytes: int = 256 * 1024 * 1024
    # Kept free on top of the table itself when the budget comes from psutil.

    bfs_chunk_size: int = 4_000_000
    # Frontier slice processed per vectorised step while building tables.

    bfs_max_depth: Optional[int] = None
    # Optional depth guard for the forward BFS solver (None → unbounded).

    def __post_init__(self) -> None:
        if isinstance(self.pdb_mode, str):
            self.pdb_mode = PDBMode(self.pdb_mode.lower())
        if self.max_depth < 1:
            raise ValueError(f"'max_depth' must be >= 1, got {self.max_depth}")
        if self.bfs_chunk_size <= 0:
            raise ValueError(f"'bfs_chunk_size' must be > 0, got {self.bfs_chunk_size}")
