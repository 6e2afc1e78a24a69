'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Benchmark harness: validates IDA* solutions, compares IDA* with BFS,
and measures the distribution of optimal solution depths.

'''
from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from pocket_cube.config import GODS_NUMBER
from pocket_cube.errors import PocketCubeError
from pocket_cube.moves import Move, moves_to_string, random_scramble
from pocket_cube.solvers.pdb import HeuristicEngine, default_engine
from pocket_cube.solvers.solver import scramble, solve, verify
from pocket_cube.state import CubeState, is_solved

logger = logging.getLogger(__name__)

# Scrambles that need (close to) the full 11 moves
WORST_CASE_SCRAMBLES: List[Tuple[str, str]] = [
    ("Sune variation", "R U2 R' U' R U R' U' R U' R'"),
    ("T-perm setup", "F R U' R' U' R U R' F' R U R' U' R' F R F'"),
    ("Random depth 11", "R F R2 U' F2 U R F2 R2 F'"),
    ("Complex pattern", "R U R' U R U2 R' U2 R U R' U'"),
]

COMPARISON_COLUMNS = ["method", "scramble_depth", "solution_depth", "nodes_explored", "time_ms", "success"]


# =============================================================
# Scramble generation
# =============================================================
def generate_random_scramble(depth: int, rng: Optional[random.Random] = None) -> Tuple[CubeState, List[Move]]:
    """
    Random scramble of exactly `depth` moves (pruning rule honoured).

    Returns:
        (scrambled state, scramble moves)
    """
    moves = random_scramble(depth, rng)
    return scramble(moves), moves


def generate_random_scramble_range(
    min_depth: int,
    max_depth: int,
    rng: Optional[random.Random] = None,
) -> Tuple[CubeState, List[Move], int]:
    """Random scramble whose length is drawn uniformly from [min_depth, max_depth]."""
    rng = rng or random.Random()
    depth = rng.randint(min_depth, max_depth)
    state, moves = generate_random_scramble(depth, rng)
    return state, moves, depth


def state_from_scramble(text: str) -> CubeState:
    return scramble(text)


# =============================================================
# Single solve
# =============================================================
def solve_with_method(
    state: CubeState,
    method: str,
    scramble_depth: int,
    engine: Optional[HeuristicEngine] = None,
    bfs_max_depth: Optional[int] = None,
) -> Dict[str, object]:
    """
    Solve one state and return a benchmark row.

    A solver that returns None (or raises a PocketCubeError / MemoryError) is
    recorded with ``success=False`` and ``solution_depth=-1`` instead of
    aborting the whole run.
    """
    row: Dict[str, object] = dict(
        method=method,
        scramble_depth=scramble_depth,
        solution_depth=-1,
        nodes_explored=0,
        time_ms=float("nan"),
        success=False,
    )
    try:
        result = solve(state, method=method, engine=engine, bfs_max_depth=bfs_max_depth)
    except (PocketCubeError, MemoryError):
        logger.exception("%s failed on %s", method, state)
        return row

    if result is None:
        return row

    row.update(
        solution_depth=result.length,
        nodes_explored=result.nodes_explored,
        time_ms=result.time_ms,
        success=True,
    )
    return row


# =============================================================
# Validation
# =============================================================
def run_validation(
    sample_size: int = 100,
    engine: Optional[HeuristicEngine] = None,
    rng: Optional[random.Random] = None,
    max_scramble_depth: int = GODS_NUMBER,
) -> pd.DataFrame:
    """
    Scramble, solve with IDA*, and replay each solution on the scrambled state.

    Returns:
        DataFrame with columns
            ['trial', 'scramble', 'solution', 'solution_depth', 'verified']
    """
    engine = engine or default_engine()
    rng = rng or random.Random()
    rows: list[dict] = []

    for t in range(sample_size):
        state, moves, _ = generate_random_scramble_range(1, max_scramble_depth, rng)
        result = solve(state, method="ida*", engine=engine)
        ok = result is not None and verify(state, result.moves)
        if not ok:
            logger.warning("Validation #%d failed: scramble %s, solution %s",
                           t + 1, moves_to_string(moves),
                           moves_to_string(result.moves) if result else None)
        rows.append(
            dict(
                trial=t,
                scramble=moves_to_string(moves),
                solution=moves_to_string(result.moves) if result else None,
                solution_depth=result.length if result else -1,
                verified=ok,
            )
        )

    df = pd.DataFrame(rows, columns=["trial", "scramble", "solution", "solution_depth", "verified"])
    passed = int(df["verified"].sum()) if not df.empty else 0
    print("VALIDATION")
    print("-" * 40)
    print(f"passed: {passed}/{sample_size} ({100.0 * passed / max(1, sample_size):.1f}%)")
    print(f"failed: {sample_size - passed}/{sample_size}")
    return df


# =============================================================
# Comparison
# =============================================================
def summarize_comparison(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-method statistics over the successful solves of `run_comparison` rows.

    Returns:
        DataFrame indexed by method with columns
            sample_size, avg_time_ms, max_time_ms, min_time_ms,
            avg_nodes, max_nodes, avg_solution_depth, success_rate
    """
    out = df.groupby("method").agg(sample_size=("success", "size"),
                                   success_rate=("success", "mean"))
    ok = df[df["success"].astype(bool)]
    stats = ok.groupby("method").agg(
        avg_time_ms=("time_ms", "mean"),
        max_time_ms=("time_ms", "max"),
        min_time_ms=("time_ms", "min"),
        avg_nodes=("nodes_explored", "mean"),
        max_nodes=("nodes_explored", "max"),
        avg_solution_depth=("solution_depth", "mean"),
    )
    out = out.join(stats, how="left")
    out["success_rate"] = 100.0 * out["success_rate"].astype(float)
    return out[["sample_size", "avg_time_ms", "max_time_ms", "min_time_ms",
                "avg_nodes", "max_nodes", "avg_solution_depth", "success_rate"]]


def run_comparison(
    sample_size: int = 50,
    max_scramble_depth: int = GODS_NUMBER,
    include_bfs: bool = False,
    engine: Optional[HeuristicEngine] = None,
    rng: Optional[random.Random] = None,
    bfs_max_depth: Optional[int] = None,
) -> pd.DataFrame:
    """
    Solve the same random scrambles with every method and summarise.

    Args:
        sample_size: Number of scrambled cubes.
        max_scramble_depth: Scramble lengths are drawn from [1, max_scramble_depth].
        include_bfs: Also run BFS (slow and memory hungry on deep scrambles).
        engine: Heuristic engine for IDA*.
        rng: Optional random.Random for reproducibility.
        bfs_max_depth: Optional depth guard for BFS.

    Returns:
        Summary DataFrame (see `summarize_comparison`); the raw rows are kept
        in ``df.attrs["rows"]``.
    """
    engine = engine or default_engine()
    rng = rng or random.Random()
    methods = ["bfs", "ida*"] if include_bfs else ["ida*"]
    rows: list[dict] = []

    for i in range(sample_size):
        state, _, depth = generate_random_scramble_range(1, max_scramble_depth, rng)
        for method in methods:
            rows.append(solve_with_method(state, method, depth, engine, bfs_max_depth))
        if i % 10 == 0:
            logger.info("comparison: %d/%d", i + 1, sample_size)

    raw = pd.DataFrame(rows, columns=COMPARISON_COLUMNS)
    summary = summarize_comparison(raw)
    summary.attrs["rows"] = raw

    print(f"COMPARISON ({', '.join(methods)}) | sample={sample_size} | max depth={max_scramble_depth}")
    print("-" * 60)
    print(summary.to_string(float_format=lambda v: f"{v:.2f}"))
    return summary


# =============================================================
# Depth distribution
# =============================================================
def ascii_histogram(counts: pd.Series, width: int = 40) -> List[str]:
    """One text bar per index entry, scaled so the largest count spans `width`."""
    top = int(counts.max()) if len(counts) else 0
    lines = []
    for depth, count in counts.items():
        bar = "█" * (int(round(count / top * width)) if top > 0 else 0)
        lines.append(f"{int(depth):>2}: {bar} {int(count)}")
    return lines


def run_distribution(
    sample_size: int = 500,
    engine: Optional[HeuristicEngine] = None,
    rng: Optional[random.Random] = None,
    scramble_range: Tuple[int, int] = (5, 24),
) -> pd.DataFrame:
    """
    Distribution of optimal solution depths over long random scrambles.

    Returns:
        DataFrame indexed by depth 0..11 with columns
            ['count', 'percentage', 'avg_time_ms', 'avg_nodes']
    """
    engine = engine or default_engine()
    rng = rng or random.Random()
    rows: list[dict] = []

    for i in range(sample_size):
        state, _, depth = generate_random_scramble_range(*scramble_range, rng)
        rows.append(solve_with_method(state, "ida*", depth, engine))
        if i % 50 == 0:
            logger.info("distribution: %d/%d", i + 1, sample_size)

    raw = pd.DataFrame(rows, columns=COMPARISON_COLUMNS)
    ok = raw[raw["success"].astype(bool)]
    depths = pd.Index(np.arange(GODS_NUMBER + 1), name="depth")
    grouped = ok.groupby("solution_depth")
    out = pd.DataFrame(index=depths)
    out["count"] = grouped.size().reindex(depths, fill_value=0).astype(int)
    out["percentage"] = 100.0 * out["count"] / max(1, sample_size)
    out["avg_time_ms"] = grouped["time_ms"].mean().reindex(depths, fill_value=0.0)
    out["avg_nodes"] = grouped["nodes_explored"].mean().reindex(depths, fill_value=0.0).round()

    print(f"SOLUTION DEPTH DISTRIBUTION | sample={sample_size}")
    print("-" * 60)
    print(out.to_string(float_format=lambda v: f"{v:.3f}"))
    print()
    for line in ascii_histogram(out["count"]):
        print(line)
    return out


def plot_distribution(df: pd.DataFrame) -> None:
    """
    Bar chart of solution depth counts.

    Args:
        df: Output of `run_distribution(...)`.
    """
    plt.figure(figsize=(8, 5))
    plt.bar(df.index, df["count"])
    plt.xlabel("Optimal solution length (moves)")
    plt.ylabel("Count")
    plt.title("Pocket Cube: optimal depth distribution")
    plt.grid(True, alpha=0.25, axis="y")
    plt.tight_layout()
    plt.show()


# =============================================================
# Worst case
# =============================================================
def run_worst_case(engine: Optional[HeuristicEngine] = None,
                   scrambles: Optional[List[Tuple[str, str]]] = None) -> pd.DataFrame:
    """
    Solve the known hard scrambles with IDA*.

    Scrambles that leave the cube solved are skipped.

    Returns:
        DataFrame with columns
            ['name', 'scramble', 'solution', 'solution_length', 'time_ms', 'nodes_explored', 'success']
    """
    engine = engine or default_engine()
    rows: list[dict] = []

    for name, text in (scrambles or WORST_CASE_SCRAMBLES):
        state = state_from_scramble(text)
        if is_solved(state):
            print(f"{name}: scramble leaves the cube solved, skipped")
            continue
        result = solve(state, method="ida*", engine=engine)
        if result is None:
            print(f"{name}: no solution")
        else:
            print(f"{name}: {text}\n    -> {result}")
        rows.append(
            dict(
                name=name,
                scramble=text,
                solution=moves_to_string(result.moves) if result else None,
                solution_length=result.length if result else -1,
                time_ms=result.time_ms if result else float("nan"),
                nodes_explored=result.nodes_explored if result else 0,
                success=result is not None,
            )
        )

    return pd.DataFrame(rows, columns=["name", "scramble", "solution", "solution_length",
                                       "time_ms", "nodes_explored", "success"])


def run_all(engine: Optional[HeuristicEngine] = None,
            rng: Optional[random.Random] = None) -> Dict[str, pd.DataFrame]:
    """Validation, distribution, comparison (IDA* only) and worst case, in that order."""
    engine = engine or default_engine()
    rng = rng or random.Random()
    rule = "=" * 60

    frames: Dict[str, pd.DataFrame] = {}
    frames["validation"] = run_validation(50, engine, rng)
    print(f"\n{rule}\n")
    frames["distribution"] = run_distribution(200, engine, rng)
    print(f"\n{rule}\n")
    frames["comparison"] = run_comparison(50, GODS_NUMBER, False, engine, rng)
    print(f"\n{rule}\n")
    frames["worst_case"] = run_worst_case(engine)
    return frames
