'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Command line solver: scramble string in, optimal solution out.

'''
#!/usr/bin/env python3
import argparse
import json
import logging
import random
import sys

# project imports
from pocket_cube.config import GODS_NUMBER, PDBMode, SolverConfig
from pocket_cube.errors import PocketCubeError
from pocket_cube.moves import moves_to_string, random_scramble
from pocket_cube.solvers.pdb import HeuristicEngine
from pocket_cube.solvers.solver import METHODS, scramble, solve, verify
from pocket_cube.cube import Cube


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("pocket-cube-solve", description="Solve a 2x2x2 Pocket Cube scramble optimally")
    p.add_argument("scramble", nargs="?", default=None,
                   help="scramble in face-turn notation, e.g. \"R U R' U'\"")
    p.add_argument("--random", type=int, default=None, metavar="N",
                   help="ignore SCRAMBLE and use a random scramble of N moves")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--method", choices=METHODS, default="ida*")
    p.add_argument("--pdb-mode", choices=[m.value for m in PDBMode], default=PDBMode.AUTO.value, dest="pdb_mode")
    p.add_argument("--max-depth", type=int, default=GODS_NUMBER, dest="max_depth")
    p.add_argument("--memory-budget-mb", type=int, default=None, dest="memory_budget_mb",
                   help="memory the combined table may use (default: ask the OS)")
    p.add_argument("--bfs-max-depth", type=int, default=None, dest="bfs_max_depth")
    p.add_argument("--json", action="store_true", help="print the result as JSON")
    p.add_argument("--net", action="store_true", help="print the scrambled cube net")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.random is not None:
        moves = random_scramble(args.random, random.Random(args.seed))
    elif args.scramble is not None:
        moves = args.scramble
    else:
        print("either a scramble or --random N is required", file=sys.stderr)
        return 2

    cfg = SolverConfig(
        max_depth=args.max_depth,
        pdb_mode=args.pdb_mode,
        memory_budget_bytes=args.memory_budget_mb * 1024 * 1024 if args.memory_budget_mb is not None else None,
        bfs_max_depth=args.bfs_max_depth,
    )
    engine = HeuristicEngine(cfg)

    try:
        state = scramble(moves)
    except PocketCubeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.net:
        Cube(state).print_net()

    result = solve(state, method=args.method, engine=engine)
    if result is None:
        print("no solution found", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict()))
    else:
        text = moves if isinstance(moves, str) else moves_to_string(moves)
        print(f"scramble : {text}")
        print(f"solution : {result}")
        print(f"verified : {verify(state, result.moves)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
