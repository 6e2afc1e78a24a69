'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Command line benchmark runner (validation, comparison, distribution, worst case).

'''
#!/usr/bin/env python3
import argparse
import logging
import random
import sys

# project imports
from pocket_cube import benchmark
from pocket_cube.config import GODS_NUMBER, PDBMode, SolverConfig
from pocket_cube.solvers.pdb import HeuristicEngine

SUITES = ("validation", "comparison", "distribution", "worst-case", "all")


def main(argv=None) -> int:
    p = argparse.ArgumentParser("pocket-cube-bench", description="Benchmark the Pocket Cube solvers")
    p.add_argument("suite", choices=SUITES, nargs="?", default="all")
    p.add_argument("--samples", type=int, default=None, help="sample size (suite default if omitted)")
    p.add_argument("--max-scramble", type=int, default=GODS_NUMBER, dest="max_scramble")
    p.add_argument("--include-bfs", action="store_true", dest="include_bfs")
    p.add_argument("--bfs-max-depth", type=int, default=None, dest="bfs_max_depth")
    p.add_argument("--pdb-mode", choices=[m.value for m in PDBMode], default=PDBMode.AUTO.value, dest="pdb_mode")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--csv", type=str, default=None, help="write the suite's frame to this CSV file")
    p.add_argument("--plot", action="store_true", help="plot the depth distribution")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    engine = HeuristicEngine(SolverConfig(pdb_mode=args.pdb_mode, bfs_max_depth=args.bfs_max_depth))
    engine.build()
    rng = random.Random(args.seed)

    if args.suite == "validation":
        df = benchmark.run_validation(args.samples or 100, engine, rng, args.max_scramble)
    elif args.suite == "comparison":
        df = benchmark.run_comparison(args.samples or 50, args.max_scramble, args.include_bfs,
                                      engine, rng, args.bfs_max_depth)
    elif args.suite == "distribution":
        df = benchmark.run_distribution(args.samples or 500, engine, rng)
        if args.plot:
            benchmark.plot_distribution(df)
    elif args.suite == "worst-case":
        df = benchmark.run_worst_case(engine)
    else:
        frames = benchmark.run_all(engine, rng)
        if args.plot:
            benchmark.plot_distribution(frames["distribution"])
        df = None

    if args.csv and df is not None:
        df.to_csv(args.csv)
        print(f"saved {args.csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
