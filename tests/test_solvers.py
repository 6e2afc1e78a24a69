'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: IDA* and BFS solvers, the search node and the solver façade.

'''
import random
import unittest

from pocket_cube.config import GODS_NUMBER, PDBMode, SolverConfig
from pocket_cube.moves import Move, apply_move, apply_moves, can_follow, random_scramble
from pocket_cube.solvers.bfs import solve_bfs
from pocket_cube.solvers.ida_star import IDAStarSolver, solve_ida_star
from pocket_cube.solvers.pdb import HeuristicEngine
from pocket_cube.solvers.result import SolveResult
from pocket_cube.solvers.search_node import SearchNode, successors
from pocket_cube.solvers.solver import scramble, solve, solve_scramble, verify
from pocket_cube.state import CubeState, create_solved, is_solved


class TestSearchNode(unittest.TestCase):

    def test_root_expands_all_moves(self):
        root = SearchNode(create_solved())
        self.assertEqual(root.depth, 0)
        self.assertTrue(root.is_goal())
        children = root.expand()
        self.assertEqual(len(children), 18)
        self.assertEqual([c.last_move for c in children], list(Move))
        self.assertTrue(all(c.depth == 1 for c in children))

    def test_children_follow_pruning_rule(self):
        node = SearchNode(apply_move(create_solved(), "U"), (Move.U,))
        for child in node.expand():
            self.assertTrue(can_follow(Move.U, child.last_move))
            self.assertEqual(child.get_moves()[0], Move.U)
        self.assertEqual(len(node.expand()), 12)

    def test_successors_match_apply_move(self):
        s = apply_moves(create_solved(), "R U' F2")
        for m, nxt in successors(s, Move.F2):
            self.assertEqual(nxt, apply_move(s, m))


class TestIDAStar(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.engine = HeuristicEngine(SolverConfig(pdb_mode=PDBMode.DISJOINT))
        cls.engine.build()

    def test_solved_input(self):
        res = solve_ida_star(create_solved(), self.engine)
        self.assertEqual(res.moves, ())
        self.assertEqual(res.nodes_explored, 1)
        self.assertEqual(res.to_dict()["moves"], [])
        self.assertEqual(res.to_dict()["nodesExplored"], 1)

    def test_sexy_move_six_times_is_trivial(self):
        s = create_solved()
        for _ in range(6):
            s = apply_moves(s, ["R", "U", "R'", "U'"])
        res = solve_ida_star(s, self.engine)
        self.assertEqual(res.length, 0)

    def test_single_move(self):
        res = solve_ida_star(apply_move(create_solved(), "R"), self.engine)
        self.assertEqual(res.labels(), ["R'"])
        self.assertEqual(res.method, "ida*")

    def test_known_scramble_within_gods_number(self):
        s = scramble("R U2 R' U' R U R' U' R U' R'")
        res = solve_ida_star(s, self.engine)
        self.assertIsNotNone(res)
        self.assertLessEqual(res.length, GODS_NUMBER)
        self.assertTrue(verify(s, res.moves))

    def test_round_trip_random(self):
        rng = random.Random(21)
        for _ in range(10):
            s = apply_moves(create_solved(), random_scramble(rng.randint(1, 7), rng))
            res = solve_ida_star(s, self.engine)
            self.assertIsNotNone(res)
            self.assertLessEqual(res.length, GODS_NUMBER)
            self.assertTrue(is_solved(apply_moves(s, res.moves)))
            for a, b in zip(res.moves, res.moves[1:]):
                self.assertTrue(can_follow(a, b))

    def test_deterministic(self):
        s = scramble("F R' U2 L")
        a = solve_ida_star(s, self.engine)
        b = solve_ida_star(s, self.engine)
        self.assertEqual(a.moves, b.moves)
        self.assertEqual(a.nodes_explored, b.nodes_explored)

    def test_depth_cap_aborts(self):
        solver = IDAStarSolver(self.engine, max_depth=2)
        with self.assertLogs("pocket_cube.solvers.ida_star", level="ERROR"):
            self.assertIsNone(solver.solve(scramble("R U F")))

    def test_illegal_state_aborts(self):
        twisted = CubeState(tuple(range(8)), (1, 0, 0, 0, 0, 0, 0, 0))
        solver = IDAStarSolver(self.engine, max_depth=3)
        with self.assertLogs("pocket_cube.solvers.ida_star", level="ERROR"):
            self.assertIsNone(solver.solve(twisted))

    def test_engine_from_config(self):
        res = solve_ida_star(scramble("U R"), config=SolverConfig(pdb_mode=PDBMode.DISJOINT, max_depth=5))
        self.assertEqual(res.length, 2)


class TestBFS(unittest.TestCase):

    def test_solved_input(self):
        res = solve_bfs(create_solved())
        self.assertEqual(res.moves, ())
        self.assertEqual(res.nodes_explored, 1)

    def test_single_move(self):
        res = solve_bfs(apply_move(create_solved(), "F2"))
        self.assertEqual(res.labels(), ["F2"])
        self.assertEqual(res.method, "bfs")

    def test_opposite_faces(self):
        # U D commute: the canonical answer starts with the smaller face
        res = solve_bfs(scramble("U D"))
        self.assertEqual(res.labels(), ["D'", "U'"])

    def test_depth_guard(self):
        with self.assertLogs("pocket_cube.solvers.bfs", level="WARNING"):
            self.assertIsNone(solve_bfs(scramble("R U F"), max_depth=2))


class TestCrossSolver(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.engine = HeuristicEngine(SolverConfig(pdb_mode=PDBMode.DISJOINT))

    def test_same_optimal_length(self):
        rng = random.Random(8)
        for _ in range(10):
            s = apply_moves(create_solved(), random_scramble(rng.randint(1, 5), rng))
            a = solve_bfs(s)
            b = solve_ida_star(s, self.engine)
            self.assertEqual(a.length, b.length)
            self.assertTrue(verify(s, a.moves))
            self.assertTrue(verify(s, b.moves))
            self.assertLessEqual(a.length, GODS_NUMBER)


class TestFacade(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.engine = HeuristicEngine(SolverConfig(pdb_mode=PDBMode.DISJOINT))

    def test_method_aliases(self):
        s = scramble("R U")
        for method in ("ida*", "IDA", "idastar", "ida_star", "bfs", " BFS "):
            res = solve(s, method=method, engine=self.engine)
            self.assertEqual(res.length, 2, method)

    def test_unknown_method(self):
        with self.assertRaises(ValueError):
            solve(create_solved(), method="dfs", engine=self.engine)

    def test_solve_scramble(self):
        res = solve_scramble("R U R'", engine=self.engine)
        self.assertIsInstance(res, SolveResult)
        self.assertTrue(verify(scramble("R U R'"), res.moves))

    def test_result_shapes(self):
        res = solve_scramble([Move.R], engine=self.engine)
        d = res.to_dict()
        self.assertEqual(set(d), {"moves", "nodesExplored", "timeMs"})
        self.assertEqual(d["moves"], ["R'"])
        self.assertGreaterEqual(d["timeMs"], 0.0)
        self.assertIn("R'", str(res))


if __name__ == "__main__":
    unittest.main()
