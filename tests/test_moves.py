'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Move model: transition algebra, parsing and the pruning rule.

'''
import random
import unittest

from pocket_cube.errors import InvalidMoveError
from pocket_cube.moves import (
    ALL_MOVES, FACES, MOVE_BY_LABEL, Move, TRANSITIONS, apply_move, apply_moves,
    can_follow, invert_move, invert_sequence, moves_to_string, parse_move,
    parse_scramble, random_scramble, valid_moves,
)
from pocket_cube.state import create_solved, is_solved


class TestMoveAlgebra(unittest.TestCase):

    def setUp(self):
        rng = random.Random(7)
        # a few arbitrary reachable states, solved included
        self.states = [create_solved()] + [
            apply_moves(create_solved(), random_scramble(n, rng)) for n in (3, 8, 15)
        ]

    def test_eighteen_moves_in_declared_order(self):
        labels = [m.label for m in ALL_MOVES]
        self.assertEqual(labels, [
            "U", "U'", "U2", "D", "D'", "D2", "R", "R'", "R2",
            "L", "L'", "L2", "F", "F'", "F2", "B", "B'", "B2",
        ])
        self.assertEqual(len(TRANSITIONS), 18)

    def test_inverse_law(self):
        for s in self.states:
            for m in ALL_MOVES:
                self.assertEqual(apply_move(apply_move(s, m), invert_move(m)), s, f"{m} then inverse")

    def test_four_turn_identity(self):
        for s in self.states:
            for face in FACES:
                out = s
                for _ in range(4):
                    out = apply_move(out, face)
                self.assertEqual(out, s, f"{face}^4")

    def test_double_turn_equivalence(self):
        for s in self.states:
            for face in FACES:
                self.assertEqual(apply_move(s, face + "2"), apply_moves(s, [face, face]))

    def test_r_then_r_prime_is_solved(self):
        s = apply_move(create_solved(), "R")
        self.assertFalse(is_solved(s))
        self.assertTrue(is_solved(apply_move(s, "R'")))

    def test_sexy_move_has_order_six(self):
        s = create_solved()
        for _ in range(6):
            s = apply_moves(s, ["R", "U", "R'", "U'"])
        self.assertTrue(is_solved(s))

    def test_single_move_never_solved_and_distinct(self):
        seen = set()
        for m in ALL_MOVES:
            s = apply_move(create_solved(), m)
            self.assertFalse(is_solved(s), m.label)
            seen.add(s.key())
        self.assertEqual(len(seen), 18)

    def test_moves_preserve_twist_law(self):
        for s in self.states:
            for m in ALL_MOVES:
                self.assertEqual(sum(apply_move(s, m).corner_orientation) % 3, 0)

    def test_apply_move_does_not_mutate_input(self):
        s = create_solved()
        before = s.key()
        apply_move(s, "F")
        self.assertEqual(s.key(), before)

    def test_invert_sequence(self):
        seq = parse_scramble("R U2 F' D")
        self.assertEqual(moves_to_string(invert_sequence(seq)), "D' F U2 R'")
        self.assertTrue(is_solved(apply_moves(apply_moves(create_solved(), seq), invert_sequence(seq))))


class TestParsing(unittest.TestCase):

    def test_parse_labels(self):
        self.assertIs(parse_move("U'"), Move.U_PRIME)
        self.assertIs(parse_move("B2"), Move.B2)
        self.assertIs(parse_move(Move.L), Move.L)
        self.assertEqual(str(Move.F_PRIME), "F'")

    def test_parse_scramble_whitespace(self):
        self.assertEqual(parse_scramble("  R  U2\tF' "), [Move.R, Move.U2, Move.F_PRIME])
        self.assertEqual(parse_scramble(""), [])

    def test_unknown_label_raises(self):
        for bad in ("X", "r", "R3", "U''", "", 5):
            with self.assertRaises(InvalidMoveError):
                parse_move(bad)
        with self.assertRaises(ValueError):
            apply_move(create_solved(), "Q")

    def test_bad_token_in_scramble_reports_label(self):
        with self.assertRaises(InvalidMoveError) as ctx:
            parse_scramble("R U Z")
        self.assertEqual(ctx.exception.label, "Z")


class TestPruning(unittest.TestCase):

    def test_same_face_never_follows(self):
        for a in ALL_MOVES:
            for b in ALL_MOVES:
                if a.face == b.face:
                    self.assertFalse(can_follow(a, b), f"{a} {b}")

    def test_opposite_faces_fixed_order(self):
        self.assertTrue(can_follow("D", "U"))
        self.assertFalse(can_follow("U", "D2"))
        self.assertTrue(can_follow("L'", "R"))
        self.assertFalse(can_follow("R", "L"))
        self.assertTrue(can_follow("B2", "F"))
        self.assertFalse(can_follow("F", "B'"))

    def test_adjacent_faces_allowed(self):
        self.assertTrue(can_follow("R", "U"))
        self.assertTrue(can_follow("U", "R"))

    def test_valid_moves_counts(self):
        self.assertEqual(len(valid_moves(None)), 18)
        # smaller face of an opposite pair: 4 other faces + the opposite one
        self.assertEqual(len(valid_moves(MOVE_BY_LABEL["D"])), 15)
        # larger face: only the 4 adjacent faces
        self.assertEqual(len(valid_moves(MOVE_BY_LABEL["U"])), 12)

    def test_random_scramble_honours_rule(self):
        rng = random.Random(3)
        seq = random_scramble(200, rng)
        self.assertEqual(len(seq), 200)
        for a, b in zip(seq, seq[1:]):
            self.assertTrue(can_follow(a, b), f"{a} {b}")

    def test_random_scramble_reproducible(self):
        self.assertEqual(random_scramble(20, random.Random(11)), random_scramble(20, random.Random(11)))
        self.assertEqual(random_scramble(0), [])
        with self.assertRaises(ValueError):
            random_scramble(-1)


if __name__ == "__main__":
    unittest.main()
