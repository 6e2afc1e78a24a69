'''
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: CubeState: solved detection, validation, persistence and facelet views.

'''
import json
import unittest

from pocket_cube.errors import InvalidStateError
from pocket_cube.moves import apply_move, apply_moves
from pocket_cube.state import (
    CubeState, create_solved, facelets_are_consistent, is_solved, state_to_facelets,
)


class TestCubeState(unittest.TestCase):

    def test_solved(self):
        s = create_solved()
        self.assertTrue(is_solved(s))
        self.assertTrue(s.is_solved())
        self.assertEqual(s.corner_permutation, tuple(range(8)))
        self.assertEqual(s.corner_orientation, (0,) * 8)

    def test_lists_normalised_to_tuples(self):
        s = CubeState([0, 1, 2, 3, 4, 5, 6, 7], [0] * 8)
        self.assertEqual(s, create_solved())
        self.assertEqual(hash(s), hash(create_solved()))
        self.assertEqual(s.key(), create_solved().key())

    def test_frozen(self):
        s = create_solved()
        with self.assertRaises(AttributeError):
            s.corner_permutation = (1, 0, 2, 3, 4, 5, 6, 7)

    def test_twisted_corner_not_solved(self):
        s = CubeState(tuple(range(8)), (1, 2, 0, 0, 0, 0, 0, 0))
        self.assertFalse(is_solved(s))


class TestValidation(unittest.TestCase):

    def test_reachable_states_validate(self):
        s = apply_moves(create_solved(), "R U F' D2 L B'")
        self.assertIs(s.validate(), s)

    def test_twist_law(self):
        with self.assertRaises(InvalidStateError):
            CubeState(tuple(range(8)), (1, 0, 0, 0, 0, 0, 0, 0)).validate()

    def test_not_a_permutation(self):
        with self.assertRaises(InvalidStateError):
            CubeState((0, 0, 2, 3, 4, 5, 6, 7), (0,) * 8).validate()

    def test_bad_orientation_value(self):
        with self.assertRaises(InvalidStateError):
            CubeState(tuple(range(8)), (3, 0, 0, 0, 0, 0, 0, 0)).validate()

    def test_wrong_length(self):
        with self.assertRaises(InvalidStateError):
            CubeState((0, 1, 2), (0, 0, 0)).validate()

    def test_odd_permutation_is_legal(self):
        # a single quarter turn is a 4-cycle, i.e. an odd corner permutation
        s = apply_move(create_solved(), "U")
        s.validate()


class TestPersistence(unittest.TestCase):

    def test_dict_round_trip(self):
        s = apply_moves(create_solved(), "R U R' F2")
        data = s.to_dict()
        self.assertEqual(set(data), {"corner_permutation", "corner_orientation"})
        self.assertIsInstance(data["corner_permutation"], list)
        self.assertEqual(CubeState.from_dict(data), s)

    def test_json_round_trip(self):
        s = apply_moves(create_solved(), "B' L2 D")
        text = s.to_json()
        self.assertEqual(json.loads(text)["corner_orientation"], list(s.corner_orientation))
        self.assertEqual(CubeState.from_json(text), s)

    def test_from_dict_rejects_illegal(self):
        bad = {"corner_permutation": list(range(8)), "corner_orientation": [2, 0, 0, 0, 0, 0, 0, 0]}
        with self.assertRaises(InvalidStateError):
            CubeState.from_dict(bad)
        # trusted source: no check
        self.assertEqual(CubeState.from_dict(bad, validate=False).corner_orientation[0], 2)

    def test_from_dict_malformed(self):
        with self.assertRaises(InvalidStateError):
            CubeState.from_dict({"corner_permutation": list(range(8))})
        with self.assertRaises(InvalidStateError):
            CubeState.from_dict({"corner_permutation": 5, "corner_orientation": [0] * 8})
        with self.assertRaises(InvalidStateError):
            CubeState.from_json("{not json")

    def test_from_dict_rejects_non_integer_fields(self):
        solved = [0] * 8
        with self.assertRaises(InvalidStateError):
            CubeState.from_dict({"corner_permutation": "01234567", "corner_orientation": solved})
        with self.assertRaises(InvalidStateError):
            CubeState.from_dict({"corner_permutation": list(range(8)),
                                 "corner_orientation": [0, 1.9, 2.2, 0, 0, 0, 0, 0]})
        with self.assertRaises(InvalidStateError):
            CubeState.from_dict({"corner_permutation": list(range(8)),
                                 "corner_orientation": [True, 2, 0, 0, 0, 0, 0, 0]})
        # unchecked loads are typed too
        with self.assertRaises(InvalidStateError):
            CubeState.from_dict({"corner_permutation": "01234567", "corner_orientation": solved},
                                validate=False)
        with self.assertRaises(InvalidStateError):
            CubeState.from_json('{"corner_permutation": [0, 1, 2, 3, 4, 5, 6, 7.0], "corner_orientation": [0, 0, 0, 0, 0, 0, 0, 0]}')


class TestFacelets(unittest.TestCase):

    def test_solved_facelets(self):
        letters = state_to_facelets(create_solved())
        self.assertEqual(len(letters), 24)
        self.assertEqual(letters[:3], ["U", "R", "F"])
        self.assertTrue(facelets_are_consistent(letters))

    def test_scrambled_facelets_consistent(self):
        s = apply_moves(create_solved(), "R U F' L2 D B' R2 U'")
        self.assertTrue(facelets_are_consistent(state_to_facelets(s)))

    def test_cubies_view(self):
        s = apply_move(create_solved(), "R")
        cubies = s.cubies()
        self.assertEqual(len(cubies), 8)
        self.assertEqual([c.piece_idx for c in cubies], list(s.corner_permutation))


if __name__ == "__main__":
    unittest.main()
