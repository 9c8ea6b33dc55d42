import unittest

from game import (
    BoardState,
    MatchFailure,
    SelectionEngine,
    SelectionKind,
    generate_board,
)


class TestSelectionEngine(unittest.TestCase):
    def _mk_board(self, tiles=None):
        """Board of (2, 1) tiles showing 2, with overrides {coord: (a, b, a_up)}."""
        board = BoardState.from_pairs([(2, 1)] * 100)
        for (r, c), (a, b, up) in (tiles or {}).items():
            i = board.index(r, c)
            board.a_sides[i] = a
            board.b_sides[i] = b
            board.a_up[i] = up
        return board

    def _mk_engine(self, tiles=None, listener=None):
        return SelectionEngine(board=self._mk_board(tiles), listener=listener)

    def test_given_fresh_engine_when_created_then_idle_with_board(self):
        engine = SelectionEngine(seed=3)
        self.assertIsNone(engine.selected)
        self.assertIsNotNone(engine.board)
        self.assertFalse(engine.is_round_complete())

    def test_given_out_of_range_positions_when_selecting_then_ignored(self):
        engine = self._mk_engine()
        for pos in [(-1, 0), (0, -1), (10, 0), (0, 10), (42, 42)]:
            res = engine.select(pos)
            self.assertEqual(res.kind, SelectionKind.IGNORED)
        self.assertIsNone(engine.selected)
        self.assertEqual(engine.upward_value((10, 10)), 0)

    def test_given_eliminated_tile_when_selecting_then_ignored(self):
        engine = self._mk_engine({(2, 2): (0, 5, True)})
        self.assertEqual(engine.select((2, 2)).kind, SelectionKind.IGNORED)
        self.assertIsNone(engine.selected)

    def test_given_idle_when_selecting_then_first_selected_and_flag_set(self):
        engine = self._mk_engine()
        res = engine.select((3, 3))
        self.assertEqual(res.kind, SelectionKind.FIRST_SELECTED)
        self.assertEqual(res.pos1, (3, 3))
        self.assertEqual(engine.selected, (3, 3))
        self.assertTrue(engine.board.is_selected((3, 3)))

    def test_given_selected_tile_when_clicked_again_then_deselected(self):
        engine = self._mk_engine()
        engine.select((3, 3))
        res = engine.select((3, 3))
        self.assertEqual(res.kind, SelectionKind.DESELECTED)
        self.assertIsNone(engine.selected)
        self.assertFalse(engine.board.is_selected((3, 3)))

    def test_given_selection_when_deselecting_then_only_matching_position_clears(self):
        engine = self._mk_engine()
        self.assertFalse(engine.deselect((3, 3)))
        engine.select((3, 3))
        self.assertFalse(engine.deselect((3, 4)))
        self.assertEqual(engine.selected, (3, 3))
        self.assertTrue(engine.deselect((3, 3)))
        self.assertIsNone(engine.selected)
        self.assertFalse(engine.board.is_selected((3, 3)))

    def test_given_matching_pair_when_selecting_second_then_both_faces_eliminated(self):
        engine = self._mk_engine({(5, 6): (8, 9, False)})
        engine.select((5, 5))
        res = engine.select((5, 6))
        self.assertEqual(res.kind, SelectionKind.MATCH_SUCCESS)
        self.assertEqual((res.pos1, res.pos2), ((5, 5), (5, 6)))
        self.assertEqual(res.path, [(5, 5), (5, 6)])
        self.assertIsNone(engine.selected)
        self.assertEqual(engine.upward_value((5, 5)), 0)
        self.assertEqual(engine.upward_value((5, 6)), 0)
        # Only the shown faces go; the hidden ones survive.
        self.assertEqual(engine.board.faces((5, 5)), (0, 1))
        self.assertEqual(engine.board.faces((5, 6)), (8, 0))
        self.assertFalse(engine.board.is_selected((5, 5)))
        self.assertFalse(engine.board.is_selected((5, 6)))
        self.assertEqual(engine.select((5, 5)).kind, SelectionKind.IGNORED)
        self.assertEqual(engine.select((5, 6)).kind, SelectionKind.IGNORED)

    def test_given_non_matching_pair_when_selecting_second_then_both_released(self):
        engine = self._mk_engine()
        engine.select((1, 1))
        res = engine.select((1, 2))
        self.assertEqual(res.kind, SelectionKind.MATCH_FAILED)
        self.assertEqual(res.reason, MatchFailure.SUM_MISMATCH)
        self.assertIsNone(engine.selected)
        self.assertFalse(engine.board.is_selected((1, 1)))
        self.assertFalse(engine.board.is_selected((1, 2)))
        self.assertEqual(engine.upward_value((1, 1)), 2)
        # Next click starts over.
        self.assertEqual(engine.select((1, 2)).kind, SelectionKind.FIRST_SELECTED)

    def test_given_pair_without_route_when_selecting_then_failed_no_path(self):
        engine = self._mk_engine({(5, 7): (4, 9, False)})
        engine.select((5, 5))
        res = engine.select((5, 7))
        self.assertEqual(res.kind, SelectionKind.MATCH_FAILED)
        self.assertEqual(res.reason, MatchFailure.NO_PATH)
        self.assertEqual(engine.upward_value((5, 7)), 9)

    def test_given_selected_tile_when_flipping_then_selected_tile_keeps_face(self):
        engine = self._mk_engine()
        engine.select((4, 4))
        flipped = engine.flip_all(False)
        self.assertEqual(len(flipped), 99)
        self.assertNotIn((4, 4), flipped)
        self.assertTrue(engine.board.shows_a_side((4, 4)))
        self.assertFalse(engine.board.shows_a_side((4, 5)))
        self.assertEqual(engine.upward_value((4, 4)), 2)
        self.assertEqual(engine.upward_value((4, 5)), 1)
        # Face values are untouched by flipping.
        self.assertEqual(engine.board.faces((4, 5)), (2, 1))

    def test_given_engine_when_toggling_then_board_side_alternates(self):
        engine = self._mk_engine()
        self.assertTrue(engine.board.a_side_up)
        self.assertEqual(len(engine.toggle_flip()), 100)
        self.assertFalse(engine.board.a_side_up)
        self.assertEqual(engine.upward_value((0, 0)), 1)
        engine.toggle_flip()
        self.assertTrue(engine.board.a_side_up)
        self.assertEqual(engine.upward_value((0, 0)), 2)

    def test_given_eliminated_a_face_when_flipped_to_b_then_tile_selectable_again(self):
        engine = self._mk_engine({(2, 2): (0, 5, True)})
        self.assertEqual(engine.select((2, 2)).kind, SelectionKind.IGNORED)
        engine.flip_all(False)
        self.assertEqual(engine.upward_value((2, 2)), 5)
        self.assertEqual(engine.select((2, 2)).kind, SelectionKind.FIRST_SELECTED)

    def test_given_b_side_match_when_eliminating_then_b_face_zeroed(self):
        engine = self._mk_engine({(0, 0): (4, 5, False), (0, 1): (6, 1, True)})
        board = engine.board
        engine.select((0, 0))
        res = engine.select((0, 1))
        self.assertEqual(res.kind, SelectionKind.MATCH_SUCCESS)
        self.assertEqual(board.faces((0, 0)), (4, 0))
        self.assertEqual(board.faces((0, 1)), (0, 1))

    def test_given_cleared_board_when_checking_then_round_complete(self):
        board = BoardState.from_pairs([(0, 0)] * 100)
        engine = SelectionEngine(board=board)
        self.assertTrue(engine.is_round_complete())
        board.b_sides[37] = 3
        self.assertFalse(engine.is_round_complete())

    def test_given_listener_when_selecting_then_non_ignored_results_delivered(self):
        seen = []
        engine = self._mk_engine({(5, 6): (8, 9, False)}, listener=seen.append)
        engine.select((-1, -1))
        engine.select((5, 5))
        engine.select((5, 6))
        kinds = [r.kind for r in seen]
        self.assertEqual(kinds, [SelectionKind.FIRST_SELECTED, SelectionKind.MATCH_SUCCESS])

    def test_given_engine_when_snapshot_then_row_major_faces_and_orientation(self):
        engine = self._mk_engine({(9, 9): (10, 3, False)})
        snap = engine.snapshot()
        keys = list(snap.keys())
        self.assertEqual(len(keys), 100)
        self.assertEqual(keys[0], (0, 0))
        self.assertEqual(keys[1], (0, 1))
        self.assertEqual(keys[-1], (9, 9))
        self.assertEqual(snap[(9, 9)], {'aSide': 10, 'bSide': 3, 'orientation': False})
        self.assertEqual(snap[(0, 0)], {'aSide': 2, 'bSide': 1, 'orientation': True})

    def test_given_snapshot_when_restoring_then_board_equal_and_selection_cleared(self):
        src = SelectionEngine(seed=11)
        src.select((0, 0))
        src.flip_all(False)
        snap = src.snapshot()

        dst = SelectionEngine(seed=99)
        dst.select((3, 3))
        board = dst.restore(snap)
        self.assertIsNone(dst.selected)
        self.assertEqual(board.pairs(), src.board.pairs())
        self.assertEqual(board.a_up, src.board.a_up)
        self.assertFalse(board.a_side_up)
        self.assertFalse(any(board.selected))
        self.assertEqual(dst.snapshot(), snap)

    def test_given_malformed_snapshot_when_restoring_then_value_error(self):
        engine = SelectionEngine(seed=1)
        snap = engine.snapshot()

        short = dict(snap)
        short.pop((5, 5))
        with self.assertRaises(ValueError):
            engine.restore(short)

        odd_a = dict(snap)
        odd_a[(0, 0)] = {'aSide': 3, 'bSide': 1, 'orientation': True}
        with self.assertRaises(ValueError):
            engine.restore(odd_a)

        moved = dict(snap)
        tile = moved.pop((9, 9))
        moved[(10, 9)] = tile
        with self.assertRaises(ValueError):
            engine.restore(moved)

        not_a_tile = dict(snap)
        not_a_tile[(0, 0)] = None
        with self.assertRaises(ValueError):
            engine.restore(not_a_tile)

        for bad_key in (None, (1,), ('x', 'y')):
            rekeyed = dict(snap)
            rekeyed[bad_key] = rekeyed.pop((9, 9))
            with self.assertRaises(ValueError):
                engine.restore(rekeyed)

        eleven = dict(snap)
        eleven[(0, 0)] = {'aSide': 2, 'bSide': 9, 'orientation': True}
        with self.assertRaises(ValueError):
            engine.restore(eleven)

        # A half-cleared tile may show a face that pairs with nothing on its other side.
        cleared = dict(snap)
        cleared[(0, 0)] = {'aSide': 0, 'bSide': 9, 'orientation': False}
        self.assertIsNotNone(engine.restore(cleared))
        self.assertEqual(engine.upward_value((0, 0)), 9)

    def test_given_disposed_engine_when_used_then_operations_are_noops(self):
        engine = SelectionEngine(seed=5)
        engine.dispose()
        self.assertIsNone(engine.board)
        self.assertEqual(engine.select((0, 0)).kind, SelectionKind.IGNORED)
        self.assertFalse(engine.deselect((0, 0)))
        self.assertEqual(engine.flip_all(False), set())
        self.assertEqual(engine.toggle_flip(), set())
        self.assertEqual(engine.upward_value((0, 0)), 0)
        self.assertEqual(len(engine.snapshot()), 0)
        self.assertFalse(engine.is_round_complete())

    def test_given_seed_when_resetting_then_new_board_matches_generator(self):
        engine = SelectionEngine(seed=1)
        engine.select((0, 0))
        board = engine.reset(seed=8)
        self.assertIsNone(engine.selected)
        self.assertEqual(board.pairs(), generate_board(8).pairs())


if __name__ == '__main__':
    unittest.main(verbosity=2)
