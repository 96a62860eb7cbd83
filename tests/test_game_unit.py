import random
import unittest

from game import Block, BlockPool, Board, Direction, Game, Point


def checkerboard(rows, cols):
    return Board.from_rows([[2 if (r + c) % 2 == 0 else 4 for c in range(cols)] for r in range(rows)])


class TestGameUnit(unittest.TestCase):
    def _game(self, rows, seed=0):
        return Game(Board.from_rows(rows), rng=random.Random(seed))

    def test_given_game_when_moving_then_live_board_updated_and_moves_returned(self):
        g = self._game([
            [2, 2, None, None],
            [None, None, None, None],
        ])
        moves = g.move_blocks(Direction.LEFT)
        self.assertEqual(len(moves), 1)
        self.assertEqual(g.board.to_rows()[0], [4, None, None, None])
        self.assertEqual(g.block_at(Point(0, 0)), Block(4))
        self.assertIs(g.get_board(), g.board)

    def test_given_blocked_direction_when_moving_then_empty_map_and_board_unchanged(self):
        g = self._game([[2, 4], [None, None]])
        before = g.board.to_json()
        self.assertEqual(g.move_blocks(Direction.UP), {})
        self.assertEqual(g.board.to_json(), before)

    def test_given_default_listener_when_moving_then_called_per_merge(self):
        g = self._game([[2, 2, 4, 4]])
        gained = []
        g.set_on_block_merged_listener(lambda merged, point, b1, b2: gained.append(merged.value))
        g.move_blocks(Direction.RIGHT)
        self.assertEqual(gained, [8, 4])
        self.assertEqual(g.board.to_rows(), [[None, None, 4, 8]])

    def test_given_per_call_listener_when_moving_then_overrides_default(self):
        g = self._game([[2, 2]])
        default_calls, call_calls = [], []
        g.set_on_block_merged_listener(lambda *a: default_calls.append(a))
        g.move_blocks(Direction.LEFT, listener=lambda *a: call_calls.append(a))
        self.assertEqual(default_calls, [])
        self.assertEqual(len(call_calls), 1)

    def test_given_any_board_when_probing_then_live_board_untouched(self):
        rng = random.Random(99)
        for _ in range(30):
            rows = [[rng.choice([None, 2, 4, 8]) for _ in range(4)] for _ in range(4)]
            g = self._game(rows)
            calls = []
            g.set_on_block_merged_listener(lambda *a: calls.append(a))
            before = g.board.to_json()
            for d in Direction:
                g.try_move_blocks(d)
                self.assertEqual(g.board.to_json(), before)
            self.assertEqual(calls, [])

    def test_given_probe_when_direction_can_move_then_true(self):
        g = self._game([[None, 2], [None, 4]])
        self.assertTrue(g.try_move_blocks(Direction.LEFT))
        self.assertFalse(g.try_move_blocks(Direction.RIGHT))
        self.assertFalse(g.try_move_blocks(Direction.UP))
        self.assertFalse(g.try_move_blocks(Direction.DOWN))
        self.assertEqual(g.movable_directions(), {
            Direction.UP: False,
            Direction.DOWN: False,
            Direction.LEFT: True,
            Direction.RIGHT: False,
        })
        self.assertTrue(g.can_move())
        self.assertFalse(g.is_game_over())

    def test_given_checkerboard_when_probing_then_game_over(self):
        for rows, cols in ((1, 1), (2, 2), (4, 4), (3, 5)):
            g = Game(checkerboard(rows, cols))
            for d in Direction:
                self.assertFalse(g.try_move_blocks(d))
            self.assertTrue(g.is_game_over())

    def test_given_full_board_with_one_pair_when_probing_then_not_game_over(self):
        board = checkerboard(4, 4)
        # Only a horizontal pair: (3,2) and (3,3)
        board.set_block_at(Point(3, 2), Block(8))
        board.set_block_at(Point(3, 3), Block(8))
        g = Game(board)
        self.assertTrue(g.try_move_blocks(Direction.LEFT))
        self.assertTrue(g.try_move_blocks(Direction.RIGHT))
        self.assertFalse(g.try_move_blocks(Direction.UP))
        self.assertFalse(g.try_move_blocks(Direction.DOWN))
        self.assertFalse(g.is_game_over())

    def test_given_empty_slots_when_spawning_then_block_placed_on_empty_slot(self):
        g = self._game([[2, None], [None, 4]], seed=3)
        spot = g.spawn_block(8)
        self.assertIn(spot, (Point(0, 1), Point(1, 0)))
        self.assertEqual(g.block_at(spot), Block(8))
        self.assertEqual(g.board.block_count, 3)

        spot2 = g.spawn_block(Block(16))
        self.assertTrue(g.board.is_full())
        self.assertFalse(g.is_spawnable())
        self.assertEqual(g.block_at(spot2), Block(16))

    def test_given_full_board_when_spawning_then_none_and_unchanged(self):
        g = Game(checkerboard(2, 2))
        before = g.board.to_json()
        self.assertIsNone(g.spawn_block(2))
        self.assertIsNone(g.spawn_block_weighted([2, 4], [90, 10]))
        self.assertEqual(g.board.to_json(), before)

    def test_given_non_block_value_when_spawning_then_value_error_and_board_unchanged(self):
        g = self._game([[None, None], [None, 4]])
        for bad in (None, "2", 2.0, [2]):
            with self.assertRaises(ValueError):
                g.spawn_block(bad)
        with self.assertRaises(ValueError):
            g.spawn_block(0)
        self.assertEqual(g.board.block_count, 1)

    def test_given_same_seed_when_spawning_then_deterministic(self):
        spots = []
        for _ in range(2):
            g = Game.create(4, 4, seed=42)
            spots.append([g.spawn_block_weighted([2, 4], [90, 10]) for _ in range(10)])
            spots[-1].append(g.board.to_json())
        self.assertEqual(spots[0], spots[1])

    def test_given_mismatched_weights_when_spawning_weighted_then_value_error(self):
        g = Game.create(2, 2, seed=1)
        with self.assertRaises(ValueError):
            g.spawn_block_weighted([2, 4], [90])
        with self.assertRaises(ValueError):
            g.spawn_block_weighted([2], [90, 10])
        self.assertEqual(g.board.block_count, 0)

    def test_given_out_of_bounds_when_reading_block_then_index_error(self):
        g = Game.create(2, 2)
        with self.assertRaises(IndexError):
            g.block_at(Point(2, 0))

    def test_given_board_when_clear_board_then_empty_same_size(self):
        g = self._game([[2, 4, 8], [16, None, 32]])
        g.clear_board()
        self.assertEqual(g.board.block_count, 0)
        self.assertEqual((g.board.row_count, g.board.column_count), (2, 3))

    def test_given_shared_pool_when_merging_and_spawning_then_pooled_blocks(self):
        pool = BlockPool()
        g = Game(Board(1, 3), rng=random.Random(0), pool=pool)
        g.spawn_block(2)
        g.spawn_block(2)
        g.move_blocks(Direction.LEFT)
        self.assertIs(g.block_at(Point(0, 0)), pool.of(4))

    def test_given_play_loop_when_running_until_over_then_invariants_hold(self):
        g = Game.create(4, 4, seed=2024)
        g.spawn_block_weighted([2, 4], [90, 10])
        g.spawn_block_weighted([2, 4], [90, 10])
        rng = random.Random(5)
        for _ in range(10000):
            if g.is_game_over():
                break
            direction = rng.choice(list(Direction))
            can = g.try_move_blocks(direction)
            moves = g.move_blocks(direction)
            self.assertEqual(can, bool(moves))
            self.assertEqual(g.board.block_count, len(g.board.occupied_slots()))
            if moves:
                self.assertIsNotNone(g.spawn_block_weighted([2, 4], [90, 10]))
        self.assertTrue(g.is_game_over())
        self.assertTrue(g.board.is_full())


if __name__ == '__main__':
    unittest.main(verbosity=2)
