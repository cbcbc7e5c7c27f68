import random
import unittest

from game import settle, fall_distances, shuffle_grid


class TestSettle(unittest.TestCase):
    def test_given_full_grid_when_settling_then_unchanged_and_nothing_drawn(self):
        grid = (1, 2, 3, 3, 2, 1, 2, 2, 2)
        out, used = settle(grid, 10, 3, 3, random.Random(0))
        self.assertEqual(out, grid)
        self.assertEqual(used, 0)

    def test_given_hole_when_settling_without_stock_then_cells_drop_and_hole_rises(self):
        grid = (
            1, 2, 3,
            None, 2, 1,
            2, 2, 2,
        )
        out, used = settle(grid, 0, 3, 3)
        self.assertEqual(used, 0)
        self.assertEqual([out[0], out[3], out[6]], [None, 1, 2])
        self.assertEqual(out[1:3] + out[4:6] + out[7:], grid[1:3] + grid[4:6] + grid[7:])

    def test_given_holes_when_settling_with_stock_then_refilled_from_top(self):
        grid = (
            None, None, 3,
            1, None, 1,
            2, 3, 2,
        )
        out, used = settle(grid, 10, 3, 3, random.Random(5))
        self.assertEqual(used, 3)
        self.assertNotIn(None, out)
        self.assertEqual([out[3], out[6]], [1, 2])
        self.assertEqual(out[7], 3)

    def test_given_low_stock_when_settling_then_draws_capped_by_stock(self):
        grid = (
            None, None, None,
            None, None, None,
            1, 2, 3,
        )
        out, used = settle(grid, 2, 3, 3, random.Random(5))
        self.assertEqual(used, 2)
        self.assertEqual(sum(1 for v in out if v is None), 4)
        self.assertEqual(out[6:], (1, 2, 3))

    def test_given_settled_column_when_measuring_falls_then_survivors_and_refills_reported(self):
        before = (
            1, 2, 3,
            None, 2, 1,
            2, 2, 2,
        )
        after, _ = settle(before, 0, 3, 3)
        self.assertEqual(fall_distances(before, after, 3), {3: 1})
        refilled, _ = settle(before, 1, 3, 3, random.Random(1))
        self.assertEqual(fall_distances(before, refilled, 3), {3: 1, 0: 3})


class TestShuffle(unittest.TestCase):
    def test_given_empty_budget_when_shuffling_then_unchanged(self):
        grid = (1, 2, None, 3)
        self.assertEqual(shuffle_grid(grid, 0, random.Random(1)), (grid, 0))

    def test_given_budget_when_shuffling_then_values_permuted_and_holes_fixed(self):
        grid = (1, 2, None, 3, 4, None, 5, 6, 7)
        out, budget = shuffle_grid(grid, 2, random.Random(1))
        self.assertEqual(budget, 1)
        self.assertEqual(len(out), len(grid))
        self.assertEqual([i for i, v in enumerate(out) if v is None], [2, 5])
        self.assertEqual(sorted(v for v in out if v is not None), [1, 2, 3, 4, 5, 6, 7])

    def test_given_same_seed_when_shuffling_then_reproducible(self):
        grid = tuple(range(1, 10))
        self.assertEqual(shuffle_grid(grid, 1, random.Random(9)), shuffle_grid(grid, 1, random.Random(9)))


if __name__ == '__main__':
    unittest.main(verbosity=2)
