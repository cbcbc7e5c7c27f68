from __future__ import annotations

from typing import Sequence

# Celebration fires when any one of these is reached.
CELEBRATE_MIN_PATH_LENGTH = 8
CELEBRATE_MIN_COMBO = 3
CELEBRATE_MIN_CELLS_DESTROYED = 6


def is_valid_path(path: Sequence[int], value: int) -> bool:
    """A path is long enough when it has more cells than its shared value."""
    return len(path) > value


def base_points(path_length: int, cell_count: int) -> int:
    """Squared path length times the number of cells.

    Callers pass the path length for both arguments, so this is effectively cubic.
    """
    return path_length * path_length * cell_count


def final_points(base: int, combo: int) -> int:
    return base * combo


def should_celebrate(path_length: int, combo: int, cells_destroyed: int) -> bool:
    return (
        path_length >= CELEBRATE_MIN_PATH_LENGTH
        or combo >= CELEBRATE_MIN_COMBO
        or cells_destroyed >= CELEBRATE_MIN_CELLS_DESTROYED
    )


def floating_text(points: int, combo: int) -> str:
    """Short score label, with the multiplier shown once a combo is running."""
    if combo > 1:
        return f"+{points} x{combo}"
    return f"+{points}"
