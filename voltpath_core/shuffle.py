from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, Tuple

from .grid import Cell, Grid

logger = logging.getLogger(__name__)


def shuffle_grid(
    grid: Sequence[Cell],
    budget: int,
    rng: Optional[random.Random] = None,
) -> Tuple[Grid, int]:
    """Permutes the occupied cells' values in place, spending one shuffle.

    Empty slots keep their positions and no stock is drawn. With an empty budget
    the grid comes back unchanged.
    """
    if budget <= 0:
        return tuple(grid), budget
    rng = rng or random.Random()
    values: List[int] = [v for v in grid if v is not None]
    rng.shuffle(values)  # Fisher-Yates
    it = iter(values)
    out = tuple(None if v is None else next(it) for v in grid)
    logger.debug("shuffled %d cells, %d shuffles left", len(values), budget - 1)
    return out, budget - 1
