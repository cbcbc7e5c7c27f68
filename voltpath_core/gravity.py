from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple

from .grid import Cell, Grid, random_value

logger = logging.getLogger(__name__)


def settle(
    grid: Sequence[Cell],
    stock: int,
    max_value: int,
    n: int,
    rng: Optional[random.Random] = None,
) -> Tuple[Grid, int]:
    """Drops every column's cells to the bottom and refills from the top.

    Each column is handled on its own: surviving values keep their order, new
    values are drawn while stock lasts, and slots the stock cannot cover stay
    empty. Returns the new grid and how many cells were drawn.
    """
    rng = rng or random.Random()
    out: List[Cell] = list(grid)
    remaining = max(stock, 0)
    used = 0
    for col in range(n):
        kept: List[Cell] = [grid[r * n + col] for r in range(n) if grid[r * n + col] is not None]
        empty = n - len(kept)
        draws = min(empty, remaining)
        fresh: List[Cell] = [random_value(rng, max_value) for _ in range(draws)]
        remaining -= draws
        used += draws
        filled: List[Cell] = [None] * (empty - draws) + fresh + kept
        for r in range(n):
            out[r * n + col] = filled[r]
    if used:
        logger.debug("settle drew %d cells, %d left in stock", used, remaining)
    return tuple(out), used


def fall_distances(before: Sequence[Cell], after: Sequence[Cell], n: int) -> Dict[int, int]:
    """Maps each landed cell index (in `after`) to how many rows it fell.

    Cells that survived drop by the number of holes beneath them; refilled cells
    are counted as entering from above the board. Slots left empty by an
    exhausted stock are not reported.
    """
    out: Dict[int, int] = {}
    for col in range(n):
        holes = 0
        for r in range(n - 1, -1, -1):
            idx = r * n + col
            if before[idx] is None:
                holes += 1
            elif holes > 0:
                out[(r + holes) * n + col] = holes
        for r in range(holes):
            idx = r * n + col
            if after[idx] is not None:
                out[idx] = n - r
    return out
