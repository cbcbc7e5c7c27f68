from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence, Tuple

Cell = Optional[int]  # None marks an empty slot
Grid = Tuple[Cell, ...]  # row-major, length == n * n
Coord = Tuple[int, int]


def position(index: int, n: int) -> Coord:
    """Converts a cell index to its (row, col) position."""
    return index // n, index % n


def index_of(row: int, col: int, n: int) -> int:
    return row * n + col


def are_adjacent(a: int, b: int, n: int) -> bool:
    """True when two cells touch, diagonals included."""
    ra, ca = position(a, n)
    rb, cb = position(b, n)
    dr = abs(ra - rb)
    dc = abs(ca - cb)
    return dr <= 1 and dc <= 1 and (dr + dc) > 0


def neighbors(index: int, n: int) -> List[int]:
    """Gets the in-bounds 8-neighbours of a cell (no wrap-around)."""
    r, c = position(index, n)
    out: List[int] = []
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            nr, nc = r + dr, c + dc
            if 0 <= nr < n and 0 <= nc < n:
                out.append(nr * n + nc)
    return out


def random_value(rng: random.Random, max_value: int) -> int:
    return rng.randint(1, max_value)


def generate_grid(n: int, max_value: int, rng: Optional[random.Random] = None) -> Grid:
    """Fills an n x n grid with uniform values in [1, max_value].

    No adjacency constraint is applied, so fresh grids may already hold long chains.
    """
    rng = rng or random.Random()
    return tuple(random_value(rng, max_value) for _ in range(n * n))


def column(grid: Sequence[Cell], col: int, n: int) -> List[Cell]:
    return [grid[row * n + col] for row in range(n)]


def row(grid: Sequence[Cell], r: int, n: int) -> List[Cell]:
    return list(grid[r * n:(r + 1) * n])


def with_values(grid: Sequence[Cell], indices: Iterable[int], value: Cell) -> Grid:
    """Returns a copy of the grid with the given cells set to value."""
    out = list(grid)
    for i in indices:
        out[i] = value
    return tuple(out)


def pretty(grid: Sequence[Cell], n: int, path: Optional[Sequence[int]] = None) -> str:
    """Generates a human-readable board, bracketing cells on the current path."""
    on_path = set(path or ())
    lines: List[str] = []
    for r in range(n):
        cells: List[str] = []
        for c in range(n):
            idx = r * n + c
            v = grid[idx]
            txt = '.' if v is None else str(v)
            cells.append(f"[{txt}]" if idx in on_path else f" {txt} ")
        lines.append(''.join(cells))
    return '\n'.join(lines)
