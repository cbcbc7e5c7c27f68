from __future__ import annotations

from collections import deque
from typing import Deque, Sequence, Set, Tuple

from .grid import Cell, neighbors


def has_legal_move(grid: Sequence[Cell], n: int) -> bool:
    """Checks whether any path longer than its value can be traced on the grid.

    Runs a breadth-first search over same-valued 8-neighbours from every occupied
    cell. Every BFS tree branch of depth k is itself a legal path of k distinct
    cells, so reaching a depth above the seed value proves a move exists.
    """
    for start in range(len(grid)):
        value = grid[start]
        if value is None:
            continue
        visited: Set[int] = {start}
        queue: Deque[Tuple[int, int]] = deque([(start, 1)])
        while queue:
            idx, depth = queue.popleft()
            if depth > value:
                return True
            for nxt in neighbors(idx, n):
                if nxt in visited or grid[nxt] != value:
                    continue
                visited.add(nxt)
                queue.append((nxt, depth + 1))
    return False
