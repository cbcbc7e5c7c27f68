from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .grid import Cell, are_adjacent

logger = logging.getLogger(__name__)


class PathBuilder:
    """Accumulates a traced path, silently dropping illegal steps.

    The builder knows nothing about scoring or grid mutation. A path is open
    between begin() and release(); backtracking onto an earlier cell of the
    path truncates everything after it.
    """

    def __init__(self, n: int) -> None:
        self.n = n
        self._path: List[int] = []
        self._value: Optional[int] = None

    @property
    def path(self) -> Tuple[int, ...]:
        return tuple(self._path)

    @property
    def value(self) -> Optional[int]:
        return self._value

    @property
    def is_open(self) -> bool:
        return bool(self._path)

    def _in_bounds(self, index: int) -> bool:
        return 0 <= index < self.n * self.n

    def begin(self, index: int, grid: Sequence[Cell]) -> bool:
        if not self._in_bounds(index) or grid[index] is None:
            return False
        self._path = [index]
        self._value = grid[index]
        return True

    def extend(self, index: int, grid: Sequence[Cell]) -> bool:
        """Tries to add a cell; returns True only when the path changed."""
        if not self._path or not self._in_bounds(index):
            return False
        if index in self._path:
            pos = self._path.index(index)
            if pos == len(self._path) - 1:
                return False
            del self._path[pos + 1:]
            logger.debug("backtracked path to %d cells", len(self._path))
            return True
        if not are_adjacent(self._path[-1], index, self.n):
            return False
        if grid[index] != self._value:
            return False
        self._path.append(index)
        return True

    def release(self) -> Tuple[Tuple[int, ...], Optional[int]]:
        """Hands over the current path and its value, leaving the builder idle."""
        out = (tuple(self._path), self._value)
        self.clear()
        return out

    def clear(self) -> None:
        self._path = []
        self._value = None


def paths_match(path: Sequence[int], expected: Sequence[int]) -> bool:
    """Checks two paths cover the same cells in the same order, either direction."""
    if len(path) != len(expected):
        return False
    return list(path) == list(expected) or list(path) == list(reversed(expected))
