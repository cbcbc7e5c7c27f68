from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .grid import Cell, Grid

GRID_SIZE = 6
MAX_VALUE = 5
INITIAL_STOCK = 50
LINE_BONUS = 100
CHALLENGE_VALUE = 5


def check_grid(grid: Sequence[Cell], n: int, max_value: int) -> Grid:
    """Returns the grid as a tuple, raising ValueError on a wrong size or out-of-range cell."""
    cells = tuple(grid)
    if len(cells) != n * n:
        raise ValueError(f"grid has {len(cells)} cells, expected {n * n}")
    for v in cells:
        if v is not None and not (isinstance(v, int) and 1 <= v <= max_value):
            raise ValueError(f"grid value {v!r} outside 1..{max_value}")
    return cells


class ChallengeKind(str, Enum):
    COLUMN_OF_VALUE = 'column_of_value'
    ROW_OF_VALUE = 'row_of_value'


@dataclass(frozen=True)
class Challenge:
    """A single line-completion objective, e.g. a full column of fives."""
    kind: ChallengeKind
    value: int = CHALLENGE_VALUE

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError(f"challenge value must be positive, got {self.value}")


@dataclass(frozen=True)
class LevelConfig:
    """Immutable parameters of one attempt; validated on construction."""
    grid_size: int = GRID_SIZE
    max_value: int = MAX_VALUE
    initial_stock: int = INITIAL_STOCK
    target_score: Optional[int] = None
    shuffles: int = 0
    challenge: Optional[Challenge] = None
    initial_grid: Optional[Grid] = None
    line_bonus: int = LINE_BONUS

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.max_value <= 0:
            raise ValueError(f"max_value must be positive, got {self.max_value}")
        if self.initial_stock < 0:
            raise ValueError(f"initial_stock cannot be negative, got {self.initial_stock}")
        if self.shuffles < 0:
            raise ValueError(f"shuffles cannot be negative, got {self.shuffles}")
        if self.line_bonus < 0:
            raise ValueError(f"line_bonus cannot be negative, got {self.line_bonus}")
        if self.target_score is not None and self.target_score <= 0:
            raise ValueError(f"target_score must be positive, got {self.target_score}")
        if self.initial_grid is not None:
            grid = check_grid(self.initial_grid, self.grid_size, self.max_value)
            # frozen: normalise lists to tuples
            object.__setattr__(self, 'initial_grid', grid)

    @property
    def free_play(self) -> bool:
        return self.target_score is None

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> 'LevelConfig':
        """Builds a config from the camelCase JSON shape used by the API."""
        if not isinstance(obj, Mapping):
            raise ValueError(f"config must be an object, got {type(obj).__name__}")
        ch = obj.get('challenge')
        challenge: Optional[Challenge] = None
        if ch:
            if not isinstance(ch, Mapping):
                raise ValueError(f"challenge must be an object, got {type(ch).__name__}")
            challenge = Challenge(
                kind=ChallengeKind(ch['type']),
                value=int(ch.get('value', CHALLENGE_VALUE)),
            )
        grid_in = obj.get('initialGrid')
        initial_grid: Optional[Tuple[Cell, ...]] = None
        if grid_in is not None:
            initial_grid = tuple(None if v is None else int(v) for v in grid_in)
        target = obj.get('targetScore')
        return cls(
            grid_size=int(obj.get('gridSize', GRID_SIZE)),
            max_value=int(obj.get('maxValue', MAX_VALUE)),
            initial_stock=int(obj.get('stock', INITIAL_STOCK)),
            target_score=int(target) if target is not None else None,
            shuffles=int(obj.get('shuffles', 0)),
            challenge=challenge,
            initial_grid=initial_grid,
            line_bonus=int(obj.get('lineBonus', LINE_BONUS)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'gridSize': self.grid_size,
            'maxValue': self.max_value,
            'stock': self.initial_stock,
            'targetScore': self.target_score,
            'shuffles': self.shuffles,
            'challenge': (
                {'type': self.challenge.kind.value, 'value': self.challenge.value}
                if self.challenge else None
            ),
            'initialGrid': list(self.initial_grid) if self.initial_grid is not None else None,
            'lineBonus': self.line_bonus,
        }
