from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .bonus import LineHit
from .grid import Grid
from .reach import has_legal_move


class Phase(str, Enum):
    PLAYING = 'PLAYING'
    STUCK = 'STUCK'
    VICTORY = 'VICTORY'
    DEFEAT = 'DEFEAT'

    @property
    def terminal(self) -> bool:
        return self in (Phase.VICTORY, Phase.DEFEAT)


@dataclass(frozen=True)
class AttemptState:
    """Represents everything that changes during one attempt at a level."""
    grid: Grid
    score: int
    combo: int
    stock: int
    shuffles: int
    phase: Phase = Phase.PLAYING
    challenge_completed: bool = False
    challenge_line: Optional[LineHit] = None
    awarded_lines: Tuple[LineHit, ...] = ()


def evaluate_phase(grid: Grid, n: int, score: int, shuffles: int, target_score: Optional[int]) -> Phase:
    """Decides the phase from scratch: target first, then stuck/defeat, else playing."""
    if target_score is not None and score >= target_score:
        return Phase.VICTORY
    if not has_legal_move(grid, n):
        return Phase.DEFEAT if shuffles == 0 else Phase.STUCK
    return Phase.PLAYING
