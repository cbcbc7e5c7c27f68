from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from .bonus import LineHit, award_line_bonuses, check_challenge, uniform_lines
from .config import LevelConfig, check_grid
from .grid import Grid, generate_grid
from .path import PathBuilder
from .resolve import NOOP, RESOLVED, PathValidator, ResolutionResult, resolve
from .shuffle import shuffle_grid
from .state import AttemptState, Phase, evaluate_phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveOutcome:
    """What a released path did, for presentation and audio collaborators."""
    kind: str
    state: AttemptState
    transformed: Tuple[int, ...] = ()
    destroyed: Tuple[int, ...] = ()
    new_value: Optional[int] = None
    points: int = 0
    bonus_points: int = 0
    celebrate: bool = False
    challenge_hit: Optional[LineHit] = None
    line_bonuses: Tuple[LineHit, ...] = ()
    previous_phase: Optional[Phase] = None
    falls: Dict[int, int] = field(default_factory=dict)

    @property
    def phase_changed(self) -> bool:
        return self.previous_phase is not None and self.previous_phase != self.state.phase


@dataclass(frozen=True)
class AttemptReport:
    """Final figures handed to whoever persists progression."""
    phase: Phase
    score: int
    challenge_completed: bool
    challenge_line: Optional[LineHit]

    @property
    def victory(self) -> bool:
        return self.phase is Phase.VICTORY


class Match:
    """Owns one attempt: grid, stock, score, combo, shuffles and phase.

    Every public call runs to completion. While a move resolves no new path may be
    opened, and once the attempt reaches VICTORY or DEFEAT nothing mutates until
    reset().
    """

    def __init__(
        self,
        config: LevelConfig,
        seed: Optional[int] = None,
        state: Optional[AttemptState] = None,
    ) -> None:
        self.config = config
        self.rng = random.Random(seed)
        self.builder = PathBuilder(config.grid_size)
        self._resolving = False
        if state is not None:
            state = self._checked(state)
        self.state: AttemptState = state if state is not None else self._fresh_state()

    def _checked(self, state: AttemptState) -> AttemptState:
        """Rejects a restored state that breaks the grid or counter invariants."""
        grid = check_grid(state.grid, self.config.grid_size, self.config.max_value)
        for name in ('score', 'combo', 'stock', 'shuffles'):
            if getattr(state, name) < 0:
                raise ValueError(f"{name} cannot be negative")
        return replace(state, grid=grid)

    @classmethod
    def from_state(cls, config: LevelConfig, state: AttemptState, seed: Optional[int] = None) -> 'Match':
        return cls(config, seed=seed, state=state)

    @property
    def n(self) -> int:
        return self.config.grid_size

    @property
    def resolving(self) -> bool:
        return self._resolving

    @property
    def accepting_input(self) -> bool:
        return not self._resolving and not self.state.phase.terminal

    @property
    def path(self) -> Tuple[int, ...]:
        return self.builder.path

    def _fresh_state(self) -> AttemptState:
        cfg = self.config
        if cfg.initial_grid is not None:
            grid: Grid = tuple(cfg.initial_grid)
        else:
            grid = generate_grid(cfg.grid_size, cfg.max_value, self.rng)
        phase = evaluate_phase(grid, cfg.grid_size, 0, cfg.shuffles, cfg.target_score)
        return AttemptState(
            grid=grid,
            score=0,
            combo=0,
            stock=cfg.initial_stock,
            shuffles=cfg.shuffles,
            phase=phase,
        )

    def reset(self) -> None:
        """Starts the attempt over with a fresh (or the fixed) grid."""
        self.builder.clear()
        self._resolving = False
        self.state = self._fresh_state()
        logger.debug("attempt reset, phase %s", self.state.phase.value)

    def begin(self, index: int) -> bool:
        if not self.accepting_input:
            return False
        return self.builder.begin(index, self.state.grid)

    def extend(self, index: int) -> bool:
        if not self.accepting_input:
            return False
        return self.builder.extend(index, self.state.grid)

    def release(self, validator: Optional[PathValidator] = None) -> MoveOutcome:
        """Closes the current path and resolves it as one atomic step."""
        path, value = self.builder.release()
        if not self.accepting_input:
            return MoveOutcome(NOOP, self.state)
        self._resolving = True
        try:
            res = resolve(
                path,
                value,
                self.state.grid,
                self.config.max_value,
                self.state.score,
                self.state.stock,
                self.state.combo,
                self.n,
                rng=self.rng,
                validator=validator,
            )
            if res.kind != RESOLVED:
                return MoveOutcome(res.kind, self.state)
            return self._commit(res)
        finally:
            self._resolving = False

    def _commit(self, res: ResolutionResult) -> MoveOutcome:
        cfg = self.config
        before = self.state
        challenge_hit = check_challenge(res.grid, self.n, cfg.challenge, before.challenge_completed)
        bonus_hits: List[LineHit] = []
        awarded = before.awarded_lines
        if cfg.free_play:
            bonus_hits, awarded = award_line_bonuses(res.grid, self.n, before.awarded_lines)
        bonus = cfg.line_bonus * len(bonus_hits)
        score = res.score + bonus
        phase = evaluate_phase(res.grid, self.n, score, before.shuffles, cfg.target_score)
        self.state = replace(
            before,
            grid=res.grid,
            score=score,
            combo=res.combo,
            stock=res.stock,
            phase=phase,
            challenge_completed=before.challenge_completed or challenge_hit is not None,
            challenge_line=challenge_hit if challenge_hit is not None else before.challenge_line,
            awarded_lines=awarded,
        )
        if challenge_hit is not None:
            logger.debug("challenge completed on %s %d", challenge_hit.axis.value, challenge_hit.index)
        self._log_transition(before.phase, phase)
        return MoveOutcome(
            RESOLVED,
            self.state,
            transformed=res.path,
            destroyed=res.path if res.destroyed else (),
            new_value=res.new_value,
            points=res.points,
            bonus_points=bonus,
            celebrate=res.celebrate,
            challenge_hit=challenge_hit,
            line_bonuses=tuple(bonus_hits),
            previous_phase=before.phase,
            falls=res.falls,
        )

    def shuffle(self) -> bool:
        """Spends one shuffle to permute the board; False when not allowed."""
        if not self.accepting_input or self.state.shuffles <= 0:
            return False
        self.builder.clear()
        before = self.state
        grid, budget = shuffle_grid(before.grid, before.shuffles, self.rng)
        phase = evaluate_phase(grid, self.n, before.score, budget, self.config.target_score)
        # a shuffled line must form again before it pays again
        still = set(uniform_lines(grid, self.n))
        awarded = tuple(h for h in before.awarded_lines if h in still)
        self.state = replace(before, grid=grid, shuffles=budget, phase=phase, awarded_lines=awarded)
        self._log_transition(before.phase, phase)
        return True

    def report(self) -> AttemptReport:
        return AttemptReport(
            phase=self.state.phase,
            score=self.state.score,
            challenge_completed=self.state.challenge_completed,
            challenge_line=self.state.challenge_line,
        )

    def _log_transition(self, old: Phase, new: Phase) -> None:
        if old == new:
            return
        if new.terminal:
            logger.info("attempt ended in %s with score %d", new.value, self.state.score)
        else:
            logger.debug("phase %s -> %s", old.value, new.value)
