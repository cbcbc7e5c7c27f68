from __future__ import annotations

# Facade module that re-exports Voltpath core functionality.
# The Flask app and tests import from here; single-responsibility
# modules live under voltpath_core/*.

from voltpath_core.grid import (  # noqa: F401
    Cell,
    Grid,
    position,
    index_of,
    are_adjacent,
    neighbors,
    generate_grid,
    pretty,
)
from voltpath_core.reach import has_legal_move  # noqa: F401
from voltpath_core.path import PathBuilder, paths_match  # noqa: F401
from voltpath_core.scoring import (  # noqa: F401
    is_valid_path,
    base_points,
    final_points,
    should_celebrate,
    floating_text,
)
from voltpath_core.gravity import settle, fall_distances  # noqa: F401
from voltpath_core.bonus import (  # noqa: F401
    LineAxis,
    LineHit,
    find_column_of_value,
    find_row_of_value,
    uniform_lines,
    check_challenge,
    award_line_bonuses,
)
from voltpath_core.resolve import NOOP, REJECTED, RESOLVED, ResolutionResult, resolve  # noqa: F401
from voltpath_core.shuffle import shuffle_grid  # noqa: F401
from voltpath_core.config import Challenge, ChallengeKind, LevelConfig  # noqa: F401
from voltpath_core.state import AttemptState, Phase, evaluate_phase  # noqa: F401
from voltpath_core.match import AttemptReport, Match, MoveOutcome  # noqa: F401


def new_match(config: LevelConfig | None = None, seed: int | None = None) -> Match:
    """Starts an attempt with the given (or default) level configuration."""
    return Match(config or LevelConfig(), seed=seed)
