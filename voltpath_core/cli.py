from __future__ import annotations

import argparse
import logging
import re
from typing import List, Optional

from .config import GRID_SIZE, INITIAL_STOCK, MAX_VALUE, LevelConfig
from .grid import pretty
from .match import Match, MoveOutcome
from .state import Phase
from .scoring import floating_text


def parse_path(text: str) -> Optional[List[int]]:
    """Parses '0 1 7' or '0,1,7' into cell indices; None if not numeric."""
    parts = [t for t in re.split(r'[\s,]+', text.strip()) if t]
    if not parts:
        return None
    try:
        return [int(p) for p in parts]
    except ValueError:
        return None


def play_path(match: Match, cells: List[int]) -> MoveOutcome:
    """Feeds a whole traced path through begin/extend/release."""
    if cells:
        match.begin(cells[0])
        for idx in cells[1:]:
            match.extend(idx)
    return match.release()


def describe(outcome: MoveOutcome) -> str:
    if outcome.kind == 'noop':
        return 'Nothing to play.'
    if outcome.kind == 'rejected':
        return 'Path too short.'
    parts = [floating_text(outcome.points, outcome.state.combo)]
    if outcome.destroyed:
        parts.append(f"destroyed {len(outcome.destroyed)} cells")
    else:
        parts.append(f"merged into {outcome.new_value}")
    if outcome.celebrate:
        parts.append('great move!')
    if outcome.challenge_hit is not None:
        parts.append(f"challenge complete ({outcome.challenge_hit.axis.value} {outcome.challenge_hit.index})")
    if outcome.bonus_points:
        parts.append(f"line bonus +{outcome.bonus_points}")
    return ', '.join(parts)


def _status(match: Match) -> str:
    s = match.state
    target = f"/{match.config.target_score}" if match.config.target_score else ''
    return f"score {s.score}{target}  combo {s.combo}  stock {s.stock}  shuffles {s.shuffles}  [{s.phase.value}]"


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Voltpath: trace paths of equal cells on a grid')
    parser.add_argument('--size', type=int, default=GRID_SIZE, help='Grid size (NxN)')
    parser.add_argument('--max-value', type=int, default=MAX_VALUE, help='Highest value before cells are destroyed')
    parser.add_argument('--stock', type=int, default=INITIAL_STOCK, help='Cells available for refilling')
    parser.add_argument('--target', type=int, default=None, help='Target score (omit for free play)')
    parser.add_argument('--shuffles', type=int, default=0, help='Shuffles available')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed')
    parser.add_argument('--verbose', action='store_true', help='Log engine decisions')
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    try:
        config = LevelConfig(
            grid_size=args.size,
            max_value=args.max_value,
            initial_stock=args.stock,
            target_score=args.target,
            shuffles=args.shuffles,
        )
    except ValueError as e:
        parser.error(str(e))
    match = Match(config, seed=args.seed)

    print(pretty(match.state.grid, match.n))
    print(_status(match))
    while not match.state.phase.terminal:
        if match.state.phase is Phase.STUCK:
            print('No moves left. Type s to shuffle.')
        try:
            text = input('Path (indices), s=shuffle, q=quit: ').strip().lower()
        except EOFError:
            break
        if text == 'q':
            break
        if text == 's':
            if not match.shuffle():
                print('No shuffles left.')
        else:
            cells = parse_path(text)
            if cells is None:
                print('Could not parse. Try again.')
                continue
            print(describe(play_path(match, cells)))
        print(pretty(match.state.grid, match.n))
        print(_status(match))

    report = match.report()
    if report.victory:
        print(f"Level complete! Final score {report.score}.")
    elif report.phase.terminal:
        print(f"Game over. Final score {report.score}.")


if __name__ == '__main__':
    main()
