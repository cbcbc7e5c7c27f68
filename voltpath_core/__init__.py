"""
Voltpath core Python package.

Pure-logic building blocks of the path-merging puzzle, kept in small modules
so the game.py facade, the Flask app and the tests can share them.
Modules:
- grid.py: cell/grid types, coordinates, adjacency, generation
- reach.py: has_legal_move
- path.py: PathBuilder
- scoring.py, resolve.py: move validation, transform/destroy and points
- gravity.py: settle (gravity + refill from stock)
- bonus.py: challenge and free-play line detection
- shuffle.py, state.py, match.py: shuffle, phases and the attempt state machine
- config.py: LevelConfig
"""
