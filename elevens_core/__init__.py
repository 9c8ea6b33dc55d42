"""
Elevens core Python package.

Pure game logic for the pair-elimination puzzle, kept free of any UI so it can be
driven from the CLI, the Flask app, or tests.
Modules:
- board.py: BoardState, Coord and board constants
- deal.py: seeded board generation
- pathfind.py: BFS connectivity over the board plus its border ring
- match.py: value-sum and path checks for a candidate pair
- engine.py: SelectionEngine state machine, snapshots
- codec.py, db.py: JSON and SQLite persistence of snapshots and settings
"""
