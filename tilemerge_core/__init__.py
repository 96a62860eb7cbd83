"""
Tilemerge core Python package.

This package contains the rules engine of the sliding tile merge puzzle,
kept free of any rendering so it can be driven by the CLI, the Flask app
and the tests alike.
Modules:
- board.py: Block, BlockPool, Point, Board
- traversal.py: Direction, traversal strategies and their factory
- merge.py: BlockMove, block mergers and the slide state machine
- game.py: Game (move, probe, spawn)
- spawn.py: seeded random helpers
- state.py: GameSession (score and saved state)
- db.py: SQLite persistence of sessions
"""
