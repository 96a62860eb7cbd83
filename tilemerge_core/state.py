from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .board import Block, Board, Point
from .game import Game, MoveMap
from .traversal import Direction

BOARD_ROW_COUNT = 4
BOARD_COLUMN_COUNT = 4
INITIAL_BLOCK_COUNT = 2
SPAWNED_VALUES = (2, 4)
SPAWNED_WEIGHTS = (90, 10)


@dataclass
class MoveOutcome:
    """Result of one session move: the move map plus what happened after it."""
    moves: MoveMap
    spawned: Optional[Point]
    score_delta: int
    stopped: bool

    @property
    def moved(self) -> bool:
        return bool(self.moves)


@dataclass
class GameSession:
    """Represents one player's game: the engine plus score and the markers shown by the UI."""
    game: Game = field(default_factory=lambda: Game.create(BOARD_ROW_COUNT, BOARD_COLUMN_COUNT))
    score: int = 0
    stopped: bool = False
    merged_points: List[Point] = field(default_factory=list)
    spawned_point: Optional[Point] = None

    @classmethod
    def create(cls, rows: int = BOARD_ROW_COUNT, columns: int = BOARD_COLUMN_COUNT, seed: Optional[int] = None) -> 'GameSession':
        session = cls(game=Game.create(rows, columns, seed=seed))
        session.new_game()
        return session

    @property
    def board(self) -> Board:
        return self.game.board

    def new_game(self) -> None:
        self.game.clear_board()
        self.score = 0
        self.merged_points = []
        self.spawned_point = None
        for _ in range(INITIAL_BLOCK_COUNT):
            self.game.spawn_block_weighted(SPAWNED_VALUES, SPAWNED_WEIGHTS)
        self.stopped = self.game.is_game_over()

    def move(self, direction: Direction) -> MoveOutcome:
        if self.stopped:
            return MoveOutcome(moves={}, spawned=None, score_delta=0, stopped=True)

        gained = 0

        def on_merged(merged: Block, point: Point, block1: Block, block2: Block) -> None:
            nonlocal gained
            gained += merged.value

        moves = self.game.move_blocks(direction, listener=on_merged)
        if not moves:
            return MoveOutcome(moves=moves, spawned=None, score_delta=0, stopped=self.stopped)

        spawned = self.game.spawn_block_weighted(SPAWNED_VALUES, SPAWNED_WEIGHTS)
        self.score += gained
        self.merged_points = [m.to_point for m in moves.values() if m.merged]
        self.spawned_point = spawned
        self.stopped = self.game.is_game_over()
        return MoveOutcome(moves=moves, spawned=spawned, score_delta=gained, stopped=self.stopped)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board": self.board.to_dict(),
            "score": int(self.score),
            "mergeds": [str(p) for p in self.merged_points],
            "spawned": str(self.spawned_point) if self.spawned_point is not None else None,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, obj: Dict[str, Any], seed: Optional[int] = None) -> 'GameSession':
        """Restores a saved session. Raises ValueError on malformed input."""
        if not isinstance(obj, dict) or "board" not in obj:
            raise ValueError('Session data must be an object with a board')
        board = Board.from_dict(obj["board"])
        try:
            score = int(obj.get("score", 0) or 0)
        except (TypeError, ValueError):
            raise ValueError(f'Bad score: {obj.get("score")!r}') from None
        mergeds = [Point.parse(s) for s in obj.get("mergeds") or []]
        spawned_raw = obj.get("spawned")
        spawned = Point.parse(spawned_raw) if spawned_raw else None
        game = Game(board, rng=random.Random(seed))
        session = cls(game=game, score=score, merged_points=mergeds, spawned_point=spawned)
        session.stopped = game.is_game_over()
        return session

    @classmethod
    def from_json(cls, text: str, seed: Optional[int] = None) -> 'GameSession':
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f'Session JSON is malformed: {e}') from None
        return cls.from_dict(obj, seed=seed)
