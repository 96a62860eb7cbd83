from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Iterator, List, Optional, Protocol, Tuple

from .board import Board, Point

if TYPE_CHECKING:
    from .merge import BlockMove


class Direction(Enum):
    UP = 'UP'
    DOWN = 'DOWN'
    LEFT = 'LEFT'
    RIGHT = 'RIGHT'


# Given a point and a positive offset, returns the point that many steps
# further along the slide direction.
PointMover = Callable[[Point, int], Point]


class BoardOperation(Protocol):
    """Invoked once per visited cell, in traversal order."""

    def operate(self, board: Board, point: Point, is_new_line: bool, mover: PointMover) -> Optional['BlockMove']:
        ...


_KEYS = {'w': Direction.UP, 's': Direction.DOWN, 'a': Direction.LEFT, 'd': Direction.RIGHT}


def parse_direction(text: str) -> Direction:
    """Accepts direction names in any case and the w/a/s/d keys."""
    key = str(text).strip()
    if key.lower() in _KEYS:
        return _KEYS[key.lower()]
    try:
        return Direction[key.upper()]
    except KeyError:
        raise ValueError(f'Unknown direction: {text!r}') from None


@dataclass(frozen=True)
class BoardTraversalStrategy:
    """
    Visits the board in lines perpendicular to the motion. Each line starts at
    the destination edge and walks back toward the opposite edge, so a single
    forward sweep is enough to slide every tile.
    """
    direction: Direction
    dr: int
    dc: int

    @property
    def by_column(self) -> bool:
        return self.dc == 0

    def move(self, point: Point, offset: int) -> Point:
        return Point(point.row + self.dr * offset, point.column + self.dc * offset)

    def lines(self, board: Board) -> Iterator[List[Point]]:
        """Yields every line of the board, each ordered from the destination edge."""
        if self.by_column:
            rows = list(range(board.row_count))
            if self.dr > 0:
                rows.reverse()
            for c in range(board.column_count):
                yield [Point(r, c) for r in rows]
        else:
            cols = list(range(board.column_count))
            if self.dc > 0:
                cols.reverse()
            for r in range(board.row_count):
                yield [Point(r, c) for c in cols]

    def visit_order(self, board: Board) -> Iterator[Tuple[Point, bool]]:
        """Flattened traversal: (point, is_new_line) pairs."""
        for line in self.lines(board):
            for i, point in enumerate(line):
                yield point, i == 0

    def execute(self, board: Board, operation: BoardOperation, early_terminate: bool = False) -> Dict[Point, 'BlockMove']:
        """
        Runs the operation over every cell and collects the move records keyed by
        their source point, in traversal order. With early_terminate the sweep
        stops at the first move produced.
        """
        moves: Dict[Point, 'BlockMove'] = {}
        for point, is_new_line in self.visit_order(board):
            move = operation.operate(board, point, is_new_line, self.move)
            if move is None:
                continue
            moves[move.from_point] = move
            if early_terminate:
                break
        return moves


_STEPS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


class CachingBoardTraversalStrategyFactory:
    """Creates one strategy per direction and reuses it afterwards."""

    def __init__(self) -> None:
        self._cache: Dict[Direction, BoardTraversalStrategy] = {}

    def create(self, direction: Direction) -> BoardTraversalStrategy:
        strategy = self._cache.get(direction)
        if strategy is None:
            if direction not in _STEPS:
                raise ValueError(f'Unknown direction: {direction!r}')
            dr, dc = _STEPS[direction]
            strategy = BoardTraversalStrategy(direction=direction, dr=dr, dc=dc)
            self._cache[direction] = strategy
        return strategy
