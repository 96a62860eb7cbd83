from __future__ import annotations

import random
from typing import Dict, Optional, Sequence, Union

from .board import Block, BlockPool, Board, Point
from .merge import BlockMove, DefaultBlockMerger, GameBoardOperation, MergeListener
from .spawn import random_item, random_item_weighted
from .traversal import CachingBoardTraversalStrategyFactory, Direction

MoveMap = Dict[Point, BlockMove]


class Game:
    """Owns one board and applies slides, probes and spawns to it."""

    def __init__(
        self,
        board: Board,
        strategy_factory: Optional[CachingBoardTraversalStrategyFactory] = None,
        operation: Optional[GameBoardOperation] = None,
        rng: Optional[random.Random] = None,
        pool: Optional[BlockPool] = None,
    ) -> None:
        self._board = board
        self._pool = pool if pool is not None else BlockPool()
        self._strategy_factory = strategy_factory or CachingBoardTraversalStrategyFactory()
        self._operation = operation or GameBoardOperation(DefaultBlockMerger(self._pool))
        self._rng = rng or random.Random()
        self._listener: Optional[MergeListener] = None

    @classmethod
    def create(cls, rows: int = 4, columns: int = 4, seed: Optional[int] = None) -> 'Game':
        return cls(Board(rows, columns), rng=random.Random(seed))

    @property
    def board(self) -> Board:
        return self._board

    def get_board(self) -> Board:
        return self._board

    @property
    def strategy_factory(self) -> CachingBoardTraversalStrategyFactory:
        return self._strategy_factory

    @property
    def rng(self) -> random.Random:
        return self._rng

    def set_on_block_merged_listener(self, listener: Optional[MergeListener]) -> None:
        self._listener = listener

    def block_at(self, point: Point) -> Optional[Block]:
        return self._board.block_at(point)

    def clear_board(self) -> None:
        self._board.clear()

    def is_spawnable(self) -> bool:
        return not self._board.is_full()

    def spawn_block(self, block: Union[Block, int]) -> Optional[Point]:
        """Places the block on a random empty slot. Returns None if the board is full."""
        if isinstance(block, int):
            block = self._pool.of(block)
        elif not isinstance(block, Block):
            raise ValueError(f'Cannot spawn {block!r}: expected a Block or an int')
        if not self.is_spawnable():
            return None
        slot = random_item(self._board.empty_slots(), self._rng)
        if slot is None:
            return None
        self._board.set_block_at(slot, block)
        return slot

    def spawn_block_weighted(self, values: Sequence[Union[Block, int]], weights: Sequence[float]) -> Optional[Point]:
        choice = random_item_weighted(values, weights, self._rng)
        return self.spawn_block(choice)

    def move_blocks(self, direction: Direction, listener: Optional[MergeListener] = None) -> MoveMap:
        """Slides the live board. An empty map means nothing moved."""
        strategy = self._strategy_factory.create(direction)
        self._operation.prepare(listener if listener is not None else self._listener)
        return strategy.execute(self._board, self._operation)

    def try_move_blocks(self, direction: Direction) -> bool:
        """Probes a slide on a copy of the board; the live board is never touched."""
        strategy = self._strategy_factory.create(direction)
        self._operation.prepare()
        moves = strategy.execute(self._board.copy(), self._operation, early_terminate=True)
        return bool(moves)

    def movable_directions(self) -> Dict[Direction, bool]:
        return {d: self.try_move_blocks(d) for d in Direction}

    def can_move(self) -> bool:
        return any(self.try_move_blocks(d) for d in Direction)

    def is_game_over(self) -> bool:
        return not self.can_move()
