from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from .board import Block, BlockPool, Board, Point
from .traversal import PointMover


@dataclass(frozen=True)
class BlockMove:
    """Net displacement of one tile during a single slide."""
    from_point: Point
    to_point: Point
    merged: bool

    def to_json(self) -> dict:
        return {
            "from": [self.from_point.row, self.from_point.column],
            "to": [self.to_point.row, self.to_point.column],
            "merged": self.merged,
        }


# (merged_block, merged_point, moving_block, absorbed_block)
MergeListener = Callable[[Block, Point, Block, Block], None]


class BlockMerger(Protocol):
    def can_merge(self, block1: Block, block2: Block) -> bool:
        ...

    def merge(self, block1: Block, block2: Block) -> Block:
        ...


class DefaultBlockMerger:
    """Equal values merge into their sum."""

    def __init__(self, pool: Optional[BlockPool] = None) -> None:
        self._pool = pool

    def can_merge(self, block1: Block, block2: Block) -> bool:
        return block1.value == block2.value

    def merge(self, block1: Block, block2: Block) -> Block:
        value = block1.value + block2.value
        return self._pool.of(value) if self._pool is not None else Block(value)


class GameBoardOperation:
    """
    The slide state machine. Called once per cell in traversal order; each
    occupied cell either relocates its tile, merges it into the tile ahead, or
    leaves it in place.

    Per-line state:
    - empty_count: length of the empty gap between the current cell and the
      last tile that has settled in this line.
    - dst_merged: whether the last settled tile already absorbed a merge during
      this slide, which blocks a second merge into it.
    """

    def __init__(self, merger: Optional[BlockMerger] = None) -> None:
        self._merger: BlockMerger = merger if merger is not None else DefaultBlockMerger()
        self._listener: Optional[MergeListener] = None
        self._empty_count = 0
        self._dst_merged = False
        self._did_move = False

    @property
    def merger(self) -> BlockMerger:
        return self._merger

    def prepare(self, listener: Optional[MergeListener] = None) -> None:
        """Resets all state before a slide and attaches the merge listener, if any."""
        self._empty_count = 0
        self._dst_merged = False
        self._did_move = False
        self._listener = listener

    def did_move(self) -> bool:
        return self._did_move

    def operate(self, board: Board, point: Point, is_new_line: bool, mover: PointMover) -> Optional[BlockMove]:
        if is_new_line:
            self._empty_count = 0
            self._dst_merged = False

        if board.block_at(point) is None:
            self._empty_count += 1
            return None

        # Largest offset first so a tile never passes a tile it cannot merge with.
        for offset in range(1 + self._empty_count, 0, -1):
            dst = mover(point, offset)
            if not board.contains(dst):
                continue
            move = self._try_offset(board, point, dst)
            if move is not None:
                self._did_move = True
                return move
        return None

    def _try_offset(self, board: Board, src: Point, dst: Point) -> Optional[BlockMove]:
        block = board.block_at(src)
        dst_block = board.block_at(dst)
        assert block is not None

        if dst_block is None:
            board.set_block_at(dst, block)
            board.remove_block_at(src)
            self._dst_merged = False
            return BlockMove(src, dst, merged=False)

        if self._dst_merged or not self._merger.can_merge(block, dst_block):
            return None

        merged = self._merger.merge(block, dst_block)
        board.set_block_at(dst, merged)
        board.remove_block_at(src)
        self._dst_merged = True
        self._empty_count += 1
        if self._listener is not None:
            self._listener(merged, dst, block, dst_block)
        return BlockMove(src, dst, merged=True)
