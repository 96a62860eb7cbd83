from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence


@dataclass(frozen=True)
class Block:
    """A tile on the board. Blocks with equal values are interchangeable."""
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value <= 0:
            raise ValueError(f'Block value must be a positive integer, got {self.value!r}')


class BlockPool:
    """Per-engine cache handing out one Block instance per value."""

    def __init__(self) -> None:
        self._blocks: Dict[int, Block] = {}

    def of(self, value: int) -> Block:
        block = self._blocks.get(value)
        if block is None:
            block = Block(value)
            self._blocks[value] = block
        return block

    def __len__(self) -> int:
        return len(self._blocks)


@dataclass(frozen=True)
class Point:
    """Zero-based (row, column) coordinate."""
    row: int
    column: int

    def within(self, row_count: int, column_count: int) -> bool:
        return 0 <= self.row < row_count and 0 <= self.column < column_count

    def __str__(self) -> str:
        return f"{self.row},{self.column}"

    @classmethod
    def parse(cls, text: str) -> 'Point':
        """Parses the "row,column" form produced by str()."""
        parts = str(text).split(',')
        if len(parts) != 2:
            raise ValueError(f'Malformed point: {text!r}')
        try:
            return cls(int(parts[0]), int(parts[1]))
        except ValueError:
            raise ValueError(f'Malformed point: {text!r}') from None


class Board:
    """Fixed-size grid of optional blocks, stored row-major.

    The occupied count is maintained on every write so that fullness checks
    never need a scan.
    """

    def __init__(self, row_count: int, column_count: int) -> None:
        if row_count < 1 or column_count < 1:
            raise ValueError(f'Board dimensions must be positive, got {row_count}x{column_count}')
        self._row_count = row_count
        self._column_count = column_count
        self._blocks: List[Optional[Block]] = [None] * (row_count * column_count)
        self._block_count = 0

    @property
    def row_count(self) -> int:
        return self._row_count

    @property
    def column_count(self) -> int:
        return self._column_count

    @property
    def size(self) -> int:
        return self._row_count * self._column_count

    @property
    def block_count(self) -> int:
        return self._block_count

    def is_full(self) -> bool:
        return self._block_count == self.size

    def contains(self, point: Point) -> bool:
        return point.within(self._row_count, self._column_count)

    def index(self, point: Point) -> int:
        """Calculates the row-major index of an in-bounds point."""
        self._ensure_valid(point)
        return point.row * self._column_count + point.column

    def block_at(self, point: Point) -> Optional[Block]:
        return self._blocks[self.index(point)]

    def set_block_at(self, point: Point, block: Optional[Block]) -> None:
        idx = self.index(point)
        old = self._blocks[idx]
        if old is None and block is not None:
            self._block_count += 1
        elif old is not None and block is None:
            self._block_count -= 1
        self._blocks[idx] = block

    def remove_block_at(self, point: Point) -> None:
        self.set_block_at(point, None)

    def clear(self) -> None:
        self._blocks = [None] * self.size
        self._block_count = 0

    def points(self) -> Iterable[Point]:
        """Iterates over all coordinates in row-major order."""
        for r in range(self._row_count):
            for c in range(self._column_count):
                yield Point(r, c)

    def empty_slots(self) -> List[Point]:
        return [p for p in self.points() if self._blocks[self._raw_index(p)] is None]

    def occupied_slots(self) -> List[Point]:
        return [p for p in self.points() if self._blocks[self._raw_index(p)] is not None]

    def highest_value(self) -> int:
        """Largest tile value on the board, or -1 when it is empty."""
        values = [b.value for b in self._blocks if b is not None]
        return max(values) if values else -1

    def copy(self) -> 'Board':
        other = Board(self._row_count, self._column_count)
        other._blocks = list(self._blocks)
        other._block_count = self._block_count
        return other

    def values(self) -> List[Optional[int]]:
        return [b.value if b is not None else None for b in self._blocks]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rowCount": self._row_count,
            "columnCount": self._column_count,
            "values": self.values(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any], pool: Optional[BlockPool] = None) -> 'Board':
        if not isinstance(data, dict):
            raise ValueError('Board data must be an object')
        try:
            row_count = data["rowCount"]
            column_count = data["columnCount"]
            values = data["values"]
        except KeyError as e:
            raise ValueError(f'Board data is missing a field: {e}') from None
        for name, dim in (('rowCount', row_count), ('columnCount', column_count)):
            if isinstance(dim, bool) or not isinstance(dim, int) or dim < 1:
                raise ValueError(f'{name} must be a positive integer, got {dim!r}')
        # Checked before the grid is allocated
        if not isinstance(values, list) or len(values) != row_count * column_count:
            raise ValueError(f'Expected {row_count * column_count} values for a {row_count}x{column_count} board')
        board = cls(row_count, column_count)
        for i, value in enumerate(values):
            if value is None:
                continue
            block = pool.of(value) if pool is not None else Block(value)
            board._blocks[i] = block
            board._block_count += 1
        return board

    @classmethod
    def from_json(cls, text: str, pool: Optional[BlockPool] = None) -> 'Board':
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f'Board JSON is malformed: {e}') from None
        return cls.from_dict(data, pool)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[int]]]) -> 'Board':
        """Builds a board from nested rows; None and 0 mark empty cells."""
        h = len(rows)
        w = len(rows[0]) if h else 0
        board = cls(h, w)
        for r, row in enumerate(rows):
            if len(row) != w:
                raise ValueError('All rows must have the same length')
            for c, value in enumerate(row):
                if value:
                    board.set_block_at(Point(r, c), Block(value))
        return board

    def to_rows(self) -> List[List[Optional[int]]]:
        flat = self.values()
        w = self._column_count
        return [flat[r * w:(r + 1) * w] for r in range(self._row_count)]

    def pretty(self) -> str:
        """Generates a human-readable string representation of the board."""
        cells = [str(v) if v is not None else '.' for v in self.values()]
        width = max(len(s) for s in cells)
        lines: List[str] = []
        for row in self.to_rows():
            lines.append(" ".join((str(v) if v is not None else '.').rjust(width) for v in row))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._row_count == other._row_count
            and self._column_count == other._column_count
            and self.values() == other.values()
        )

    def __repr__(self) -> str:
        return f"Board({self._row_count}x{self._column_count}, blocks={self._block_count})"

    def _raw_index(self, point: Point) -> int:
        return point.row * self._column_count + point.column

    def _ensure_valid(self, point: Point) -> None:
        if not self.contains(point):
            raise IndexError(
                f'Point {point} is outside the {self._row_count}x{self._column_count} board'
            )
