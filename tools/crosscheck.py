"""Cross-check the traversal engine against a naive compress-and-merge slide.

Usage: python tools/crosscheck.py [--boards N] [--seed S] [--size R C]
"""
from __future__ import annotations

import argparse
import os
import random
import sys
from typing import List, Optional

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import game  # type: ignore  # noqa: E402

Row = List[Optional[int]]


def slide_line(line: Row) -> Row:
    """Reference slide toward index 0: drop gaps, merge equal neighbours once."""
    tiles = [v for v in line if v]
    out: Row = []
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            out.append(tiles[i] * 2)
            i += 2
        else:
            out.append(tiles[i])
            i += 1
    return out + [None] * (len(line) - len(out))


def reference_slide(rows: List[Row], direction: game.Direction) -> List[Row]:
    h, w = len(rows), len(rows[0])
    if direction in (game.Direction.LEFT, game.Direction.RIGHT):
        result = []
        for row in rows:
            line = row if direction == game.Direction.LEFT else row[::-1]
            moved = slide_line(line)
            result.append(moved if direction == game.Direction.LEFT else moved[::-1])
        return result
    result = [[None] * w for _ in range(h)]
    for c in range(w):
        col = [rows[r][c] for r in range(h)]
        line = col if direction == game.Direction.UP else col[::-1]
        moved = slide_line(line)
        if direction == game.Direction.DOWN:
            moved = moved[::-1]
        for r in range(h):
            result[r][c] = moved[r]
    return result


def random_rows(rng: random.Random, h: int, w: int) -> List[Row]:
    choices = [None, None, 2, 2, 4, 4, 8, 16]
    return [[rng.choice(choices) for _ in range(w)] for _ in range(h)]


def main() -> None:
    parser = argparse.ArgumentParser(description='Cross-check slides against a reference implementation')
    parser.add_argument('--boards', type=int, default=500)
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('--size', type=int, nargs=2, default=(4, 4), metavar=('ROWS', 'COLUMNS'))
    args = parser.parse_args()

    rng = random.Random(args.seed)
    h, w = args.size
    mismatches = 0
    for i in range(args.boards):
        rows = random_rows(rng, h, w)
        for direction in game.Direction:
            board = game.Board.from_rows(rows)
            g = game.Game(board)
            moves = g.move_blocks(direction)
            expected = reference_slide(rows, direction)
            got = board.to_rows()
            if got != expected or bool(moves) != (expected != rows):
                mismatches += 1
                print(f"board #{i} {direction.value}: expected {expected}, got {got}")
    print(f"Checked {args.boards} boards x 4 directions, mismatches={mismatches}")


if __name__ == '__main__':
    main()
