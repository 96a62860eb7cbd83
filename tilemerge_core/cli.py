from __future__ import annotations

import argparse
from typing import List, Optional

from .db import db_lookup_session, db_store_session
from .state import BOARD_COLUMN_COUNT, BOARD_ROW_COUNT, GameSession
from .traversal import Direction, parse_direction


def _show(session: GameSession) -> None:
    print(session.board.pretty())
    print(f"Score: {session.score}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Sliding tile merge puzzle in the terminal')
    parser.add_argument('--rows', type=int, default=BOARD_ROW_COUNT, help='Board row count')
    parser.add_argument('--columns', type=int, default=BOARD_COLUMN_COUNT, help='Board column count')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for spawns')
    parser.add_argument('--db', default=None, help='SQLite DB file path for saving the session')
    parser.add_argument('--session', default='default', help='Key of the saved session in --db')
    parser.add_argument('--moves', default=None, help='Play these moves (e.g. "wasd" or "up,left") and exit')
    args = parser.parse_args(argv)

    if args.rows < 1 or args.columns < 1:
        parser.error('--rows and --columns must be positive')

    scripted: Optional[List[Direction]] = None
    if args.moves is not None:
        tokens = [t for t in args.moves.replace(',', ' ').split() if t]
        if len(tokens) == 1 and all(ch in 'wasdWASD' for ch in tokens[0]):
            tokens = list(tokens[0])
        try:
            scripted = [parse_direction(t) for t in tokens]
        except ValueError as e:
            parser.error(str(e))

    session: Optional[GameSession] = None
    if args.db:
        session = db_lookup_session(args.db, args.session, seed=args.seed)
    if session is None:
        session = GameSession.create(args.rows, args.columns, seed=args.seed)

    def play(direction: Direction) -> None:
        outcome = session.move(direction)
        if not outcome.moved:
            print('Nothing moved.')
            return
        print(f"{direction.value}: +{outcome.score_delta}")
        _show(session)
        if args.db:
            db_store_session(args.db, args.session, session)

    _show(session)
    if scripted is not None:
        for direction in scripted:
            if session.stopped:
                break
            play(direction)
    else:
        while not session.stopped:
            try:
                text = input('Move (w/a/s/d, q to quit): ').strip()
            except EOFError:
                break
            if text.lower() in ('q', 'quit', 'exit'):
                break
            try:
                direction = parse_direction(text)
            except ValueError:
                print('Could not parse. Try again.')
                continue
            play(direction)

    if session.stopped:
        print(f"Game over! Highest tile: {session.board.highest_value()}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
