from __future__ import annotations

import os
import sys
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .game import (  # type: ignore
        BOARD_COLUMN_COUNT,
        BOARD_ROW_COUNT,
        Direction,
        GameSession,
        db_lookup_session,
        db_store_session,
        parse_direction,
    )
except ImportError:
    from game import (  # type: ignore
        BOARD_COLUMN_COUNT,
        BOARD_ROW_COUNT,
        Direction,
        GameSession,
        db_lookup_session,
        db_store_session,
        parse_direction,
    )

DEFAULT_DB = os.getenv("TILEMERGE_DB", os.path.join("data", "sessions.db"))
MAX_BOARD_SIDE = 16

app = Flask(__name__)


def _debug(msg: str) -> None:
    if os.getenv("TILEMERGE_DEBUG", "0").lower() in ("1", "true", "yes", "on"):
        print(f"[api] {msg}")


def _error(message: str, status: int = 400) -> Tuple[Any, int]:
    _debug(f"{status}: {message}")
    return jsonify({"ok": False, "error": message}), status


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _seed_from(body: Dict[str, Any]) -> Optional[int]:
    seed = body.get("seed", None)
    return int(seed) if seed is not None else None


def _check_board_sides(rows: Any, columns: Any) -> None:
    if not (isinstance(rows, int) and isinstance(columns, int)
            and 1 <= rows <= MAX_BOARD_SIDE and 1 <= columns <= MAX_BOARD_SIDE):
        raise ValueError(f"board sides must be between 1 and {MAX_BOARD_SIDE}")


def state_to_json(s: GameSession) -> Dict[str, Any]:
    return s.to_dict()


def json_to_state(obj: Dict[str, Any], seed: Optional[int] = None) -> GameSession:
    """Restores a posted session, rejecting boards larger than the API allows."""
    board = obj.get("board") if isinstance(obj, dict) else None
    if isinstance(board, dict):
        _check_board_sides(board.get("rowCount"), board.get("columnCount"))
    return GameSession.from_dict(obj, seed=seed)


def _point_json(p) -> Optional[list]:
    return [p.row, p.column] if p is not None else None


@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    try:
        rows = int(body.get("rows", BOARD_ROW_COUNT))
        columns = int(body.get("columns", BOARD_COLUMN_COUNT))
        seed = _seed_from(body)
        _check_board_sides(rows, columns)
    except (TypeError, ValueError) as e:
        return _error(f"bad parameters: {e}")
    session = GameSession.create(rows, columns, seed=seed)
    return jsonify({"ok": True, "state": state_to_json(session), "stopped": session.stopped})


@app.post("/api/move")
def api_move() -> Any:
    body = _body()
    try:
        session = json_to_state(body["state"], seed=_seed_from(body))
        direction = parse_direction(body["direction"])
    except KeyError as e:
        return _error(f"missing field: {e}")
    except (TypeError, ValueError) as e:
        return _error(f"bad request: {e}")
    outcome = session.move(direction)
    return jsonify({
        "ok": True,
        "moved": outcome.moved,
        "moves": [m.to_json() for m in outcome.moves.values()],
        "spawned": _point_json(outcome.spawned),
        "scoreDelta": outcome.score_delta,
        "state": state_to_json(session),
        "stopped": outcome.stopped,
    })


@app.post("/api/probe")
def api_probe() -> Any:
    body = _body()
    try:
        session = json_to_state(body["state"])
    except KeyError as e:
        return _error(f"missing field: {e}")
    except (TypeError, ValueError) as e:
        return _error(f"bad state: {e}")
    directions = session.game.movable_directions()
    return jsonify({
        "ok": True,
        "directions": {d.value: directions[d] for d in Direction},
        "stopped": session.stopped,
    })


@app.post("/api/save")
def api_save() -> Any:
    body = _body()
    key = body.get("key")
    if not isinstance(key, str) or not key:
        return _error("key required")
    try:
        session = json_to_state(body["state"])
    except KeyError as e:
        return _error(f"missing field: {e}")
    except (TypeError, ValueError) as e:
        return _error(f"bad state: {e}")
    db_store_session(DEFAULT_DB, key, session)
    return jsonify({"ok": True})


@app.post("/api/load")
def api_load() -> Any:
    body = _body()
    key = body.get("key")
    if not isinstance(key, str) or not key:
        return _error("key required")
    session = db_lookup_session(DEFAULT_DB, key)
    if session is None:
        return _error(f"no saved session for key {key!r}", 404)
    return jsonify({"ok": True, "state": state_to_json(session), "stopped": session.stopped})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
