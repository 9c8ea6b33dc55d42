from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from the repo root
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from elevens_core.config import DEFAULT_SLOT, db_path, setup_logging  # noqa: E402
from game import (  # noqa: E402
    BoardState,
    SelectionEngine,
    SelectionKind,
    board_from_json,
    board_to_json,
    coord_from_json,
    db_list_rounds,
    db_load_round,
    db_load_settings,
    db_store_round,
    db_store_settings,
    find_path,
    layout_key,
    result_to_json,
)

logger = logging.getLogger(__name__)

DEFAULT_DB = db_path()

app = Flask(__name__)


# ---------- State (de)serialization ----------

def state_to_json(engine: SelectionEngine) -> Dict[str, Any]:
    board = engine.board
    assert board is not None
    out = board_to_json(board)
    sel = engine.selected
    out["selected"] = [sel[0], sel[1]] if sel is not None else None
    out["complete"] = engine.is_round_complete()
    out["layoutKey"] = layout_key(board)
    return out


def json_to_engine(obj: Any) -> SelectionEngine:
    """Rebuilds an engine from the state a client sent back. Raises ValueError if malformed."""
    board = board_from_json(obj)
    engine = SelectionEngine(board=board)
    sel = obj.get("selected")
    if sel is not None:
        # Selection locks orientation, so the cursor tile keeps its own face here.
        if engine.select(coord_from_json(sel)).kind != SelectionKind.FIRST_SELECTED:
            raise ValueError(f"cannot select {sel!r}")
    return engine


def _bad_request(msg: str) -> Tuple[Any, int]:
    logger.warning("bad request: %s", msg)
    return jsonify({"ok": False, "error": msg}), 400


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _engine_from_body(body: Dict[str, Any]) -> SelectionEngine:
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        raise ValueError("state required")
    return json_to_engine(s_in)


def _db() -> str:
    return str(app.config.get("ELEVENS_DB", DEFAULT_DB))


# ---------- Core Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    seed = body.get("seed", None)
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        return _bad_request("seed must be an integer")
    engine = SelectionEngine(seed=seed)
    return jsonify({"ok": True, "seed": seed, "state": state_to_json(engine)})


@app.post("/api/select")
def api_select() -> Any:
    body = _body()
    try:
        engine = _engine_from_body(body)
        pos = coord_from_json(body.get("pos"))
    except ValueError as e:
        return _bad_request(f"bad state: {e}")
    res = engine.select(pos)
    return jsonify({"ok": True, "result": result_to_json(res), "state": state_to_json(engine)})


@app.post("/api/deselect")
def api_deselect() -> Any:
    body = _body()
    try:
        engine = _engine_from_body(body)
        pos = coord_from_json(body.get("pos"))
    except ValueError as e:
        return _bad_request(f"bad state: {e}")
    done = engine.deselect(pos)
    return jsonify({"ok": True, "deselected": done, "state": state_to_json(engine)})


@app.post("/api/flip")
def api_flip() -> Any:
    body = _body()
    try:
        engine = _engine_from_body(body)
    except ValueError as e:
        return _bad_request(f"bad state: {e}")
    show = body.get("showASide", None)
    if show is not None and not isinstance(show, bool):
        return _bad_request("showASide must be a boolean")
    flipped = engine.toggle_flip() if show is None else engine.flip_all(show)
    return jsonify({
        "ok": True,
        "flipped": [[r, c] for (r, c) in sorted(flipped)],
        "state": state_to_json(engine),
    })


@app.post("/api/path")
def api_path() -> Any:
    body = _body()
    try:
        engine = _engine_from_body(body)
        start = coord_from_json(body.get("from"))
        end = coord_from_json(body.get("to"))
    except ValueError as e:
        return _bad_request(f"bad state: {e}")
    board = engine.board
    assert board is not None
    path = find_path(start, end, board.is_eliminated)
    return jsonify({"ok": True, "path": [[r, c] for (r, c) in path] if path is not None else None})


# ---------- Saves and settings ----------

@app.post("/api/save")
def api_save() -> Any:
    body = _body()
    try:
        engine = _engine_from_body(body)
    except ValueError as e:
        return _bad_request(f"bad state: {e}")
    slot = str(body.get("slot") or DEFAULT_SLOT)
    board: Optional[BoardState] = engine.board
    assert board is not None
    key = db_store_round(_db(), slot, board)
    return jsonify({"ok": True, "slot": slot, "layoutKey": key})


@app.post("/api/load")
def api_load() -> Any:
    body = _body()
    slot = str(body.get("slot") or DEFAULT_SLOT)
    try:
        board = db_load_round(_db(), slot)
    except ValueError as e:
        return jsonify({"ok": False, "error": str(e)}), 500
    if board is None:
        return jsonify({"ok": False, "error": f"no saved round in slot {slot!r}"}), 404
    return jsonify({"ok": True, "slot": slot, "state": state_to_json(SelectionEngine(board=board))})


@app.get("/api/slots")
def api_slots() -> Any:
    rows = db_list_rounds(_db())
    return jsonify({
        "ok": True,
        "slots": [{"slot": s, "layoutKey": k, "seed": seed, "savedAt": t} for s, k, seed, t in rows],
    })


@app.route("/api/settings", methods=["GET", "POST"])
def api_settings() -> Any:
    db = _db()
    if request.method == "POST":
        body = _body()
        try:
            db_store_settings(db, dict(body))
        except ValueError as e:
            return _bad_request(str(e))
    return jsonify({"ok": True, "settings": db_load_settings(db)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    setup_logging()
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    port = int(os.getenv("PORT", "5000"))
    app.run(host="127.0.0.1", port=port, debug=debug)
