from __future__ import annotations

import json
import logging
import os
import sqlite3
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from .board import BoardState
from .codec import board_from_json, board_to_json
from .hashkey import layout_key

logger = logging.getLogger(__name__)

SETTING_DEFAULTS: Dict[str, float] = {
    'bgm_volume': 1.0,
    'sfx_volume': 1.0,
}


def _ensure_db_dir(db_path: str) -> None:
    """Ensures the directory for the SQLite DB exists before connecting."""
    directory = os.path.dirname(db_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def _resolve_db_path(db_path: str) -> str:
    """Resolves a potentially unwritable DB path to a writable one, creating the directory if needed."""
    try:
        _ensure_db_dir(db_path)
        return db_path
    except PermissionError:
        pass
    candidates = [
        os.getenv('ELEVENS_DB_DIR'),
        os.path.join(os.getcwd(), 'data'),
        '/tmp',
    ]
    base = os.path.basename(db_path) or 'elevens.db'
    for d in candidates:
        if not d:
            continue
        try:
            os.makedirs(d, exist_ok=True)
            logger.warning('db path %s not writable, using %s', db_path, d)
            return os.path.join(d, base)
        except OSError:
            continue
    # Last resort: current working directory
    return base


def _ensure_db(conn: sqlite3.Connection) -> None:
    """Ensures the tables for saved rounds and settings exist."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS rounds (
            slot TEXT PRIMARY KEY,
            layout_key TEXT NOT NULL,
            seed INTEGER,
            tiles TEXT NOT NULL,
            a_side_up INTEGER NOT NULL,
            saved_at TEXT NOT NULL
        )
        """
    )
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS settings (
            name TEXT PRIMARY KEY,
            value REAL NOT NULL
        )
        """
    )
    conn.commit()


def _connect(db_path: str) -> sqlite3.Connection:
    resolved = _resolve_db_path(db_path)
    _ensure_db_dir(resolved)
    conn = sqlite3.connect(resolved)
    _ensure_db(conn)
    return conn


def db_store_round(db_path: str, slot: str, board: BoardState, seed: Optional[int] = None) -> str:
    """Saves a board snapshot under a slot name, replacing any earlier save. Returns its layout key."""
    key = layout_key(board)
    payload = board_to_json(board)
    conn = _connect(db_path)
    try:
        conn.execute(
            """
            INSERT OR REPLACE INTO rounds (slot, layout_key, seed, tiles, a_side_up, saved_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                slot,
                key,
                seed,
                json.dumps(payload["tiles"]),
                1 if payload["aSideUp"] else 0,
                datetime.now(timezone.utc).isoformat(timespec='seconds'),
            ),
        )
        conn.commit()
    finally:
        conn.close()
    logger.info('saved round slot=%s key=%s', slot, key)
    return key


def db_load_round(db_path: str, slot: str) -> Optional[BoardState]:
    """Loads a saved board, or None if the slot is empty. Raises ValueError on a corrupt row."""
    conn = _connect(db_path)
    try:
        row = conn.execute("SELECT tiles, a_side_up FROM rounds WHERE slot = ?", (slot,)).fetchone()
    finally:
        conn.close()
    if not row:
        return None
    tiles_json, a_side_up = row
    try:
        tiles = json.loads(tiles_json)
    except json.JSONDecodeError as e:
        raise ValueError(f'corrupt save in slot {slot!r}: {e}') from e
    board = board_from_json({"tiles": tiles, "aSideUp": bool(a_side_up)})
    logger.info('loaded round slot=%s', slot)
    return board


def db_delete_round(db_path: str, slot: str) -> bool:
    conn = _connect(db_path)
    try:
        cur = conn.execute("DELETE FROM rounds WHERE slot = ?", (slot,))
        conn.commit()
        return cur.rowcount > 0
    finally:
        conn.close()


def db_list_rounds(db_path: str) -> List[Tuple[str, str, Optional[int], str]]:
    """Lists saved rounds as (slot, layout_key, seed, saved_at), newest first."""
    conn = _connect(db_path)
    try:
        cur = conn.execute("SELECT slot, layout_key, seed, saved_at FROM rounds ORDER BY saved_at DESC, slot")
        return [(str(s), str(k), (int(seed) if seed is not None else None), str(t)) for s, k, seed, t in cur.fetchall()]
    finally:
        conn.close()


def db_store_setting(db_path: str, name: str, value: float) -> float:
    """Stores a volume setting clamped to [0, 1]. Unknown names raise ValueError."""
    return db_store_settings(db_path, {name: value})[name]


def _clamp_setting(name: str, value: float) -> float:
    if name not in SETTING_DEFAULTS:
        raise ValueError(f'unknown setting: {name}')
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f'{name} must be a number')
    return min(1.0, max(0.0, float(value)))


def db_store_settings(db_path: str, values: Dict[str, float]) -> Dict[str, float]:
    """
    Stores several volume settings in one transaction. Every name and value is
    checked before anything is written, so a bad entry leaves the table untouched.
    """
    clamped = {name: _clamp_setting(name, value) for name, value in values.items()}
    conn = _connect(db_path)
    try:
        with conn:
            conn.executemany(
                "INSERT OR REPLACE INTO settings (name, value) VALUES (?, ?)",
                list(clamped.items()),
            )
    finally:
        conn.close()
    return clamped


def db_load_settings(db_path: str) -> Dict[str, float]:
    settings = dict(SETTING_DEFAULTS)
    conn = _connect(db_path)
    try:
        for name, value in conn.execute("SELECT name, value FROM settings"):
            if name in settings:
                settings[name] = float(value)
    finally:
        conn.close()
    return settings
