from __future__ import annotations

import argparse
from typing import Optional

from .board import Coord
from .config import DEFAULT_SLOT, db_path, setup_logging
from .db import db_load_round, db_store_round
from .engine import SelectionEngine, SelectionKind
from .hashkey import layout_key


def _parse_coord(text: str) -> Optional[Coord]:
    sep = ',' if ',' in text else ' '
    parts = [t for t in text.split(sep) if t != '']
    if len(parts) != 2:
        return None
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError:
        return None


def main() -> None:
    parser = argparse.ArgumentParser(description='Elevens: clear tile pairs that sum to 11')
    parser.add_argument('--db', default=None, help='SQLite DB file path for saves')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for deal')
    parser.add_argument('--slot', default=DEFAULT_SLOT, help='Save slot name')
    parser.add_argument('--resume', action='store_true', help='Resume the round saved in --slot')
    parser.add_argument('--play', action='store_true', help='Play interactively')
    parser.add_argument('--log-level', default=None, help='DEBUG, INFO, WARNING or ERROR')
    args = parser.parse_args()

    setup_logging(args.log_level)
    db = args.db or db_path()

    engine = SelectionEngine(seed=args.seed)
    if args.resume:
        board = db_load_round(db, args.slot)
        if board is None:
            print(f'No saved round in slot {args.slot!r}; dealing a new one.')
        else:
            engine = SelectionEngine(board=board)

    assert engine.board is not None
    print(f'Layout {layout_key(engine.board)}')
    print(engine.board.pretty())
    if not args.play:
        return

    print('Commands: "r c" select, "f" flip, "s" save, "q" quit.')
    while not engine.is_round_complete():
        text = input('> ').strip().lower()
        if text == 'q':
            break
        if text == 'f':
            flipped = engine.toggle_flip()
            side = 'A' if engine.board.a_side_up else 'B'
            print(f'Flipped {len(flipped)} tiles to {side}-side')
            print(engine.board.pretty())
            continue
        if text == 's':
            key = db_store_round(db, args.slot, engine.board, seed=args.seed)
            print(f'Saved to slot {args.slot!r} ({key})')
            continue
        pos = _parse_coord(text)
        if pos is None:
            print('Could not parse. Try again.')
            continue
        res = engine.select(pos)
        if res.kind == SelectionKind.IGNORED:
            print('Nothing to select there.')
            continue
        if res.kind == SelectionKind.MATCH_SUCCESS:
            print(f'Match! {res.pos1} + {res.pos2}')
            print(engine.board.pretty(set(res.path or [])))
        elif res.kind == SelectionKind.MATCH_FAILED:
            reason = res.reason.value if res.reason is not None else 'unknown'
            print(f'No match ({reason}).')
            print(engine.board.pretty())
        else:
            print(engine.board.pretty())
    if engine.is_round_complete():
        print('Board cleared!')
