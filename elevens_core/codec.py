from __future__ import annotations

from collections import OrderedDict
from typing import Any, Dict, List, Optional

from .board import BoardState, Coord
from .engine import SelectionResult, Snapshot, board_from_snapshot


def _coord_to_json(c: Optional[Coord]) -> Optional[List[int]]:
    if c is None:
        return None
    return [int(c[0]), int(c[1])]


def coord_from_json(obj: Any) -> Coord:
    """Parses [r, c] into a coordinate. Raises ValueError for anything else."""
    try:
        r, c = obj
        return (int(r), int(c))
    except (TypeError, ValueError) as e:
        raise ValueError(f'bad coordinate: {obj!r}') from e


def snapshot_to_json(snapshot: Snapshot) -> List[Dict[str, Any]]:
    return [
        {
            "row": int(r),
            "col": int(c),
            "aSide": int(tile["aSide"]),
            "bSide": int(tile["bSide"]),
            "orientation": bool(tile["orientation"]),
        }
        for (r, c), tile in snapshot.items()
    ]


def snapshot_from_json(items: Any) -> Snapshot:
    if not isinstance(items, list):
        raise ValueError('tiles must be a list')
    out: Snapshot = OrderedDict()
    for item in items:
        if not isinstance(item, dict):
            raise ValueError(f'bad tile: {item!r}')
        try:
            coord = (int(item["row"]), int(item["col"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f'bad tile coordinate: {item!r}') from e
        out[coord] = {
            "aSide": item.get("aSide"),
            "bSide": item.get("bSide"),
            "orientation": bool(item.get("orientation", True)),
        }
    return out


def board_to_json(b: BoardState) -> Dict[str, Any]:
    tiles = []
    for coord in b.coords():
        a_side, b_side = b.faces(coord)
        tiles.append({
            "row": coord[0],
            "col": coord[1],
            "aSide": a_side,
            "bSide": b_side,
            "orientation": b.shows_a_side(coord),
        })
    return {"tiles": tiles, "aSideUp": bool(b.a_side_up)}


def board_from_json(obj: Any) -> BoardState:
    if not isinstance(obj, dict):
        raise ValueError('board must be an object')
    a_side_up = obj.get("aSideUp")
    return board_from_snapshot(
        snapshot_from_json(obj.get("tiles")),
        None if a_side_up is None else bool(a_side_up),
    )


def result_to_json(res: SelectionResult) -> Dict[str, Any]:
    return {
        "kind": res.kind.value,
        "pos1": _coord_to_json(res.pos1),
        "pos2": _coord_to_json(res.pos2),
        "path": [_coord_to_json(p) for p in res.path] if res.path is not None else None,
        "reason": res.reason.value if res.reason is not None else None,
    }
