from __future__ import annotations

from typing import Tuple

from .board import BoardState


def _pair64(left: int, right: int) -> int:
    if left >= right:
        return (left * left) + left + right
    else:
        return left + (right * right)


def _mix64(value: int) -> int:
    value = (value + 0x9e3779b97f4a7c15) & 0xFFFFFFFFFFFFFFFF
    value ^= (value >> 30)
    value = (value * 0xbf58476d1ce4e5b9) & 0xFFFFFFFFFFFFFFFF
    value ^= (value >> 27)
    value = (value * 0x94d049bb133111eb) & 0xFFFFFFFFFFFFFFFF
    value ^= (value >> 31)
    return value & 0xFFFFFFFFFFFFFFFF


def _hash64(vals: Tuple[int, ...]) -> int:
    h = 0
    for v in vals:
        h = _pair64(h, v & 0xFFFFFFFFFFFFFFFF) & 0xFFFFFFFFFFFFFFFF
    return _mix64(h)


def _tile_code(a_side: int, b_side: int) -> int:
    # Both faces fit in 4 bits each (0..10).
    return (a_side << 4) | b_side


def layout_key(board: BoardState) -> str:
    """64-bit hex digest of the face values in row-major order. Orientation is not included."""
    vals = tuple(_tile_code(a, b) for a, b in board.pairs())
    return f"{_hash64(vals):016x}"
