from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Set

from .board import BOARD_SIZE, Coord

Passable = Callable[[Coord], bool]

# The search grid is the board plus one ring of virtual cells on every side.
MIN_INDEX = -1
MAX_INDEX = BOARD_SIZE

# up, down, left, right
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def neighbors(coord: Coord) -> List[Coord]:
    """Gets the orthogonal neighbors of a coordinate (no wrap-around)."""
    r, c = coord
    return [(r + dr, c + dc) for dr, dc in DIRECTIONS]


def in_search_grid(coord: Coord) -> bool:
    r, c = coord
    return MIN_INDEX <= r <= MAX_INDEX and MIN_INDEX <= c <= MAX_INDEX


def is_ring(coord: Coord) -> bool:
    """True for the virtual border cells just outside the board."""
    r, c = coord
    return in_search_grid(coord) and (r in (MIN_INDEX, MAX_INDEX) or c in (MIN_INDEX, MAX_INDEX))


def is_passable_cell(coord: Coord, passable: Passable) -> bool:
    if not in_search_grid(coord):
        return False
    if is_ring(coord):
        return True
    return bool(passable(coord))


def _search(start: Coord, end: Coord, passable: Passable,
            parent: Optional[Dict[Coord, Coord]] = None) -> bool:
    """
    Breadth First Search from start, stopping as soon as end shows up as a neighbor.
    The endpoints never need to be passable themselves. When parent is given it is
    filled with back-pointers for every discovered cell.
    """
    if start == end:
        return False
    visited: Set[Coord] = {start}
    queue: Deque[Coord] = deque([start])
    while queue:
        current = queue.popleft()
        for nxt in neighbors(current):
            if nxt in visited:
                continue
            if nxt == end:
                if parent is not None:
                    parent[nxt] = current
                return True
            if is_passable_cell(nxt, passable):
                visited.add(nxt)
                if parent is not None:
                    parent[nxt] = current
                queue.append(nxt)
    return False


def has_path(start: Coord, end: Coord, passable: Passable) -> bool:
    """Checks whether start and end are connected through passable cells or the border ring."""
    return _search(start, end, passable)


def find_path(start: Coord, end: Coord, passable: Passable) -> Optional[List[Coord]]:
    """Finds a shortest connecting route, both endpoints included, or None."""
    parent: Dict[Coord, Coord] = {}
    if not _search(start, end, passable, parent):
        return None
    path: List[Coord] = [end]
    node = end
    while node != start:
        node = parent[node]
        path.append(node)
    path.reverse()
    return path
