from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set

from .board import BOARD_SIZE, EVEN_FACES, ODD_FACES, TARGET_SUM, BoardState, Coord
from .deal import generate_board
from .match import MatchFailure, evaluate_match

logger = logging.getLogger(__name__)

Snapshot = Dict[Coord, Dict[str, Any]]


class SelectionKind(str, Enum):
    IGNORED = 'ignored'
    FIRST_SELECTED = 'first_selected'
    DESELECTED = 'deselected'
    MATCH_SUCCESS = 'match_success'
    MATCH_FAILED = 'match_failed'


@dataclass(frozen=True)
class SelectionResult:
    kind: SelectionKind
    pos1: Optional[Coord] = None
    pos2: Optional[Coord] = None
    path: Optional[List[Coord]] = None
    reason: Optional[MatchFailure] = None


IGNORED = SelectionResult(SelectionKind.IGNORED)


class SelectionEngine:
    """Owns one round's BoardState and turns tile clicks into selections and matches.

    The engine is either idle or holds exactly one selected tile. A second click on a
    different tile always ends in a match attempt and returns the engine to idle.
    """

    def __init__(self, board: Optional[BoardState] = None, seed: Optional[int] = None,
                 listener: Optional[Callable[[SelectionResult], None]] = None) -> None:
        self.listener = listener
        self._board: Optional[BoardState] = None
        self._selected: Optional[Coord] = None
        if board is not None:
            self._board = board
        else:
            self.initialize(seed)

    # ----- lifecycle -----

    def initialize(self, seed: Optional[int] = None) -> BoardState:
        """Deals a new round and returns to the idle state."""
        self._board = generate_board(seed)
        self._selected = None
        logger.info('new round seed=%s', seed)
        return self._board

    def reset(self, seed: Optional[int] = None) -> BoardState:
        return self.initialize(seed)

    def dispose(self) -> None:
        self._board = None
        self._selected = None

    @property
    def board(self) -> Optional[BoardState]:
        return self._board

    @property
    def selected(self) -> Optional[Coord]:
        return self._selected

    # ----- queries -----

    def upward_value(self, pos: Coord) -> int:
        if self._board is None:
            return 0
        return self._board.upward_value(pos)

    def is_round_complete(self) -> bool:
        return self._board is not None and self._board.is_cleared()

    # ----- selection -----

    def select(self, pos: Coord) -> SelectionResult:
        board = self._board
        if board is None or not board.in_bounds(pos) or board.is_eliminated(pos):
            return IGNORED
        if pos == self._selected:
            self.deselect(pos)
            return self._emit(SelectionResult(SelectionKind.DESELECTED, pos1=pos))
        if self._selected is None:
            board.set_selected(pos, True)
            self._selected = pos
            logger.debug('selected %s value=%d', pos, board.upward_value(pos))
            return self._emit(SelectionResult(SelectionKind.FIRST_SELECTED, pos1=pos))

        prev = self._selected
        verdict = evaluate_match(board, prev, pos)
        if verdict.success:
            board.eliminate_upward(prev)
            board.eliminate_upward(pos)
        board.set_selected(prev, False)
        board.set_selected(pos, False)
        self._selected = None
        if verdict.success:
            logger.debug('matched %s and %s via %d cells', prev, pos, len(verdict.path or []))
            return self._emit(SelectionResult(SelectionKind.MATCH_SUCCESS, pos1=prev, pos2=pos, path=verdict.path))
        return self._emit(SelectionResult(SelectionKind.MATCH_FAILED, pos1=prev, pos2=pos, reason=verdict.reason))

    def deselect(self, pos: Coord) -> bool:
        if self._board is None or self._selected is None or pos != self._selected:
            return False
        self._board.set_selected(pos, False)
        self._selected = None
        logger.debug('deselected %s', pos)
        return True

    # ----- orientation -----

    def flip_all(self, show_a_side: bool) -> Set[Coord]:
        """Turns every unselected tile to the requested face. Face values are untouched."""
        board = self._board
        if board is None:
            return set()
        board.a_side_up = bool(show_a_side)
        flipped = {coord for coord in board.coords() if board.set_orientation(coord, bool(show_a_side))}
        logger.debug('flipped %d tiles to %s-side', len(flipped), 'A' if show_a_side else 'B')
        return flipped

    def toggle_flip(self) -> Set[Coord]:
        if self._board is None:
            return set()
        return self.flip_all(not self._board.a_side_up)

    # ----- snapshots -----

    def snapshot(self) -> Snapshot:
        """Row-major mapping of coordinate to faces and orientation, for persistence."""
        out: Snapshot = OrderedDict()
        if self._board is None:
            return out
        for coord in self._board.coords():
            a_side, b_side = self._board.faces(coord)
            out[coord] = {'aSide': a_side, 'bSide': b_side, 'orientation': self._board.shows_a_side(coord)}
        return out

    def restore(self, snapshot: Snapshot, a_side_up: Optional[bool] = None) -> BoardState:
        """Replaces the board with a snapshot's contents; any selection is dropped."""
        self._board = board_from_snapshot(snapshot, a_side_up)
        self._selected = None
        return self._board

    def _emit(self, result: SelectionResult) -> SelectionResult:
        if self.listener is not None:
            self.listener(result)
        return result


def _check_face(value: Any, allowed: tuple, coord: Coord, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or (value != 0 and value not in allowed):
        raise ValueError(f'bad {name} at {coord}: {value!r}')
    return value


def board_from_snapshot(snapshot: Snapshot, a_side_up: Optional[bool] = None) -> BoardState:
    """Builds a BoardState from a snapshot mapping. Raises ValueError on malformed input."""
    total = BOARD_SIZE * BOARD_SIZE
    if len(snapshot) != total:
        raise ValueError(f'snapshot needs {total} tiles, got {len(snapshot)}')
    a_sides = [0] * total
    b_sides = [0] * total
    a_up = [True] * total
    seen: Set[Coord] = set()
    for key, tile in snapshot.items():
        try:
            r, c = int(key[0]), int(key[1])
        except (TypeError, ValueError, IndexError):
            raise ValueError(f'bad coordinate: {key!r}')
        if not isinstance(tile, dict):
            raise ValueError(f'bad tile at {key!r}: {tile!r}')
        if not (0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE):
            raise ValueError(f'coordinate out of range: {key}')
        if (r, c) in seen:
            raise ValueError(f'duplicate coordinate: {key}')
        seen.add((r, c))
        i = r * BOARD_SIZE + c
        a_sides[i] = _check_face(tile.get('aSide'), EVEN_FACES, (r, c), 'aSide')
        b_sides[i] = _check_face(tile.get('bSide'), ODD_FACES, (r, c), 'bSide')
        if a_sides[i] and b_sides[i] and a_sides[i] + b_sides[i] == TARGET_SUM:
            raise ValueError(f'tile at {(r, c)} already sums to {TARGET_SUM}')
        a_up[i] = bool(tile.get('orientation', True))
    if a_side_up is None:
        # Only selected tiles can disagree with the last flip, so the majority tells.
        a_side_up = sum(a_up) * 2 >= total
    return BoardState(a_sides=a_sides, b_sides=b_sides, a_up=a_up, a_side_up=bool(a_side_up))
