from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .board import TARGET_SUM, BoardState, Coord
from .pathfind import find_path

logger = logging.getLogger(__name__)


class MatchFailure(str, Enum):
    SUM_MISMATCH = 'sum_mismatch'
    NO_PATH = 'no_path'


@dataclass(frozen=True)
class MatchVerdict:
    success: bool
    path: Optional[List[Coord]] = None
    reason: Optional[MatchFailure] = None


def evaluate_match(board: BoardState, pos1: Coord, pos2: Coord) -> MatchVerdict:
    """Checks the value sum first, then looks for a route through eliminated tiles."""
    v1 = board.upward_value(pos1)
    v2 = board.upward_value(pos2)
    if v1 + v2 != TARGET_SUM:
        logger.debug('no match %s+%s: %d + %d != %d', pos1, pos2, v1, v2, TARGET_SUM)
        return MatchVerdict(success=False, reason=MatchFailure.SUM_MISMATCH)
    path = find_path(pos1, pos2, board.is_eliminated)
    if path is None:
        logger.debug('no match %s+%s: no path', pos1, pos2)
        return MatchVerdict(success=False, reason=MatchFailure.NO_PATH)
    return MatchVerdict(success=True, path=path)
