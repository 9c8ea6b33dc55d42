from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Dict, List, Optional, Tuple

from .board import EVEN_FACES, ODD_FACES, TARGET_SUM, BoardState

logger = logging.getLogger(__name__)

# Each even face is paired only with odd faces it does not sum to 11 with.
PARTNERS: Dict[int, Tuple[int, ...]] = {
    even: tuple(odd for odd in ODD_FACES if even + odd != TARGET_SUM) for even in EVEN_FACES
}
PER_EVEN = 20


def build_deck() -> List[Tuple[int, int]]:
    """Creates the unshuffled 100-tile multiset: 20 per even face, 5 per allowed partner."""
    deck: List[Tuple[int, int]] = []
    for even, odds in PARTNERS.items():
        per_partner = PER_EVEN // len(odds)
        for odd in odds:
            deck.extend([(even, odd)] * per_partner)
    return deck


def generate_board(seed: Optional[int] = None) -> BoardState:
    """Deals a fresh board. The shuffle is the only random step, so a seed fixes the layout."""
    rng = random.Random(seed)
    deck = build_deck()
    rng.shuffle(deck)
    logger.debug('dealt board seed=%s', seed)
    return BoardState.from_pairs(deck)


def deal_counts(board: BoardState) -> Counter:
    """Counts (a_side, b_side) pairs on the board, eliminated faces included."""
    return Counter(board.pairs())
