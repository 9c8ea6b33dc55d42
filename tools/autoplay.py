from __future__ import annotations

import argparse
import os
import sys
import time
from typing import List, Optional, Tuple

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from game import BOARD_SIZE, TARGET_SUM, Coord, SelectionEngine, SelectionKind, has_path  # type: ignore  # noqa: E402


def find_any_match(engine: SelectionEngine) -> Optional[Tuple[Coord, Coord]]:
    """Scans the shown faces for one connectable pair summing to 11."""
    board = engine.board
    assert board is not None
    live: List[Coord] = [c for c in board.coords() if not board.is_eliminated(c)]
    for i, a in enumerate(live):
        va = board.upward_value(a)
        for b in live[i + 1:]:
            if va + board.upward_value(b) != TARGET_SUM:
                continue
            if has_path(a, b, board.is_eliminated):
                return a, b
    return None


def play_greedy(seed: Optional[int]) -> Tuple[int, int]:
    """Plays one round taking the first match found on either side. Returns (matches, faces left)."""
    engine = SelectionEngine(seed=seed)
    matches = 0
    progress = True
    while progress and not engine.is_round_complete():
        progress = False
        for side in (True, False):
            engine.flip_all(side)
            while True:
                pair = find_any_match(engine)
                if pair is None:
                    break
                engine.select(pair[0])
                res = engine.select(pair[1])
                if res.kind != SelectionKind.MATCH_SUCCESS:
                    raise RuntimeError(f'expected a match for {pair}, got {res.kind.value}')
                matches += 1
                progress = True
    assert engine.board is not None
    return matches, engine.board.remaining_faces()


def main() -> None:
    ap = argparse.ArgumentParser(description='Greedy self-play over seeded Elevens boards')
    ap.add_argument('--seeds', type=int, default=20, help='Number of seeds to play (0..N-1)')
    args = ap.parse_args()

    total_faces = 2 * BOARD_SIZE * BOARD_SIZE
    cleared = 0
    t0 = time.time()
    for seed in range(args.seeds):
        matches, left = play_greedy(seed)
        if left == 0:
            cleared += 1
        print(f'seed={seed} matches={matches} faces_left={left}/{total_faces}')
    took = int((time.time() - t0) * 1000)
    print(f'Played {args.seeds} seeds in {took}ms, fully cleared={cleared}')


if __name__ == '__main__':
    main()
