from __future__ import annotations

# Facade module that re-exports the Elevens core functionality.
# The Flask app, tools and tests import from here; single-responsibility
# modules live under elevens_core/*.

from elevens_core.board import (  # noqa: F401
    BOARD_SIZE,
    EVEN_FACES,
    ODD_FACES,
    TARGET_SUM,
    BoardState,
    Coord,
)
from elevens_core.deal import PARTNERS, build_deck, deal_counts, generate_board  # noqa: F401
from elevens_core.hashkey import layout_key  # noqa: F401
from elevens_core.pathfind import (  # noqa: F401
    find_path,
    has_path,
    is_passable_cell,
    is_ring,
    neighbors,
)
from elevens_core.match import MatchFailure, MatchVerdict, evaluate_match  # noqa: F401
from elevens_core.engine import (  # noqa: F401
    SelectionEngine,
    SelectionKind,
    SelectionResult,
    Snapshot,
    board_from_snapshot,
)
from elevens_core.codec import (  # noqa: F401
    board_from_json,
    board_to_json,
    coord_from_json,
    result_to_json,
    snapshot_from_json,
    snapshot_to_json,
)
from elevens_core.db import (  # noqa: F401
    _ensure_db_dir,
    _resolve_db_path,
    db_delete_round,
    db_list_rounds,
    db_load_round,
    db_load_settings,
    db_store_round,
    db_store_setting,
    db_store_settings,
)


def main() -> None:
    # CLI driver delegated to elevens_core.cli
    from elevens_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
