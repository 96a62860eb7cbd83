from __future__ import annotations

# Facade module that re-exports the tilemerge core functionality.
# Kept so the Flask app, the tools and the tests share one import surface.
# Single-responsibility modules live under tilemerge_core/*.

try:
    from .tilemerge_core.board import Block, BlockPool, Board, Point  # type: ignore
    from .tilemerge_core.traversal import (  # type: ignore
        BoardOperation,
        BoardTraversalStrategy,
        CachingBoardTraversalStrategyFactory,
        Direction,
        PointMover,
        parse_direction,
    )
    from .tilemerge_core.merge import (  # type: ignore
        BlockMerger,
        BlockMove,
        DefaultBlockMerger,
        GameBoardOperation,
        MergeListener,
    )
    from .tilemerge_core.game import Game, MoveMap  # type: ignore
    from .tilemerge_core.spawn import random_item, random_item_weighted  # type: ignore
    from .tilemerge_core.state import (  # type: ignore
        BOARD_COLUMN_COUNT,
        BOARD_ROW_COUNT,
        INITIAL_BLOCK_COUNT,
        SPAWNED_VALUES,
        SPAWNED_WEIGHTS,
        GameSession,
        MoveOutcome,
    )
    from .tilemerge_core.db import (  # type: ignore
        _ensure_db_dir,
        _resolve_db_path,
        db_delete_session,
        db_lookup_session,
        db_store_session,
    )
except ImportError:
    from tilemerge_core.board import Block, BlockPool, Board, Point  # type: ignore
    from tilemerge_core.traversal import (  # type: ignore
        BoardOperation,
        BoardTraversalStrategy,
        CachingBoardTraversalStrategyFactory,
        Direction,
        PointMover,
        parse_direction,
    )
    from tilemerge_core.merge import (  # type: ignore
        BlockMerger,
        BlockMove,
        DefaultBlockMerger,
        GameBoardOperation,
        MergeListener,
    )
    from tilemerge_core.game import Game, MoveMap  # type: ignore
    from tilemerge_core.spawn import random_item, random_item_weighted  # type: ignore
    from tilemerge_core.state import (  # type: ignore
        BOARD_COLUMN_COUNT,
        BOARD_ROW_COUNT,
        INITIAL_BLOCK_COUNT,
        SPAWNED_VALUES,
        SPAWNED_WEIGHTS,
        GameSession,
        MoveOutcome,
    )
    from tilemerge_core.db import (  # type: ignore
        _ensure_db_dir,
        _resolve_db_path,
        db_delete_session,
        db_lookup_session,
        db_store_session,
    )


def main() -> None:
    # CLI driver delegated to tilemerge_core.cli
    try:
        from .tilemerge_core.cli import main as _main  # type: ignore
    except ImportError:
        from tilemerge_core.cli import main as _main  # type: ignore
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
