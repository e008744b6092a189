"""
Domain Models and Business Logic

This package contains the core domain models for memoapp:
- The Memo entity and pure collection functions
- The exception hierarchy shared by every layer
"""

from memoapp.core.domain.errors import (
    ConfigError,
    MemoAppError,
    StorageInitializationError,
    StorageLoadError,
    StorageSaveError,
)
from memoapp.core.domain.memo import (
    Memo,
    SortOrder,
    create_memo,
    filter_memos_by_tag,
    generate_memo_id,
    parse_tags,
    search_memos,
    sort_memos_by_date,
    update_memo,
)

__all__ = [
    "ConfigError",
    "Memo",
    "MemoAppError",
    "SortOrder",
    "StorageInitializationError",
    "StorageLoadError",
    "StorageSaveError",
    "create_memo",
    "filter_memos_by_tag",
    "generate_memo_id",
    "parse_tags",
    "search_memos",
    "sort_memos_by_date",
    "update_memo",
]
