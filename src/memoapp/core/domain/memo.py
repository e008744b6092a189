"""Memo domain model and pure collection functions.

Nothing in this module touches the file system. Every function takes a
collection and returns a new one; inputs are never mutated.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Iterable
from uuid import uuid4

from memoapp.core.utils.time import parse_timestamp, utc_now


class SortOrder(str, Enum):
    """Ordering for date sorts."""

    ASC = "asc"
    DESC = "desc"


def generate_memo_id() -> str:
    """Return a new memo id: ``memo_<epoch-ms>_<random suffix>``."""
    return f"memo_{time.time_ns() // 1_000_000}_{uuid4().hex[:9]}"


@dataclass
class Memo:
    """A single memo record."""

    title: str
    content: str
    tags: list[str] = field(default_factory=list)
    id: str = field(default_factory=generate_memo_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        # A new memo has not been edited yet
        if self.updated_at is None:
            self.updated_at = self.created_at

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted JSON shape."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Memo:
        """Build a Memo from its persisted JSON shape.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a field has the wrong type or a timestamp is invalid.
        """
        for key in ("id", "title", "content"):
            if not isinstance(data[key], str):
                raise ValueError(f"Invalid {key} for memo {data.get('id')!r}")
        tags = data.get("tags", [])
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ValueError(f"Invalid tags for memo {data.get('id')!r}")
        return cls(
            id=data["id"],
            title=data["title"],
            content=data["content"],
            tags=list(tags),
            created_at=parse_timestamp(data["createdAt"]),
            updated_at=parse_timestamp(data["updatedAt"]),
        )


def create_memo(title: str, content: str, tags: Iterable[str] | None = None) -> Memo:
    """Create a new memo with a fresh id and matching timestamps."""
    now = utc_now()
    return Memo(
        title=title,
        content=content,
        tags=list(tags or []),
        created_at=now,
        updated_at=now,
    )


def update_memo(
    memo: Memo,
    *,
    title: str | None = None,
    content: str | None = None,
    tags: Iterable[str] | None = None,
) -> Memo:
    """Return a copy of ``memo`` with the given fields replaced.

    Fields left as ``None`` keep their current value. The id and
    ``created_at`` never change, and ``updated_at`` never moves backwards.
    """
    changes: dict[str, Any] = {}
    if title is not None:
        changes["title"] = title
    if content is not None:
        changes["content"] = content
    changes["tags"] = list(tags) if tags is not None else list(memo.tags)
    changes["updated_at"] = max(utc_now(), memo.updated_at)
    return replace(memo, **changes)


def search_memos(memos: Iterable[Memo], keyword: str) -> list[Memo]:
    """Case-insensitive substring search over title, content and tags."""
    needle = keyword.lower()
    return [
        memo
        for memo in memos
        if needle in memo.title.lower()
        or needle in memo.content.lower()
        or any(needle in tag.lower() for tag in memo.tags)
    ]


def filter_memos_by_tag(memos: Iterable[Memo], tag: str) -> list[Memo]:
    """Keep memos whose tag list contains ``tag`` exactly (case-sensitive)."""
    return [memo for memo in memos if tag in memo.tags]


def sort_memos_by_date(
    memos: Iterable[Memo], order: SortOrder | str = SortOrder.DESC
) -> list[Memo]:
    """Stable sort by ``created_at``. Newest first unless ``order`` is ASC."""
    order = SortOrder(order)
    return sorted(memos, key=lambda m: m.created_at, reverse=order is SortOrder.DESC)


def parse_tags(raw: str | None) -> list[str]:
    """Split a comma-separated tag list from the command line.

    Whitespace around each tag is stripped and empty segments are dropped.
    Duplicates are kept in order.
    """
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]
