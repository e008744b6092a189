"""Test configuration and shared fixtures."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import structlog

from memoapp.core.domain.memo import Memo
from memoapp.infrastructure.persistence.file_memo_store import FileMemoStore


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture()
def memo_store(data_dir: Path) -> FileMemoStore:
    """A FileMemoStore pointing at a fresh temp directory (not yet initialized)."""
    return FileMemoStore(data_dir=data_dir, file_name="test-memos.json")


def _make_memo(
    title: str = "Title",
    content: str = "Content",
    tags: list[str] | None = None,
    created_at: datetime | None = None,
    memo_id: str | None = None,
) -> Memo:
    """Build a Memo with a fixed creation time."""
    created = created_at or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)
    memo = Memo(
        title=title,
        content=content,
        tags=list(tags or []),
        created_at=created,
        updated_at=created,
    )
    if memo_id is not None:
        memo.id = memo_id
    return memo


@pytest.fixture()
def memo_factory():
    """Factory for Memo objects with a fixed creation time."""
    return _make_memo


@pytest.fixture()
def dated_memos() -> list[Memo]:
    """Three memos created one hour apart, oldest first."""
    base = datetime(2026, 1, 1, 9, 0, tzinfo=UTC)
    return [
        _make_memo(title=f"Memo {i}", created_at=base + timedelta(hours=i), memo_id=f"m{i}")
        for i in range(1, 4)
    ]
