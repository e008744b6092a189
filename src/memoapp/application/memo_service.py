"""
Memo Service
============

Use cases behind every CLI verb. The service combines the pure record
functions with a store; it never formats output and never decides exit
codes.

Not-found is reported as ``None``. Storage failures propagate as
``MemoAppError`` subclasses.
"""

from __future__ import annotations

from typing import Iterable

import structlog

from memoapp.application.config_loader import AppConfig
from memoapp.core.domain.memo import (
    Memo,
    SortOrder,
    create_memo,
    filter_memos_by_tag,
    search_memos,
    sort_memos_by_date,
    update_memo,
)
from memoapp.core.interfaces.memo_store import MemoStoreProtocol
from memoapp.infrastructure.persistence.file_memo_store import FileMemoStore


class MemoService:
    """Orchestrates memo operations against a MemoStoreProtocol."""

    def __init__(self, store: MemoStoreProtocol) -> None:
        self.store = store
        self.logger = structlog.get_logger().bind(component="memo_service")

    async def init(self) -> None:
        await self.store.init()

    async def add_memo(
        self, title: str, content: str, tags: Iterable[str] | None = None
    ) -> Memo:
        memo = create_memo(title, content, tags)
        await self.store.add(memo)
        self.logger.info("memo_added", memo_id=memo.id, tag_count=len(memo.tags))
        return memo

    async def list_memos(
        self, tag: str | None = None, order: SortOrder = SortOrder.DESC
    ) -> list[Memo]:
        """All memos, optionally restricted to one tag, sorted by creation date."""
        memos = await self.store.load_all()
        if tag:
            memos = filter_memos_by_tag(memos, tag)
        return sort_memos_by_date(memos, order)

    async def get_memo(self, memo_id: str) -> Memo | None:
        return await self.store.get(memo_id)

    async def update_memo(
        self,
        memo_id: str,
        *,
        title: str | None = None,
        content: str | None = None,
        tags: Iterable[str] | None = None,
    ) -> Memo | None:
        """Apply the given fields to a stored memo.

        Returns:
            The updated memo, or ``None`` if no memo has this ID.
        """
        memo = await self.store.get(memo_id)
        if memo is None:
            self.logger.info("memo_not_found", memo_id=memo_id, operation="update")
            return None

        updated = update_memo(memo, title=title, content=content, tags=tags)
        if not await self.store.update(updated):
            # Removed by another process between get and update.
            self.logger.warning("memo_vanished_during_update", memo_id=memo_id)
            return None

        self.logger.info("memo_updated", memo_id=memo_id)
        return updated

    async def delete_memo(self, memo_id: str) -> Memo | None:
        """Delete a memo.

        Returns:
            The deleted memo, or ``None`` if no memo has this ID.
        """
        memo = await self.store.get(memo_id)
        if memo is None:
            self.logger.info("memo_not_found", memo_id=memo_id, operation="delete")
            return None

        if not await self.store.delete(memo_id):
            self.logger.warning("memo_vanished_during_delete", memo_id=memo_id)
            return None

        self.logger.info("memo_deleted", memo_id=memo_id)
        return memo

    async def search_memos(self, keyword: str) -> list[Memo]:
        memos = await self.store.load_all()
        return search_memos(memos, keyword)


def create_memo_service(config: AppConfig) -> MemoService:
    """Build a MemoService backed by the JSON document named in ``config``."""
    store = FileMemoStore(
        data_dir=config.storage.data_dir,
        file_name=config.storage.file_name,
    )
    return MemoService(store)
