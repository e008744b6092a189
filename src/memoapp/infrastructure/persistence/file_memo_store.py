"""
File-Based Memo Store

This module provides a file-based implementation of the MemoStoreProtocol.
The whole collection lives in one JSON document:
{data_dir}/{file_name}  (default: ./data/memos.json)

The document is a JSON array of memo objects with ISO-8601 timestamps.
Every public operation follows the same cycle:
- Load the full document (async read via aiofiles)
- Mutate the list in memory
- Save the full document (temp file, then rename)

There is no locking between the read and the write. Two processes working
on the same document race and the last writer wins.
"""

from __future__ import annotations

import json
from pathlib import Path

import aiofiles
import structlog

from memoapp.core.domain.errors import (
    StorageInitializationError,
    StorageLoadError,
    StorageSaveError,
)
from memoapp.core.domain.memo import Memo
from memoapp.core.interfaces.memo_store import MemoStoreProtocol

DEFAULT_DATA_DIR = Path("data")
DEFAULT_FILE_NAME = "memos.json"


class FileMemoStore(MemoStoreProtocol):
    """
    JSON document persistence implementing MemoStoreProtocol.

    Example:
        >>> store = FileMemoStore(data_dir="./data", file_name="memos.json")
        >>> await store.init()
        >>> await store.add(create_memo("Title", "Body", ["work"]))
        >>> memos = await store.load_all()
    """

    def __init__(
        self,
        data_dir: str | Path = DEFAULT_DATA_DIR,
        file_name: str = DEFAULT_FILE_NAME,
    ) -> None:
        """
        Initialize FileMemoStore. No I/O happens until ``init`` is awaited.

        Args:
            data_dir: Directory holding the document
            file_name: Name of the JSON document inside ``data_dir``
        """
        self.data_dir = Path(data_dir)
        self.file_name = file_name
        self._file = self.data_dir / file_name
        self.logger = structlog.get_logger().bind(component="file_memo_store")

    @property
    def path(self) -> Path:
        """Location of the JSON document."""
        return self._file

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    async def init(self) -> None:
        """
        Ensure the data directory and the document exist.

        Idempotent: an existing document is left untouched.

        Raises:
            StorageInitializationError: If the directory or file cannot be created
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            if not self._file.exists():
                async with aiofiles.open(self._file, "w", encoding="utf-8") as f:
                    await f.write(json.dumps([], indent=2))
                self.logger.info("memo_document_created", path=str(self._file))
        except OSError as exc:
            raise StorageInitializationError(
                f"Failed to initialize storage: {exc}",
                details={"path": str(self._file)},
            ) from exc

    async def load_all(self) -> list[Memo]:
        """
        Read and parse the whole document.

        Returns:
            Every memo in document order

        Raises:
            StorageLoadError: If the file is missing, unreadable, not valid
                JSON, or holds a malformed record
        """
        try:
            async with aiofiles.open(self._file, "r", encoding="utf-8") as f:
                content = await f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageLoadError(
                f"Failed to load memos: {exc}", details={"path": str(self._file)}
            ) from exc

        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise StorageLoadError(
                f"Failed to load memos: invalid JSON ({exc})",
                details={"path": str(self._file)},
            ) from exc

        if not isinstance(data, list):
            raise StorageLoadError(
                "Failed to load memos: document is not a JSON array",
                details={"path": str(self._file)},
            )

        try:
            memos = [Memo.from_dict(item) for item in data]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise StorageLoadError(
                f"Failed to load memos: malformed record ({exc!r})",
                details={"path": str(self._file)},
            ) from exc

        self.logger.debug("memos_loaded", count=len(memos))
        return memos

    async def save_all(self, memos: list[Memo]) -> None:
        """
        Replace the whole document with ``memos``.

        Writes to a temp file first, then renames it over the document.

        Raises:
            StorageSaveError: If the document cannot be written
        """
        temp_path = self._file.with_suffix(self._file.suffix + ".tmp")
        payload = json.dumps([m.to_dict() for m in memos], indent=2, ensure_ascii=False)
        try:
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            temp_path.replace(self._file)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise StorageSaveError(
                f"Failed to save memos: {exc}", details={"path": str(self._file)}
            ) from exc

        self.logger.debug("memos_saved", count=len(memos))

    # ------------------------------------------------------------------
    # Record operations (load, mutate, save)
    # ------------------------------------------------------------------

    async def add(self, memo: Memo) -> None:
        memos = await self.load_all()
        memos.append(memo)
        await self.save_all(memos)

    async def get(self, memo_id: str) -> Memo | None:
        for memo in await self.load_all():
            if memo.id == memo_id:
                return memo
        return None

    async def update(self, memo: Memo) -> bool:
        memos = await self.load_all()
        for i, existing in enumerate(memos):
            if existing.id == memo.id:
                memos[i] = memo
                await self.save_all(memos)
                return True
        return False

    async def delete(self, memo_id: str) -> bool:
        memos = await self.load_all()
        remaining = [m for m in memos if m.id != memo_id]
        if len(remaining) == len(memos):
            return False
        await self.save_all(remaining)
        return True

    async def clear(self) -> None:
        await self.save_all([])
        self.logger.info("memos_cleared", path=str(self._file))
