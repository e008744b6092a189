"""Interfaces for memo stores."""

from __future__ import annotations

from typing import Protocol

from memoapp.core.domain.memo import Memo


class MemoStoreProtocol(Protocol):
    """Protocol for memo persistence implementations.

    Implementations own a single document holding the whole collection.
    Every operation reloads it; nothing is cached between calls.
    """

    async def init(self) -> None:
        """Create the backing document if it does not exist yet."""
        ...

    async def load_all(self) -> list[Memo]:
        """Load the full collection."""
        ...

    async def save_all(self, memos: list[Memo]) -> None:
        """Replace the full collection."""
        ...

    async def add(self, memo: Memo) -> None:
        """Append a memo."""
        ...

    async def get(self, memo_id: str) -> Memo | None:
        """Get a memo by ID, or ``None`` if absent."""
        ...

    async def update(self, memo: Memo) -> bool:
        """Replace the memo with the same ID. Returns False if absent."""
        ...

    async def delete(self, memo_id: str) -> bool:
        """Delete a memo by ID. Returns False if absent."""
        ...

    async def clear(self) -> None:
        """Remove every memo."""
        ...
