"""Protocol definitions the core depends on."""

from memoapp.core.interfaces.memo_store import MemoStoreProtocol

__all__ = ["MemoStoreProtocol"]
