"""Memo persistence implementations."""

from memoapp.infrastructure.persistence.file_memo_store import FileMemoStore

__all__ = ["FileMemoStore"]
