"""Unit tests for the JSON file-backed memo store."""

import asyncio
import json
from pathlib import Path

import pytest

from memoapp.core.domain.errors import (
    StorageInitializationError,
    StorageLoadError,
    StorageSaveError,
)
from memoapp.core.domain.memo import create_memo, update_memo
from memoapp.infrastructure.persistence.file_memo_store import FileMemoStore

# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_init_creates_directory_and_empty_document(memo_store: FileMemoStore) -> None:
    await memo_store.init()

    assert memo_store.data_dir.is_dir()
    assert json.loads(memo_store.path.read_text(encoding="utf-8")) == []


@pytest.mark.asyncio
async def test_init_creates_nested_parents(tmp_path: Path) -> None:
    store = FileMemoStore(data_dir=tmp_path / "a" / "b" / "c")

    await store.init()

    assert store.path == tmp_path / "a" / "b" / "c" / "memos.json"
    assert store.path.exists()


@pytest.mark.asyncio
async def test_init_is_idempotent_and_keeps_existing_data(memo_store: FileMemoStore) -> None:
    await memo_store.init()
    await memo_store.add(create_memo("Keep", "me", []))

    await memo_store.init()

    memos = await memo_store.load_all()
    assert [m.title for m in memos] == ["Keep"]


@pytest.mark.asyncio
async def test_init_fails_when_directory_cannot_be_created(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = FileMemoStore(data_dir=blocker / "data")

    with pytest.raises(StorageInitializationError) as exc_info:
        await store.init()

    assert exc_info.value.code == "storage_init_error"
    assert "Failed to initialize storage" in exc_info.value.message


# ---------------------------------------------------------------------------
# load_all / save_all
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_add_and_load_memo(memo_store: FileMemoStore) -> None:
    await memo_store.init()
    memo = create_memo("Test Memo", "Test content", ["test"])

    await memo_store.add(memo)
    memos = await memo_store.load_all()

    assert len(memos) == 1
    assert memos[0].id == memo.id
    assert memos[0].title == "Test Memo"
    assert memos[0].content == "Test content"
    assert memos[0].tags == ["test"]
    assert memos[0].created_at == memo.created_at
    assert memos[0].updated_at == memo.updated_at


@pytest.mark.asyncio
async def test_document_uses_iso_timestamps(memo_store: FileMemoStore) -> None:
    await memo_store.init()
    memo = create_memo("T", "C", [])
    await memo_store.add(memo)

    raw = json.loads(memo_store.path.read_text(encoding="utf-8"))

    assert set(raw[0]) == {"id", "title", "content", "tags", "createdAt", "updatedAt"}
    assert raw[0]["createdAt"] == memo.created_at.isoformat()


@pytest.mark.asyncio
async def test_save_of_loaded_collection_leaves_document_unchanged(
    memo_store: FileMemoStore,
) -> None:
    await memo_store.init()
    for i in range(3):
        await memo_store.add(create_memo(f"Title {i}", f"Body {i}", ["x", "x"]))
    before = json.loads(memo_store.path.read_text(encoding="utf-8"))

    await memo_store.save_all(await memo_store.load_all())

    after = json.loads(memo_store.path.read_text(encoding="utf-8"))
    assert after == before


@pytest.mark.asyncio
async def test_save_all_leaves_no_temp_file(memo_store: FileMemoStore) -> None:
    await memo_store.init()
    await memo_store.save_all([create_memo("T", "C")])

    assert [p.name for p in memo_store.data_dir.iterdir()] == ["test-memos.json"]


@pytest.mark.asyncio
async def test_load_reads_documents_written_with_zulu_timestamps(
    memo_store: FileMemoStore,
) -> None:
    memo_store.data_dir.mkdir(parents=True)
    memo_store.path.write_text(
        json.dumps(
            [
                {
                    "id": "memo_1700000000000_abc1234",
                    "title": "Imported",
                    "content": "From an older file",
                    "tags": ["legacy"],
                    "createdAt": "2023-11-14T22:13:20.000Z",
                    "updatedAt": "2023-11-14T22:13:20.000Z",
                }
            ]
        ),
        encoding="utf-8",
    )

    memos = await memo_store.load_all()

    assert memos[0].title == "Imported"
    assert memos[0].created_at.year == 2023


@pytest.mark.asyncio
async def test_load_missing_file_raises(memo_store: FileMemoStore) -> None:
    with pytest.raises(StorageLoadError):
        await memo_store.load_all()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"id": "memo_1"}',
        '[{"id": "memo_1", "title": "no dates"}]',
        '[{"id": "m", "title": "t", "content": "c", "tags": [], '
        '"createdAt": "bad", "updatedAt": "bad"}]',
        '[{"id": "m", "title": null, "content": 5, "tags": [], '
        '"createdAt": "2026-01-01T00:00:00+00:00", "updatedAt": "2026-01-01T00:00:00+00:00"}]',
        '["not a record"]',
    ],
)
async def test_load_corrupt_document_raises(memo_store: FileMemoStore, content: str) -> None:
    memo_store.data_dir.mkdir(parents=True)
    memo_store.path.write_text(content, encoding="utf-8")

    with pytest.raises(StorageLoadError) as exc_info:
        await memo_store.load_all()

    assert exc_info.value.code == "storage_load_error"
    assert exc_info.value.details["path"] == str(memo_store.path)


@pytest.mark.asyncio
async def test_save_fails_when_directory_is_gone(memo_store: FileMemoStore) -> None:
    with pytest.raises(StorageSaveError) as exc_info:
        await memo_store.save_all([create_memo("T", "C")])

    assert "Failed to save memos" in exc_info.value.message


@pytest.mark.asyncio
async def test_failed_rename_removes_temp_file(memo_store: FileMemoStore) -> None:
    # A directory in place of the document makes the final rename fail
    memo_store.path.mkdir(parents=True)
    (memo_store.path / "keep").write_text("x", encoding="utf-8")

    with pytest.raises(StorageSaveError):
        await memo_store.save_all([create_memo("T", "C")])

    assert not memo_store.path.with_name("test-memos.json.tmp").exists()


# ---------------------------------------------------------------------------
# get / update / delete / clear
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_returns_memo_or_none(memo_store: FileMemoStore) -> None:
    await memo_store.init()
    memo = create_memo("Test", "Content", [])
    await memo_store.add(memo)

    found = await memo_store.get(memo.id)
    missing = await memo_store.get("nonexistent-id")

    assert found is not None
    assert found.id == memo.id
    assert missing is None


@pytest.mark.asyncio
async def test_update_existing_memo(memo_store: FileMemoStore) -> None:
    await memo_store.init()
    memo = create_memo("Original", "Original content", [])
    await memo_store.add(memo)

    success = await memo_store.update(update_memo(memo, title="Updated", content="Updated content"))

    assert success is True
    stored = await memo_store.get(memo.id)
    assert stored.title == "Updated"
    assert stored.content == "Updated content"


@pytest.mark.asyncio
async def test_update_missing_memo_returns_false(memo_store: FileMemoStore) -> None:
    await memo_store.init()
    await memo_store.add(create_memo("Other", "x"))

    success = await memo_store.update(create_memo("Ghost", "never stored"))

    assert success is False
    assert [m.title for m in await memo_store.load_all()] == ["Other"]


@pytest.mark.asyncio
async def test_delete_existing_memo_removes_exactly_one(memo_store: FileMemoStore) -> None:
    await memo_store.init()
    memos = [create_memo(f"Memo {i}", "x") for i in range(3)]
    for memo in memos:
        await memo_store.add(memo)

    success = await memo_store.delete(memos[1].id)

    remaining = await memo_store.load_all()
    assert success is True
    assert len(remaining) == 2
    assert [m.id for m in remaining] == [memos[0].id, memos[2].id]


@pytest.mark.asyncio
async def test_delete_missing_memo_leaves_collection_unchanged(
    memo_store: FileMemoStore,
) -> None:
    await memo_store.init()
    await memo_store.add(create_memo("Keep", "x"))
    before = memo_store.path.read_text(encoding="utf-8")

    success = await memo_store.delete("nonexistent-id")

    assert success is False
    assert memo_store.path.read_text(encoding="utf-8") == before


@pytest.mark.asyncio
async def test_clear_removes_everything(memo_store: FileMemoStore) -> None:
    await memo_store.init()
    await memo_store.add(create_memo("A", "x"))
    await memo_store.add(create_memo("B", "y"))

    await memo_store.clear()

    assert await memo_store.load_all() == []


def test_end_to_end_add_update_delete(tmp_path: Path) -> None:
    """init -> add -> update -> delete, reloading the document after each step."""

    async def _run_test() -> None:
        store = FileMemoStore(data_dir=tmp_path / "store")
        await store.init()

        memo = create_memo("T", "C", ["a"])
        await store.add(memo)
        memos = await store.load_all()
        assert len(memos) == 1
        assert (memos[0].title, memos[0].content, memos[0].tags) == ("T", "C", ["a"])

        assert await store.update(update_memo(memos[0], title="T2")) is True
        memos = await store.load_all()
        assert memos[0].title == "T2"
        assert memos[0].content == "C"

        assert await store.delete(memo.id) is True
        assert await store.load_all() == []

    asyncio.run(_run_test())
