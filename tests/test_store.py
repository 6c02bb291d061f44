"""Tests for the append-only JSONL record store."""

import asyncio
from pathlib import Path

import orjson
import pytest

from utils.errors import StoreParseError, StoreReadError, StoreWriteError
from utils.schemas import UserRecord
from utils.store import RecordStore


def _ann() -> UserRecord:
    return UserRecord.from_payload({"name": "Ann", "email": "a@x.com", "age": 30})


def test_append_creates_file_and_writes_one_line(store: RecordStore, store_path: Path) -> None:
    assert not store_path.exists()

    asyncio.run(store.append(_ann()))

    assert store_path.read_bytes() == b'{"name":"Ann","email":"a@x.com","age":30}\n'


def test_last_listed_record_equals_appended(store: RecordStore) -> None:
    asyncio.run(store.append(UserRecord.from_payload({"name": "Bo", "email": "b@x.com", "age": 41})))
    asyncio.run(store.append(_ann()))

    records = asyncio.run(store.list_all())

    assert records[-1] == _ann()
    assert records[-1].to_dict() == {"name": "Ann", "email": "a@x.com", "age": 30}


def test_list_all_preserves_append_order(store: RecordStore) -> None:
    payloads = [{"name": f"user-{i}", "email": f"u{i}@x.com", "age": 20 + i} for i in range(25)]

    async def _append_all() -> None:
        for payload in payloads:
            await store.append(UserRecord.from_payload(payload))

    asyncio.run(_append_all())
    records = asyncio.run(store.list_all())

    assert [r.to_dict() for r in records] == payloads


def test_append_never_rewrites_existing_lines(store: RecordStore, store_path: Path) -> None:
    store_path.write_bytes(b'{"name":"Old","email":"o@x.com","age":70}\n')

    asyncio.run(store.append(_ann()))

    lines = store_path.read_bytes().splitlines()
    assert lines[0] == b'{"name":"Old","email":"o@x.com","age":70}'
    assert len(lines) == 2


def test_unvalidated_fields_are_stored_as_received(store: RecordStore, store_path: Path) -> None:
    record = UserRecord.from_payload({"name": 12, "age": "thirty", "role": "admin"})

    asyncio.run(store.append(record))

    assert orjson.loads(store_path.read_bytes()) == {"name": 12, "age": "thirty"}
    [listed] = asyncio.run(store.list_all())
    assert listed.to_dict() == {"name": 12, "age": "thirty"}


def test_empty_file_lists_no_records(store: RecordStore, store_path: Path) -> None:
    store_path.write_bytes(b"")

    assert asyncio.run(store.list_all()) == []


def test_blank_lines_are_skipped(store: RecordStore, store_path: Path) -> None:
    store_path.write_bytes(b'\n{"name":"Ann"}\n\n   \n{"name":"Bo"}\n')

    records = asyncio.run(store.list_all())

    assert [r.to_dict() for r in records] == [{"name": "Ann"}, {"name": "Bo"}]


def test_missing_file_is_a_read_failure(store: RecordStore) -> None:
    with pytest.raises(StoreReadError) as exc_info:
        asyncio.run(store.list_all())

    assert exc_info.value.kind == "read_failure"


def test_malformed_line_fails_whole_listing(store: RecordStore, store_path: Path) -> None:
    store_path.write_bytes(
        b'{"name":"Ann","email":"a@x.com","age":30}\n'
        b'{"name":"Bo",\n'
        b'{"name":"Cy","email":"c@x.com","age":22}\n'
    )

    with pytest.raises(StoreParseError) as exc_info:
        asyncio.run(store.list_all())

    assert exc_info.value.kind == "parse_failure"
    assert exc_info.value.line_number == 2


def test_non_object_line_is_a_parse_failure(store: RecordStore, store_path: Path) -> None:
    store_path.write_bytes(b'{"name":"Ann"}\n[1, 2]\n')

    with pytest.raises(StoreParseError) as exc_info:
        asyncio.run(store.list_all())

    assert exc_info.value.line_number == 2


def test_unwritable_path_is_a_write_failure(tmp_path: Path) -> None:
    # A directory cannot be opened for appending
    store = RecordStore(tmp_path)

    with pytest.raises(StoreWriteError) as exc_info:
        asyncio.run(store.append(_ann()))

    assert exc_info.value.kind == "write_failure"
    assert isinstance(exc_info.value.__cause__, OSError)


def test_missing_parent_directory_is_a_write_failure(tmp_path: Path) -> None:
    store = RecordStore(tmp_path / "missing" / "users.txt")

    with pytest.raises(StoreWriteError):
        asyncio.run(store.append(_ann()))


def test_concurrent_appends_keep_every_line_intact(store: RecordStore) -> None:
    payloads = [
        {"name": f"user-{i}", "email": f"u{i}@x.com" * 50, "age": i} for i in range(50)
    ]

    async def _append_concurrently() -> None:
        await asyncio.gather(*(store.append(UserRecord.from_payload(p)) for p in payloads))

    asyncio.run(_append_concurrently())
    records = asyncio.run(store.list_all())

    assert len(records) == len(payloads)
    assert sorted((r.to_dict() for r in records), key=lambda d: d["age"]) == payloads


def test_listed_records_are_fresh_copies(store: RecordStore) -> None:
    asyncio.run(store.append(_ann()))

    first = asyncio.run(store.list_all())
    second = asyncio.run(store.list_all())

    assert first == second
    assert first[0] is not second[0]
