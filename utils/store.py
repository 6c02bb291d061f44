"""
Record Store - Append-only JSONL persistence for user records.

One store owns one file. Records are appended as one orjson-encoded line
each, in arrival order, and are never rewritten. Reads always scan the full
file.

Both operations run the blocking file I/O in a worker thread so the event
loop keeps serving other requests while a write or read is in flight. There
is no lock: each append is a single write() on a file opened in append mode.
"""

import asyncio
import logging
from pathlib import Path

import orjson

from utils.errors import StoreParseError, StoreReadError, StoreWriteError
from utils.schemas import UserRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """Append-only user record store backed by a single JSONL file."""

    def __init__(self, path: str | Path) -> None:
        """
        Initialize record store.

        Args:
            path: Store file path; created on first append if absent
        """
        self.path = Path(path)

    async def append(self, record: UserRecord) -> None:
        """
        Append one record as a JSON line.

        Returns only after the write has completed.

        Args:
            record: Record to persist

        Raises:
            StoreWriteError: On any underlying I/O error
        """
        line = record.to_json_line()
        await asyncio.to_thread(self._write_line, line)

        logger.debug("Record appended: path=%s, bytes=%d", str(self.path), len(line))

    async def list_all(self) -> list[UserRecord]:
        """
        Read every stored record in file order.

        Returns:
            Fresh UserRecord instances, one per non-blank line

        Raises:
            StoreReadError: If the file cannot be read (including when absent)
            StoreParseError: If any line is not a JSON object
        """
        data = await asyncio.to_thread(self._read_bytes)

        records: list[UserRecord] = []
        for line_num, line in enumerate(data.splitlines(), 1):
            line = line.strip()
            if not line:
                continue

            try:
                raw_dict = orjson.loads(line)
            except orjson.JSONDecodeError as e:
                raise StoreParseError(
                    f"Invalid JSON at line {line_num} of {self.path}: {e}",
                    str(self.path),
                    line_num,
                ) from e

            if not isinstance(raw_dict, dict):
                raise StoreParseError(
                    f"Line {line_num} of {self.path} is not a JSON object",
                    str(self.path),
                    line_num,
                )

            records.append(UserRecord.from_payload(raw_dict))

        logger.debug("Records loaded: path=%s, count=%d", str(self.path), len(records))
        return records

    def _write_line(self, line: bytes) -> None:
        try:
            with open(self.path, "ab") as f:
                f.write(line)
        except OSError as e:
            raise StoreWriteError(
                f"Failed to append to {self.path}: {e}", str(self.path)
            ) from e

    def _read_bytes(self) -> bytes:
        try:
            with open(self.path, "rb") as f:
                return f.read()
        except OSError as e:
            raise StoreReadError(
                f"Failed to read {self.path}: {e}", str(self.path)
            ) from e
