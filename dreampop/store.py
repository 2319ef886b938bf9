"""A small bucketed key/value store kept in an SQLite file."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from os import PathLike
from pathlib import Path
from typing import Iterator, Union

from platformdirs import user_data_path

APP_NAME = "dreampop"
DB_FILENAME = "dreampop.db"

NOTES_BUCKET = "notes"
HISTORY_BUCKET = "history"
INTERNAL_BUCKET = "internal"
SELF_KEY = b"self"
RESERVED_BUCKETS = frozenset({INTERNAL_BUCKET, HISTORY_BUCKET})

StrPath = Union[str, "PathLike[str]"]

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS buckets (
        name TEXT PRIMARY KEY,
        sequence INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS entries (
        bucket TEXT NOT NULL,
        key BLOB NOT NULL,
        value BLOB NOT NULL,
        PRIMARY KEY (bucket, key)
    )
    """,
)


class StoreError(Exception):
    """Base error for store operations."""


class BucketNotFound(StoreError):
    """Raised when a bucket does not exist."""


class BucketExists(StoreError):
    """Raised when a bucket that should be new already exists."""


class BucketStore:
    """Named buckets of byte keys and values, each with its own sequence."""

    def __init__(self, path: StrPath) -> None:
        self.path = path
        self._conn = sqlite3.connect(str(path), isolation_level=None)
        self._depth = 0
        for statement in _SCHEMA:
            self._conn.execute(statement)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "BucketStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Iterator["BucketStore"]:
        """Run a block atomically; nested blocks roll back on their own."""
        savepoint = f"sp_{self._depth}"
        if self._depth == 0:
            self._conn.execute("BEGIN IMMEDIATE")
        else:
            self._conn.execute(f"SAVEPOINT {savepoint}")
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self._conn.execute("ROLLBACK")
            else:
                self._conn.execute(f"ROLLBACK TO {savepoint}")
                self._conn.execute(f"RELEASE {savepoint}")
            raise
        else:
            self._depth -= 1
            if self._depth == 0:
                self._conn.execute("COMMIT")
            else:
                self._conn.execute(f"RELEASE {savepoint}")

    def bucket_names(self) -> list[str]:
        """Return every bucket name in byte order."""
        rows = self._conn.execute("SELECT name FROM buckets ORDER BY name")
        return [name for (name,) in rows]

    def has_bucket(self, name: str) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM buckets WHERE name = ?", (name,)
        ).fetchone()
        return row is not None

    def _require(self, name: str) -> None:
        if not self.has_bucket(name):
            raise BucketNotFound(f"bucket not found: {name!r}")

    def create_bucket(self, name: str) -> None:
        if not name:
            raise StoreError("bucket name required")
        with self.transaction():
            if self.has_bucket(name):
                raise BucketExists(f"bucket already exists: {name!r}")
            self._conn.execute("INSERT INTO buckets (name) VALUES (?)", (name,))

    def create_bucket_if_not_exists(self, name: str) -> None:
        if not name:
            raise StoreError("bucket name required")
        self._conn.execute(
            "INSERT OR IGNORE INTO buckets (name) VALUES (?)", (name,)
        )

    def delete_bucket(self, name: str) -> None:
        with self.transaction():
            self._require(name)
            self._conn.execute("DELETE FROM entries WHERE bucket = ?", (name,))
            self._conn.execute("DELETE FROM buckets WHERE name = ?", (name,))

    def rename_bucket(self, src: str, dst: str) -> None:
        """Give bucket ``src`` the name ``dst``, keeping its contents."""
        if not dst:
            raise StoreError("bucket name required")
        with self.transaction():
            self._require(src)
            if src == dst:
                return
            if self.has_bucket(dst):
                raise BucketExists(f"bucket already exists: {dst!r}")
            self._conn.execute(
                "UPDATE buckets SET name = ? WHERE name = ?", (dst, src)
            )
            self._conn.execute(
                "UPDATE entries SET bucket = ? WHERE bucket = ?", (dst, src)
            )

    def get(self, bucket: str, key: bytes) -> bytes | None:
        self._require(bucket)
        row = self._conn.execute(
            "SELECT value FROM entries WHERE bucket = ? AND key = ?",
            (bucket, bytes(key)),
        ).fetchone()
        return None if row is None else bytes(row[0])

    def put(self, bucket: str, key: bytes, value: bytes) -> None:
        if not key:
            raise StoreError("key required")
        with self.transaction():
            self._require(bucket)
            self._conn.execute(
                "INSERT OR REPLACE INTO entries (bucket, key, value) VALUES (?, ?, ?)",
                (bucket, bytes(key), bytes(value)),
            )

    def delete(self, bucket: str, key: bytes) -> None:
        with self.transaction():
            self._require(bucket)
            self._conn.execute(
                "DELETE FROM entries WHERE bucket = ? AND key = ?",
                (bucket, bytes(key)),
            )

    def next_sequence(self, bucket: str) -> int:
        """Advance the bucket's sequence and return the new value."""
        with self.transaction():
            self._require(bucket)
            self._conn.execute(
                "UPDATE buckets SET sequence = sequence + 1 WHERE name = ?",
                (bucket,),
            )
            (sequence,) = self._conn.execute(
                "SELECT sequence FROM buckets WHERE name = ?", (bucket,)
            ).fetchone()
        return sequence

    def items(self, bucket: str) -> list[tuple[bytes, bytes]]:
        """Return the bucket's (key, value) pairs in key byte order."""
        self._require(bucket)
        rows = self._conn.execute(
            "SELECT key, value FROM entries WHERE bucket = ? ORDER BY key",
            (bucket,),
        )
        return [(bytes(key), bytes(value)) for key, value in rows]


def default_path() -> Path:
    """Return the database location inside the user's data directory."""
    return user_data_path(APP_NAME) / DB_FILENAME


def open_store(path: StrPath | None = None) -> BucketStore:
    """Open the store, creating it and its standard buckets if needed."""
    target = Path(path) if path is not None else default_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    store = BucketStore(target)
    try:
        with store.transaction():
            store.create_bucket_if_not_exists(NOTES_BUCKET)
            store.create_bucket_if_not_exists(HISTORY_BUCKET)
            store.create_bucket_if_not_exists(INTERNAL_BUCKET)
            if store.get(INTERNAL_BUCKET, SELF_KEY) is None:
                store.put(INTERNAL_BUCKET, SELF_KEY, NOTES_BUCKET.encode())
    except BaseException:
        store.close()
        raise
    return store