"""Spaces: named note lists, one of which is selected at a time."""

from __future__ import annotations

from .store import (
    INTERNAL_BUCKET,
    NOTES_BUCKET,
    RESERVED_BUCKETS,
    SELF_KEY,
    BucketExists,
    BucketStore,
)

SPACE_CHAR_LIMIT = 100


class SpaceError(Exception):
    """Raised for invalid, reserved, missing or duplicate spaces."""


def is_reserved(name: str) -> bool:
    """Tell whether a name belongs to the store's own buckets."""
    return name in RESERVED_BUCKETS


def validate_space_name(name: str) -> str:
    """Reject empty and reserved names; return the name unchanged otherwise."""
    if name == "":
        raise SpaceError("space can't be empty")
    if is_reserved(name):
        raise SpaceError(f"can't use space name {name!r}, it's reserved")
    return name


class Spaces:
    """Space operations on top of a bucket store."""

    def __init__(self, store: BucketStore) -> None:
        self.store = store

    def current(self) -> str:
        """Return the name of the selected space."""
        value = self.store.get(INTERNAL_BUCKET, SELF_KEY)
        return NOTES_BUCKET if value is None else value.decode("utf-8")

    def add(self, name: str) -> str:
        """Create a new, empty space."""
        validate_space_name(name)
        try:
            self.store.create_bucket(name)
        except BucketExists:
            raise SpaceError("space already exists") from None
        return name

    def rename(self, src: str, dst: str) -> str:
        """Rename a space, keeping its notes and its selection."""
        validate_space_name(src)
        validate_space_name(dst)
        with self.store.transaction():
            if not self.store.has_bucket(src):
                raise SpaceError("source space does not exist")
            selected = self.current() == src
            try:
                self.store.rename_bucket(src, dst)
            except BucketExists:
                raise SpaceError("space already exists") from None
            if selected:
                self.store.put(INTERNAL_BUCKET, SELF_KEY, dst.encode("utf-8"))
        return dst

    def names(self) -> list[str]:
        """Return every user space in byte order."""
        return [name for name in self.store.bucket_names() if not is_reserved(name)]

    def select(self, name: str) -> str:
        """Make ``name`` the space that note commands work on."""
        if is_reserved(name):
            raise SpaceError(f"can't select space {name!r}")
        with self.store.transaction():
            if not self.store.has_bucket(name):
                raise SpaceError("space does not exist")
            self.store.put(INTERNAL_BUCKET, SELF_KEY, name.encode("utf-8"))
        return name

    def remove(self, name: str) -> None:
        """Delete a space and its notes; the selected space is kept."""
        if is_reserved(name):
            raise SpaceError(f"can't remove space {name!r}")
        with self.store.transaction():
            if name == self.current():
                raise SpaceError(f"can't remove the selected space {name!r}")
            if not self.store.has_bucket(name):
                raise SpaceError("space does not exist")
            self.store.delete_bucket(name)