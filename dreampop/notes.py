"""Notes kept in the selected space, and the history of checked notes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .store import (
    HISTORY_BUCKET,
    INTERNAL_BUCKET,
    NOTES_BUCKET,
    SELF_KEY,
    BucketStore,
)

NOTE_CHAR_LIMIT = 100


class NoteError(Exception):
    """Raised for invalid note ids, missing notes and empty notes."""


@dataclass(frozen=True)
class Note:
    id: int
    text: str


def _key(note_id: int) -> bytes:
    return note_id.to_bytes(8, "big")


def _note(key: bytes, value: bytes) -> Note:
    return Note(int.from_bytes(key, "big"), value.decode("utf-8"))


def format_note(note: Note) -> str:
    """Render a note the way listings show it."""
    return f"{note.id}. {note.text} "


def parse_note_id(text: str) -> int:
    """Turn a command-line argument into a note id."""
    try:
        note_id = int(text.strip())
    except ValueError:
        raise NoteError(f"invalid note id: {text!r}") from None
    if note_id < 0:
        raise NoteError(f"invalid note id: {text!r}")
    return note_id


def validate_note(text: str) -> str:
    """Reject an empty note; return the text unchanged otherwise."""
    if text == "":
        raise NoteError("note can't be empty")
    return text


class Notebook:
    """Note operations on top of a bucket store."""

    def __init__(self, store: BucketStore) -> None:
        self.store = store

    def current_space(self) -> str:
        value = self.store.get(INTERNAL_BUCKET, SELF_KEY)
        return NOTES_BUCKET if value is None else value.decode("utf-8")

    def add(self, text: str) -> Note:
        """Store a new note in the current space and return it."""
        space = self.current_space()
        with self.store.transaction():
            note_id = self.store.next_sequence(space)
            self.store.put(space, _key(note_id), text.encode("utf-8"))
        return Note(note_id, text)

    def notes(self) -> list[Note]:
        return [_note(k, v) for k, v in self.store.items(self.current_space())]

    def get(self, note_id: int) -> Note:
        value = self.store.get(self.current_space(), _key(note_id))
        if value is None:
            raise NoteError("key doesn't exist")
        return Note(note_id, value.decode("utf-8"))

    def edit(self, note_id: int, text: str) -> Note:
        """Replace the text of an existing note."""
        validate_note(text)
        space = self.current_space()
        with self.store.transaction():
            self.get(note_id)
            self.store.put(space, _key(note_id), text.encode("utf-8"))
        return Note(note_id, text)

    def _take(self, note_ids: Iterable[int]) -> list[Note]:
        space = self.current_space()
        taken = []
        for note_id in note_ids:
            value = self.store.get(space, _key(note_id))
            if value is None:
                continue
            taken.append(Note(note_id, value.decode("utf-8")))
            self.store.delete(space, _key(note_id))
        return taken

    def check(self, note_ids: Iterable[int]) -> list[Note]:
        """Move the given notes into history; unknown ids are skipped."""
        with self.store.transaction():
            checked = self._take(note_ids)
            for note in checked:
                history_id = self.store.next_sequence(HISTORY_BUCKET)
                self.store.put(
                    HISTORY_BUCKET, _key(history_id), note.text.encode("utf-8")
                )
        return checked

    def remove(self, note_ids: Iterable[int]) -> list[Note]:
        """Delete the given notes; unknown ids are skipped."""
        with self.store.transaction():
            return self._take(note_ids)

    def history(self) -> list[Note]:
        return [_note(k, v) for k, v in self.store.items(HISTORY_BUCKET)]

    def clean_history(self) -> None:
        """Empty the history and restart its numbering."""
        with self.store.transaction():
            if self.store.has_bucket(HISTORY_BUCKET):
                self.store.delete_bucket(HISTORY_BUCKET)
            self.store.create_bucket(HISTORY_BUCKET)