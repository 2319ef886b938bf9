import pytest

from dreampop.notes import (
    Note,
    NoteError,
    Notebook,
    format_note,
    parse_note_id,
    validate_note,
)
from dreampop.store import open_store


@pytest.fixture
def book(tmp_path):
    with open_store(tmp_path / "dreampop.db") as store:
        yield Notebook(store)


def test_current_space_defaults_to_notes(book):
    assert book.current_space() == "notes"


def test_add_and_list(book):
    first = book.add("buy milk")
    second = book.add("call mom")
    assert book.notes() == [first, second]
    assert second.id > first.id
    assert first.text == "buy milk"


def test_add_goes_to_selected_space(book):
    book.store.create_bucket("work")
    book.store.put("internal", b"self", b"work")
    note = book.add("ship it")
    assert book.current_space() == "work"
    assert book.notes() == [note]
    assert book.store.items("notes") == []


def test_get_missing_raises(book):
    with pytest.raises(NoteError):
        book.get(42)


def test_edit_replaces_text(book):
    note = book.add("draft")
    edited = book.edit(note.id, "final")
    assert book.get(note.id) == edited
    assert edited.text == "final"


def test_edit_missing_or_empty_raises(book):
    note = book.add("draft")
    with pytest.raises(NoteError):
        book.edit(note.id + 100, "x")
    with pytest.raises(NoteError):
        book.edit(note.id, "")
    assert book.get(note.id).text == "draft"


def test_check_moves_to_history(book):
    a = book.add("a")
    b = book.add("b")
    c = book.add("c")
    checked = book.check([a.id, c.id, 999])
    assert checked == [a, c]
    assert book.notes() == [b]
    assert [n.text for n in book.history()] == ["a", "c"]


def test_remove_skips_missing_and_keeps_history_empty(book):
    a = book.add("a")
    b = book.add("b")
    removed = book.remove([b.id, 12345])
    assert removed == [b]
    assert book.notes() == [a]
    assert book.history() == []


def test_clean_history_resets_numbering(book):
    note = book.add("a")
    book.check([note.id])
    first_history = book.history()
    book.clean_history()
    assert book.history() == []
    again = book.add("b")
    book.check([again.id])
    assert [n.id for n in book.history()] == [first_history[0].id]


def test_format_note():
    assert format_note(Note(3, "milk")) == "3. milk "


def test_parse_note_id_valid():
    assert parse_note_id("12") == 12


@pytest.mark.parametrize("text", ["abc", "-1", "", "1.5"])
def test_parse_note_id_invalid(text):
    with pytest.raises(NoteError):
        parse_note_id(text)


def test_validate_note():
    assert validate_note("hello") == "hello"
    with pytest.raises(NoteError, match="can't be empty"):
        validate_note("")