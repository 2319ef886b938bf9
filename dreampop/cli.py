"""Command-line interface: your note list, in the terminal."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Callable, Sequence, TypeVar

from .notes import (
    NOTE_CHAR_LIMIT,
    Notebook,
    NoteError,
    format_note,
    parse_note_id,
    validate_note,
)
from .spaces import SPACE_CHAR_LIMIT, Spaces, SpaceError, validate_space_name
from .store import BucketStore, StoreError, open_store

T = TypeVar("T")


class _Cancelled(Exception):
    """The user closed a prompt."""


def _read(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        raise _Cancelled() from None


def _ask(
    title: str,
    validate: Callable[[str], T],
    *,
    placeholder: str = "",
    limit: int = NOTE_CHAR_LIMIT,
) -> T:
    """Prompt until the answer passes ``validate``."""
    hint = f" [{placeholder}]" if placeholder else ""
    while True:
        answer = _read(f"{title}{hint}: ")[:limit]
        try:
            return validate(answer)
        except (NoteError, SpaceError) as exc:
            print(exc, file=sys.stderr)


def _split_ids(line: str) -> list[str]:
    return [part for part in re.split(r"[\s,]+", line) if part]


def _choose_notes(book: Notebook, title: str) -> list[int]:
    notes = book.notes()
    if not notes:
        return []
    print(title)
    for note in notes:
        print(format_note(note))
    return [parse_note_id(part) for part in _split_ids(_read("Note ids: "))]


def _choose_space(choices: list[str], title: str) -> str:
    print(title)
    for name in choices:
        print(f"  {name}")
    return _ask(title, lambda s: s, limit=SPACE_CHAR_LIMIT)


def _note_ids(book: Notebook, args: argparse.Namespace, title: str) -> list[int]:
    if args.ids:
        return [parse_note_id(text) for text in args.ids]
    return _choose_notes(book, title)


def _cmd_help(args: argparse.Namespace, store: BucketStore) -> None:
    args.help_parser.print_help()


def _cmd_add(args: argparse.Namespace, store: BucketStore) -> None:
    if args.text is not None:
        text = validate_note(args.text)
    else:
        text = _ask("Add new note", validate_note, placeholder="hmmm")
    Notebook(store).add(text)


def _cmd_ls(args: argparse.Namespace, store: BucketStore) -> None:
    for note in Notebook(store).notes():
        print(format_note(note))


def _cmd_edit(args: argparse.Namespace, store: BucketStore) -> None:
    book = Notebook(store)
    note_id = parse_note_id(args.id)
    current = book.get(note_id)
    if args.text is not None:
        text = args.text
    else:
        text = _ask("Edit note", validate_note, placeholder=current.text)
    book.edit(note_id, text)


def _cmd_rm(args: argparse.Namespace, store: BucketStore) -> None:
    book = Notebook(store)
    book.remove(_note_ids(book, args, "Remove your notes"))


def _cmd_check(args: argparse.Namespace, store: BucketStore) -> None:
    book = Notebook(store)
    book.check(_note_ids(book, args, "Check your notes"))


def _cmd_history(args: argparse.Namespace, store: BucketStore) -> None:
    for note in Notebook(store).history():
        print(format_note(note))


def _cmd_history_clean(args: argparse.Namespace, store: BucketStore) -> None:
    Notebook(store).clean_history()


def _cmd_space_add(args: argparse.Namespace, store: BucketStore) -> None:
    name = args.name
    if name is None:
        name = _ask(
            "Add new space", validate_space_name, placeholder="hmmm",
            limit=SPACE_CHAR_LIMIT,
        )
    Spaces(store).add(name)


def _cmd_space_edit(args: argparse.Namespace, store: BucketStore) -> None:
    src, dst = args.src, args.dst
    if src is None:
        src = _ask("Old space", validate_space_name, limit=SPACE_CHAR_LIMIT)
    if dst is None:
        dst = _ask("New space", validate_space_name, limit=SPACE_CHAR_LIMIT)
    Spaces(store).rename(src, dst)


def _cmd_space_ls(args: argparse.Namespace, store: BucketStore) -> None:
    for name in Spaces(store).names():
        print(f"{name} ")


def _cmd_space_select(args: argparse.Namespace, store: BucketStore) -> None:
    spaces = Spaces(store)
    if args.name is not None:
        spaces.select(args.name)
        return
    name = _choose_space(spaces.names(), "Choose your space")
    spaces.select(name)
    print(name)


def _cmd_space_rm(args: argparse.Namespace, store: BucketStore) -> None:
    spaces = Spaces(store)
    name = args.name
    if name is None:
        name = _choose_space(spaces.names(), "Choose your space")
    spaces.remove(name)


def _cmd_space_self(args: argparse.Namespace, store: BucketStore) -> None:
    print(Spaces(store).current())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dreampop", description="Your notelist but in terminal"
    )
    parser.add_argument("--db", help="path of the database file")
    parser.set_defaults(handler=_cmd_help, help_parser=parser)
    commands = parser.add_subparsers(dest="command")

    add = commands.add_parser("add", help="add a note")
    add.add_argument("text", nargs="?")
    add.set_defaults(handler=_cmd_add)

    commands.add_parser("ls", help="list notes").set_defaults(handler=_cmd_ls)

    edit = commands.add_parser("edit", help="edit a note")
    edit.add_argument("id")
    edit.add_argument("text", nargs="?")
    edit.set_defaults(handler=_cmd_edit)

    rm = commands.add_parser("rm", help="remove notes")
    rm.add_argument("ids", nargs="*")
    rm.set_defaults(handler=_cmd_rm)

    check = commands.add_parser("check", help="check notes off into history")
    check.add_argument("ids", nargs="*")
    check.set_defaults(handler=_cmd_check)

    history = commands.add_parser("history", help="list checked notes")
    history.set_defaults(handler=_cmd_history)
    history_commands = history.add_subparsers(dest="history_command")
    history_commands.add_parser("clean", help="empty the history").set_defaults(
        handler=_cmd_history_clean
    )

    space = commands.add_parser("space", help="manage spaces")
    space.set_defaults(handler=_cmd_help, help_parser=space)
    space_commands = space.add_subparsers(dest="space_command")

    space_add = space_commands.add_parser("add", help="add a space")
    space_add.add_argument("name", nargs="?")
    space_add.set_defaults(handler=_cmd_space_add)

    space_edit = space_commands.add_parser("edit", help="rename a space")
    space_edit.add_argument("src", nargs="?")
    space_edit.add_argument("dst", nargs="?")
    space_edit.set_defaults(handler=_cmd_space_edit)

    space_commands.add_parser("ls", help="list spaces").set_defaults(
        handler=_cmd_space_ls
    )

    space_select = space_commands.add_parser("select", help="select a space")
    space_select.add_argument("name", nargs="?")
    space_select.set_defaults(handler=_cmd_space_select)

    space_rm = space_commands.add_parser("rm", help="remove a space")
    space_rm.add_argument("name", nargs="?")
    space_rm.set_defaults(handler=_cmd_space_rm)

    space_commands.add_parser("self", help="show the selected space").set_defaults(
        handler=_cmd_space_self
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        store = open_store(args.db)
    except (StoreError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    with store:
        try:
            args.handler(args, store)
        except (NoteError, SpaceError, StoreError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        except (_Cancelled, KeyboardInterrupt):
            print("cancelled", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())