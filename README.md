# dreampop

Your note list, but in the terminal.

dreampop keeps short notes in named *spaces*. One space is selected at a
time and every note command works on it. Checking a note off moves it to a
shared history, which can be listed and cleaned. Everything is kept in a
single SQLite database file, by default in your user data directory.

## Installation

```
pip install .
```

## Notes

```
dreampop add "buy milk"     # add a note to the current space
dreampop ls                 # list notes as "<id>. <text>"
dreampop edit 1 "buy bread" # replace the text of note 1
dreampop check 1 3          # move notes 1 and 3 to the history
dreampop rm 2               # delete note 2 without keeping it
dreampop history            # list checked notes
dreampop history clean      # empty the history and restart its numbering
```

A note may not be empty. Ids that do not exist are skipped by `check` and
`rm`; `edit` reports an error for them.

When the text is left out, `add` and `edit` ask for it on a prompt (at most
100 characters are kept). When no ids are given, `check` and `rm` print the
notes of the current space and read the ids to act on from one line,
separated by spaces or commas.

## Spaces

```
dreampop space add work          # create a space
dreampop space ls                # list spaces
dreampop space select work       # make "work" the current space
dreampop space self              # print the current space
dreampop space edit work office  # rename a space, keeping its notes
dreampop space rm office         # delete a space and its notes
```

A fresh database starts with a single space, `notes`, already selected.
The names `internal` and `history` are reserved and cannot be used for
spaces, and the space that is currently selected cannot be removed.
Renaming the selected space keeps it selected. `space add`, `space edit`,
`space select` and `space rm` prompt for names that are not given;
`space select` prints the name it selected after such a prompt.

## Options

```
dreampop --db PATH ls       # use the database file at PATH
```

Errors are printed to standard error and the command exits with status 1;
closing a prompt (end of input or Ctrl-C) cancels the command the same way.

## Using it from Python

```python
from dreampop.store import open_store
from dreampop.notes import Notebook
from dreampop.spaces import Spaces

with open_store("notes.db") as store:
    spaces = Spaces(store)
    spaces.add("work")
    spaces.select("work")

    book = Notebook(store)
    note = book.add("write report")
    book.check([note.id])
    for item in book.history():
        print(item.text)
```

`open_store()` called with no path uses `default_path()`, the
`dreampop.db` file in the `dreampop` folder of the platform's user data
directory. `BucketStore` is the underlying key/value store; `Notebook`
raises `NoteError` and `Spaces` raises `SpaceError` for invalid input.

## What it does not do

Prompts are plain line input: there are no full-screen forms or
arrow-key menus for choosing notes or spaces. Notes are single lines of
text without dates, priorities or tags.

## Running the tests

```
pip install .[test]
pytest
```