# medleytext

The editing core of a small markdown-first text editor, written with the
standard library alone. Everything here is plain state and functions that
can be driven from any front end or from tests.

## Modules

- **`medleytext.editor`**: `TextEditor`, a text buffer with a caret,
  selections (`select_left`, `select_up`, `select_all`, ...), `copy`, `cut`
  and `paste` through an in-memory `clipboard`, `save` and `load_file`,
  mouse `click` and wheel `scroll`, the find panel (`toggle_find`,
  `find_next`, `find_previous`, `replace_current_match`,
  `replace_all_matches`), the file palette (`toggle_palette`), and
  `key_down`, which routes a key press to the find panel, the palette, the
  autocomplete menu or typing, and then runs any bound command. It also
  produces the text of the header, the status bar and the find panel's
  status line.
- **`medleytext.find`**: `find_all` for non-overlapping substring search,
  and `FindPanelState`, which holds the query, the replacement, the matches
  and the selected match, wraps when cycling, and keeps the selection near
  its old place when the text changes.
- **`medleytext.autocomplete`**: `suggestions_for` and `open_autocomplete`
  offer markdown syntax as it is typed: headings, lists and checkboxes,
  code blocks, blockquotes, links, inline code, and bold and italic (not
  offered when the line already leaves a marker open). `Autocomplete` keeps
  the selected suggestion.
- **`medleytext.palette`**: `scan_markdown_files` walks a directory tree for
  `.md` files, skipping names that start with a dot; `fuzzy_match` scores a
  name against a query; `Palette` ranks the files as the query is typed.
- **`medleytext.keymap`**: the `Action` enum, the `Keystroke` dataclass,
  the `KEY_BINDINGS` table (`"ctrl-s"`, `"shift-f3"`, ...), `parse_binding`
  and `action_for`.
- **`medleytext.segments`**: `build_segments` splits a token into
  `RenderRun`s coloured by selection and search highlights, with a `Cursor`
  where the caret goes.
- **`medleytext.layout`**: line numbers, line starts, click-to-offset,
  scroll clamping and vertical caret moves.

Offsets throughout are character indexes into the buffer, and colours are
integers of the form `0xRRGGBB`.

## Examples

Search a buffer:

```python
from medleytext.find import find_all

for match in find_all("one two one", "one"):
    print(match.start, match.end)   # 0 3, then 8 11
```

Get suggestions for the markdown just typed:

```python
from medleytext.autocomplete import suggestions_for

for suggestion in suggestions_for("-", "-"):
    print(suggestion.insert_text, "->", suggestion.label)
```

Rank file names against a query. A higher score is a better match, and
`None` means the name does not match at all:

```python
from medleytext.palette import fuzzy_match

fuzzy_match("rdm", "notes/readme.md")   # an int score
fuzzy_match("xyz", "notes/readme.md")   # None
```

Edit a document:

```python
from medleytext.editor import TextEditor
from medleytext.keymap import Keystroke

editor = TextEditor.from_file("notes.md")  # creates the file if it is missing
for ch in "# Title":
    editor.insert_char(ch)
editor.key_down(Keystroke("s", control=True))  # ctrl-s: save to notes.md
print(editor.status_text())                # ('Line 1', '✓ saved')
```

## What it does not do

- There is no window and no command to start: nothing draws the editor,
  and a front end has to call `TextEditor` and read its state.
- Markdown is not tokenized or coloured here; `build_segments` takes a
  token and its colour from the caller.
- The clipboard is the editor's own `clipboard` attribute, not the system
  clipboard.
- `save` with no path and no current file raises `ValueError` instead of
  asking for a name.
- `Palette` entries show only the file name within its own directory, not
  the path from the directory that was scanned.

## Running the tests

Install the `test` extra, then run `pytest` from the project root.