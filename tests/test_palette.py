from pathlib import Path

import pytest

from medleytext.keymap import Keystroke
from medleytext.palette import (
    FileEntry,
    Palette,
    fuzzy_match,
    scan_markdown_files,
)


@pytest.fixture
def workspace(tmp_path):
    (tmp_path / "alpha.md").write_text("a")
    (tmp_path / "notes.md").write_text("n")
    (tmp_path / "readme.txt").write_text("t")
    (tmp_path / ".hidden.md").write_text("h")
    hidden_dir = tmp_path / ".git"
    hidden_dir.mkdir()
    (hidden_dir / "inside.md").write_text("x")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "deep.md").write_text("d")
    return tmp_path


def test_scan_finds_visible_markdown_only(workspace):
    names = sorted(entry.display_name for entry in scan_markdown_files(workspace))
    assert names == ["alpha.md", "deep.md", "notes.md"]


def test_scan_paths_are_absolute_and_exist(workspace):
    entries = scan_markdown_files(workspace)
    assert all(entry.path.is_absolute() for entry in entries)
    assert all(entry.path.is_file() for entry in entries)
    assert all(entry.score is None for entry in entries)


def test_scan_missing_directory_is_empty(tmp_path):
    assert scan_markdown_files(tmp_path / "missing") == []


def test_fuzzy_empty_query_scores_zero():
    assert fuzzy_match("", "anything") == 0


def test_fuzzy_out_of_order_does_not_match():
    assert fuzzy_match("ba", "ab") is None
    assert fuzzy_match("xyz", "notes.md") is None


def test_fuzzy_is_case_insensitive():
    assert fuzzy_match("NoTeS", "notes.md") == fuzzy_match("notes", "NOTES.md")


def test_fuzzy_single_char_at_start():
    assert fuzzy_match("a", "a") == 35


def test_fuzzy_consecutive_beats_scattered():
    assert fuzzy_match("abc", "abcxyz") > fuzzy_match("abc", "axbxcx")


def test_fuzzy_word_boundary_bonus():
    assert fuzzy_match("n", "x_n") > fuzzy_match("n", "xan")


def test_palette_initially_lists_all(workspace):
    palette = Palette(workspace)
    assert len(palette.filtered_files) == 3
    assert palette.footer_text() == "3 files | ↑↓ navigate | Enter to open | Esc to close"
    assert palette.prompt_text() == "> Type to search..."


def test_type_filters_and_ranks(workspace):
    palette = Palette(workspace)
    for c in "note":
        palette.type_char(c)
    assert [e.display_name for e in palette.filtered_files] == ["notes.md"]
    assert palette.selected_file() == (workspace / "notes.md").resolve()
    assert palette.filtered_files[0].score == fuzzy_match("note", "notes.md")


def test_results_sorted_by_score(workspace):
    palette = Palette(workspace)
    palette.type_char("d")
    scores = [entry.score for entry in palette.filtered_files]
    assert scores == sorted(scores, reverse=True)
    assert palette.filtered_files[0].display_name == "deep.md"


def test_backspace_restores_results(workspace):
    palette = Palette(workspace)
    palette.type_char("q")
    assert palette.filtered_files == []
    assert palette.selected_file() is None
    palette.backspace()
    assert palette.query == ""
    assert len(palette.filtered_files) == 3


def test_selection_moves_and_clamps(workspace):
    palette = Palette(workspace)
    palette.move_up()
    assert palette.selected_index == 0
    for _ in range(5):
        palette.move_down()
    assert palette.selected_index == 2
    palette.move_up()
    assert palette.selected_index == 1


def test_typing_resets_selection(workspace):
    palette = Palette(workspace)
    palette.move_down()
    palette.type_char("m")
    assert palette.selected_index == 0


def test_key_down_enter_and_escape(workspace):
    palette = Palette(workspace)
    palette.key_down(Keystroke(key="enter"))
    assert palette.should_open is True
    assert palette.should_close is False
    palette.key_down(Keystroke(key="escape"))
    assert palette.should_close is True


def test_key_down_navigation_and_text(workspace):
    palette = Palette(workspace)
    palette.key_down(Keystroke(key="down"))
    assert palette.selected_index == 1
    palette.key_down(Keystroke(key="up"))
    assert palette.selected_index == 0
    palette.key_down(Keystroke(key="a", key_char="a"))
    palette.key_down(Keystroke(key="l", key_char="l"))
    assert palette.query == "al"
    palette.key_down(Keystroke(key="backspace"))
    assert palette.query == "a"


def test_key_down_ignores_modified_and_non_ascii(workspace):
    palette = Palette(workspace)
    palette.key_down(Keystroke(key="a", key_char="a", control=True))
    palette.key_down(Keystroke(key="é", key_char="é"))
    assert palette.query == ""
    palette.key_down(Keystroke(key="space", key_char=" "))
    assert palette.query == " "


def test_visible_files_marks_selection(workspace):
    palette = Palette(workspace)
    palette.move_down()
    flags = [selected for selected, _ in palette.visible_files()]
    assert flags == [False, True, False]
    assert all(isinstance(entry, FileEntry) for _, entry in palette.visible_files())


def test_visible_files_limited(tmp_path):
    for idx in range(12):
        (tmp_path / f"f{idx}.md").write_text("")
    palette = Palette(tmp_path)
    assert len(palette.filtered_files) == 12
    assert len(palette.visible_files()) == 10


def test_empty_directory(tmp_path):
    palette = Palette(Path(tmp_path))
    assert palette.selected_file() is None
    palette.move_down()
    assert palette.selected_index == 0