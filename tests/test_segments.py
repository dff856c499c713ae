import pytest

from medleytext.find import FindPanelState
from medleytext.segments import (
    Cursor,
    HighlightKind,
    RenderRun,
    build_segments,
    insert_cursor,
)

TOKEN_COLOR = 0x123456


def _texts(segments):
    return "".join(s.text for s in segments if isinstance(s, RenderRun))


def _panel(query, content):
    panel = FindPanelState(query)
    panel.recompute_matches(content)
    return panel


def test_empty_text_has_no_segments():
    assert build_segments("", TOKEN_COLOR, 0) == []


def test_plain_token_is_one_run():
    assert build_segments("hello", TOKEN_COLOR, 10) == [RenderRun("hello", TOKEN_COLOR, None)]


def test_selection_splits_token():
    text = "abcdefgh"
    segments = build_segments(text, TOKEN_COLOR, 100, selection_range=(102, 105))
    assert _texts(segments) == text
    selected = [s for s in segments if s.background == HighlightKind.SELECTION.background()]
    assert [s.text for s in selected] == [text[2:5]]
    assert selected[0].text_color == 0xFFFFFF
    others = [s for s in segments if s.background is None]
    assert all(s.text_color == TOKEN_COLOR for s in others)


def test_selection_outside_token_is_ignored():
    segments = build_segments("word", TOKEN_COLOR, 50, selection_range=(0, 50))
    assert segments == [RenderRun("word", TOKEN_COLOR, None)]


def test_search_matches_active_and_inactive():
    content = "ab ab"
    panel = _panel("ab", content)
    segments = build_segments(content, TOKEN_COLOR, 0, search_panel=panel)
    assert _texts(segments) == content
    backgrounds = [s.background for s in segments if s.text == "ab"]
    assert backgrounds == [
        HighlightKind.SEARCH_ACTIVE.background(),
        HighlightKind.SEARCH_MATCH.background(),
    ]
    active = next(s for s in segments if s.background == 0xF8C555)
    assert active.text_color == 0x1E1E1E


def test_panel_without_query_adds_nothing():
    panel = _panel("", "abc")
    assert build_segments("abc", TOKEN_COLOR, 0, search_panel=panel) == [
        RenderRun("abc", TOKEN_COLOR, None)
    ]


def test_selection_wins_over_search():
    content = "find me"
    panel = _panel("find", content)
    segments = build_segments(content, TOKEN_COLOR, 0, selection_range=(0, 4), search_panel=panel)
    first = segments[0]
    assert first.text == "find"
    assert first.background == HighlightKind.SELECTION.background()


def test_cursor_inside_token():
    text = "abcdef"
    segments = build_segments(text, TOKEN_COLOR, 20, cursor_position=23)
    idx = segments.index(Cursor())
    assert _texts(segments[:idx]) == text[:3]
    assert _texts(segments[idx + 1:]) == text[3:]


def test_cursor_hidden_when_selection_overlaps():
    segments = build_segments("abcdef", TOKEN_COLOR, 0, selection_range=(1, 2), cursor_position=2)
    assert Cursor() not in segments


def test_cursor_at_token_end_not_placed():
    segments = build_segments("abc", TOKEN_COLOR, 0, cursor_position=3)
    assert Cursor() not in segments


def test_insert_cursor_start_middle_end():
    run = RenderRun("abcd", TOKEN_COLOR, 0x264F78)
    assert insert_cursor([run], 0) == [Cursor(), run]
    assert insert_cursor([run], 4) == [run, Cursor()]
    assert insert_cursor([run], 2) == [
        RenderRun("ab", TOKEN_COLOR, 0x264F78),
        Cursor(),
        RenderRun("cd", TOKEN_COLOR, 0x264F78),
    ]


def test_insert_cursor_past_end_appends():
    runs = [RenderRun("ab", TOKEN_COLOR), RenderRun("cd", TOKEN_COLOR)]
    assert insert_cursor(runs, 10) == runs + [Cursor()]


def test_insert_cursor_only_once_at_boundary():
    runs = [RenderRun("ab", TOKEN_COLOR), RenderRun("cd", TOKEN_COLOR)]
    result = insert_cursor(runs, 2)
    assert result.count(Cursor()) == 1
    assert result == [runs[0], Cursor(), runs[1]]


def test_priorities_order():
    assert (
        HighlightKind.SELECTION.priority()
        > HighlightKind.SEARCH_ACTIVE.priority()
        > HighlightKind.SEARCH_MATCH.priority()
    )


@pytest.mark.parametrize(
    "kind, background, text_color",
    [
        (HighlightKind.SELECTION, 0x264F78, 0xFFFFFF),
        (HighlightKind.SEARCH_ACTIVE, 0xF8C555, 0x1E1E1E),
        (HighlightKind.SEARCH_MATCH, 0x3D315B, 0xFFFFFF),
    ],
)
def test_kind_colors(kind, background, text_color):
    assert kind.background() == background
    assert kind.text_color(TOKEN_COLOR) == text_color