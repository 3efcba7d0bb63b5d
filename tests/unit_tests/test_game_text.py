import json

import pytest

from bowling_solitaire import game_text


def test_help_sheet_is_bundled() -> None:
    content = game_text.get_help_content()
    assert content.title == "Bowling Solitaire"
    assert content.lines
    assert all(len(line) <= content.max_width for line in content.wrapped())


def test_story_notes_are_numbered_in_order() -> None:
    notes = game_text.story_notes()
    assert [note.number for note in notes] == [1, 2, 3]
    assert [note.heading for note in notes] == ["The Entryway BBS", "A Modest Success", "The Exit"]


def test_unknown_locale_raises() -> None:
    with pytest.raises(FileNotFoundError):
        game_text.load_text("xx")


@pytest.mark.parametrize(
    "text, width, expected",
    [
        ("", 10, [""]),
        ("one two three", 7, ["one two", "three"]),
        ("a verylongword b", 4, ["a", "verylongword", "b"]),
        ("  spaced   out  ", 20, ["spaced out"]),
    ],
)
def test_wrap_text(text: str, width: int, expected) -> None:
    assert game_text.wrap_text(text, width) == expected


def test_malformed_text_file_is_rejected(monkeypatch, tmp_path) -> None:
    (tmp_path / "text_zz.json").write_text(
        json.dumps({"help": {"title": "T", "lines": ["x"]}, "notes": [{"heading": "H"}]}),
        encoding="utf-8",
    )
    monkeypatch.setattr(game_text, "_TEXT_DIR", str(tmp_path))
    game_text.load_text.cache_clear()
    try:
        with pytest.raises(TypeError):
            game_text.load_text("zz")
    finally:
        game_text.load_text.cache_clear()
