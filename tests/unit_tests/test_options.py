import json
import os

import pytest

from bowling_solitaire import common as C
from bowling_solitaire.options import (
    GameOptions,
    advance_story,
    delete_options,
    get_note,
    load_options,
    save_options,
    unlocked_notes,
)


def test_missing_file_gives_defaults(tmp_path) -> None:
    assert load_options(str(tmp_path / "nope.json")) == GameOptions()


def test_save_then_load(tmp_path) -> None:
    path = str(tmp_path / "nested" / "options.json")
    options = GameOptions(show_hints=True, visible_trash=True, players=1, story_phase=2)
    assert save_options(options, path)
    with open(path, "r", encoding="utf-8") as fh:
        assert json.load(fh) == {
            "showHints": True,
            "visibleTrash": True,
            "players": 1,
            "storyPhase": 2,
        }
    assert load_options(path) == options


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", ""])
def test_unreadable_file_gives_defaults(tmp_path, content: str) -> None:
    path = tmp_path / "options.json"
    path.write_text(content, encoding="utf-8")
    assert load_options(str(path)) == GameOptions()


def test_from_dict_rejects_bad_values() -> None:
    options = GameOptions.from_dict({"showHints": 1, "players": 9, "storyPhase": "two"})
    assert options == GameOptions(show_hints=True, players=1, story_phase=0)
    assert GameOptions.from_dict({"players": True}).players == 1
    assert GameOptions.from_dict({"storyPhase": 7}).story_phase == 0


def test_default_path_follows_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv(C.SETTINGS_ENV_VAR, str(tmp_path))
    assert C.options_path() == os.path.join(str(tmp_path), "options.json")
    save_options(GameOptions(show_hints=True))
    assert load_options().show_hints is True


def test_settings_dir_without_override(monkeypatch) -> None:
    monkeypatch.delenv(C.SETTINGS_ENV_VAR, raising=False)
    monkeypatch.setenv("APPDATA", os.path.join("appdata"))
    assert C.options_path() == os.path.join("appdata", "BowlingSolitaire", "options.json")


def test_first_finished_game_unlocks_story() -> None:
    options = GameOptions()
    assert advance_story(options, 0)
    assert options.story_phase == 1


@pytest.mark.parametrize(
    "phase, score, expected_phase",
    [
        (1, 49, 1),
        (1, 50, 2),
        (2, 99, 2),
        (2, 100, 3),
        (3, 300, 3),
        (1, None, 1),
    ],
)
def test_story_score_triggers(phase: int, score, expected_phase: int) -> None:
    options = GameOptions(story_phase=phase)
    advanced = advance_story(options, score)
    assert options.story_phase == expected_phase
    assert advanced == (expected_phase != phase)


def test_delete_options_resets_to_defaults(tmp_path) -> None:
    path = str(tmp_path / "options.json")
    save_options(GameOptions(show_hints=True, story_phase=3), path)
    assert delete_options(path)
    assert not os.path.exists(path)
    assert load_options(path) == GameOptions()
    assert delete_options(path)


def test_delete_options_reports_failure(tmp_path) -> None:
    # A directory in place of the file cannot be removed with os.remove.
    path = tmp_path / "options.json"
    path.mkdir()
    assert not delete_options(str(path))


@pytest.mark.parametrize(
    "phase, headings",
    [
        (0, []),
        (1, ["The Entryway BBS"]),
        (3, ["The Entryway BBS", "A Modest Success", "The Exit"]),
    ],
)
def test_notes_unlock_with_story_phase(phase: int, headings) -> None:
    notes = unlocked_notes(GameOptions(story_phase=phase))
    assert [note.heading for note in notes] == headings


@pytest.mark.parametrize("number", [0, -1, 4, True, "1"])
def test_missing_note_numbers(number) -> None:
    assert get_note(number) is None


def test_get_note_by_number() -> None:
    note = get_note(2)
    assert note.heading == "A Modest Success"
    assert note.text.startswith('"Bowling Solitaire" never gained')
