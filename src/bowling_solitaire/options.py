"""Persisted player options for Bowling Solitaire."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from bowling_solitaire import common as C
from bowling_solitaire import game_text

LOGGER = logging.getLogger(__name__)

STORY_SCORE_TRIGGERS: Dict[int, int] = {
    1: 50,
    2: 100,
}
FINAL_STORY_PHASE = 3


@dataclass
class GameOptions:
    show_hints: bool = False
    visible_trash: bool = False
    players: int = 1
    story_phase: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "showHints": self.show_hints,
            "visibleTrash": self.visible_trash,
            "players": self.players,
            "storyPhase": self.story_phase,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "GameOptions":
        defaults = GameOptions()
        players = _coerce_int(data.get("players"), defaults.players)
        if not 1 <= players <= C.MAX_PLAYERS:
            players = defaults.players
        story_phase = _coerce_int(data.get("storyPhase"), defaults.story_phase)
        if not 0 <= story_phase <= FINAL_STORY_PHASE:
            story_phase = defaults.story_phase
        return GameOptions(
            show_hints=bool(data.get("showHints", defaults.show_hints)),
            visible_trash=bool(data.get("visibleTrash", defaults.visible_trash)),
            players=players,
            story_phase=story_phase,
        )


def _coerce_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


# --- Load / save ------------------------------------------------------------


def load_options(path: Optional[str] = None) -> GameOptions:
    """Read options from disk, falling back to defaults when unavailable."""

    path = path or C.options_path()
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError:
        return GameOptions()
    except (OSError, ValueError) as exc:
        LOGGER.warning("Could not read options from %s: %s", path, exc)
        return GameOptions()
    if not isinstance(data, Mapping):
        LOGGER.warning("Ignoring options file %s: expected an object", path)
        return GameOptions()
    return GameOptions.from_dict(data)


def save_options(options: GameOptions, path: Optional[str] = None) -> bool:
    path = path or C.options_path()
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(options.to_dict(), fh, indent=2)
    except OSError as exc:
        LOGGER.warning("Could not write options to %s: %s", path, exc)
        return False
    return True


def delete_options(path: Optional[str] = None) -> bool:
    """Erase saved options so the next load starts from defaults."""

    path = path or C.options_path()
    try:
        os.remove(path)
    except FileNotFoundError:
        return True
    except OSError as exc:
        LOGGER.warning("Could not delete options at %s: %s", path, exc)
        return False
    LOGGER.info("Deleted saved options at %s", path)
    return True


# --- Story progression ------------------------------------------------------


def advance_story(options: GameOptions, total_score: Optional[int]) -> bool:
    """Unlock the next story note after a finished game.

    The first finished game always unlocks a note; later notes need the game's
    total to reach the score trigger of the current phase.
    """

    phase = options.story_phase
    if phase >= FINAL_STORY_PHASE:
        return False
    if phase == 0:
        options.story_phase = 1
        return True
    trigger = STORY_SCORE_TRIGGERS[phase]
    if total_score is not None and total_score >= trigger:
        options.story_phase = phase + 1
        return True
    return False


def get_note(
    number: int, *, locale: str = game_text.DEFAULT_LOCALE
) -> Optional[game_text.StoryNote]:
    """Return story note ``number`` (1-based), or None when there is no such note."""

    if isinstance(number, bool) or not isinstance(number, int):
        return None
    notes = game_text.story_notes(locale=locale)
    if not 1 <= number <= len(notes):
        return None
    return notes[number - 1]


def unlocked_notes(
    options: GameOptions, *, locale: str = game_text.DEFAULT_LOCALE
) -> List[game_text.StoryNote]:
    """Notes the player may read: note ``n`` opens once the story phase reaches ``n``."""

    notes = game_text.story_notes(locale=locale)
    return [note for note in notes if note.number <= options.story_phase]
