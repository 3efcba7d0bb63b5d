"""Bundled text for Bowling Solitaire: the how-to-play sheet and the story notes.

Text lives in ``assets/text/text_<locale>.json`` as one object with a ``help``
entry and an ordered ``notes`` list. Notes are numbered from 1 in file order.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Mapping, Optional, Tuple

DEFAULT_LOCALE = "en"
_TEXT_DIR = os.path.join(os.path.dirname(__file__), "assets", "text")


@dataclass(frozen=True)
class HelpContent:
    title: str
    lines: Tuple[str, ...]
    max_width: Optional[int] = None

    def wrapped(self) -> List[str]:
        if self.max_width is None:
            return list(self.lines)
        out: List[str] = []
        for line in self.lines:
            out.extend(wrap_text(line, self.max_width))
        return out


@dataclass(frozen=True)
class StoryNote:
    number: int
    heading: str
    text: str

    def wrapped(self, width: int) -> List[str]:
        return wrap_text(self.text, width)


@dataclass(frozen=True)
class GameText:
    help: HelpContent
    notes: Tuple[StoryNote, ...]


def wrap_text(text: str, width: int) -> List[str]:
    """Greedy word wrap by character count; words longer than ``width`` get their own line."""

    words = text.split()
    if not words:
        return [""]
    lines: List[str] = []
    current = words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if len(candidate) <= width:
            current = candidate
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return lines


def _text_file_path(locale: str) -> str:
    return os.path.join(_TEXT_DIR, f"text_{locale}.json")


def _parse_help(raw: Any) -> HelpContent:
    if not isinstance(raw, Mapping):
        raise TypeError("Text file must provide a 'help' object")
    title = raw.get("title")
    lines = raw.get("lines")
    max_width = raw.get("max_width")
    if not isinstance(title, str):
        raise TypeError("Help text is missing a string 'title'")
    if not isinstance(lines, list) or not all(isinstance(line, str) for line in lines):
        raise TypeError("Help text must provide a list of string lines")
    if max_width is not None and (isinstance(max_width, bool) or not isinstance(max_width, int)):
        raise TypeError("Help text has non-integer max_width")
    return HelpContent(title=title, lines=tuple(lines), max_width=max_width)


def _parse_notes(raw: Any) -> Tuple[StoryNote, ...]:
    if not isinstance(raw, list):
        raise TypeError("Text file must provide a 'notes' list")
    notes = []
    for number, entry in enumerate(raw, start=1):
        if not isinstance(entry, Mapping):
            raise TypeError(f"Story note {number} must be an object")
        heading = entry.get("heading")
        text = entry.get("text")
        if not isinstance(heading, str) or not isinstance(text, str):
            raise TypeError(f"Story note {number} needs string 'heading' and 'text'")
        notes.append(StoryNote(number=number, heading=heading, text=text))
    return tuple(notes)


@lru_cache()
def load_text(locale: str = DEFAULT_LOCALE) -> GameText:
    path = _text_file_path(locale)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Text locale '{locale}' not found at {path}") from exc
    if not isinstance(raw, Mapping):
        raise ValueError(f"Text file {path} must contain an object")
    return GameText(help=_parse_help(raw.get("help")), notes=_parse_notes(raw.get("notes")))


def get_help_content(*, locale: str = DEFAULT_LOCALE) -> HelpContent:
    return load_text(locale).help


def story_notes(*, locale: str = DEFAULT_LOCALE) -> Tuple[StoryNote, ...]:
    return load_text(locale).notes
