"""Keyboard dispatch for Bowling Solitaire.

Pins are selected with their letter keys, the three hand piles are played with
X, Y and Z, and space ends the current roll.
"""

from __future__ import annotations

from typing import Dict, Optional

import pygame

from bowling_solitaire import common as C
from bowling_solitaire.engine import RoundEngine


PIN_KEYS: Dict[int, int] = {
    getattr(pygame, f"K_{label.lower()}"): index for index, label in enumerate(C.PIN_LABELS)
}
PILE_KEYS: Dict[int, int] = {
    getattr(pygame, f"K_{label.lower()}"): index for index, label in enumerate(C.PILE_LABELS)
}
END_ROLL_KEY = pygame.K_SPACE


def normalise_key(key: int) -> int:
    # Raw keystroke sources send upper-case character codes; pygame uses lower case.
    if ord("A") <= key <= ord("Z"):
        return key + (ord("a") - ord("A"))
    return key


def key_for_char(char: str) -> Optional[int]:
    if len(char) != 1:
        return None
    return normalise_key(ord(char))


def handle_key(engine: RoundEngine, key: int) -> bool:
    """Apply one key press to the engine; returns whether the engine changed."""

    if engine.game_over or isinstance(key, bool) or not isinstance(key, int):
        return False
    key = normalise_key(key)
    if key in PIN_KEYS:
        return engine.select_pin(PIN_KEYS[key])
    if key in PILE_KEYS:
        return engine.play_card(PILE_KEYS[key])
    if key == END_ROLL_KEY:
        return engine.end_roll()
    return False


def handle_event(engine: RoundEngine, event: pygame.event.Event) -> bool:
    if event.type != pygame.KEYDOWN:
        return False
    return handle_key(engine, getattr(event, "key", -1))


def handle_char(engine: RoundEngine, char: str) -> bool:
    key = key_for_char(char)
    if key is None:
        return False
    return handle_key(engine, key)
