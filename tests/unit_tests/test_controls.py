import random

import pytest

pygame = pytest.importorskip("pygame")

from bowling_solitaire import controls
from bowling_solitaire.engine import HandPile, RoundEngine


@pytest.fixture
def engine(monkeypatch) -> RoundEngine:
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    game = RoundEngine(rng=random.Random(3))
    for pin in game.pins:
        pin.value = 2
    game.hand = [HandPile([2, 2, 2, 2, 2]), HandPile([4, 4, 4]), HandPile([6, 6])]
    game._update_available()
    return game


def _keydown(key: int) -> "pygame.event.Event":
    return pygame.event.Event(pygame.KEYDOWN, {"key": key, "mod": 0})


def test_letter_keys_select_pins(engine: RoundEngine) -> None:
    assert controls.handle_key(engine, pygame.K_a)
    assert controls.handle_key(engine, pygame.K_b)
    assert engine.selected_pins == [0, 1]


def test_upper_case_character_codes_are_folded(engine: RoundEngine) -> None:
    assert controls.handle_key(engine, ord("C"))
    assert engine.selected_pins == [2]


def test_pile_keys_play_cards(engine: RoundEngine) -> None:
    controls.handle_char(engine, "A")
    controls.handle_char(engine, "B")
    assert not controls.handle_char(engine, "x")
    assert controls.handle_char(engine, "y")
    assert engine.pins_down() == 2
    assert engine.hand_sizes() == [5, 2, 2]


def test_space_ends_roll(engine: RoundEngine) -> None:
    assert controls.handle_event(engine, _keydown(pygame.K_SPACE))
    assert engine.roll == 1
    assert engine.scores[0] == [0]


def test_keydown_events_dispatch(engine: RoundEngine) -> None:
    assert controls.handle_event(engine, _keydown(pygame.K_d))
    assert engine.selected_pins == [3]


@pytest.mark.parametrize("key", ["K_q", "K_ESCAPE", "K_UP", "K_RETURN", "K_1"])
def test_unmapped_keys_are_ignored(engine: RoundEngine, key: str) -> None:
    assert not controls.handle_key(engine, getattr(pygame, key))
    assert engine.selected_pins == []
    assert engine.roll == 0


def test_non_key_events_are_ignored(engine: RoundEngine) -> None:
    click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, {"pos": (10, 10), "button": 1})
    assert not controls.handle_event(engine, click)


@pytest.mark.parametrize("char", ["", "AB", "?"])
def test_bad_characters_are_ignored(engine: RoundEngine, char: str) -> None:
    assert not controls.handle_char(engine, char)


def test_keys_after_game_over_are_ignored(engine: RoundEngine) -> None:
    for _ in range(20):
        controls.handle_char(engine, " ")
    assert engine.game_over
    assert not controls.handle_key(engine, pygame.K_SPACE)
    assert not controls.handle_key(engine, pygame.K_a)
