"""Bowling Solitaire round engine: pins, ball cards and frame progression."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import (
    Dict,
    FrozenSet,
    Iterable,
    List,
    NamedTuple,
    Optional,
    Sequence,
    Set,
    Tuple,
    Union,
)

from bowling_solitaire import common as C
from bowling_solitaire import scoring as S
from bowling_solitaire.options import GameOptions

LOGGER = logging.getLogger(__name__)


# --- Core data structures ---------------------------------------------------

# Pin indices on the lane (index 0 is the head pin):
#     6 7 8 9
#      3 4 5
#       1 2
#        0
PIN_ADJACENCY: Dict[int, Set[int]] = {
    0: {1, 2},
    1: {0, 2, 3, 4},
    2: {0, 1, 4, 5},
    3: {1, 4, 6, 7},
    4: {1, 2, 3, 5, 7, 8},
    5: {2, 4, 8, 9},
    6: {3, 7},
    7: {3, 4, 6, 8},
    8: {4, 5, 7, 9},
    9: {5, 8},
}

BACK_ROW_START = 6
# The centre pin (index 4) is held back until a card has been played.
OPENING_PINS: FrozenSet[int] = frozenset({0, 1, 2, 3, 5})

PinKey = Union[int, str]


@dataclass
class Pin:
    index: int
    value: int
    down: bool = False
    available: bool = False

    @property
    def label(self) -> str:
        return C.PIN_LABELS[self.index]


class PinState(NamedTuple):
    label: str
    value: int
    is_down: bool
    is_selected: bool
    is_available: bool


class HandPile:
    """Face-down stack of ball cards; only the top card is in play."""

    def __init__(self, cards: Iterable[int]):
        self._cards: List[int] = list(cards)

    def __len__(self) -> int:
        return len(self._cards)

    @property
    def top(self) -> Optional[int]:
        return self._cards[0] if self._cards else None

    def take_top(self) -> Optional[int]:
        if not self._cards:
            return None
        return self._cards.pop(0)


# --- Engine -----------------------------------------------------------------


class RoundEngine:
    """Runs a single-player game of Bowling Solitaire.

    The engine is driven one input at a time. Every mutator is safe to call
    with anything: inputs that do not apply to the current state are ignored
    and reported by a ``False`` return value.
    """

    def __init__(
        self,
        options: Optional[GameOptions] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.options: GameOptions = options or GameOptions()
        self._rng: random.Random = rng or random.Random()

        self.deck: List[int] = []
        self.pins: List[Pin] = []
        self.hand: List[HandPile] = []
        self.discard: List[int] = []
        self.selected_pins: List[int] = []

        # Only player 0 ever bowls; the second ledger is kept for the score sheet.
        self.scores: List[List[int]] = [[] for _ in range(C.MAX_PLAYERS)]
        self.frame_scores: List[S.FrameScore] = []
        self.player: int = 0

        self.frame: int = 0
        self.roll: int = 0
        self.turn: int = 0
        self.prev_pins_down: Optional[int] = None
        self.game_over: bool = False
        self.status_message: str = ""

        self.start_new_game()

    # ------------------------------------------------------------------ state

    def start_new_game(self) -> None:
        self.scores = [[] for _ in range(C.MAX_PLAYERS)]
        self.frame_scores = []
        self.player = 0
        self.frame = 0
        self.game_over = False
        self.start_new_frame()

    def start_new_frame(self) -> bool:
        """Deal the next frame once the ledger has closed the current one."""

        if self.game_over or self.frame >= C.TOTAL_FRAMES:
            return False
        ledger_frame, _ = S.current_frame(self.scores[self.player])
        if ledger_frame <= self.frame:
            return False
        self.frame += 1
        self._deal()
        self.status_message = f"Frame {self.frame}: select pins to knock down."
        return True

    def _deal(self) -> None:
        deck = C.card_values()
        self._rng.shuffle(deck)
        self.deck = deck
        self.pins = [Pin(index=i, value=self.deck.pop()) for i in range(C.TOTAL_PINS)]
        self.hand = [HandPile([self.deck.pop() for _ in range(size)]) for size in C.PILE_SIZES]
        self.discard = []
        self.selected_pins = []
        self.turn = 0
        self.roll = 0
        self.prev_pins_down = None
        self._update_available()
        LOGGER.debug(
            "Dealt frame %d: pins=%s hand=%s",
            self.frame,
            [pin.value for pin in self.pins],
            [pile.top for pile in self.hand],
        )

    # ---------------------------------------------------------------- queries

    def pins_down(self) -> int:
        return sum(1 for pin in self.pins if pin.down)

    def pins_remaining(self) -> int:
        return len(self.pins) - self.pins_down()

    def is_pin_selected(self, pos: int) -> bool:
        return pos in self.selected_pins

    def is_pin_available(self, pos: int) -> bool:
        if not 0 <= pos < len(self.pins):
            return False
        return self.pins[pos].available

    def pin_states(self) -> List[PinState]:
        return [
            PinState(
                label=pin.label,
                value=pin.value,
                is_down=pin.down,
                is_selected=self.is_pin_selected(pin.index),
                is_available=pin.available,
            )
            for pin in self.pins
        ]

    def hand_tops(self) -> List[Optional[int]]:
        return [pile.top for pile in self.hand]

    def hand_sizes(self) -> List[int]:
        return [len(pile) for pile in self.hand]

    def selected_pin_sum(self) -> int:
        """Return the last digit of the selected pins' total, or -1 with no selection."""

        return self._pin_sum(self.selected_pins)

    def _pin_sum(self, indices: Sequence[int]) -> int:
        if not indices:
            return -1
        return sum(self.pins[i].value for i in indices) % 10

    def is_pile_hinted(self, pile_index: int) -> bool:
        if not self.options.show_hints or self.game_over:
            return False
        if not 0 <= pile_index < len(self.hand):
            return False
        top = self.hand[pile_index].top
        return top is not None and top == self.selected_pin_sum()

    def frame_score(self, player: int, frame_number: int) -> Optional[S.FrameScore]:
        if not 0 <= player < len(self.scores):
            return None
        return S.frame_score(self.scores[player], frame_number)

    def total_score(self, player: int, frame_number: Optional[int] = None) -> Optional[int]:
        if not 0 <= player < len(self.scores):
            return None
        return S.total_score(self.scores[player], frame_number)

    # ------------------------------------------------------------ availability

    def _is_available(self, pos: int, selected: Sequence[int]) -> bool:
        # Back-row pins can't be anchored until a card has been played this frame.
        if self.turn == 0 and pos >= BACK_ROW_START:
            return False
        if self.pins[pos].down:
            return False
        if pos in selected:
            return True
        count = len(selected)
        for neighbor in PIN_ADJACENCY[pos]:
            if self.pins[neighbor].down and count == 0:
                return True
            if neighbor in selected and count < C.MAX_SELECTED_PINS:
                return True
        return False

    def _available_for(self, selected: Sequence[int]) -> List[int]:
        if self.turn == 0 and not selected:
            return sorted(OPENING_PINS)
        return [pin.index for pin in self.pins if self._is_available(pin.index, selected)]

    def _update_available(self) -> None:
        available = set() if self.game_over else set(self._available_for(self.selected_pins))
        for pin in self.pins:
            pin.available = pin.index in available

    def has_available_move(self) -> bool:
        """Return True if some legal pin selection matches a visible ball card."""

        if self.game_over:
            return False
        tops = {pile.top for pile in self.hand if pile.top is not None}
        if not tops:
            return False
        seen: Set[FrozenSet[int]] = set()
        pending: List[Tuple[int, ...]] = [()]
        while pending:
            selection = pending.pop()
            for pos in self._available_for(selection):
                if pos in selection:
                    continue
                extended = selection + (pos,)
                key = frozenset(extended)
                if key in seen:
                    continue
                seen.add(key)
                if self._pin_sum(extended) in tops:
                    return True
                if len(extended) < C.MAX_SELECTED_PINS:
                    pending.append(extended)
        return False

    # ---------------------------------------------------------------- controls

    def _resolve_pin(self, key: PinKey) -> Optional[int]:
        if isinstance(key, bool):
            return None
        if isinstance(key, int):
            return key if 0 <= key < len(self.pins) else None
        if isinstance(key, str):
            return C.label_to_index(key)
        return None

    def select_pin(self, key: PinKey) -> bool:
        """Toggle a pin by label or index.

        Pressing an already selected pin clears the whole selection, not just
        that pin.
        """

        if self.game_over:
            return False
        pos = self._resolve_pin(key)
        if pos is None or not self.pins[pos].available:
            return False
        if pos in self.selected_pins:
            self.selected_pins.clear()
        else:
            self.selected_pins.append(pos)
        self._update_available()
        return True

    def clear_selection(self) -> None:
        self.selected_pins.clear()
        self._update_available()

    def play_card(self, pile_index: int) -> bool:
        """Knock down the selected pins with the top card of a hand pile.

        The card must equal the selection sum; otherwise nothing happens and
        False is returned.
        """

        if self.game_over or isinstance(pile_index, bool):
            return False
        if not isinstance(pile_index, int) or not 0 <= pile_index < len(self.hand):
            return False
        pile = self.hand[pile_index]
        if pile.top is None or pile.top != self.selected_pin_sum():
            return False

        card = pile.take_top()
        if card is not None:
            self.discard.append(card)
        for pos in self.selected_pins:
            self.pins[pos].down = True
        self._next_turn()
        self.status_message = "Pins knocked down."

        if self.pins_down() == C.TOTAL_PINS:
            mark = "Strike!" if self.prev_pins_down is None else "Spare!"
            self._record_roll()
            if self.frame == C.TOTAL_FRAMES:
                self._handle_last_frame_marks(mark)
            else:
                self.start_new_frame()
                self.status_message = f"{mark} Frame {self.frame}: select pins to knock down."
        self._update_available()
        return True

    def end_roll(self) -> bool:
        """Finish the current roll when no more cards can (or will) be played."""

        if self.game_over:
            return False
        knocked = self._record_roll()
        self.selected_pins.clear()
        self.roll += 1

        if self.frame < C.TOTAL_FRAMES and self.roll > 1:
            self.start_new_frame()
            return True
        if self.frame == C.TOTAL_FRAMES and self._last_frame_finished():
            self._end_game()
            return True

        for pile in self.hand:
            card = pile.take_top()
            if card is not None:
                self.discard.append(card)
        self._update_available()
        if knocked == 1:
            self.status_message = "Roll over: 1 pin knocked down."
        else:
            self.status_message = f"Roll over: {knocked} pins knocked down."
        return True

    # -------------------------------------------------------------- roll logic

    def _next_turn(self) -> None:
        self.turn += 1
        self.selected_pins.clear()

    def _record_roll(self) -> int:
        down = self.pins_down()
        if self.prev_pins_down is None:
            knocked = down
            if down < C.TOTAL_PINS:
                self.prev_pins_down = down
        else:
            knocked = down - self.prev_pins_down
            self.prev_pins_down = None
        ledger = self.scores[self.player]
        S.record_roll(ledger, knocked)
        self.frame_scores = S.frame_scores(ledger)
        LOGGER.debug("Frame %d roll %d: %d pins", self.frame, self.roll + 1, knocked)
        return knocked

    def _last_frame_finished(self) -> bool:
        if self.roll > 2:
            return True
        if self.roll < 2 or len(self.frame_scores) < C.TOTAL_FRAMES:
            return False
        rolls = self.frame_scores[S.TENTH_FRAME_INDEX].rolls
        return len(rolls) >= 2 and rolls[0] + rolls[1] < C.TOTAL_PINS

    def _handle_last_frame_marks(self, mark: str) -> None:
        # A mark on the first or second ball of the tenth frame earns a fresh rack.
        if self.roll < 2:
            next_roll = self.roll + 1
            self._deal()
            self.roll = next_roll
            self.status_message = f"{mark} Bonus ball {next_roll + 1} of frame {self.frame}."
            return
        self._end_game()

    def _end_game(self) -> None:
        self.game_over = True
        self.selected_pins.clear()
        self._update_available()
        self.status_message = "Game complete!"
        LOGGER.debug("Game over: total score %s", self.total_score(self.player))
