"""Scoring helpers for Bowling Solitaire.

Every function here works on a roll ledger: a flat, chronological sequence of
pin counts, one per completed roll. Nothing is cached, so the same ledger can
be scored after each new roll or all at once after a game.

``None`` marks a total that is still pending (a strike or spare waiting for
its bonus rolls, or a frame that has not been finished). It is never the same
as a scored zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

LOGGER = logging.getLogger(__name__)

ALL_PINS = 10
FRAMES_PER_GAME = 10
TENTH_FRAME_INDEX = FRAMES_PER_GAME - 1


@dataclass
class FrameScore:
    rolls: List[int] = field(default_factory=list)
    total: Optional[int] = None

    @property
    def is_resolved(self) -> bool:
        return self.total is not None


def _tenth_frame(rolls: Sequence[int]) -> FrameScore:
    # The last frame carries its own bonus balls, so no lookahead is needed.
    frame = FrameScore(list(rolls[:3]))
    if len(frame.rolls) < 2:
        return frame
    first, second = frame.rolls[0], frame.rolls[1]
    needed = 3 if first == ALL_PINS or first + second == ALL_PINS else 2
    if len(frame.rolls) >= needed:
        frame.rolls = frame.rolls[:needed]
        frame.total = sum(frame.rolls)
    return frame


def frame_scores(rolls: Sequence[int]) -> List[FrameScore]:
    """Break a roll ledger into per-frame rolls and per-frame totals.

    Only frames that have received at least one roll are returned. Each
    ``total`` is that frame's own score (not a running total).
    """

    frames: List[FrameScore] = []
    frame_index = 0
    second_ball = False

    for i, pins in enumerate(rolls):
        if frame_index == TENTH_FRAME_INDEX:
            frames.append(_tenth_frame(rolls[i:]))
            return frames

        if not second_ball:
            if pins == ALL_PINS:
                bonus = rolls[i + 1 : i + 3]
                total = ALL_PINS + sum(bonus) if len(bonus) == 2 else None
                frames.append(FrameScore([pins], total))
                frame_index += 1
                continue
            frames.append(FrameScore([pins]))
            second_ball = True
            continue

        frame = frames[-1]
        first = frame.rolls[0]
        frame.rolls.append(pins)
        if first + pins == ALL_PINS:
            frame.total = ALL_PINS + rolls[i + 1] if i + 1 < len(rolls) else None
        else:
            frame.total = first + pins
        frame_index += 1
        second_ball = False

    return frames


def total_score(rolls: Sequence[int], frame_number: Optional[int] = None) -> Optional[int]:
    """Return the running total through ``frame_number`` (1-based).

    Without a frame number the whole-game total is returned, and pending frames
    simply contribute nothing. A specific frame is stricter: if that frame or
    any frame before it is pending or unplayed the result is ``None``.
    """

    frames = frame_scores(rolls)
    if frame_number is None:
        return sum(frame.total for frame in frames if frame.total is not None)
    if not 1 <= frame_number <= FRAMES_PER_GAME or frame_number > len(frames):
        return None

    running = 0
    for frame in frames[:frame_number]:
        if frame.total is None:
            return None
        running += frame.total
    return running


def frame_score(rolls: Sequence[int], frame_number: int) -> Optional[FrameScore]:
    if not 1 <= frame_number <= FRAMES_PER_GAME:
        return None
    frames = frame_scores(rolls)
    if frame_number > len(frames):
        return FrameScore()
    return frames[frame_number - 1]


def calculate_frame_totals(rolls: Sequence[int]) -> List[Optional[int]]:
    """Return cumulative frame totals following ten-pin bowling rules."""

    return [total_score(rolls, n) for n in range(1, FRAMES_PER_GAME + 1)]


# --- Incremental recording --------------------------------------------------


def current_frame(rolls: Sequence[int]) -> Tuple[int, int]:
    """Return ``(frame_number, roll_in_frame)`` for the next roll to be added."""

    frame = 1
    roll = 0
    for pins in rolls:
        if frame < FRAMES_PER_GAME and ((roll == 0 and pins == ALL_PINS) or roll == 1):
            frame += 1
            roll = 0
        else:
            roll += 1
    return frame, roll


def record_roll(rolls: List[int], pins: int) -> bool:
    """Append a roll to the ledger.

    Returns True when the roll closes one of frames 1-9.
    """

    if not 0 <= pins <= ALL_PINS:
        LOGGER.warning("Ignoring roll of %r pins", pins)
        return False
    frame, roll = current_frame(rolls)
    rolls.append(pins)
    return frame < FRAMES_PER_GAME and (roll == 1 or pins == ALL_PINS)


# --- Score sheet marks ------------------------------------------------------


def _mark(pins: int) -> str:
    if pins == ALL_PINS:
        return "X"
    return str(pins) if pins > 0 else "-"


def frame_symbols(frame: FrameScore, frame_number: int) -> Tuple[str, str, str]:
    """Return the three score-sheet boxes for a frame ('' for an empty box)."""

    rolls = frame.rolls
    first = second = third = ""
    if not rolls:
        return first, second, third

    if frame_number < FRAMES_PER_GAME:
        if rolls[0] == ALL_PINS:
            return "", "X", ""
        first = _mark(rolls[0])
        if len(rolls) > 1:
            second = "/" if rolls[0] + rolls[1] == ALL_PINS else _mark(rolls[1])
        return first, second, third

    first = _mark(rolls[0])
    if len(rolls) > 1:
        spare = rolls[0] != ALL_PINS and rolls[0] + rolls[1] == ALL_PINS
        second = "/" if spare else _mark(rolls[1])
        if len(rolls) > 2:
            fresh_rack = spare or rolls[1] == ALL_PINS
            if not fresh_rack and rolls[1] + rolls[2] == ALL_PINS:
                third = "/"
            else:
                third = _mark(rolls[2])
    return first, second, third
