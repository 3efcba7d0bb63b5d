# common.py - shared constants and settings locations for Bowling Solitaire
import os
from typing import Dict, List, Optional, Tuple

# --- Settings location ---

SETTINGS_ENV_VAR = "BOWLING_SOLITAIRE_HOME"
OPTIONS_FILENAME = "options.json"


def _settings_dir() -> str:
    # Explicit override first, then %APPDATA% on Windows, else ~/.bowling_solitaire
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return override
    base = os.environ.get("APPDATA")
    if base:
        return os.path.join(base, "BowlingSolitaire")
    return os.path.join(os.path.expanduser("~"), ".bowling_solitaire")


def options_path(directory: Optional[str] = None) -> str:
    return os.path.join(directory or _settings_dir(), OPTIONS_FILENAME)


# ---------- Game constants ----------
TOTAL_PINS = 10
TOTAL_CARDS = 20
TOTAL_FRAMES = 10
MAX_SELECTED_PINS = 3
MAX_PLAYERS = 2

PIN_LABELS: Tuple[str, ...] = tuple(chr(ord("A") + i) for i in range(TOTAL_PINS))
PILE_SIZES: Tuple[int, ...] = (5, 3, 2)
PILE_LABELS: Tuple[str, ...] = ("X", "Y", "Z")

LABEL_INDEX: Dict[str, int] = {label: i for i, label in enumerate(PIN_LABELS)}


def card_values() -> List[int]:
    # Two of each rank 0..9; 0 stands in for a ten.
    return [(i + 1) % TOTAL_PINS for i in range(TOTAL_CARDS)]


def label_to_index(label: str) -> Optional[int]:
    return LABEL_INDEX.get((label or "").strip().upper())
