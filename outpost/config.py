"""Environment overrides for Kerbal Outpost.

Values are read once at import; a local ``.env`` file is honoured for dev runs.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_data_dir

from .constants import DEPOSIT_CHANCE

load_dotenv()

LOG_LEVEL = os.getenv("OUTPOST_LOG_LEVEL", "INFO").upper()
SAVE_DIR = Path(os.getenv("OUTPOST_SAVE_DIR") or user_data_dir("kerbal_outpost"))


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logging.warning(f"Ignoring {name}={raw!r}: not an integer")
        return None


def _float_or(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logging.warning(f"Ignoring {name}={raw!r}: not a number")
        return default
    if not 0.0 <= value <= 1.0:
        logging.warning(f"Ignoring {name}={raw!r}: must be within 0..1")
        return default
    return value


# Fixed world seed for reproducible sessions; None means seed from the clock.
WORLD_SEED = _optional_int("OUTPOST_SEED")
WORLD_DEPOSIT_CHANCE = _float_or("OUTPOST_DEPOSIT_CHANCE", DEPOSIT_CHANCE)


def configure_logging() -> None:
    """Set up root logging for the game process."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
