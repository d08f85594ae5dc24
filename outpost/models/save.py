"""Save / load game state to JSON.

Uses platformdirs for cross-platform save location (overridable with
``OUTPOST_SAVE_DIR``):
  Linux:   ~/.local/share/kerbal_outpost/save.json
  macOS:   ~/Library/Application Support/kerbal_outpost/save.json
  Windows: C:/Users/.../AppData/Local/kerbal_outpost/save.json

The map is regenerated from its seed; built modules are replayed from the
placement records, so only mutable state is persisted.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .. import config
from .colony import Colony
from .modules import ModuleType
from .session import ColonySession, Placement

SAVE_VERSION = 1
SAVE_DIR = config.SAVE_DIR
SAVE_FILE = SAVE_DIR / "save.json"


# ── Serialise helpers ─────────────────────────────────────────────────

def _placement_to_dict(p: Placement) -> dict:
    return {"x": p.x, "y": p.y, "module": p.module_type.value}


def _placement_from_dict(d: dict) -> Placement:
    return Placement(x=int(d["x"]), y=int(d["y"]), module_type=ModuleType(d["module"]))


def _grid_to_dict(session: ColonySession) -> dict:
    """Save only what regenerates the map."""
    g = session.grid
    return {
        "seed": g.seed,
        "width": g.width,
        "height": g.height,
        "deposit_chance": g.deposit_chance,
    }


def session_to_dict(session: ColonySession) -> dict:
    return {
        "version": SAVE_VERSION,
        "colony": session.colony.to_dict(),
        "grid": _grid_to_dict(session),
        "placements": [_placement_to_dict(p) for p in session.placements],
        "avatar": [session.avatar_x, session.avatar_y],
        "oxygen": session.oxygen,
    }


def session_from_dict(data: dict) -> ColonySession:
    g = data["grid"]
    session = ColonySession(
        seed=int(g["seed"]),
        width=int(g["width"]),
        height=int(g["height"]),
        deposit_chance=float(g.get("deposit_chance", config.WORLD_DEPOSIT_CHANCE)),
    )
    colony_data = data.get("colony")
    session.colony = Colony.from_dict(colony_data if isinstance(colony_data, dict) else {})

    placements: list[Placement] = []
    for entry in data.get("placements", []):
        try:
            placements.append(_placement_from_dict(entry))
        except (KeyError, ValueError, TypeError):
            logging.warning(f"Save: skipping placement {entry!r}")
    session.restore_placements(placements)

    avatar = data.get("avatar")
    if avatar is not None:
        try:
            session.avatar_x, session.avatar_y = session.grid.wrap(int(avatar[0]), int(avatar[1]))
        except (ValueError, TypeError, IndexError, KeyError):
            logging.warning(f"Save: ignoring avatar position {avatar!r}")
    session.oxygen = float(data.get("oxygen", session.oxygen))
    return session


# ── Top-level API ─────────────────────────────────────────────────────

def save_game(session: ColonySession, path: Path | None = None) -> Path:
    """Serialize the session to JSON and return the save path."""
    path = path or SAVE_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(session_to_dict(session), indent=2))
    logging.info(f"Save: wrote {path}")
    return path


def load_game(path: Path | None = None) -> ColonySession | None:
    """Deserialize a session from JSON. Returns None if no usable save exists."""
    path = path or SAVE_FILE
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        logging.error(f"Save: could not read {path}: {e}")
        return None

    if not isinstance(data, dict):
        logging.error(f"Save: {path} does not hold a save object")
        return None
    if data.get("version") != SAVE_VERSION:
        logging.warning(f"Save: unsupported version {data.get('version')!r} in {path}")
        return None
    try:
        return session_from_dict(data)
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        logging.error(f"Save: corrupt save {path}: {e}")
        return None


def has_save(path: Path | None = None) -> bool:
    """Check if a save file exists."""
    return (path or SAVE_FILE).exists()


def delete_save(path: Path | None = None) -> None:
    """Remove the save file if it exists."""
    path = path or SAVE_FILE
    if path.exists():
        path.unlink()
