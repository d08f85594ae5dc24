import os

# --- HEADLESS PYGAME ---
# Must be set before pygame opens a display.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from outpost.models import save
from outpost.models.session import ColonySession


@pytest.fixture(autouse=True)
def save_file(tmp_path, monkeypatch):
    """Keep every test away from the player's real save."""
    path = tmp_path / "save.json"
    monkeypatch.setattr(save, "SAVE_FILE", path)
    return path


@pytest.fixture
def session():
    """Small, deposit-free world with a fixed seed and clock."""
    return ColonySession(seed=42, width=40, height=30, deposit_chance=0.0, now=0.0)


@pytest.fixture
def display():
    pygame.init()
    surface = pygame.display.set_mode((1280, 720))
    yield surface
    pygame.quit()
