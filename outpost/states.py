"""Game state management for Kerbal Outpost."""

import enum


class GameState(enum.Enum):
    """Top-level game states."""

    TITLE = "title"
    PLAYING = "playing"
    RESEARCH = "research"
    PAUSED = "paused"
