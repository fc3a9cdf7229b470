"""Game state resource describing the active screen."""
from dataclasses import dataclass
from enum import Enum


class Screen(Enum):
    """Screens of the progression state machine."""
    MENU = "menu"
    LEVEL_SELECT = "level_select"
    SETTINGS = "settings"
    HIGH_SCORE = "high_score"
    PLAYING = "playing"
    PAUSED = "paused"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """Singleton component storing the currently active screen."""
    screen: Screen = Screen.MENU
