"""
Game Configuration
Centralized settings for the Crazy Eights game
"""
import os


def _env_flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class GameConfig:
    """Core game configuration"""

    # Deal settings
    DECK_SIZE = 52
    HAND_SIZE = 8

    # Opponent think delay (seconds)
    OPPONENT_THINK_DELAY = float(os.getenv('OPPONENT_THINK_DELAY', 1.5))
    OPPONENT_THINK_JITTER = float(os.getenv('OPPONENT_THINK_JITTER', 0.0))
    # Guards the synchronous opponent loop against runaway turns
    OPPONENT_MAX_MOVES = 6

    # A player draw keeps the turn with the player unless this is set
    PLAYER_DRAW_PASSES_TURN = _env_flag('PLAYER_DRAW_PASSES_TURN')

    # Game modes
    MODE_HUMAN_VS_AI = 'human_vs_ai'
    ALLOWED_MODES = [MODE_HUMAN_VS_AI]

    # Session status
    SESSION_ACTIVE = 'active'
    SESSION_COMPLETED = 'completed'


class AppConfig:
    """Flask application configuration"""
    SECRET_KEY = os.getenv('SECRET_KEY', 'crazy-eights-dev-key')
    DEBUG = _env_flag('FLASK_DEBUG')
