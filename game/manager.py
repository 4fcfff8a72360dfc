import uuid
import time
import threading

from config import GameConfig
from game.engine import CrazyEightsEngine
from game.models import Player
from utils import safe_print


class GameManager:
    """
    Responsible for creating, storing, and managing game sessions.
    Sessions live in memory for the lifetime of the process.
    """

    def __init__(self, rng=None):
        # game_id -> session data
        self.games = {}
        self.rng = rng

    # -----------------------------
    # CREATE GAME
    # -----------------------------

    def create_game(self, mode=GameConfig.MODE_HUMAN_VS_AI, player_name="You"):
        """
        Creates and deals a new game session and returns game_id.
        """
        if mode not in GameConfig.ALLOWED_MODES:
            raise ValueError(f"Unsupported game mode: {mode}")

        game_id = str(uuid.uuid4())

        players = [
            Player(player_name),
            Player("Computer")
        ]

        engine = CrazyEightsEngine(players, rng=self.rng)
        engine.start_game()

        self.games[game_id] = {
            "engine": engine,
            "mode": mode,
            "created_at": time.time(),
            "status": GameConfig.SESSION_ACTIVE,
            # one lock per session; every move on this engine goes through it
            "lock": threading.RLock()
        }

        safe_print(f"[MANAGER] Created game {game_id} ({mode})")

        return game_id

    # -----------------------------
    # GET GAME
    # -----------------------------

    def get_game(self, game_id):
        session = self.games.get(game_id)

        if not session:
            raise KeyError(f"Game {game_id} not found")

        return session["engine"]

    def get_lock(self, game_id):
        session = self.games.get(game_id)

        if not session:
            raise KeyError(f"Game {game_id} not found")

        return session["lock"]

    # -----------------------------
    # RESTART GAME
    # -----------------------------

    def restart_game(self, game_id):
        engine = self.get_game(game_id)
        with self.get_lock(game_id):
            engine.start_game()
        self.games[game_id]["status"] = GameConfig.SESSION_ACTIVE
        safe_print(f"[MANAGER] Restarted game {game_id}")
        return engine

    def refresh_status(self, game_id):
        """Mark the session completed once its game has a winner."""
        session = self.games.get(game_id)
        if session and session["engine"].state.winner is not None:
            session["status"] = GameConfig.SESSION_COMPLETED

    # -----------------------------
    # DELETE GAME
    # -----------------------------

    def delete_game(self, game_id):
        if game_id in self.games:
            del self.games[game_id]
            safe_print(f"[MANAGER] Deleted game {game_id}")
            return True
        return False

    # -----------------------------
    # LIST GAMES (DEBUG / ADMIN)
    # -----------------------------

    def list_games(self):
        return {
            gid: {
                "mode": data["mode"],
                "status": data["status"],
                "game_status": data["engine"].state.status,
                "age": time.time() - data["created_at"]
            }
            for gid, data in self.games.items()
        }
