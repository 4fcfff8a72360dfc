import time
import random
import threading

from config import GameConfig
from utils import safe_print


class SimpleAIController:
    """
    Runs the opponent's moves after a think delay.

    The engine decides and applies moves instantly; the pause belongs here.
    play_if_needed() blocks for the delay (request/response callers),
    schedule() runs the move on a timer that cancel() or a restart voids.
    """

    def __init__(self, engine, think_delay=None, jitter=None, lock=None):
        self.engine = engine
        # base delay in seconds before AI takes an action
        self.think_delay = GameConfig.OPPONENT_THINK_DELAY if think_delay is None else think_delay
        # jitter to randomize thinking time
        self.jitter = GameConfig.OPPONENT_THINK_JITTER if jitter is None else jitter
        # serialises timer-applied moves with moves made by the caller
        self.lock = lock or threading.RLock()
        self._timer = None

    # -----------------------------
    # SYNCHRONOUS
    # -----------------------------

    def play_if_needed(self):
        # The opponent always hands the turn back, so this normally runs once.
        # Protect against infinite loops with a max iteration count.
        results = []
        iters = 0
        while iters < GameConfig.OPPONENT_MAX_MOVES:
            iters += 1
            if self.engine.opponent_decide() is None:
                break

            safe_print("[AI] It's my turn")
            game_number = self.engine.game_number
            self._think()

            with self.lock:
                # the game may have been restarted or finished while thinking
                if self.engine.game_number != game_number:
                    safe_print(f"[AI] Dropping move for game {game_number}, game was restarted")
                    break
                if self.engine.opponent_decide() is None:
                    break
                results.append(self.engine.opponent_turn())
        return results

    # -----------------------------
    # SCHEDULED
    # -----------------------------

    def schedule(self, on_done=None):
        """
        Start the think timer for the opponent's move. Returns False when it
        is not the opponent's move. ``on_done`` receives the engine result.
        """
        self.cancel()
        if self.engine.opponent_decide() is None:
            return False

        game_number = self.engine.game_number
        self._timer = threading.Timer(self._delay(), self._fire, args=(game_number, on_done))
        self._timer.daemon = True
        self._timer.start()
        safe_print(f"[AI] Move scheduled for game {game_number}")
        return True

    def cancel(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            safe_print("[AI] Scheduled move cancelled")

    @property
    def pending(self):
        return self._timer is not None and self._timer.is_alive()

    def _fire(self, game_number, on_done):
        with self.lock:
            if self.engine.game_number != game_number:
                safe_print(f"[AI] Dropping move for game {game_number}, game was restarted")
                return
            if self.engine.opponent_decide() is None:
                safe_print("[AI] Dropping move, nothing to do")
                return
            result = self.engine.opponent_turn()

        if on_done is not None:
            on_done(result)

    def _delay(self):
        return self.think_delay + random.random() * self.jitter

    def _think(self):
        """Sleep a short randomized interval to simulate AI thinking."""
        time.sleep(self._delay())
