import threading

from flask import jsonify

from controllers.ai_controller import SimpleAIController
from game.models import PLAYER
from utils import safe_print


class FlaskGameController:
    def __init__(self, engine, think_delay=None, lock=None):
        self.engine = engine
        # shared with every other controller built for the same session
        self.lock = lock or threading.RLock()
        self.ai = SimpleAIController(engine, think_delay=think_delay, lock=self.lock)

    def _respond(self, result, opponent_results=None):
        with self.lock:
            ui_state = self.engine.consume_ui_state()
        body = {
            'results': result,
            'opponent_results': opponent_results or [],
            'ui_state': ui_state,
        }
        status = 409 if 'error' in result else 200
        return jsonify(body), status

    def get_state(self):
        with self.lock:
            return jsonify(self.engine.get_state())

    def play(self, card):
        safe_print(f"[FLASK_CTRL] Play request - Phase: {self.engine.state.phase}, Turn: {self.engine.state.turn}, Card: {card}")

        with self.lock:
            result = self.engine.play(PLAYER, card)

        # Only run AI if play was successful
        opponent_results = None
        if result.get('ok'):
            opponent_results = self._run_ai_if_needed()
        else:
            safe_print(f"[FLASK_CTRL] Play failed: {result.get('error')}")

        return self._respond(result, opponent_results)

    def play_index(self, index):
        with self.lock:
            hand = self.engine.hand(PLAYER)
            card = hand[index] if 0 <= index < len(hand) else None
        if card is None:
            return self._respond({'error': 'Invalid index'})
        return self.play(card)

    def draw(self):
        safe_print(f"[FLASK_CTRL] Draw request - Phase: {self.engine.state.phase}, Turn: {self.engine.state.turn}")

        with self.lock:
            result = self.engine.draw(PLAYER)

        opponent_results = None
        if result.get('ok'):
            opponent_results = self._run_ai_if_needed()

        return self._respond(result, opponent_results)

    def choose_suit(self, suit):
        with self.lock:
            result = self.engine.choose_suit(suit)

        opponent_results = None
        if result.get('ok'):
            opponent_results = self._run_ai_if_needed()

        return self._respond(result, opponent_results)

    def _run_ai_if_needed(self):
        # sleeps outside the lock, applies the move inside it
        return self.ai.play_if_needed()
