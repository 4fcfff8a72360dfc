import os
import random
import sys

import pytest

# Add repository root to Python path for tests
ROOT_DIR = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, ROOT_DIR)

from game.engine import CrazyEightsEngine  # noqa: E402
from game.models import (  # noqa: E402
    OPPONENT,
    PHASE_PLAY,
    PLAYER,
    STATUS_IN_PROGRESS,
    Card,
    Deck,
    GameState,
    build_deck,
)


def cards(*ids):
    return [Card.from_id(i) for i in ids]


def rig(engine, player, opponent, top, deck=None, active_suit=None, turn=PLAYER):
    """
    Put ``engine`` in a hand-picked position. Cards not named anywhere go to
    the deck in canonical order, or under the top discard when ``deck`` is
    given explicitly, so the 52-card count still holds.
    """
    player = cards(*player)
    opponent = cards(*opponent)
    top = Card.from_id(top)
    named = set(player) | set(opponent) | {top}

    rest = [c for c in build_deck() if c not in named]
    if deck is None:
        deck_cards, under = rest, []
    else:
        deck_cards = cards(*deck)
        under = [c for c in rest if c not in set(deck_cards)]

    if engine.game_number == 0:
        engine.game_number = 1
    engine.players[PLAYER].hand = player
    engine.players[OPPONENT].hand = opponent
    engine.deck = Deck(deck_cards)
    engine.state = GameState()
    engine.state.status = STATUS_IN_PROGRESS
    engine.state.phase = PHASE_PLAY
    engine.state.turn = turn
    engine.state.discard = under + [top]
    engine.state.active_suit = active_suit
    engine.ui_log.clear()
    engine._check_invariants()
    return engine


@pytest.fixture
def engine():
    return CrazyEightsEngine(rng=random.Random(1), player_draw_passes_turn=False)
