from collections import Counter

from game.models import SUITS, WILD_RANK, Action
from game.rules import playable_cards


def decide_opponent_move(hand, top_discard, active_suit=None):
    """
    Greedy opponent policy. Plays the first legal non-8 in hand order,
    falls back to an 8, and draws when nothing is legal.
    Pure: reads its arguments and returns an Action.
    """
    candidates = playable_cards(hand, top_discard, active_suit)

    if not candidates:
        return Action.draw()

    for card in candidates:
        if card.rank != WILD_RANK:
            return Action.play(card)

    return Action.play(candidates[0])


def choose_wild_suit(hand):
    """Most common suit in ``hand``; ties go to the earlier suit in SUITS."""
    counts = Counter(card.suit for card in hand)
    best = SUITS[0]
    for suit in SUITS[1:]:
        if counts[suit] > counts[best]:
            best = suit
    return best
