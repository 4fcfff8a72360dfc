'''
Crazy Eights legality.

A card may be played when it is an 8 (wild), when it matches the suit in
force, or when it matches the rank of the top discard. The suit in force is
the one announced after the last wild play, otherwise the top discard's own
suit. Every caller (engine, opponent policy, UI hints) goes through
is_playable so the rule lives in one place.
'''

from game.models import WILD_RANK


def is_playable(card, top_discard, active_suit=None):
    if top_discard is None:
        return False
    if card.rank == WILD_RANK:
        return True

    target_suit = active_suit or top_discard.suit
    return card.suit == target_suit or card.rank == top_discard.rank


def playable_cards(hand, top_discard, active_suit=None):
    return [c for c in hand if is_playable(c, top_discard, active_suit)]


def is_winner(player):
    return len(player.hand) == 0
