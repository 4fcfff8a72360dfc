import random
from dataclasses import dataclass

SUITS = ['hearts', 'diamonds', 'clubs', 'spades']
RANKS = ['A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K']
WILD_RANK = '8'

# Sides
PLAYER = 'player'
OPPONENT = 'opponent'

# Game status
STATUS_NOT_STARTED = 'not_started'
STATUS_IN_PROGRESS = 'in_progress'
STATUS_PLAYER_WON = 'player_won'
STATUS_OPPONENT_WON = 'opponent_won'

# Phases inside a running game
PHASE_PLAY = 'PLAY'
PHASE_CHOOSE_SUIT = 'CHOOSE_SUIT'
PHASE_GAME_OVER = 'GAME_OVER'


def other_side(side):
    return OPPONENT if side == PLAYER else PLAYER


# -----------------------------
# CARD
# -----------------------------

@dataclass(frozen=True, repr=False)
class Card:
    rank: str
    suit: str

    def __post_init__(self):
        if self.rank not in RANKS:
            raise ValueError(f"Unknown rank: {self.rank!r}")
        if self.suit not in SUITS:
            raise ValueError(f"Unknown suit: {self.suit!r}")

    @property
    def id(self):
        return f"{self.rank}-{self.suit}"

    @property
    def is_wild(self):
        return self.rank == WILD_RANK

    @classmethod
    def from_id(cls, card_id):
        """Parse a ``"<rank>-<suit>"`` id such as ``"10-clubs"``."""
        rank, sep, suit = str(card_id).partition('-')
        if not sep:
            raise ValueError(f"Malformed card id: {card_id!r}")
        return cls(rank, suit)

    def __repr__(self):
        return self.id


def build_deck():
    """All 52 cards, suit by suit, ranks in order."""
    return [Card(rank, suit) for suit in SUITS for rank in RANKS]


def shuffle(cards, rng=None):
    """
    Return a shuffled copy of ``cards`` (Fisher-Yates).

    ``rng`` is anything with a ``randint`` method; the ``random`` module is
    used when omitted. The input sequence is left untouched.
    """
    rng = rng or random
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


# -----------------------------
# DECK
# -----------------------------

class Deck:
    """Draw stack. The front of ``cards`` is drawn next."""

    def __init__(self, cards=None):
        self.cards = list(cards) if cards is not None else build_deck()

    def __len__(self):
        return len(self.cards)

    def draw(self):
        if not self.cards:
            return None
        return self.cards.pop(0)

    def draw_many(self, count):
        if len(self.cards) < count:
            raise ValueError("Not enough cards left")
        drawn = self.cards[:count]
        self.cards = self.cards[count:]
        return drawn

    def take_first(self, predicate):
        """Remove and return the first card matching ``predicate``, or None."""
        for i, card in enumerate(self.cards):
            if predicate(card):
                return self.cards.pop(i)
        return None


# -----------------------------
# PLAYER
# -----------------------------

class Player:
    def __init__(self, name):
        self.name = name
        self.hand = []

    def draw_card(self, deck):
        card = deck.draw()
        if card:
            self.hand.append(card)
        return card

    def has_card(self, card):
        return card in self.hand

    def remove_card(self, card):
        self.hand.remove(card)


# -----------------------------
# GAME STATE
# -----------------------------

class GameState:
    """
    Holds mutable game state.
    """
    def __init__(self):
        self.status = STATUS_NOT_STARTED
        self.phase = PHASE_PLAY
        self.turn = PLAYER
        self.discard = []
        self.active_suit = None
        self.winner = None
        self.message = "Welcome to Crazy Eights!"

    @property
    def top_discard(self):
        return self.discard[-1] if self.discard else None

    @property
    def in_progress(self):
        return self.status == STATUS_IN_PROGRESS


# -----------------------------
# ACTIONS
# -----------------------------

ACTION_PLAY = 'play'
ACTION_DRAW = 'draw'
ACTION_CHOOSE_SUIT = 'choose_suit'


@dataclass(frozen=True)
class Action:
    kind: str
    card: Card = None
    suit: str = None

    @classmethod
    def play(cls, card):
        return cls(ACTION_PLAY, card=card)

    @classmethod
    def draw(cls):
        return cls(ACTION_DRAW)

    @classmethod
    def choose_suit(cls, suit):
        return cls(ACTION_CHOOSE_SUIT, suit=suit)
