from config import GameConfig
from game.ai import choose_wild_suit, decide_opponent_move
from game.models import (
    ACTION_CHOOSE_SUIT,
    ACTION_DRAW,
    ACTION_PLAY,
    OPPONENT,
    PHASE_CHOOSE_SUIT,
    PHASE_GAME_OVER,
    PHASE_PLAY,
    PLAYER,
    STATUS_IN_PROGRESS,
    STATUS_OPPONENT_WON,
    STATUS_PLAYER_WON,
    SUITS,
    Card,
    Deck,
    GameState,
    Player,
    build_deck,
    other_side,
    shuffle,
)
from game.rules import is_playable, is_winner, playable_cards
from utils import safe_print

'''
[**TURN FLOW**]

1. PLAY:
The side holding the turn plays one card that passes is_playable. A non-8 clears any
announced suit and hands the turn to the other side.

2. WILD 8:
An 8 is always legal. When the player drops one the game waits in CHOOSE_SUIT until
choose_suit() is called; the turn does not move before that. When the opponent drops
one it announces its most common remaining suit at once and the turn goes back to the
player.

3. DRAW:
The front card of the deck joins the drawing side's hand. An opponent draw ends its
turn. A player draw keeps the turn with the player (they may play the drawn card)
unless player_draw_passes_turn is set. Drawing from an empty deck draws nothing and
skips the turn.

4. WIN:
The first hand to reach zero cards wins, checked after every mutation, player first.

Rejected calls return {"error": ...} and leave every piece of state untouched.
'''


class CrazyEightsEngine:
    def __init__(self, players=None, rng=None, player_draw_passes_turn=None):
        if players is None:
            players = [Player("You"), Player("Computer")]
        if len(players) != 2:
            raise ValueError("Crazy Eights is played by exactly two players")

        self.players = {PLAYER: players[0], OPPONENT: players[1]}
        self.rng = rng
        if player_draw_passes_turn is None:
            player_draw_passes_turn = GameConfig.PLAYER_DRAW_PASSES_TURN
        self.player_draw_passes_turn = player_draw_passes_turn

        self.deck = Deck([])
        self.state = GameState()
        self.game_number = 0
        self.ui_log = []

    # ---------------------
    # STATE HELPERS
    # ---------------------

    @property
    def top_discard(self):
        return self.state.top_discard

    def hand(self, side):
        return self.players[side].hand

    def playable_for(self, side):
        if not self.state.in_progress or self.state.phase != PHASE_PLAY or self.state.turn != side:
            return []
        return playable_cards(self.hand(side), self.top_discard, self.state.active_suit)

    def get_state(self):
        top = self.top_discard
        return {
            "deck_count": len(self.deck),
            "player_hand": [c.id for c in self.hand(PLAYER)],
            "playable": [c.id for c in self.playable_for(PLAYER)],
            "opponent_hand_count": len(self.hand(OPPONENT)),
            "top_discard": top.id if top else None,
            "discard_count": len(self.state.discard),
            "active_suit": self.state.active_suit,
            "turn": self.state.turn,
            "status": self.state.status,
            "phase": self.state.phase,
            "awaiting_suit": self.state.phase == PHASE_CHOOSE_SUIT,
            "winner": self.state.winner,
            "message": self.state.message,
            "game_number": self.game_number,
            "ui_log": list(self.ui_log),
        }

    def consume_ui_state(self):
        data = self.get_state()
        # ui log is transient, the frontend gets each line once
        self.ui_log.clear()
        return data

    def _log(self, msg):
        # player-facing text: becomes the status line and goes to the ui log
        safe_print(f"[ENGINE] {msg}")
        self.state.message = msg
        self.ui_log.append(msg)

    def _reject(self, reason):
        safe_print(f"[ENGINE] Rejected: {reason}")
        return {"error": reason, "phase": self.state.phase, "turn": self.state.turn}

    def _check_invariants(self):
        containers = [self.deck.cards, self.hand(PLAYER), self.hand(OPPONENT), self.state.discard]
        total = sum(len(c) for c in containers)
        assert total == GameConfig.DECK_SIZE, f"card count is {total}"
        distinct = set()
        for cards in containers:
            distinct.update(cards)
        assert len(distinct) == total, "a card is held in two places"

    def _check_winner(self):
        if not self.state.in_progress:
            return
        if is_winner(self.players[PLAYER]):
            self.state.status = STATUS_PLAYER_WON
            self.state.winner = PLAYER
            self.state.phase = PHASE_GAME_OVER
            self._log("Congratulations! You won!")
        elif is_winner(self.players[OPPONENT]):
            self.state.status = STATUS_OPPONENT_WON
            self.state.winner = OPPONENT
            self.state.phase = PHASE_GAME_OVER
            self._log("Opponent won! Better luck next time.")

    def _guard_turn(self, side):
        """Common preconditions for play and draw. Returns an error dict or None."""
        if side not in self.players:
            return self._reject(f"Unknown side: {side}")
        if not self.state.in_progress:
            return self._reject("Game is not in progress")
        if self.state.phase == PHASE_CHOOSE_SUIT:
            return self._reject("A suit must be chosen first")
        if self.state.turn != side:
            return self._reject(f"It is not the {side}'s turn")
        return None

    # ---------------------
    # GAME LIFECYCLE
    # ---------------------

    def start_game(self):
        """Deal a fresh game. Also used to restart."""
        cards = shuffle(build_deck(), self.rng)
        self.deck = Deck(cards)

        self.players[PLAYER].hand = self.deck.draw_many(GameConfig.HAND_SIZE)
        self.players[OPPONENT].hand = self.deck.draw_many(GameConfig.HAND_SIZE)

        # the seed discard is never an 8, so the first turn has a real suit to follow
        seed = self.deck.take_first(lambda c: not c.is_wild)
        assert seed is not None, "no non-8 card left to seed the discard pile"

        self.state = GameState()
        self.state.discard = [seed]
        self.state.status = STATUS_IN_PROGRESS
        self.game_number += 1
        self.ui_log.clear()

        safe_print(f"[ENGINE] Game {self.game_number} initialized, seed discard {seed}")
        self._log("Your turn! Match the suit or rank.")
        self._check_invariants()

        return {"ok": True, "game_number": self.game_number}

    # ---------------------
    # PLAY
    # ---------------------

    def play(self, side, card):
        error = self._guard_turn(side)
        if error:
            return error

        if isinstance(card, str):
            try:
                card = Card.from_id(card)
            except ValueError as e:
                return self._reject(str(e))

        player = self.players[side]
        if not player.has_card(card):
            return self._reject(f"{card} is not in the {side}'s hand")
        if not is_playable(card, self.top_discard, self.state.active_suit):
            return self._reject(f"{card} cannot be played on {self.top_discard}")

        player.remove_card(card)
        self.state.discard.append(card)
        safe_print(f"[ENGINE] {side} plays {card}")

        result = {"ok": True, "card": card.id}

        if card.is_wild:
            if side == PLAYER:
                self.state.phase = PHASE_CHOOSE_SUIT
                self._log("Choose a new suit!")
            else:
                suit = choose_wild_suit(player.hand)
                self.state.active_suit = suit
                self.state.turn = PLAYER
                self._log(f"Opponent played an 8 and chose {suit}!")
                result["suit"] = suit
        else:
            self.state.active_suit = None
            self.state.turn = other_side(side)
            if side == PLAYER:
                self._log(f"You played {card}. Opponent is thinking...")
            else:
                self._log(f"Opponent played {card}. Your turn!")

        self._check_winner()
        self._check_invariants()

        result.update({"phase": self.state.phase, "turn": self.state.turn, "status": self.state.status})
        return result

    def choose_suit(self, suit):
        if not self.state.in_progress:
            return self._reject("Game is not in progress")
        if self.state.phase != PHASE_CHOOSE_SUIT:
            return self._reject("No suit choice is pending")
        if suit not in SUITS:
            return self._reject(f"Unknown suit: {suit}")

        self.state.active_suit = suit
        self.state.phase = PHASE_PLAY
        self.state.turn = OPPONENT
        self._log(f"You chose {suit}. Opponent is thinking...")

        return {"ok": True, "suit": suit, "phase": self.state.phase, "turn": self.state.turn}

    # ---------------------
    # DRAW
    # ---------------------

    def draw(self, side):
        error = self._guard_turn(side)
        if error:
            return error

        if len(self.deck) == 0:
            self.state.turn = other_side(side)
            self._log("Deck is empty! Skipping turn.")
            return {"ok": True, "drawn": None, "skipped": True, "turn": self.state.turn}

        player = self.players[side]
        card = player.draw_card(self.deck)
        result = {"ok": True, "skipped": False}

        if side == PLAYER:
            # the drawn card is only revealed to the player
            result["drawn"] = card.id
            if self.player_draw_passes_turn:
                self.state.turn = OPPONENT
                self._log("You drew a card. Opponent is thinking...")
            else:
                self._log("You drew a card.")
        else:
            self.state.turn = PLAYER
            self._log("Opponent drew a card. Your turn!")

        self._check_winner()
        self._check_invariants()

        result["turn"] = self.state.turn
        return result

    # ---------------------
    # ACTIONS / OPPONENT
    # ---------------------

    def apply_action(self, side, action):
        if action.kind == ACTION_PLAY:
            return self.play(side, action.card)
        if action.kind == ACTION_DRAW:
            return self.draw(side)
        if action.kind == ACTION_CHOOSE_SUIT:
            if side != PLAYER:
                return self._reject("Only the player chooses a suit after an 8")
            return self.choose_suit(action.suit)
        return self._reject(f"Unknown action: {action.kind}")

    def opponent_decide(self):
        """The opponent's next Action, or None when it is not the opponent's move."""
        if not self.state.in_progress or self.state.phase != PHASE_PLAY or self.state.turn != OPPONENT:
            return None
        return decide_opponent_move(self.hand(OPPONENT), self.top_discard, self.state.active_suit)

    def opponent_turn(self):
        action = self.opponent_decide()
        if action is None:
            return self._reject("It is not the opponent's move")
        result = self.apply_action(OPPONENT, action)
        result["action"] = action.kind
        return result
