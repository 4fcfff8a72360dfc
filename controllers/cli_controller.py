from controllers.ai_controller import SimpleAIController
from game.models import SUITS, PHASE_CHOOSE_SUIT, PLAYER


class CLIController:
    def __init__(self, engine, ai=None, input_func=input):
        self.engine = engine
        self.ai = ai or SimpleAIController(engine)
        self.input = input_func

    # -----------------------------
    # DISPLAY HELPERS
    # -----------------------------

    def show_state(self):
        state = self.engine.get_state()

        print("\n===== CRAZY EIGHTS =====")
        print("Deck:", state["deck_count"], "| Opponent cards:", state["opponent_hand_count"])
        top = state["top_discard"]
        if state["active_suit"]:
            top = f"{top} (suit: {state['active_suit']})"
        print("Discard:", top)

        playable = set(state["playable"])
        for i, card_id in enumerate(state["player_hand"]):
            marker = "*" if card_id in playable else " "
            print(f"[{i}]{marker} {card_id}")

        print(">>", state["message"])
        print("========================\n")

    # -----------------------------
    # MAIN GAME LOOP
    # -----------------------------

    def run(self):
        print("=== CRAZY EIGHTS CLI ===")
        self.engine.start_game()

        while True:
            if not self.engine.state.in_progress:
                self.show_state()
                again = self.input("Play again? (y/n): ").strip().lower()
                if again != "y":
                    break
                self.engine.start_game()
                continue

            if self.engine.state.turn != PLAYER:
                self.ai.play_if_needed()
                continue

            self.show_state()

            if self.engine.state.phase == PHASE_CHOOSE_SUIT:
                self.handle_suit_choice()
            elif not self.handle_player_turn():
                break

        print("Thanks for playing.")

    # -----------------------------
    # PLAYER TURN
    # -----------------------------

    def handle_player_turn(self):
        """Returns False when the player quits."""
        if not self.engine.playable_for(PLAYER):
            print("No playable cards! Draw from the deck.")

        choice = self.input("Card index, (d)raw, (r)estart or (q)uit > ").strip().lower()

        if choice == "q":
            return False
        if choice == "r":
            self.ai.cancel()
            self.engine.start_game()
            return True
        if choice == "d":
            result = self.engine.draw(PLAYER)
            if result.get("drawn"):
                print("You drew", result["drawn"])
            return True

        if not choice.isdigit():
            print("Enter a valid index.")
            return True

        hand = self.engine.hand(PLAYER)
        idx = int(choice)
        # Validate index locally before calling engine
        if idx >= len(hand):
            print("Index out of range.")
            return True

        result = self.engine.play(PLAYER, hand[idx])
        if "error" in result:
            print(result["error"])
        return True

    def handle_suit_choice(self):
        for i, suit in enumerate(SUITS):
            print(f"[{i}] {suit}")

        choice = self.input("Choose a suit > ").strip().lower()
        if choice.isdigit() and int(choice) < len(SUITS):
            choice = SUITS[int(choice)]

        result = self.engine.choose_suit(choice)
        if "error" in result:
            print(result["error"])
