from flask import Flask, request, jsonify

from config import AppConfig
from game.manager import GameManager
from controllers.flask_controller import FlaskGameController
from utils import safe_print


def create_app(manager=None, think_delay=None):
    app = Flask(__name__)
    app.config['SECRET_KEY'] = AppConfig.SECRET_KEY

    # -----------------------------
    # GAME MANAGER
    # -----------------------------

    app.extensions['game_manager'] = manager or GameManager()

    def get_manager():
        return app.extensions['game_manager']

    def controller_for(game_id):
        manager = get_manager()
        return FlaskGameController(manager.get_game(game_id), think_delay=think_delay,
                                   lock=manager.get_lock(game_id))

    def json_body():
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        return data

    @app.errorhandler(KeyError)
    def game_not_found(e):
        return jsonify({"error": str(e).strip("'")}), 404

    @app.errorhandler(ValueError)
    def bad_request(e):
        return jsonify({"error": str(e)}), 400

    @app.after_request
    def track_completion(response):
        game_id = (request.view_args or {}).get("game_id")
        if game_id:
            get_manager().refresh_status(game_id)
        return response

    # -----------------------------
    # ROUTES
    # -----------------------------

    @app.route("/")
    def index():
        return jsonify({"game": "crazy_eights", "create": "/api/game/create"})

    # -----------------------------
    # GAME LIFECYCLE
    # -----------------------------

    @app.route("/api/game/create", methods=["POST"])
    def create_game():
        data = json_body()
        mode = data.get("mode", "human_vs_ai")
        player_name = data.get("player_name", "You")

        game_id = get_manager().create_game(mode, player_name=player_name)
        engine = get_manager().get_game(game_id)
        safe_print(f"[APP - CREATE_GAME] {game_id} for {player_name}")

        return jsonify({
            "game_id": game_id,
            "mode": mode,
            "player_name": player_name,
            "state": engine.consume_ui_state()
        }), 201

    @app.route("/api/game/<game_id>/state")
    def game_state(game_id):
        return controller_for(game_id).get_state()

    @app.route("/api/game/<game_id>/restart", methods=["POST"])
    def restart_game(game_id):
        get_manager().restart_game(game_id)
        return controller_for(game_id).get_state()

    @app.route("/api/game/<game_id>", methods=["DELETE"])
    def delete_game(game_id):
        if not get_manager().delete_game(game_id):
            raise KeyError(f"Game {game_id} not found")
        return jsonify({"deleted": game_id})

    @app.route("/api/games")
    def list_games():
        return jsonify(get_manager().list_games())

    # -----------------------------
    # GAME ACTIONS
    # -----------------------------

    @app.route("/api/game/<game_id>/play", methods=["POST"])
    def play(game_id):
        controller = controller_for(game_id)
        data = json_body()

        if "card" in data:
            return controller.play(str(data["card"]))
        if "index" in data:
            try:
                index = int(data["index"])
            except (TypeError, ValueError):
                raise ValueError("index must be an integer")
            return controller.play_index(index)
        raise ValueError("Request must name a card or an index")

    @app.route("/api/game/<game_id>/draw", methods=["POST"])
    def draw(game_id):
        return controller_for(game_id).draw()

    @app.route("/api/game/<game_id>/suit", methods=["POST"])
    def choose_suit(game_id):
        data = json_body()
        if "suit" not in data:
            raise ValueError("Request must name a suit")
        return controller_for(game_id).choose_suit(str(data["suit"]))

    return app


app = create_app()


if __name__ == "__main__":
    app.run(debug=AppConfig.DEBUG)
