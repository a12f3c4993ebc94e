import os
import atexit
import logging
import threading
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from data_access import InMemoryKeyValueStore, KeyValueRepository
from domain.constants import VALID_MOVES
from domain.errors import ConfigurationError
from main import SnakeGame
from services.audio_service import AudioService
from services.scheduler import ThreadedScheduler

load_dotenv()

app = Flask(__name__)
logging.basicConfig(level=logging.INFO)

# Enable CORS for API routes so the browser front end (different origin) can call Flask
# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
if allowed_origins_env:
    allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
else:
    # sensible defaults for local dev
    allowed_origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

CORS(app, resources={r"/api/*": {"origins": allowed_origins}})


_game: Optional[SnakeGame] = None
_audio: Optional[AudioService] = None
_init_lock = threading.Lock()


def _create_store():
    if os.getenv("SNAKE_IN_MEMORY"):
        logging.info("Using in-memory storage; settings and high score will not survive a restart")
        return InMemoryKeyValueStore()
    return KeyValueRepository()


def set_game(game: SnakeGame) -> None:
    """Install the game the endpoints drive, wiring up audio cues."""
    global _game, _audio
    if _game is not None and _game is not game:
        _game.teardown()
    _audio = AudioService(lambda: game.settings)
    game.add_listener(_audio)
    _game = game


def get_game() -> SnakeGame:
    with _init_lock:
        if _game is None:
            set_game(SnakeGame(_create_store(), ThreadedScheduler()))
        return _game


@atexit.register
def _shutdown():
    if _game is not None:
        _game.teardown()
        _game.scheduler.shutdown()


def _snapshot_response(game: SnakeGame, status: int = 200, **extra):
    body = game.snapshot()
    body["audio"] = [cue.to_dict() for cue in _audio.drain()] if _audio else []
    body.update(extra)
    return jsonify(body), status


@app.route("/api/game", methods=["GET"])
def get_game_state():
    """
    Current render snapshot.

    Returns snake, food, foodKind, phase, score, highScore and any audio
    cues queued since the last poll.
    """
    try:
        return _snapshot_response(get_game())
    except Exception as error:
        logging.error(f"Error fetching game state: {error}")
        return jsonify({"error": "Failed to load game state"}), 500


@app.route("/api/game/start", methods=["POST"])
def start_game():
    try:
        game = get_game()
        if not game.start():
            return jsonify({"error": f"Cannot start a game while {game.phase.value}"}), 409
        return _snapshot_response(game)
    except ConfigurationError as error:
        return jsonify({"error": str(error)}), 400
    except Exception as error:
        logging.error(f"Error starting game: {error}")
        return jsonify({"error": "Failed to start game"}), 500


@app.route("/api/game/restart", methods=["POST"])
def restart_game():
    try:
        game = get_game()
        if not game.restart():
            return jsonify({"error": f"Cannot restart while {game.phase.value}"}), 409
        return _snapshot_response(game)
    except ConfigurationError as error:
        return jsonify({"error": str(error)}), 400
    except Exception as error:
        logging.error(f"Error restarting game: {error}")
        return jsonify({"error": "Failed to restart game"}), 500


@app.route("/api/game/pause", methods=["POST"])
def toggle_pause():
    try:
        game = get_game()
        if not game.toggle_pause():
            return jsonify({"error": f"Cannot pause while {game.phase.value}"}), 409
        return _snapshot_response(game)
    except Exception as error:
        logging.error(f"Error toggling pause: {error}")
        return jsonify({"error": "Failed to toggle pause"}), 500


@app.route("/api/game/input", methods=["POST"])
def send_input():
    """
    Deliver one input event.

    Body: {"direction": "UP"} or {"key": "ArrowUp"} (browser key names,
    space toggles pause).
    """
    payload = request.get_json(silent=True) or {}
    direction = payload.get("direction")
    key = payload.get("key")

    if direction is None and key is None:
        return jsonify({"error": "Expected 'direction' or 'key'"}), 400
    if direction is not None and str(direction).upper() not in VALID_MOVES:
        return jsonify({"error": f"Unknown direction '{direction}'"}), 400

    try:
        game = get_game()
        if direction is not None:
            accepted = game.handle_direction(str(direction).upper())
        else:
            accepted = game.handle_key(str(key))
        return _snapshot_response(game, accepted=accepted)
    except Exception as error:
        logging.error(f"Error handling input: {error}")
        return jsonify({"error": "Failed to handle input"}), 500


@app.route("/api/settings", methods=["GET"])
def get_settings():
    try:
        return jsonify(get_game().settings.to_dict())
    except Exception as error:
        logging.error(f"Error fetching settings: {error}")
        return jsonify({"error": "Failed to load settings"}), 500


@app.route("/api/settings", methods=["PUT", "PATCH"])
def update_settings():
    """Partial settings update; unknown keys or bad values return 400."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    try:
        settings = get_game().update_settings(**payload)
        return jsonify(settings.to_dict())
    except ConfigurationError as error:
        return jsonify({"error": str(error)}), 400
    except Exception as error:
        logging.error(f"Error updating settings: {error}")
        return jsonify({"error": "Failed to update settings"}), 500


@app.route("/api/highscore", methods=["GET"])
def get_high_score():
    try:
        return jsonify({"highScore": get_game().scores.high_score})
    except Exception as error:
        logging.error(f"Error fetching high score: {error}")
        return jsonify({"error": "Failed to load high score"}), 500


if __name__ == "__main__":
    # FLASK_DEBUG=1 enables the reloader and debugger
    app.run(debug=os.getenv("FLASK_DEBUG") == "1")
