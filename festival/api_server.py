"""Flask API exposing the scheduling engine to the festival frontend."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request
from flask_cors import CORS

from . import snapshot
from .broadcast import Broadcaster, MemoryBroadcaster
from .config import Settings, load_settings
from .engine import SchedulingEngine
from .errors import UnknownArtist
from .logging import get_logger
from .models import ReminderStatus

logger = get_logger(__name__)

BOOKING_FIELDS = ("artist", "genre", "popularity", "start", "end")
REMINDER_FIELDS = ("fanId", "artist", "hour")


def _error(message: str, status: int):
    return jsonify({"error": message, "status": "error"}), status


def _missing(payload: Dict[str, Any], fields: Tuple[str, ...]) -> Optional[str]:
    missing = [name for name in fields if name not in payload]
    if missing:
        return f"Missing required fields: {', '.join(sorted(missing))}"
    return None


def _as_int(payload: Dict[str, Any], key: str) -> int:
    """Read a whole number; floats and non-numeric strings are rejected, never truncated."""

    value = payload[key]
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("+-").isdigit():
            return int(text)
    raise ValueError(f"{key} must be an integer, got {value!r}")


def create_app(
    engine: Optional[SchedulingEngine] = None,
    settings: Optional[Settings] = None,
    broadcaster: Optional[Broadcaster] = None,
) -> Flask:
    """Build the Flask app around ``engine``.

    When no engine is supplied one is created publishing into ``broadcaster``
    (an in-memory broadcaster by default). ``GET /api/state`` serves the same
    serialized state the broadcaster receives, for observers joining late.
    """

    settings = settings or load_settings()
    broadcaster = broadcaster or MemoryBroadcaster()
    engine = engine or SchedulingEngine(broadcaster=broadcaster)

    app = Flask(__name__)
    CORS(app)
    app.config["ENGINE"] = engine
    app.config["SETTINGS"] = settings

    @app.route("/api/performances", methods=["POST"])
    def add_performance():
        payload = request.get_json(silent=True) or {}
        missing = _missing(payload, BOOKING_FIELDS)
        if missing:
            return _error(missing, 400)
        try:
            result = engine.add_performance(
                str(payload["artist"]).strip(),
                str(payload["genre"]).strip(),
                _as_int(payload, "popularity"),
                _as_int(payload, "start"),
                _as_int(payload, "end"),
                masterpiece_url=payload.get("masterpieceUrl"),
                image_url=payload.get("imageUrl"),
            )
        except ValueError as exc:
            return _error(str(exc), 400)
        return jsonify(result.to_dict()), (201 if result.ok else 409)

    @app.route("/api/performances/<artist_name>", methods=["DELETE"])
    def remove_performance(artist_name: str):
        try:
            performance = engine.remove_performance(artist_name)
        except UnknownArtist as exc:
            return _error(str(exc), 404)
        return jsonify({"status": "success", "id": performance.performance_id})

    @app.route("/api/performances/swap", methods=["POST"])
    def swap_performances():
        payload = request.get_json(silent=True) or {}
        missing = _missing(payload, ("first", "second"))
        if missing:
            return _error(missing, 400)
        try:
            entries = engine.exchange_positions(str(payload["first"]), str(payload["second"]))
        except UnknownArtist as exc:
            return _error(str(exc), 404)
        return jsonify({"status": "success", "timeline": snapshot.timeline_payload(entries)})

    @app.route("/api/artists/<artist_name>/genre", methods=["GET"])
    def artist_genre(artist_name: str):
        genre = engine.find_artist_genre(artist_name)
        if genre is None:
            return _error(f"No current booking for artist {artist_name!r}", 404)
        return jsonify({"artist": artist_name, "genre": genre, "status": "success"})

    @app.route("/api/ranking", methods=["GET"])
    def ranking():
        n = request.args.get("n", default=settings.ranking_size, type=int)
        entries = engine.get_hot_artists_ranking(n)
        return jsonify({
            "artists": snapshot.ranking_payload(entries),
            "count": len(entries),
            "status": "success",
        })

    @app.route("/api/reminders", methods=["POST"])
    def add_reminder():
        payload = request.get_json(silent=True) or {}
        missing = _missing(payload, REMINDER_FIELDS)
        if missing:
            return _error(missing, 400)
        try:
            hour = _as_int(payload, "hour")
        except ValueError as exc:
            return _error(str(exc), 400)
        status = engine.add_fan_reminder(str(payload["fanId"]), str(payload["artist"]), hour)
        if status is ReminderStatus.UNKNOWN_ARTIST:
            return _error(f"No current booking for artist {payload['artist']!r}", 404)
        return jsonify({"message": "Reminder scheduled", "status": "success"}), 201

    @app.route("/api/reminders/process", methods=["POST"])
    def process_reminders():
        payload = request.get_json(silent=True) or {}
        if "hour" not in payload:
            return _error("Missing required fields: hour", 400)
        try:
            hour = _as_int(payload, "hour")
        except ValueError as exc:
            return _error(str(exc), 400)
        notices = engine.process_reminders(hour)
        return jsonify({"notifications": snapshot.notices_payload(notices), "status": "success"})

    @app.route("/api/timeline", methods=["GET"])
    def timeline():
        entries = engine.get_timeline_snapshot()
        return jsonify({
            "timeline": snapshot.timeline_payload(entries),
            "count": len(entries),
            "status": "success",
        })

    @app.route("/api/state", methods=["GET"])
    def state():
        body = engine.current_state_json()
        return app.response_class(body, mimetype="application/json")

    @app.route("/api/health", methods=["GET"])
    def health_check():
        return jsonify({
            "status": "healthy",
            "message": "Festival scheduler API server is running",
            "performances": len(engine.get_timeline_snapshot()),
        })

    logger.debug("api_app_created", ranking_size=settings.ranking_size)
    return app
