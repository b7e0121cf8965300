import logging
import os
from datetime import datetime
from pathlib import Path

from flask import Flask, jsonify, request, url_for
from werkzeug.exceptions import HTTPException

from errors import INTERNAL_ERROR, InvalidInputError, WeatherServiceError
from service import WeatherService

logger = logging.getLogger(__name__)

DEFAULT_OFFLINE_DATA = Path(__file__).resolve().parent / "data" / "offline_weather.json"

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


# Parses a boolean query/env value; None for anything unrecognised.
def _parse_bool(value):
    text = (value or "").strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return None


# Builds the JSON error envelope returned for every handled failure.
def _error_body(status, error_code, message):
    return jsonify({
        "timestamp": datetime.now().isoformat(),
        "status": status,
        "errorCode": error_code,
        "message": message,
        "path": f"uri={request.path}",
    }), status


def _links(city):
    return {
        "self": {"href": url_for("forecast", city=city, _external=True)},
        "toggle-offline-mode": {"href": url_for("toggle_offline_mode", enabled="false", _external=True)},
        "health": {"href": url_for("health", _external=True)},
    }


# App factory: reads configuration from the environment, builds the weather service, and registers routes.
def create_app():
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret")
    app.config["WEATHER_API_KEY"] = os.environ.get("WEATHER_API_KEY", "")
    app.config["WEATHER_API_BASE_URL"] = os.environ.get("WEATHER_API_BASE_URL", "https://api.openweathermap.org/data/2.5")
    app.config["WEATHER_API_TIMEOUT"] = float(os.environ.get("WEATHER_API_TIMEOUT", "5"))
    app.config["OFFLINE_DATA_FILE"] = os.environ.get("OFFLINE_DATA_FILE", str(DEFAULT_OFFLINE_DATA))
    app.config["OFFLINE_MODE"] = bool(_parse_bool(os.environ.get("OFFLINE_MODE", "false")))
    app.config["API_PREFIX"] = os.environ.get("API_PREFIX", "/api/v1/weather").rstrip("/")
    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO").upper()

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    service = WeatherService.from_config(app.config)
    app.extensions["weather_service"] = service
    prefix = app.config["API_PREFIX"]

    @app.route(f"{prefix}/forecast", methods=["GET"])
    def forecast():
        city = request.args.get("city")
        logger.info("Received request for weather forecast: city=%s", city)
        response = service.get_forecast(city)
        body = response.to_dict()
        body["_links"] = _links(city.strip())
        return jsonify(body)

    @app.route(f"{prefix}/offline-mode", methods=["POST"])
    def toggle_offline_mode():
        enabled = _parse_bool(request.args.get("enabled"))
        if enabled is None:
            raise InvalidInputError("Parameter 'enabled' must be true or false")
        logger.info("Toggling offline mode: %s", enabled)
        service.set_offline_mode(enabled)
        return f"Offline mode {'enabled' if enabled else 'disabled'}", 200, {"Content-Type": "text/plain"}

    @app.route(f"{prefix}/offline-mode", methods=["GET"])
    def offline_mode_status():
        return jsonify(service.offline_mode)

    @app.route(f"{prefix}/health", methods=["GET"])
    def health():
        return "Weather Service is running", 200, {"Content-Type": "text/plain"}

    @app.errorhandler(InvalidInputError)
    def handle_invalid_input(error):
        return _error_body(400, error.error_code, error.message)

    @app.errorhandler(WeatherServiceError)
    def handle_weather_error(error):
        logger.error("Weather service error [%s]: %s", error.error_code, error.message)
        return _error_body(500, error.error_code, error.message)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        if isinstance(error, HTTPException):
            return error
        logger.exception("Unhandled error on %s", request.path)
        return _error_body(500, INTERNAL_ERROR, "An unexpected error occurred")

    return app

if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
