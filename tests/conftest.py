import json
import pytest
from app import create_app

OFFLINE_DATA = {
    "London": {"forecasts": [
        {"date": "2025-01-15", "tempMax": 42.0, "tempMin": 20.0, "weather": "Clear", "windSpeed": 5.0, "hasRain": False, "hasThunderstorm": False},
        {"date": "2025-01-16", "tempMax": 25.0, "tempMin": 15.0, "weather": "Rain", "windSpeed": 4.0, "hasRain": True, "hasThunderstorm": False},
        {"date": "2025-01-17", "tempMax": 22.0, "tempMin": 14.0, "weather": "Clouds", "windSpeed": 3.0, "hasRain": False, "hasThunderstorm": False},
    ]},
    "New York": {"forecasts": [
        {"date": "2025-01-15", "tempMax": 5.0, "tempMin": -2.0, "weather": "Thunderstorm", "windSpeed": 12.0, "hasRain": True, "hasThunderstorm": True},
    ]},
}

# Writes a small offline dataset to a temp file for tests that load one from disk.
@pytest.fixture()
def offline_file(tmp_path):
    path = tmp_path / "offline.json"
    path.write_text(json.dumps(OFFLINE_DATA), encoding="utf-8")
    return path

# Creates a Flask app configured through the environment with a dummy API key and a temp offline dataset.
@pytest.fixture()
def app(offline_file, monkeypatch):
    monkeypatch.setenv("OFFLINE_DATA_FILE", str(offline_file))
    monkeypatch.setenv("WEATHER_API_KEY", "test-key")
    monkeypatch.setenv("OFFLINE_MODE", "false")
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.delenv("API_PREFIX", raising=False)
    app = create_app()
    app.config.update(TESTING=True)
    yield app

@pytest.fixture()
def client(app):
    return app.test_client()
