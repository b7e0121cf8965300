import json
import logging
import re
from dataclasses import replace
from pathlib import Path

import weather_api
from aggregator import FORECAST_DAYS, aggregate_daily
from errors import API_ERROR, FETCH_ERROR, NO_OFFLINE_DATA, FetchError, WeatherServiceError
from models import DailyForecast, ForecastResponse
from warning_rules import WarningRuleEngine

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE = "Using cached data - API unavailable"
OFFLINE_COUNTRY = "Offline Mode"


# Normalises a city name into an offline dataset key: lower-cased, whitespace removed.
def city_key(city):
    return re.sub(r"\s+", "", (city or "").lower())


# Provider interface
class WeatherProvider:
    name: str

    def fetch(self, city: str) -> ForecastResponse:
        raise NotImplementedError

    def is_available(self) -> bool:
        raise NotImplementedError


class OnlineWeatherProvider(WeatherProvider):
    """Live forecasts from the OpenWeather API."""

    name = "online"

    def __init__(self, api_key: str, base_url: str = weather_api.DEFAULT_BASE_URL,
                 timeout: float = weather_api.DEFAULT_TIMEOUT, engine: WarningRuleEngine | None = None):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.engine = engine or WarningRuleEngine()

    def fetch(self, city):
        logger.info("Fetching online weather data for city: %s", city)
        samples, country = weather_api.fetch_forecast(
            city, self.api_key, base_url=self.base_url, timeout=self.timeout
        )
        forecasts = self.engine.apply_all(aggregate_daily(samples))
        return ForecastResponse(city=city, country=country, forecasts=forecasts, data_source=self.name)

    def is_available(self):
        return bool(self.api_key)


class OfflineWeatherProvider(WeatherProvider):
    """Static forecasts loaded once from a JSON file; used when the API cannot be reached."""

    name = "offline"

    def __init__(self, data_file=None, engine: WarningRuleEngine | None = None):
        self.engine = engine or WarningRuleEngine()
        self._records = {}
        if data_file is not None:
            self._records = self.load(data_file)

    @staticmethod
    def load(data_file):
        """
        Read `{city: {"forecasts": [...]}}` from disk.
        Any failure is logged and yields an empty dataset instead of raising.
        """
        path = Path(data_file)
        logger.info("Loading offline weather data from: %s", path.name)
        try:
            with path.open(encoding="utf-8") as fh:
                raw = json.load(fh)
            records = {
                city_key(city): [DailyForecast.from_dict(day) for day in entry.get("forecasts") or []]
                for city, entry in raw.items()
            }
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Failed to load offline weather data from %s: %s", path, e)
            return {}
        logger.info("Loaded offline data for %d cities", len(records))
        return records

    @property
    def cities(self):
        """Loaded dataset keys, sorted. Read-only view for inspection and tests."""
        return sorted(self._records)

    def fetch(self, city):
        logger.info("Fetching offline weather data for city: %s", city)
        stored = self._records.get(city_key(city))
        if not stored:
            raise FetchError(f"No offline data available for city: {city}", NO_OFFLINE_DATA)

        # fresh copies so warnings never leak back into the preloaded records;
        # the dataset may hold more days, or hold them out of order
        upcoming = sorted(stored, key=lambda d: d.date)[:FORECAST_DAYS]
        forecasts = [replace(day, warnings=[]) for day in upcoming]
        return ForecastResponse(
            city=city,
            country=OFFLINE_COUNTRY,
            forecasts=self.engine.apply_all(forecasts),
            data_source=self.name,
            message=OFFLINE_MESSAGE,
        )

    def is_available(self):
        return bool(self._records)


class ProviderSelector:
    """Chooses the live or the offline provider per request, with one fallback hop."""

    def __init__(self, online: WeatherProvider, offline: WeatherProvider, offline_mode: bool = False):
        self.online = online
        self.offline = offline
        self.offline_mode = offline_mode

    def fetch(self, city, offline_mode: bool | None = None):
        if offline_mode is None:
            offline_mode = self.offline_mode

        if offline_mode:
            logger.info("Using offline data provider for city: %s", city)
            return self.offline.fetch(city)

        try:
            if not self.online.is_available():
                raise FetchError("Online weather provider is unavailable", API_ERROR)
            logger.info("Using online data provider for city: %s", city)
            return self.online.fetch(city)
        except Exception as primary_error:
            logger.warning("Online provider failed for %s (%s), falling back to offline data", city, primary_error)
            if not self.offline.is_available():
                raise _as_fetch_error(primary_error, city)
            try:
                response = self.offline.fetch(city)
            except WeatherServiceError as fallback_error:
                logger.warning("Offline fallback failed for %s: %s", city, fallback_error)
                raise _as_fetch_error(primary_error, city)
            logger.info("Served fallback offline data for city: %s", city)
            return response


def _as_fetch_error(error, city):
    if isinstance(error, WeatherServiceError):
        return error
    logger.error("Unexpected error fetching weather for %s", city, exc_info=error)
    return FetchError(f"Unable to fetch weather data for city: {city}", FETCH_ERROR)
