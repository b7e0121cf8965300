import logging
import threading

import weather_api
from errors import InvalidInputError
from forecast_cache import ForecastCache
from providers import OfflineWeatherProvider, OnlineWeatherProvider, ProviderSelector
from warning_rules import WarningRuleEngine

logger = logging.getLogger(__name__)


class WeatherService:
    """Entry point for request handlers: validates input, caches, owns the offline-mode flag."""

    def __init__(self, selector: ProviderSelector, cache: ForecastCache | None = None):
        self.selector = selector
        self.cache = cache if cache is not None else ForecastCache()
        self._mode_lock = threading.Lock()

    @classmethod
    def from_config(cls, config):
        engine = WarningRuleEngine()
        online = OnlineWeatherProvider(
            api_key=config.get("WEATHER_API_KEY") or "",
            base_url=config.get("WEATHER_API_BASE_URL") or weather_api.DEFAULT_BASE_URL,
            timeout=float(config.get("WEATHER_API_TIMEOUT") or weather_api.DEFAULT_TIMEOUT),
            engine=engine,
        )
        offline = OfflineWeatherProvider(config.get("OFFLINE_DATA_FILE"), engine=engine)
        selector = ProviderSelector(online, offline, offline_mode=bool(config.get("OFFLINE_MODE", False)))
        return cls(selector)

    @property
    def offline_mode(self) -> bool:
        return self.selector.offline_mode

    def set_offline_mode(self, enabled: bool) -> None:
        with self._mode_lock:
            logger.info("Switching offline mode to: %s, clearing cache", enabled)
            self.selector.offline_mode = bool(enabled)
            self.cache.invalidate()

    def get_forecast(self, city):
        if city is None or not city.strip():
            raise InvalidInputError("City name cannot be empty")
        city = city.strip()
        offline_mode = self.offline_mode
        logger.info("Fetching weather forecast for city: %s, offlineMode: %s", city, offline_mode)
        return self.cache.get_or_load(
            (city, offline_mode),
            lambda: self.selector.fetch(city, offline_mode=offline_mode),
        )
