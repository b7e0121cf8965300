import logging

import requests
from requests.exceptions import RequestException, Timeout

from errors import API_ERROR, FETCH_ERROR, FetchError, NoDataError
from models import RawSample

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_TIMEOUT = 5.0
# 8 three-hour steps per day, 3 days
SAMPLE_COUNT = 24


# Calls the OpenWeather 5-day/3-hour forecast endpoint and returns the decoded payload.
def request_forecast(city: str, api_key: str, base_url: str = DEFAULT_BASE_URL,
                     timeout: float = DEFAULT_TIMEOUT, count: int = SAMPLE_COUNT):
    params = {"q": city, "appid": api_key, "cnt": count, "units": "metric"}
    url = f"{base_url.rstrip('/')}/forecast"
    try:
        # requests applies the timeout to the connect and to each socket read,
        # not to the whole transfer; OpenWeather replies in a single small body
        response = requests.get(url, params=params, timeout=timeout)
        response.raise_for_status()
    except Timeout as e:
        logger.error("Weather API timed out after %ss: %s", timeout, e)
        raise FetchError(f"Weather API timed out for city: {city}", API_ERROR) from e
    except RequestException as e:
        logger.error("Weather API call failed: %s", e)
        raise FetchError(f"Failed to fetch weather data: {e}", API_ERROR) from e

    try:
        return response.json()
    except ValueError as e:
        raise FetchError(f"Unable to fetch weather data for city: {city}", FETCH_ERROR) from e


def parse_samples(data):
    """
    Turn a forecast payload into (samples, country).
    Raises NoDataError when the payload has no `list`, FetchError when an item is malformed.
    """
    if not isinstance(data, dict):
        raise NoDataError("No weather data received")
    items = data.get("list")
    if not items or not isinstance(items, list):
        raise NoDataError("No weather data received")
    try:
        samples = [RawSample.from_api_item(item) for item in items]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise FetchError(f"Malformed weather data: {e}", FETCH_ERROR) from e

    city_info = data.get("city")
    if not isinstance(city_info, dict):
        city_info = {}
    return samples, city_info.get("country") or "Unknown"


def fetch_forecast(city: str, api_key: str, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT):
    data = request_forecast(city, api_key, base_url=base_url, timeout=timeout)
    return parse_samples(data)
