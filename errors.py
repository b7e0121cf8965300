WEATHER_ERROR = "WEATHER_ERROR"
API_ERROR = "API_ERROR"
NO_DATA = "NO_DATA"
FETCH_ERROR = "FETCH_ERROR"
NO_OFFLINE_DATA = "NO_OFFLINE_DATA"
INVALID_INPUT = "INVALID_INPUT"
INTERNAL_ERROR = "INTERNAL_ERROR"


class WeatherServiceError(Exception):
    """Base error carrying one of the stable error codes above."""

    default_code = WEATHER_ERROR

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code


# A data source could not produce a forecast (API_ERROR, NO_DATA, FETCH_ERROR, NO_OFFLINE_DATA).
class FetchError(WeatherServiceError):
    default_code = FETCH_ERROR


class NoDataError(FetchError):
    default_code = NO_DATA


class InvalidInputError(WeatherServiceError):
    default_code = INVALID_INPUT
