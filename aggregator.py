from datetime import datetime

from errors import NoDataError
from models import DailyForecast

FORECAST_DAYS = 3


# Case-insensitive substring check against any of a sample's weather categories.
def _mentions(sample, word):
    categories = sample.conditions or (sample.weather,)
    return any(word in (category or "").lower() for category in categories)


def aggregate_daily(samples, days: int = FORECAST_DAYS, tz=None):
    """
    Group sub-daily samples by calendar date and summarise the first `days` dates.
    Dates are taken in the local time zone unless `tz` is given.
    Returns DailyForecast records sorted ascending by date, without warnings.
    """
    samples = list(samples)
    if not samples:
        raise NoDataError("No weather data received")

    by_date = {}
    for sample in sorted(samples, key=lambda s: s.timestamp):
        day = datetime.fromtimestamp(sample.timestamp, tz=tz).date()
        by_date.setdefault(day, []).append(sample)

    daily = []
    for day in sorted(by_date)[:days]:
        group = by_date[day]
        daily.append(DailyForecast(
            date=day,
            temp_max=max(s.temp_max for s in group),
            temp_min=min(s.temp_min for s in group),
            weather_summary=group[0].weather or "Unknown",
            wind_speed=sum(s.wind_speed for s in group) / len(group),
            has_rain=any(_mentions(s, "rain") for s in group),
            has_thunderstorm=any(_mentions(s, "thunderstorm") for s in group),
        ))
    return daily
