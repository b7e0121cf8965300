from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass
class RawSample:
    timestamp: int
    temp_max: float
    temp_min: float
    weather: str | None
    wind_speed: float
    # every `weather[].main` of the item; `weather` is the first of them
    conditions: tuple = ()

    @classmethod
    def from_api_item(cls, item):
        """Build a sample from one entry of the OpenWeather `list` array."""
        main = item.get("main") or {}
        weather = item.get("weather") or []
        wind = item.get("wind") or {}
        conditions = tuple(w.get("main") for w in weather if w.get("main"))
        return cls(
            timestamp=int(item["dt"]),
            temp_max=float(main["temp_max"]),
            temp_min=float(main["temp_min"]),
            weather=weather[0].get("main") if weather else None,
            wind_speed=float(wind.get("speed") or 0.0),
            conditions=conditions,
        )


@dataclass
class DailyForecast:
    date: date
    temp_max: float | None
    temp_min: float | None
    weather_summary: str
    wind_speed: float | None
    has_rain: bool = False
    has_thunderstorm: bool = False
    warnings: list = field(default_factory=list)

    def add_warning(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)

    @classmethod
    def from_dict(cls, data):
        """Parse one offline dataset entry. Stored warnings are ignored."""
        return cls(
            date=date.fromisoformat(data["date"]),
            temp_max=float(data["tempMax"]),
            temp_min=float(data["tempMin"]),
            weather_summary=data.get("weather") or "Unknown",
            wind_speed=float(data.get("windSpeed") or 0.0),
            has_rain=bool(data.get("hasRain", False)),
            has_thunderstorm=bool(data.get("hasThunderstorm", False)),
        )

    def to_dict(self):
        return {
            "date": self.date.isoformat(),
            "tempMax": self.temp_max,
            "tempMin": self.temp_min,
            "weather": self.weather_summary,
            "windSpeed": self.wind_speed,
            "hasRain": self.has_rain,
            "hasThunderstorm": self.has_thunderstorm,
            "warnings": list(self.warnings),
        }


def now_millis() -> int:
    return int(datetime.now().timestamp() * 1000)


@dataclass
class ForecastResponse:
    city: str
    country: str
    forecasts: list
    data_source: str  # "online" or "offline"
    message: str | None = None
    timestamp: int = field(default_factory=now_millis)

    def to_dict(self):
        payload = {
            "city": self.city,
            "country": self.country,
            "forecasts": [forecast.to_dict() for forecast in self.forecasts],
            "dataSource": self.data_source,
            "timestamp": self.timestamp,
        }
        # null fields are left out of the JSON body
        if self.message is not None:
            payload["message"] = self.message
        return payload

    def __repr__(self):
        return f"<ForecastResponse {self.city}, {self.country} {self.data_source} days={len(self.forecasts)}>"
