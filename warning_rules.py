import logging
from typing import Callable, NamedTuple

logger = logging.getLogger(__name__)

WIND_LIMIT_MPH = 10.0
HEAT_LIMIT_C = 40.0


class WarningRule(NamedTuple):
    name: str
    priority: int  # lower number = more severe, listed first
    message: str
    predicate: Callable


def _above(value, limit):
    return value is not None and value > limit


DEFAULT_RULES = (
    WarningRule("thunderstorm", 1, "Don't step out! A Storm is brewing!", lambda f: bool(f.has_thunderstorm)),
    WarningRule("wind", 2, "It's too windy, watch out!", lambda f: _above(f.wind_speed, WIND_LIMIT_MPH)),
    WarningRule("heat", 3, "Use sunscreen lotion", lambda f: _above(f.temp_max, HEAT_LIMIT_C)),
    WarningRule("rain", 4, "Carry umbrella", lambda f: bool(f.has_rain)),
)


class WarningRuleEngine:
    """Annotates daily forecasts with the messages of every rule that applies."""

    def __init__(self, rules=DEFAULT_RULES):
        self._rules = list(rules)

    @property
    def rules(self):
        """Snapshot of the registered rules, in registration order. Used for inspection and tests."""
        return tuple(self._rules)

    def register(self, rule: WarningRule) -> None:
        self._rules.append(rule)

    def apply(self, forecast):
        matched = [rule for rule in self._rules if rule.predicate(forecast)]
        for rule in sorted(matched, key=lambda r: r.priority):
            forecast.add_warning(rule.message)
            logger.debug("Applied warning %r for %s", rule.message, forecast.date)
        return forecast

    def apply_all(self, forecasts):
        for forecast in forecasts:
            self.apply(forecast)
        return forecasts
