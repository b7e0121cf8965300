from datetime import date

from models import DailyForecast
from warning_rules import DEFAULT_RULES, WarningRule, WarningRuleEngine

STORM = "Don't step out! A Storm is brewing!"
WIND = "It's too windy, watch out!"
HEAT = "Use sunscreen lotion"
RAIN = "Carry umbrella"

def day(temp_max=20.0, wind=5.0, rain=False, storm=False):
    return DailyForecast(date(2025, 1, 15), temp_max, 10.0, "Clear", wind, has_rain=rain, has_thunderstorm=storm)

def test_calm_day_has_no_warnings():
    assert WarningRuleEngine().apply(day()).warnings == []

def test_all_rules_listed_by_priority():
    forecast = WarningRuleEngine().apply(day(temp_max=45.0, wind=20.0, rain=True, storm=True))
    assert forecast.warnings == [STORM, WIND, HEAT, RAIN]

def test_thunderstorm_is_first():
    forecast = WarningRuleEngine().apply(day(rain=True, storm=True))
    assert forecast.warnings[0] == STORM

def test_heat_warning_above_forty():
    assert HEAT in WarningRuleEngine().apply(day(temp_max=42.0)).warnings
    assert WarningRuleEngine().apply(day(temp_max=40.0)).warnings == []

def test_wind_threshold_is_strict():
    assert WarningRuleEngine().apply(day(wind=10.0)).warnings == []
    assert WarningRuleEngine().apply(day(wind=10.1)).warnings == [WIND]

def test_rain_only():
    forecast = WarningRuleEngine().apply(day(wind=8.0, rain=True, storm=False))
    assert forecast.warnings == [RAIN]

def test_applying_twice_is_idempotent():
    engine = WarningRuleEngine()
    forecast = engine.apply(day(temp_max=41.0, rain=True))
    first = list(forecast.warnings)
    engine.apply(forecast)
    assert forecast.warnings == first

def test_missing_values_never_trigger():
    forecast = DailyForecast(date(2025, 1, 15), None, None, "Unknown", None)
    assert WarningRuleEngine().apply(forecast).warnings == []

def test_rules_are_evaluated_by_priority_not_registration_order():
    engine = WarningRuleEngine(reversed(DEFAULT_RULES))
    forecast = engine.apply(day(temp_max=45.0, wind=20.0, rain=True, storm=True))
    assert forecast.warnings == [STORM, WIND, HEAT, RAIN]

def test_register_extends_rule_set():
    engine = WarningRuleEngine()
    engine.register(WarningRule("frost", 0, "Watch for ice", lambda f: f.temp_min is not None and f.temp_min < 0))
    forecast = DailyForecast(date(2025, 1, 15), 2.0, -3.0, "Snow", 4.0, has_rain=True)
    engine.apply(forecast)
    assert forecast.warnings == ["Watch for ice", RAIN]
    assert len(engine.rules) == len(DEFAULT_RULES) + 1

def test_apply_all_annotates_each_day():
    days = [day(storm=True), day(), day(rain=True)]
    WarningRuleEngine().apply_all(days)
    assert [d.warnings for d in days] == [[STORM], [], [RAIN]]
