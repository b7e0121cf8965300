import pytest

from errors import INVALID_INPUT, InvalidInputError
from models import ForecastResponse
from providers import ProviderSelector
from service import WeatherService

class CountingSelector(ProviderSelector):
    def __init__(self):
        super().__init__(online=None, offline=None)
        self.calls = []

    def fetch(self, city, offline_mode=None):
        self.calls.append((city, offline_mode))
        return ForecastResponse(city, "GB", [], "offline" if offline_mode else "online")

@pytest.fixture()
def service():
    return WeatherService(CountingSelector())

@pytest.mark.parametrize("city", [None, "", "   "])
def test_blank_city_is_invalid(service, city):
    with pytest.raises(InvalidInputError) as exc:
        service.get_forecast(city)
    assert exc.value.error_code == INVALID_INPUT
    assert service.selector.calls == []

def test_second_lookup_is_served_from_cache(service):
    first = service.get_forecast(" London ")
    second = service.get_forecast("London")
    assert first is second
    assert service.selector.calls == [("London", False)]

def test_toggling_mode_invalidates_cache_both_ways(service):
    service.get_forecast("London")
    service.set_offline_mode(True)
    assert service.offline_mode is True
    assert service.get_forecast("London").data_source == "offline"
    service.set_offline_mode(False)
    assert service.get_forecast("London").data_source == "online"
    assert service.selector.calls == [("London", False), ("London", True), ("London", False)]

def test_setting_same_mode_still_clears(service):
    service.get_forecast("London")
    service.set_offline_mode(False)
    assert len(service.cache) == 0

def test_from_config_builds_providers(offline_file):
    service = WeatherService.from_config({
        "WEATHER_API_KEY": "",
        "OFFLINE_DATA_FILE": str(offline_file),
        "OFFLINE_MODE": True,
        "WEATHER_API_TIMEOUT": 3,
    })
    assert service.offline_mode is True
    assert service.selector.online.is_available() is False
    assert service.selector.online.timeout == 3.0
    assert service.selector.offline.is_available() is True
    assert service.get_forecast("London").data_source == "offline"
