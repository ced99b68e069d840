"""
Weather Service (v1.0.0)
Fills the "Clima" line of a look context from the current weather of a city.

Only used when a look request names a city and leaves weather empty; any
lookup problem yields None and the look is generated without it.
"""
import logging
from typing import Optional
from dataclasses import dataclass
import httpx

from fashion_ai.config import get_settings

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
REQUEST_PARAMS = {"units": "metric", "lang": "pt_br"}
REQUEST_TIMEOUT = 10.0

WET_CONDITIONS = ("rain", "drizzle", "thunderstorm")
FROZEN_CONDITIONS = ("snow", "sleet")

# (minimum effective °C, layer), checked top to bottom
LAYER_THRESHOLDS = [(25, "light"), (15, "medium")]
COLDEST_LAYER = "heavy"

LAYER_LABELS = {"light": "roupas leves", "medium": "camadas médias", "heavy": "roupas pesadas"}


@dataclass
class WeatherInfo:
    """Current conditions for a city, reduced to what a stylist needs."""
    city: str
    country: str
    temp_celsius: float
    feels_like: float
    humidity: int
    condition: str  # OpenWeatherMap group, lowercased: "clear", "rain", ...
    description: str  # localized, e.g. "chuva leve"
    wind_speed: float
    layer_hint: str

    def to_prompt_context(self) -> str:
        return (
            f"{self.description} em {self.city}, "
            f"{self.temp_celsius:.0f}°C (sensação {self.feels_like:.0f}°C), "
            f"umidade {self.humidity}%, "
            f"sugestão: {LAYER_LABELS.get(self.layer_hint, self.layer_hint)}"
        )


def _effective_temperature(temp: float, condition: str, wind_speed: float) -> float:
    if wind_speed > 5:
        temp -= wind_speed * 0.5
    if condition in WET_CONDITIONS:
        temp -= 3
    elif condition in FROZEN_CONDITIONS:
        temp -= 5
    return temp


def _derive_layer_hint(temp: float, condition: str, wind_speed: float) -> str:
    """Clothing weight for the conditions: "light", "medium" or "heavy"."""
    effective = _effective_temperature(temp, condition, wind_speed)
    for minimum, layer in LAYER_THRESHOLDS:
        if effective >= minimum:
            return layer
    return COLDEST_LAYER


def parse_weather(data: dict, city: str) -> WeatherInfo:
    """Build WeatherInfo from an OpenWeatherMap current-weather payload."""
    main = data.get("main") or {}
    current = (data.get("weather") or [{}])[0]

    temp = main.get("temp", 20)
    condition = current.get("main", "Clear").lower()
    wind_speed = (data.get("wind") or {}).get("speed", 0)

    return WeatherInfo(
        city=data.get("name", city),
        country=(data.get("sys") or {}).get("country", ""),
        temp_celsius=temp,
        feels_like=main.get("feels_like", temp),
        humidity=main.get("humidity", 50),
        condition=condition,
        description=current.get("description", "céu limpo"),
        wind_speed=wind_speed,
        layer_hint=_derive_layer_hint(temp, condition, wind_speed),
    )


def is_configured() -> bool:
    return get_settings().has_weather()


async def get_weather(city: str) -> Optional[WeatherInfo]:
    """
    Current weather for a city, or None when disabled, unknown or unreachable.
    """
    api_key = get_settings().openweather_api_key
    if not api_key:
        logger.warning("OPENWEATHER_API_KEY not set - weather disabled")
        return None

    params = dict(REQUEST_PARAMS, q=city, appid=api_key)
    try:
        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as client:
            response = await client.get(OPENWEATHER_BASE_URL, params=params)
            if response.status_code == 404:
                logger.warning(f"City not found: {city}")
                return None
            response.raise_for_status()
            info = parse_weather(response.json(), city)
    except httpx.TimeoutException:
        logger.warning(f"Weather lookup timed out for {city}")
        return None
    except Exception as e:
        # HTTP errors and unreadable payloads
        logger.error(f"Weather lookup failed for {city}: {e}")
        return None

    logger.info(f"Weather for {info.city}: {info.temp_celsius}°C, {info.layer_hint}")
    return info
