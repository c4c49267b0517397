"""Constants for building telemetry."""

import logging
from types import MappingProxyType
from typing import Final, Mapping

from .models import AqiBand, EnergyModel, SensorDescriptor, WeatherCondition

_LOGGER = logging.getLogger(__package__)

# --- Automation portal ---
DEFAULT_API_BASE: Final = "http://portail.izit.green:8083"
PORTAL_NAME: Final = "IZITGreen"
PORTAL_URL: Final = "https://portail.izit.green/"

URL_GET_TOKEN: Final = "/GetToken"
URL_CONTAINER_CHILDREN: Final = "/Containers/{container_id}/Children"
URL_VALUE: Final = "/Values/{value_id}/Value"
URL_TREND_SAMPLES: Final = "/TrendSamples"

SITES_CONTAINER: Final = "00/IZITGreen/Servers"
CLIENTS_CONTAINER: Final = "00/IZITGreen/InterfaceClient"
DEFAULT_VALUE_PATH: Final = "01/IZITGreen/A"

ORDER_ASCENDING: Final = "SampleDateAscending"
ORDER_DESCENDING: Final = "SampleDateDescending"

DEFAULT_HEADERS: Final = {
    "Accept": "application/json",
}

# --- Open-Meteo ---
FORECAST_URL: Final = "https://api.open-meteo.com/v1/forecast"
AIR_QUALITY_URL: Final = "https://air-quality-api.open-meteo.com/v1/air-quality"

FORECAST_CURRENT_FIELDS: Final = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,precipitation,"
    "weather_code,wind_speed_10m,wind_direction_10m,pressure_msl,cloud_cover,"
    "visibility,uv_index,is_day"
)
FORECAST_HOURLY_FIELDS: Final = (
    "temperature_2m,precipitation_probability,precipitation,weather_code,"
    "cloud_cover,visibility,uv_index,wind_speed_10m,wind_direction_10m,"
    "relative_humidity_2m,dew_point_2m,shortwave_radiation,direct_radiation"
)
FORECAST_DAILY_FIELDS: Final = (
    "weather_code,temperature_2m_max,temperature_2m_min,precipitation_sum,"
    "precipitation_probability_max,wind_speed_10m_max,wind_gusts_10m_max,"
    "uv_index_max,sunrise,sunset,daylight_duration,sunshine_duration"
)
AIR_QUALITY_CURRENT_FIELDS: Final = (
    "european_aqi,pm10,pm2_5,carbon_monoxide,nitrogen_dioxide,sulphur_dioxide,"
    "ozone,dust,uv_index,uv_index_clear_sky"
)

HOURLY_WINDOW: Final = 24

# --- Defaults ---
DEFAULT_TOKEN_VALIDITY: Final = 50 * 60  # seconds
DEFAULT_REQUEST_TIMEOUT: Final = 10.0
DEFAULT_WEATHER_TIMEOUT: Final = 15.0
DEFAULT_AIR_QUALITY_TIMEOUT: Final = 10.0

# Paris
DEFAULT_LATITUDE: Final = 48.8566
DEFAULT_LONGITUDE: Final = 2.3522
DEFAULT_TIMEZONE: Final = "Europe/Paris"

BASE_HVAC_CONSUMPTION: Final = 50.0  # kWh per hour
DEFAULT_ENERGY_MODEL: Final = EnergyModel()

# --- Building health (illustrative estimates, not measurements) ---
MAX_ENERGY_EFFICIENCY: Final = 95
BASE_ENERGY_EFFICIENCY: Final = 75
BASE_CARBON_REDUCTION: Final = 45
CARBON_PER_SYSTEM: Final = 12
BASE_WATER_SAVED: Final = 1200
WATER_PER_SYSTEM: Final = 85

# --- Weather codes (WMO) ---
WEATHER_CODES: Final[Mapping[int, WeatherCondition]] = MappingProxyType({
    0: WeatherCondition("Clear sky", "☀️"),
    1: WeatherCondition("Mainly clear", "🌤️"),
    2: WeatherCondition("Partly cloudy", "⛅"),
    3: WeatherCondition("Overcast", "☁️"),
    45: WeatherCondition("Foggy", "🌫️"),
    48: WeatherCondition("Depositing rime fog", "🌫️"),
    51: WeatherCondition("Light drizzle", "🌦️"),
    53: WeatherCondition("Moderate drizzle", "🌦️"),
    55: WeatherCondition("Dense drizzle", "🌧️"),
    61: WeatherCondition("Slight rain", "🌧️"),
    63: WeatherCondition("Moderate rain", "🌧️"),
    65: WeatherCondition("Heavy rain", "⛈️"),
    71: WeatherCondition("Slight snow", "🌨️"),
    73: WeatherCondition("Moderate snow", "❄️"),
    75: WeatherCondition("Heavy snow", "❄️"),
    77: WeatherCondition("Snow grains", "🌨️"),
    80: WeatherCondition("Slight rain showers", "🌦️"),
    81: WeatherCondition("Moderate rain showers", "🌧️"),
    82: WeatherCondition("Violent rain showers", "⛈️"),
    85: WeatherCondition("Slight snow showers", "🌨️"),
    86: WeatherCondition("Heavy snow showers", "❄️"),
    95: WeatherCondition("Thunderstorm", "⛈️"),
    96: WeatherCondition("Thunderstorm with slight hail", "⛈️"),
    99: WeatherCondition("Thunderstorm with heavy hail", "⛈️"),
})
UNKNOWN_CONDITION: Final = WeatherCondition("Unknown", "❓")

# --- European AQI bands (upper bound inclusive) ---
AQI_BANDS: Final = (
    AqiBand(20, "Excellent", "var(--primary)", "rgba(16, 185, 129, 0.2)"),
    AqiBand(40, "Bon", "var(--success)", "rgba(34, 197, 94, 0.2)"),
    AqiBand(60, "Moyen", "var(--warning)", "rgba(245, 158, 11, 0.2)"),
    AqiBand(80, "Médiocre", "#ff6b6b", "rgba(255, 107, 107, 0.2)"),
    AqiBand(100, "Mauvais", "var(--danger)", "rgba(239, 68, 68, 0.2)"),
)
AQI_WORST_BAND: Final = AqiBand(float("inf"), "Très Mauvais", "#8b0000", "rgba(139, 0, 0, 0.2)")

# --- Sensor groups (Daveyzieux site) ---
_SITE_ROOT = "01/IZITGreen/InterfaceClient/MrBricolage Daveysieux"
_TREND_LOGS = f"{_SITE_ROOT}/extended trend log"


def _sensor(sensor_id: str, name: str, path: str, **meta) -> SensorDescriptor:
    return SensorDescriptor(sensor_id, name, path, MappingProxyType(meta))


TEMPERATURE_SENSORS: Final = (
    _sensor("TempSensor7", "Température Extérieure",
            f"{_SITE_ROOT}/a/TempSensor7.temperature-interval extended trend log",
            color="rgba(168, 85, 247, 1)", unit="°C"),
    _sensor("TempSensor2", "Sonde Rooftop Surface de Vente 1",
            f"{_SITE_ROOT}/a/TempSensor2.temperature-interval extended trend log",
            color="rgba(239, 68, 68, 1)", unit="°C"),
    _sensor("TempSensor3", "Sonde Rooftop Surface de Vente 2",
            f"{_SITE_ROOT}/a/TempSensor3.temperature-interval extended trend log",
            color="rgba(59, 130, 246, 1)", unit="°C"),
    _sensor("TempSensor5", "Sonde Rooftop Surface de Vente 3",
            f"{_SITE_ROOT}/a/TempSensor5.temperature-interval extended trend log",
            color="rgba(236, 72, 153, 1)", unit="°C"),
)

RFTP_SENSORS: Final = tuple(
    _sensor(f"RFTPSensor{i}", f"RFTP Sensor {i}", f"{_TREND_LOGS}/Extended Trend Log_rftp{i}", unit="kW")
    for i in range(1, 5)
)

PRESSURE_SENSORS: Final = tuple(
    _sensor(
        f"PSensor{i}",
        f"P Sensor {i}",
        f"{_SITE_ROOT}/a/P-interval extended trend log" + ("" if i == 1 else f"_{i}"),
    )
    for i in range(1, 7)
)

PRESSURE_RFTP_SENSORS: Final = PRESSURE_SENSORS + RFTP_SENSORS

GAS_SENSOR: Final = _sensor("GazSensor", "Gaz", f"{_TREND_LOGS}/Extended Trend Log_gaz", unit="m³/h")

ROOFTOP_UNITS: Final = (
    _sensor("RTU1", "Trane RTU-01 (Nord)", f"{_TREND_LOGS}/Extended Trend Log_temp 1", unit="°C"),
    _sensor("RTU2", "Trane RTU-02 (Sud)", f"{_TREND_LOGS}/Extended Trend Log_temp 2", unit="°C"),
    _sensor("RTU3", "Trane RTU-03 (Est)", f"{_TREND_LOGS}/Extended Trend Log_temp 3", unit="°C"),
    _sensor("RTU4", "Trane RTU-04 (Ouest)", f"{_TREND_LOGS}/Extended Trend Log_temp 4", unit="°C"),
)
