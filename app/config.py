"""Configuration settings for the JacketScore backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("jacketscore.config")

# Shared SSM client for secret reads. Default to a region so imports do not
# fail in environments without AWS configuration (e.g. CI test runners).
_ssm_client = boto3.client(
    "ssm",
    region_name=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "us-east-1",
)

SSM_PARAMETERS = {
    "openai_api_key": "/jacketscore/openai/api_key",
    "openweather_api_key": "/jacketscore/openweather/api_key",
    "places_api_key": "/jacketscore/google/places_api_key",
}


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


@lru_cache(maxsize=None)
def get_ssm_secret(name: str) -> str:
    """Fetch a decrypted secret from AWS SSM Parameter Store.

    Values are cached in-memory to avoid repeated SSM calls. Any failure to
    retrieve the parameter results in a runtime error.
    """

    try:
        response = _ssm_client.get_parameter(Name=name, WithDecryption=True)
        value = response.get("Parameter", {}).get("Value")
    except (ClientError, BotoCoreError) as exc:  # pragma: no cover - AWS error passthrough
        logger.error("Failed to load %s from SSM: %s", name, exc)
        raise RuntimeError(f"Unable to load {name} from SSM") from exc

    if not value:
        logger.error("Received empty value for %s from SSM", name)
        raise RuntimeError(f"{name} not configured in SSM")

    return value


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    jacketscore_env: str = os.getenv("JACKETSCORE_ENV", "local")
    log_level: str = os.getenv("JACKETSCORE_LOG_LEVEL", "INFO")
    use_ssm: bool = _get_bool(
        "JACKETSCORE_USE_SSM",
        default=os.getenv("JACKETSCORE_ENV", "local").lower() in {"prod", "production"},
    )
    default_timezone: str = os.getenv("DEFAULT_TIMEZONE", "UTC")

    # OpenAI / recommendation settings
    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    openai_timeout: float = float(os.getenv("OPENAI_TIMEOUT", "30.0"))
    openai_max_tokens: int = int(os.getenv("OPENAI_MAX_TOKENS", "100"))
    openai_temperature: float = float(os.getenv("OPENAI_TEMPERATURE", "0.7"))

    # Forecast lookup (OpenWeatherMap 5 day / 3 hour forecast)
    openweather_api_key: str = os.getenv("OPENWEATHER_API_KEY", "")
    openweather_base_url: str = os.getenv(
        "OPENWEATHER_BASE_URL", "https://api.openweathermap.org/data/2.5/forecast"
    )
    weather_timeout: float = float(os.getenv("WEATHER_TIMEOUT", "10.0"))

    # Places autocomplete (Google Places web service)
    places_api_key: str = os.getenv("GOOGLE_PLACES_API_KEY", "")
    places_base_url: str = os.getenv(
        "PLACES_BASE_URL", "https://maps.googleapis.com/maps/api/place"
    )
    places_timeout: float = float(os.getenv("PLACES_TIMEOUT", "10.0"))


settings = Settings()

# Fill missing secrets from SSM so local runs and tests can rely on env alone
if settings.use_ssm:
    for _field, _parameter in SSM_PARAMETERS.items():
        if getattr(settings, _field):
            continue
        try:
            setattr(settings, _field, get_ssm_secret(_parameter))
        except RuntimeError:
            logger.warning("%s not available at import time", _parameter)

for _field in SSM_PARAMETERS:
    if not getattr(settings, _field):
        logger.warning("%s is not configured", _field)

__all__ = ["settings", "Settings", "get_ssm_secret"]
