"""
Configuration module for the GeoIP processor
"""

import os
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

# GeoIP configuration
DEFAULT_GEOIP_DB_PATH = "/usr/local/share/GeoIP/GeoLite2-City.mmdb"
GEOIP_DB_PATH = os.getenv("GEOIP_DB_PATH", DEFAULT_GEOIP_DB_PATH)
GEOIP_CONFIG = os.getenv("GEOIP_CONFIG", "")

# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")
LOGGING_CONFIG_FILE = os.getenv("LOGGING_CONFIG_FILE", "LOGGING.yaml")

# Processor name used by the registry
PROCESSOR_NAME = "geoip"


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    # Accept both a bare section and one nested under processors.geoip
    processors = data.get("processors")
    if isinstance(processors, dict) and PROCESSOR_NAME in processors:
        data = processors[PROCESSOR_NAME] or {}
    return data


def load_config(path: Optional[str] = None):
    """Load a GeoIPConfig from a YAML file.

    Falls back to GEOIP_CONFIG, then to defaults (env db path, no lookups).
    """
    from pydantic import ValidationError
    from .schemas.lookup import GeoIPConfig

    path = path or GEOIP_CONFIG
    if not path:
        return GeoIPConfig()

    data = _read_yaml(path)
    try:
        return GeoIPConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid GeoIP configuration in {path}: {e}") from e
