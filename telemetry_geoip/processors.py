"""
Processor registry

Processors register a factory under a fixed name at import time; the host
pipeline creates instances by name from its configuration.
"""

import logging
from typing import Any, Callable, Dict, List

from . import config as settings
from .enrich.base import Processor
from .enrich.geoip import GeoIP
from .errors import ProcessorNotFoundError

logger = logging.getLogger("processors")

ProcessorFactory = Callable[..., Processor]

_registry: Dict[str, ProcessorFactory] = {}


def add(name: str, factory: ProcessorFactory):
    """Register a processor factory under name"""
    if name in _registry:
        logger.warning(f"Processor {name} registered twice, replacing")
    _registry[name] = factory


def create(name: str, **options: Any) -> Processor:
    """Create a processor by name; options override the factory defaults"""
    try:
        factory = _registry[name]
    except KeyError:
        raise ProcessorNotFoundError(f"Unknown processor: {name}") from None
    return factory(**options)


def names() -> List[str]:
    return sorted(_registry)


def _geoip_factory(**options: Any) -> GeoIP:
    options.setdefault("db_path", settings.GEOIP_DB_PATH)
    options.setdefault("lookups", [])
    return GeoIP(**options)


add(settings.PROCESSOR_NAME, _geoip_factory)
