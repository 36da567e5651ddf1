"""
GeoIP enrichment processor for telemetry pipelines
"""

from .enrich.geo import GeoDatabaseReader, GeoRecord
from .enrich.geoip import GeoIP
from .metric import Metric
from .schemas.lookup import GeoIPConfig, LookupRule

__version__ = "0.1.0"

__all__ = ["GeoIP", "GeoIPConfig", "LookupRule", "GeoDatabaseReader", "GeoRecord", "Metric"]
