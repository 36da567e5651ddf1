"""
GeoIP enrichment processor
Looks up the country code, city name and latitude/longitude for IP address
fields and writes them back onto the same metric
"""

import ipaddress
import logging
import time
from typing import Any, Dict, List, Optional

from ..errors import FieldTypeError, GeoLookupError, InvalidIPAddressError
from ..metric import Metric, expect_string
from ..schemas.lookup import GeoIPConfig, LookupRule
from ..services.prometheus_metrics import prometheus_metrics
from .base import Processor
from .geo import GeoDatabaseReader, GeoRecord

logger = logging.getLogger("enrich.geoip")

# Addresses that parse but are absent from the database (private ranges,
# unrouted space) are skipped without logging. Only the lookups counter
# records them.
QUIET_MISS = True

CITY_LOCALE = "en"

SAMPLE_CONFIG = """\
## db_path is the location of the MaxMind GeoIP2 City database
db_path: /var/lib/GeoIP/GeoLite2-City.mmdb

lookup:
  # get the ip from the field "source_ip" and put the lookup results in the
  # respective destination fields (if specified)
  - field: source_ip
    dest_country: source_country
    dest_city: source_city
    dest_lat: source_lat
    dest_lon: source_lon
"""

DESCRIPTION = ("GeoIP looks up the country code, city name and latitude/longitude "
               "for IP addresses in the MaxMind GeoIP database")


def parse_ip(value: str):
    """Parse an IPv4 or IPv6 address"""
    try:
        return ipaddress.ip_address(value)
    except ValueError as e:
        raise InvalidIPAddressError(f"Invalid IP address: {value}") from e


class GeoIP(Processor):
    """GeoIP processor using a MaxMind GeoLite2 City database"""

    def __init__(self, config: Optional[GeoIPConfig] = None,
                 reader: Optional[GeoDatabaseReader] = None, **options: Any):
        super().__init__("geoip")
        self.config = config or GeoIPConfig(**options)
        self._reader = reader
        if reader is not None:
            self.loaded = True
            self.last_refresh = time.time()

    @property
    def db_path(self) -> str:
        return self.config.db_path

    @property
    def lookups(self) -> List[LookupRule]:
        return self.config.lookups

    def sample_config(self) -> str:
        return SAMPLE_CONFIG

    def description(self) -> str:
        return DESCRIPTION

    def init(self) -> None:
        """Open the GeoIP database; GeoDatabaseOpenError aborts startup"""
        if self._reader is not None:
            return

        try:
            self._reader = GeoDatabaseReader.open(self.db_path)
        except Exception:
            self.error_count += 1
            prometheus_metrics.set_database_loaded(False)
            raise

        self.loaded = True
        self.last_refresh = time.time()

        prometheus_metrics.set_database_loaded(True)
        build_epoch = getattr(self._reader.metadata(), "build_epoch", None)
        if build_epoch:
            prometheus_metrics.set_database_build_timestamp(build_epoch)

        logger.info("GeoIP database loaded successfully", extra={
            "component": "enrich.geoip",
            "event": "loaded",
            "db_path": self.db_path,
            "lookups": len(self.lookups)
        })

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None
        self.loaded = False

    def apply(self, *metrics: Metric) -> List[Metric]:
        """Enrich each metric in place and return the batch"""
        if not self.lookups:
            return list(metrics)

        if self._reader is None:
            raise RuntimeError("GeoIP processor used before init()")

        start = time.perf_counter()
        for point in metrics:
            for rule in self.lookups:
                self._apply_rule(point, rule)

        prometheus_metrics.increment_points_processed(len(metrics))
        prometheus_metrics.observe_apply_latency((time.perf_counter() - start) * 1000)
        return list(metrics)

    def _apply_rule(self, point: Metric, rule: LookupRule) -> None:
        if not rule.enabled:
            return

        value = point.get_field(rule.field)
        if value is None:
            return

        try:
            address = parse_ip(expect_string(rule.field, value))
        except FieldTypeError as e:
            logger.error(str(e))
            prometheus_metrics.increment_lookup("type_mismatch")
            return
        except InvalidIPAddressError as e:
            logger.error(str(e))
            prometheus_metrics.increment_lookup("invalid_ip")
            return

        try:
            record = self._reader.lookup(address)
        except GeoLookupError as e:
            prometheus_metrics.increment_lookup("miss")
            if not QUIET_MISS:
                logger.error(f"GeoIP lookup error: {e}")
            return

        prometheus_metrics.increment_lookup("hit")
        prometheus_metrics.increment_fields_written(self._write_fields(point, rule, record))

    def _write_fields(self, point: Metric, rule: LookupRule, record: GeoRecord) -> int:
        values = [
            (rule.dest_country, record.country_iso_code),
            (rule.dest_city, record.city_name(CITY_LOCALE)),
            (rule.dest_lat, float(record.latitude) if record.latitude is not None else None),
            (rule.dest_lon, float(record.longitude) if record.longitude is not None else None),
        ]
        written = 0
        for dest, attr in values:
            if dest and attr is not None:
                point.add_field(dest, attr)
                written += 1
        return written

    def get_status(self) -> Dict[str, Any]:
        status = super().get_status()
        status.update({
            "db_path": self.db_path,
            "lookups": len(self.lookups),
        })
        return status
