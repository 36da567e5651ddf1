"""
GeoIP database reader
Uses MaxMind GeoIP2/GeoLite2 City databases through geoip2
"""

import ipaddress
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

import geoip2.database
import geoip2.errors
import maxminddb

from ..errors import GeoDatabaseOpenError, GeoLookupError

logger = logging.getLogger("enrich.geo")

IPAddress = Union[str, ipaddress.IPv4Address, ipaddress.IPv6Address]

CITY_DATABASE_TYPE = "City"


@dataclass(frozen=True)
class GeoRecord:
    """Geolocation attributes for one address"""
    country_iso_code: Optional[str] = None
    city_names: Mapping[str, str] = field(default_factory=dict)
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def city_name(self, locale: str = "en") -> Optional[str]:
        return self.city_names.get(locale)

    @classmethod
    def from_city(cls, city: Any) -> "GeoRecord":
        """Build a record from a geoip2 City model"""
        return cls(
            country_iso_code=city.country.iso_code,
            city_names=dict(city.city.names or {}),
            latitude=city.location.latitude,
            longitude=city.location.longitude,
        )


class GeoDatabaseReader:
    """Read-only handle on a GeoIP2 City database.

    Opened once and shared for the lifetime of its owner. The underlying
    geoip2 reader is safe for concurrent lookups.
    """

    def __init__(self, reader: geoip2.database.Reader, db_path: str = ""):
        self._reader = reader
        self.db_path = db_path

    @classmethod
    def open(cls, db_path: str) -> "GeoDatabaseReader":
        """Open a City database, raising GeoDatabaseOpenError on any failure"""
        try:
            reader = geoip2.database.Reader(db_path)
        except (OSError, ValueError, maxminddb.InvalidDatabaseError) as e:
            raise GeoDatabaseOpenError(f"Error opening GeoIP database {db_path}: {e}") from e

        database_type = reader.metadata().database_type
        if CITY_DATABASE_TYPE not in database_type:
            reader.close()
            raise GeoDatabaseOpenError(
                f"Error opening GeoIP database {db_path}: {database_type} is not a City database"
            )

        logger.debug(f"Opened GeoIP database {db_path} ({database_type})")
        return cls(reader, db_path)

    def lookup(self, ip: IPAddress) -> GeoRecord:
        """Lookup an address, raising GeoLookupError when it is not found"""
        try:
            city = self._reader.city(ip)
        except geoip2.errors.AddressNotFoundError as e:
            raise GeoLookupError(f"{ip} not found in {self.db_path}") from e
        except (geoip2.errors.GeoIP2Error, maxminddb.InvalidDatabaseError, ValueError, TypeError) as e:
            raise GeoLookupError(f"GeoIP lookup error for {ip}: {e}") from e
        return GeoRecord.from_city(city)

    def metadata(self):
        return self._reader.metadata()

    def close(self):
        self._reader.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
