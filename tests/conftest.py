# tests/conftest.py
from types import SimpleNamespace
from unittest.mock import MagicMock

import geoip2.errors
import pytest

from telemetry_geoip.enrich.geo import GeoDatabaseReader

# Stand-in for a GeoLite2-City test database
CITY_RECORDS = {
    "8.8.8.8": {
        "country": "US",
        "city": {"en": "Mountain View", "de": "Mountain View"},
        "lat": 37.386,
        "lon": -122.0838,
    },
    "81.2.69.142": {
        "country": "GB",
        "city": {"en": "London", "fr": "Londres"},
        "lat": 51.5142,
        "lon": -0.0931,
    },
    "2001:4860:4860::8888": {
        "country": "US",
        "city": {},
        "lat": 37.751,
        "lon": -97.822,
    },
    "89.160.20.112": {
        "country": "SE",
        "city": {"sv": "Linköping"},
        "lat": 58.4167,
        "lon": 15.6167,
    },
}


def make_city(entry):
    """Build an object shaped like geoip2.models.City"""
    return SimpleNamespace(
        country=SimpleNamespace(iso_code=entry["country"]),
        city=SimpleNamespace(names=entry["city"]),
        location=SimpleNamespace(latitude=entry["lat"], longitude=entry["lon"]),
    )


def make_geoip2_reader(records, database_type="GeoLite2-City"):
    reader = MagicMock()

    def city(ip):
        entry = records.get(str(ip))
        if entry is None:
            raise geoip2.errors.AddressNotFoundError(f"The address {ip} is not in the database.")
        return make_city(entry)

    reader.city.side_effect = city
    reader.metadata.return_value = SimpleNamespace(database_type=database_type, build_epoch=1700000000)
    return reader


@pytest.fixture
def geoip2_reader():
    return make_geoip2_reader(CITY_RECORDS)


@pytest.fixture
def geo_reader(geoip2_reader):
    return GeoDatabaseReader(geoip2_reader, "/test/GeoLite2-City-Test.mmdb")
