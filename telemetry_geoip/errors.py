"""
Error taxonomy for the GeoIP processor
"""


class GeoIPError(Exception):
    """Base error for the GeoIP processor."""


class ConfigError(GeoIPError):
    """Raised when the processor configuration cannot be loaded or validated."""


class GeoDatabaseOpenError(GeoIPError):
    """Raised when the GeoIP database file is missing, unreadable or not a MaxMind DB.

    This is fatal: the processor must not start without a database.
    """


class GeoLookupError(GeoIPError):
    """Raised when an address is not in the database or the reader fails internally."""


class InvalidIPAddressError(GeoIPError):
    """Raised when a field value does not parse as an IPv4 or IPv6 address."""


class FieldTypeError(GeoIPError, TypeError):
    """Raised when a metric field holds a value of an unexpected type."""


class ProcessorNotFoundError(GeoIPError, KeyError):
    """Raised when a processor name is not in the registry."""
