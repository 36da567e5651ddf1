"""
Prometheus metrics for the GeoIP processor
"""

from prometheus_client import Counter, Gauge, Histogram, generate_latest, CONTENT_TYPE_LATEST

LOOKUP_RESULTS = ("hit", "miss", "invalid_ip", "type_mismatch")

# Points handed to the processor
POINTS_PROCESSED_TOTAL = Counter(
    'telemetry_geoip_points_processed_total',
    'Total number of metric points passed through the GeoIP processor'
)

# Lookup outcomes per rule
LOOKUPS_TOTAL = Counter(
    'telemetry_geoip_lookups_total',
    'GeoIP lookups by result',
    ['result']
)

FIELDS_WRITTEN_TOTAL = Counter(
    'telemetry_geoip_fields_written_total',
    'Total number of geolocation fields written onto metric points'
)

# Database status
DATABASE_LOADED = Gauge(
    'telemetry_geoip_database_loaded',
    'GeoIP database loaded status (1=loaded, 0=missing)'
)

DATABASE_BUILD_TIMESTAMP = Gauge(
    'telemetry_geoip_database_build_timestamp',
    'Build epoch of the loaded GeoIP database'
)

# Processing latency
APPLY_LATENCY = Histogram(
    'telemetry_geoip_apply_latency_ms',
    'GeoIP processor latency per batch in milliseconds',
    buckets=[0.1, 0.5, 1, 5, 10, 25, 50, 100, 250, 500, 1000]
)


class PrometheusMetrics:
    """Service for managing Prometheus metrics."""

    def increment_points_processed(self, count: int = 1):
        """Increment points processed counter."""
        POINTS_PROCESSED_TOTAL.inc(count)

    def increment_lookup(self, result: str, count: int = 1):
        """Increment lookup counter for one of LOOKUP_RESULTS."""
        if result not in LOOKUP_RESULTS:
            raise ValueError(f"Unknown lookup result: {result}")
        LOOKUPS_TOTAL.labels(result=result).inc(count)

    def increment_fields_written(self, count: int = 1):
        FIELDS_WRITTEN_TOTAL.inc(count)

    def set_database_loaded(self, loaded: bool):
        """Set GeoIP database loaded status."""
        DATABASE_LOADED.set(1 if loaded else 0)

    def set_database_build_timestamp(self, timestamp: float):
        DATABASE_BUILD_TIMESTAMP.set(timestamp)

    def observe_apply_latency(self, latency_ms: float):
        """Observe batch processing latency."""
        APPLY_LATENCY.observe(latency_ms)

    def get_metrics(self) -> bytes:
        """Get Prometheus metrics in text format."""
        return generate_latest()

    def get_content_type(self) -> str:
        """Get the content type for Prometheus metrics."""
        return CONTENT_TYPE_LATEST


# Global metrics instance
prometheus_metrics = PrometheusMetrics()
