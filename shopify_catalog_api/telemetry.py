"""OpenTelemetry helpers for metrics instrumentation."""

from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter, PeriodicExportingMetricReader


_meter_provider_initialized = False


def init_metrics() -> None:
    """Initialize OpenTelemetry metrics with a console exporter."""
    global _meter_provider_initialized
    if _meter_provider_initialized:
        return
    reader = PeriodicExportingMetricReader(ConsoleMetricExporter())
    provider = MeterProvider(metric_readers=[reader])
    metrics.set_meter_provider(provider)
    _meter_provider_initialized = True


def get_meter():
    return metrics.get_meter("shopify_catalog_api")


def get_request_duration_histogram():
    """Return a histogram for catalog request duration."""
    return get_meter().create_histogram(
        name="catalog.products.request.duration",
        unit="ms",
        description="Duration of GET /api/products requests",
    )


def get_products_returned_counter():
    """Return a counter of products served."""
    return get_meter().create_counter(
        name="catalog.products.returned",
        unit="1",
        description="Products returned by GET /api/products",
    )
