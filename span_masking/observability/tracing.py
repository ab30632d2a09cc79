"""Tracer provider wiring with the masking processor installed."""
import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter

from span_masking.observability.processor import MaskingSpanProcessor
from span_masking.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def build_exporter(config: Settings) -> Optional[SpanExporter]:
    """Pick the exporter: OTLP when an endpoint is configured, else console (if asked for)."""
    if config.otel_exporter_otlp_endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        logger.info(f"Exporting spans via OTLP to {config.otel_exporter_otlp_endpoint}")
        return OTLPSpanExporter(
            endpoint=config.otel_exporter_otlp_endpoint,
            insecure=config.otel_exporter_otlp_insecure,
        )

    if config.console_exporter:
        logger.info("Exporting spans to console")
        return ConsoleSpanExporter()

    return None


def wrap_processor(processor: SpanProcessor, config: Settings) -> SpanProcessor:
    """Install the masking processor in front of ``processor`` unless disabled."""
    if not config.masking_enabled:
        logger.warning("Span masking disabled - attributes are exported unmasked")
        return processor
    return MaskingSpanProcessor(processor)


def setup_tracing(
    config: Optional[Settings] = None,
    exporter: Optional[SpanExporter] = None,
    processor: Optional[SpanProcessor] = None,
    set_global: bool = False,
) -> TracerProvider:
    """
    Build a TracerProvider whose spans pass through the masking processor.

    Args:
        config: Settings to use (defaults to the module-level settings)
        exporter: Explicit exporter; overrides the one derived from settings
        processor: Explicit delegate processor; overrides exporter entirely
        set_global: Also register the provider with opentelemetry.trace

    Raises:
        RuntimeError: In prod with tracing enabled but no OTLP endpoint
    """
    if config is None:
        config = default_settings

    if config.is_prod and config.tracing_enabled and not config.otel_exporter_otlp_endpoint:
        raise RuntimeError("In PROD, OTEL_EXPORTER_OTLP_ENDPOINT must be present when tracing is enabled")

    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: config.service_name}))

    if config.tracing_enabled:
        if processor is None:
            exporter = exporter or build_exporter(config)
            if exporter is not None:
                processor = BatchSpanProcessor(exporter)

        if processor is not None:
            provider.add_span_processor(wrap_processor(processor, config))
        else:
            logger.info("No span exporter configured - spans are dropped")

    if set_global:
        trace.set_tracer_provider(provider)

    return provider
