"""Tests for tracer provider setup and settings."""
import pytest
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from span_masking.observability.processor import MaskingSpanProcessor
from span_masking.observability.tracing import build_exporter, setup_tracing, wrap_processor
from span_masking.settings import Settings


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("MODE", "OTEL_EXPORTER_OTLP_ENDPOINT", "SPAN_MASKING_ENABLED", "OTEL_SERVICE_NAME"):
            monkeypatch.delenv(name, raising=False)
        config = make_settings()
        assert config.mode == "dev"
        assert config.masking_enabled is True
        assert config.tracing_enabled is True
        assert config.otel_exporter_otlp_endpoint is None
        assert config.is_prod is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MODE", "prod")
        monkeypatch.setenv("SPAN_MASKING_ENABLED", "false")
        monkeypatch.setenv("OTEL_SERVICE_NAME", "basket-api")
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://otel-collector:4317")

        config = make_settings()

        assert config.is_prod is True
        assert config.masking_enabled is False
        assert config.service_name == "basket-api"
        assert config.otel_exporter_otlp_endpoint == "http://otel-collector:4317"


class TestBuildExporter:

    def test_no_exporter_by_default(self):
        assert build_exporter(make_settings(otel_exporter_otlp_endpoint=None, console_exporter=False)) is None

    def test_console_exporter(self):
        exporter = build_exporter(make_settings(otel_exporter_otlp_endpoint=None, console_exporter=True))
        assert isinstance(exporter, ConsoleSpanExporter)

    def test_otlp_exporter(self):
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        exporter = build_exporter(make_settings(otel_exporter_otlp_endpoint="localhost:4317"))
        try:
            assert isinstance(exporter, OTLPSpanExporter)
        finally:
            exporter.shutdown()


class TestSetupTracing:

    def test_prod_requires_otlp_endpoint(self):
        config = make_settings(mode="prod", tracing_enabled=True, otel_exporter_otlp_endpoint=None)
        with pytest.raises(RuntimeError, match="OTEL_EXPORTER_OTLP_ENDPOINT"):
            setup_tracing(config)

    def test_prod_with_tracing_disabled_is_allowed(self):
        config = make_settings(mode="prod", tracing_enabled=False, otel_exporter_otlp_endpoint=None)
        provider = setup_tracing(config)
        provider.shutdown()

    def test_spans_are_masked(self):
        exporter = InMemorySpanExporter()
        config = make_settings(service_name="ordering-api")
        provider = setup_tracing(config, processor=SimpleSpanProcessor(exporter))

        with provider.get_tracer(__name__).start_as_current_span("order") as span:
            span.set_attribute("customer.id", "cust-00012345")
            span.set_attribute("db.password", "hunter2")

        (finished,) = exporter.get_finished_spans()
        assert finished.attributes["customer.id"] == "*********2345"
        assert finished.attributes["db.password"] == "********"
        assert finished.resource.attributes["service.name"] == "ordering-api"
        provider.shutdown()

    def test_masking_disabled_exports_raw_values(self):
        exporter = InMemorySpanExporter()
        config = make_settings(masking_enabled=False)
        provider = setup_tracing(config, processor=SimpleSpanProcessor(exporter))

        with provider.get_tracer(__name__).start_as_current_span("order") as span:
            span.set_attribute("db.password", "hunter2")

        (finished,) = exporter.get_finished_spans()
        assert finished.attributes["db.password"] == "hunter2"
        provider.shutdown()

    def test_wrap_processor(self):
        inner = SimpleSpanProcessor(InMemorySpanExporter())
        wrapped = wrap_processor(inner, make_settings(masking_enabled=True))
        assert isinstance(wrapped, MaskingSpanProcessor)
        assert wrapped.delegate is inner
        assert wrap_processor(inner, make_settings(masking_enabled=False)) is inner
