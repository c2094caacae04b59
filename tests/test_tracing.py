"""Tests for tracing.py: configure_tracing, get_tracer, traced_search,
traced_projection.

OTel spans are collected with InMemorySpanExporter so tests run fully offline.
"""
from __future__ import annotations

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from provider_wellness.roi import project
from provider_wellness.schema import SearchResponse
from provider_wellness.tracing import (
    ATTR_ROI_BREAK_EVEN,
    ATTR_ROI_FINAL,
    ATTR_ROI_PROVIDERS,
    ATTR_ROI_YEARS,
    ATTR_SEARCH_QUERY,
    ATTR_SEARCH_RESULT_COUNT,
    ATTR_SEARCH_SCOPE,
    ATTR_SEARCH_STATUS,
    configure_tracing,
    get_tracer,
    traced_projection,
    traced_search,
)


# ---------------------------------------------------------------------------
# Shared in-memory exporter fixture
# ---------------------------------------------------------------------------


@pytest.fixture()
def mem_exporter() -> InMemorySpanExporter:
    """Fresh InMemorySpanExporter and a configured TracerProvider."""
    exporter = InMemorySpanExporter()
    configure_tracing(exporter=exporter, service_name="test-service")
    return exporter


def _span(exporter: InMemorySpanExporter, name: str):
    return next(s for s in exporter.get_finished_spans() if s.name == name)


# ---------------------------------------------------------------------------
# configure_tracing / get_tracer
# ---------------------------------------------------------------------------


class TestConfigureTracing:
    def test_returns_tracer_provider(self):
        from opentelemetry.sdk.trace import TracerProvider

        provider = configure_tracing(exporter=InMemorySpanExporter(), service_name="provider-test")
        assert isinstance(provider, TracerProvider)

    def test_service_name_on_resource(self):
        provider = configure_tracing(exporter=InMemorySpanExporter(), service_name="wellness-test")
        assert provider.resource.attributes["service.name"] == "wellness-test"

    def test_console_exporter_used_when_no_endpoint(self):
        assert configure_tracing(service_name="console-test") is not None

    def test_missing_otlp_package_raises_import_error(self, monkeypatch):
        """When the otlp exporter package is absent, a helpful ImportError is raised."""
        import builtins

        real_import = builtins.__import__

        def mock_import(name, *args, **kwargs):
            if "otlp" in name:
                raise ImportError("mocked missing package")
            return real_import(name, *args, **kwargs)

        monkeypatch.setattr(builtins, "__import__", mock_import)
        with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
            configure_tracing(endpoint="http://localhost:4318/v1/traces")


class TestGetTracer:
    def test_returns_tracer(self, mem_exporter):
        tracer = get_tracer("test.component")
        assert hasattr(tracer, "start_as_current_span")


# ---------------------------------------------------------------------------
# traced_search
# ---------------------------------------------------------------------------


class TestTracedSearch:
    def test_returns_same_response(self, mem_exporter, engine):
        wrapped = traced_search(engine.search, get_tracer("search"))
        response = wrapped("burnout")
        assert response == engine.search("burnout")

    def test_span_records_query_status_and_count(self, mem_exporter, engine):
        wrapped = traced_search(engine.search, get_tracer("search"))
        response = wrapped("burnout")

        span = _span(mem_exporter, "search")
        assert span.attributes.get(ATTR_SEARCH_QUERY) == "burnout"
        assert span.attributes.get(ATTR_SEARCH_STATUS) == "ok"
        assert span.attributes.get(ATTR_SEARCH_RESULT_COUNT) == len(response.results)
        assert ATTR_SEARCH_SCOPE not in span.attributes

    def test_span_records_scope(self, mem_exporter, engine):
        wrapped = traced_search(engine.search, get_tracer("search"))
        wrapped("burnout", scope_provider_id="nurses")

        span = _span(mem_exporter, "search")
        assert span.attributes.get(ATTR_SEARCH_SCOPE) == "nurses"
        assert span.attributes.get(ATTR_SEARCH_RESULT_COUNT) == 1

    def test_too_short_status_recorded(self, mem_exporter, engine):
        wrapped = traced_search(engine.search, get_tracer("search"))
        wrapped("a")
        assert _span(mem_exporter, "search").attributes.get(ATTR_SEARCH_STATUS) == "too_short"

    def test_span_status_error_on_exception(self, mem_exporter):
        def broken_search(query: str, scope_provider_id=None) -> SearchResponse:
            raise RuntimeError("index unavailable")

        wrapped = traced_search(broken_search, get_tracer("search"))
        with pytest.raises(RuntimeError):
            wrapped("burnout")

        assert _span(mem_exporter, "search").status.status_code == StatusCode.ERROR


# ---------------------------------------------------------------------------
# traced_projection
# ---------------------------------------------------------------------------


class TestTracedProjection:
    def test_returns_same_result(self, mem_exporter, example_details, default_assumptions):
        wrapped = traced_projection(project, get_tracer("roi"))
        assert wrapped(example_details, default_assumptions) == project(example_details, default_assumptions)

    def test_span_records_inputs_and_outcome(self, mem_exporter, example_details, default_assumptions):
        wrapped = traced_projection(project, get_tracer("roi"))
        result = wrapped(example_details, default_assumptions)

        span = _span(mem_exporter, "roi-projection")
        assert span.attributes.get(ATTR_ROI_PROVIDERS) == 100
        assert span.attributes.get(ATTR_ROI_YEARS) == 5
        assert span.attributes.get(ATTR_ROI_FINAL) == pytest.approx(result.summary.final_roi)
        assert span.attributes.get(ATTR_ROI_BREAK_EVEN) == "Year 1"

    def test_span_status_error_on_exception(self, mem_exporter, example_details, default_assumptions):
        def broken_project(details, assumptions):
            raise ValueError("bad inputs")

        wrapped = traced_projection(broken_project, get_tracer("roi"))
        with pytest.raises(ValueError):
            wrapped(example_details, default_assumptions)

        assert _span(mem_exporter, "roi-projection").status.status_code == StatusCode.ERROR
