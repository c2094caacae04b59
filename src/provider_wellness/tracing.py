"""OpenTelemetry tracing helpers for search and ROI projection calls.

Usage with an OTLP collector:

    from provider_wellness.tracing import configure_tracing, get_tracer, traced_search

    configure_tracing(endpoint="http://localhost:4318/v1/traces")
    search = traced_search(engine.search, get_tracer("provider-wellness.search"))
    response = search("burnout", scope_provider_id="physicians")

Usage without a backend (development / testing):

    configure_tracing()   # ConsoleSpanExporter by default
"""
from __future__ import annotations

from typing import Callable

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor, SpanExporter

from .roi import ModelAssumptions, OrgDetails, RoiResult
from .schema import SearchResponse

ATTR_SEARCH_QUERY = "search.query"
ATTR_SEARCH_SCOPE = "search.scope"
ATTR_SEARCH_STATUS = "search.status"
ATTR_SEARCH_RESULT_COUNT = "search.result_count"
ATTR_ROI_PROVIDERS = "roi.num_providers"
ATTR_ROI_YEARS = "roi.projection_years"
ATTR_ROI_FINAL = "roi.final_roi"
ATTR_ROI_BREAK_EVEN = "roi.break_even_year"

_provider: TracerProvider | None = None


def configure_tracing(
    endpoint: str | None = None,
    service_name: str = "provider-wellness",
    exporter: SpanExporter | None = None,
) -> TracerProvider:
    """Create and register a global TracerProvider.

    Args:
        endpoint: OTLP HTTP endpoint URL. When *None* and no *exporter* is
            given, spans are printed to stdout.
        service_name: Service label shown by the tracing backend.
        exporter: Pre-built exporter (e.g. ``InMemorySpanExporter`` in tests).
            Takes precedence over *endpoint*.

    Returns:
        The configured provider, also set as the global OTel provider.
    """
    global _provider

    provider = TracerProvider(resource=Resource(attributes={SERVICE_NAME: service_name}))

    if exporter is not None:
        chosen_exporter: SpanExporter = exporter
    elif endpoint is not None:
        try:
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
                OTLPSpanExporter,
            )
        except ImportError as exc:  # pragma: no cover
            raise ImportError(
                "opentelemetry-exporter-otlp-proto-http is required to export "
                "traces to an OTLP endpoint.  Install it with:\n"
                "  pip install 'provider-wellness[otlp]'"
            ) from exc
        chosen_exporter = OTLPSpanExporter(endpoint=endpoint)
    else:
        chosen_exporter = ConsoleSpanExporter()

    provider.add_span_processor(SimpleSpanProcessor(chosen_exporter))
    trace.set_tracer_provider(provider)
    _provider = provider
    return provider


def get_tracer(name: str) -> trace.Tracer:
    """Return a tracer from the configured provider, or the global no-op one."""
    if _provider is not None:
        return _provider.get_tracer(name)
    return trace.get_tracer(name)


def traced_search(
    search_fn: Callable[..., SearchResponse],
    tracer: trace.Tracer,
) -> Callable[..., SearchResponse]:
    """Wrap a search callable so every call is recorded as a ``search`` span.

    The span records the query, the provider scope (when given), the
    response status, and the number of results.
    """

    def _wrapped(query: str, scope_provider_id: str | None = None) -> SearchResponse:
        with tracer.start_as_current_span("search") as span:
            span.set_attribute(ATTR_SEARCH_QUERY, query)
            if scope_provider_id is not None:
                span.set_attribute(ATTR_SEARCH_SCOPE, scope_provider_id)
            try:
                response = search_fn(query, scope_provider_id=scope_provider_id)
                span.set_attribute(ATTR_SEARCH_STATUS, response.status)
                span.set_attribute(ATTR_SEARCH_RESULT_COUNT, len(response.results))
                span.set_status(trace.StatusCode.OK)
                return response
            except Exception as exc:
                span.set_status(trace.StatusCode.ERROR, str(exc))
                span.record_exception(exc)
                raise

    return _wrapped


def traced_projection(
    project_fn: Callable[[OrgDetails, ModelAssumptions], RoiResult],
    tracer: trace.Tracer,
) -> Callable[[OrgDetails, ModelAssumptions], RoiResult]:
    """Wrap a projection callable so every call is recorded as a ``roi-projection`` span."""

    def _wrapped(details: OrgDetails, assumptions: ModelAssumptions) -> RoiResult:
        with tracer.start_as_current_span("roi-projection") as span:
            span.set_attribute(ATTR_ROI_PROVIDERS, details.num_providers)
            span.set_attribute(ATTR_ROI_YEARS, details.projection_years)
            try:
                result = project_fn(details, assumptions)
                span.set_attribute(ATTR_ROI_FINAL, result.summary.final_roi)
                if result.summary.break_even_year is not None:
                    span.set_attribute(ATTR_ROI_BREAK_EVEN, result.summary.break_even_year)
                span.set_status(trace.StatusCode.OK)
                return result
            except Exception as exc:
                span.set_status(trace.StatusCode.ERROR, str(exc))
                span.record_exception(exc)
                raise

    return _wrapped
