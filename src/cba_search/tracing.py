"""OpenTelemetry tracing helpers for corpus search and answer generation.

Spans recorded here:

- ``retrieval``     : one ``CorpusIndex.search`` call
- ``entity-match``  : one player lookup
- ``generation``    : one answer-generation call
- ``rag-pipeline``  : parent span tying the three together

Usage with a local OTLP collector:

    from cba_search.tracing import configure_tracing, get_tracer, traced_search

    configure_tracing(endpoint="http://localhost:6006/v1/traces", service_name="cba-search")
    search = traced_search(index.search, get_tracer("cba-search.retrieval"))
    result = search("How do Bird rights work?")

Without a backend, ``configure_tracing()`` prints spans to stdout.
"""
from __future__ import annotations

from typing import Callable

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

from .qa import build_augmentation
from .retrieval import CorpusIndex
from .schema import SearchResult

# ---------------------------------------------------------------------------
# OpenInference semantic-convention attribute names
# ---------------------------------------------------------------------------

ATTR_INPUT_VALUE = "input.value"
ATTR_OUTPUT_VALUE = "output.value"
ATTR_LLM_MODEL_NAME = "llm.model_name"
ATTR_RETRIEVAL_DOCUMENTS = "retrieval.documents"
ATTR_RETRIEVAL_CONTEXT_CHARS = "retrieval.context_chars"
ATTR_ENTITY_MATCHED = "entity.matched"

# ---------------------------------------------------------------------------
# Provider lifecycle helpers
# ---------------------------------------------------------------------------

_provider: TracerProvider | None = None


def configure_tracing(
    endpoint: str | None = None,
    service_name: str = "cba-search",
    exporter: SpanExporter | None = None,
) -> TracerProvider:
    """Create and register a global TracerProvider.

    Args:
        endpoint: OTLP HTTP endpoint URL. When *None* and no *exporter* is
            given, spans go to :class:`ConsoleSpanExporter`.
        service_name: Service label shown by the observability backend.
        exporter: Ready-made exporter, e.g. ``InMemorySpanExporter`` in tests.
            When provided, *endpoint* is ignored.

    Returns:
        The configured provider, also installed as the global provider.
    """
    global _provider

    resource = Resource(attributes={SERVICE_NAME: service_name})
    provider = TracerProvider(resource=resource)

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
                "  pip install 'cba-search[otlp]'"
            ) from exc
        chosen_exporter = OTLPSpanExporter(endpoint=endpoint)
    else:
        chosen_exporter = ConsoleSpanExporter()

    # Synchronous export keeps spans readable right after a call returns.
    provider.add_span_processor(SimpleSpanProcessor(chosen_exporter))
    trace.set_tracer_provider(provider)
    _provider = provider
    return provider


def get_tracer(name: str) -> trace.Tracer:
    """Return a tracer from the provider set by :func:`configure_tracing`.

    Falls back to the global (possibly no-op) provider when tracing was never
    configured.
    """
    if _provider is not None:
        return _provider.get_tracer(name)
    return trace.get_tracer(name)


# ---------------------------------------------------------------------------
# Span-wrapping helpers
# ---------------------------------------------------------------------------


def traced_search(
    search_fn: Callable[..., SearchResult],
    tracer: trace.Tracer,
) -> Callable[..., SearchResult]:
    """Wrap a search callable so every call is recorded as a ``retrieval`` span.

    The span records the query, the number of sources and the context size.
    """

    def _wrapped(query: str, *args, **kwargs) -> SearchResult:
        with tracer.start_as_current_span("retrieval") as span:
            span.set_attribute(ATTR_INPUT_VALUE, query)
            try:
                result = search_fn(query, *args, **kwargs)
                span.set_attribute(ATTR_RETRIEVAL_DOCUMENTS, len(result.sources))
                span.set_attribute(ATTR_RETRIEVAL_CONTEXT_CHARS, len(result.context))
                span.set_status(trace.StatusCode.OK)
                return result
            except Exception as exc:
                span.set_status(trace.StatusCode.ERROR, str(exc))
                span.record_exception(exc)
                raise

    return _wrapped


def traced_entity_match(
    match_fn: Callable[[str], str],
    tracer: trace.Tracer,
) -> Callable[[str], str]:
    """Wrap a player-lookup callable in an ``entity-match`` span."""

    def _wrapped(query: str) -> str:
        with tracer.start_as_current_span("entity-match") as span:
            span.set_attribute(ATTR_INPUT_VALUE, query)
            try:
                block = match_fn(query)
                span.set_attribute(ATTR_ENTITY_MATCHED, bool(block))
                span.set_status(trace.StatusCode.OK)
                return block
            except Exception as exc:
                span.set_status(trace.StatusCode.ERROR, str(exc))
                span.record_exception(exc)
                raise

    return _wrapped


def traced_generation(
    answer_fn: Callable[..., str],
    tracer: trace.Tracer,
    model_name: str = "",
) -> Callable[..., str]:
    """Wrap an answer callable ``(question, context) -> str`` in a ``generation`` span.

    The first 500 characters of the answer are stored as ``output.value``.
    """

    def _wrapped(question: str, context: str, **kwargs) -> str:
        with tracer.start_as_current_span("generation") as span:
            span.set_attribute(ATTR_INPUT_VALUE, question)
            if model_name:
                span.set_attribute(ATTR_LLM_MODEL_NAME, model_name)
            try:
                answer = answer_fn(question, context, **kwargs)
                span.set_attribute(ATTR_OUTPUT_VALUE, answer[:500])
                span.set_status(trace.StatusCode.OK)
                return answer
            except Exception as exc:
                span.set_status(trace.StatusCode.ERROR, str(exc))
                span.record_exception(exc)
                raise

    return _wrapped


def build_traced_rag_pipeline(
    index: CorpusIndex,
    answer_fn: Callable[..., str],
    tracer: trace.Tracer,
    model_name: str = "",
) -> Callable[[str], str]:
    """Search, look up players and answer under one ``rag-pipeline`` parent span.

    Args:
        index: Loaded corpus index.
        answer_fn: Callable ``(question, context) -> str``.
        tracer: Tracer shared by all child spans.
        model_name: Model name attached to the generation span.

    Returns:
        A callable ``(question) -> answer``.
    """
    w_search = traced_search(index.search, tracer)
    w_entities = traced_entity_match(index.match_entities, tracer)
    w_answer = traced_generation(answer_fn, tracer, model_name=model_name)

    def _pipeline(question: str) -> str:
        with tracer.start_as_current_span("rag-pipeline") as span:
            span.set_attribute(ATTR_INPUT_VALUE, question)
            result = w_search(question)
            entity_block = w_entities(question)
            answer = w_answer(question, build_augmentation(result, entity_block))
            span.set_attribute(ATTR_OUTPUT_VALUE, answer[:500])
            return answer

    return _pipeline
