import logging
import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from shared.config.settings import LOG_LEVEL, OTLP_ENDPOINT, TRACING_ENABLED

UNMEASURED_PATHS = ["/health", "/metrics"]

def add_otel_ids(logger, log_method, event_dict):
    """Stamps the active trace/span ids onto the event so logs join up with traces."""
    span = trace.get_current_span()
    if span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = trace.format_trace_id(ctx.trace_id)
        event_dict["span_id"] = trace.format_span_id(ctx.span_id)
    return event_dict

def configure_logging(level_name: str = LOG_LEVEL):
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_otel_ids,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

def configure_tracing(app: FastAPI, service_name: str):
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=OTLP_ENDPOINT, insecure=True))
    )
    trace.set_tracer_provider(provider)

    # Order workflow stages open child spans under the request span
    FastAPIInstrumentor.instrument_app(app, excluded_urls=",".join(UNMEASURED_PATHS))

def configure_metrics(app: FastAPI):
    Instrumentator(
        should_group_status_codes=False,
        excluded_handlers=UNMEASURED_PATHS,
    ).instrument(app).expose(app, include_in_schema=False)

def setup_observability(app: FastAPI, service_name: str):
    """
    Wires JSON logging, request tracing and Prometheus metrics into `app`.

    Call once on the outermost app: mounted service apps are served through
    its middleware, and Prometheus collectors may only be registered once
    per process. Tracing is skipped when TRACING_ENABLED is false.
    """
    configure_logging()
    if TRACING_ENABLED:
        configure_tracing(app, service_name)
    configure_metrics(app)
