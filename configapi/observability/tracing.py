# configapi/observability/tracing.py
"""
OpenTelemetry tracing bootstrap for the FastAPI app.
- Installs a TracerProvider with a Console exporter.
- Instruments the FastAPI app and the SQLAlchemy engine passed in.
- Idempotent: safe to call multiple times. No-op unless OTEL_ENABLED.
"""
from __future__ import annotations

import logging
import typing as _t

from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor, ConsoleSpanExporter

logger = logging.getLogger(__name__)

_OTEL_INITIALIZED = False


def init_tracing(settings: _t.Any, app=None, engine=None) -> bool:
    """Initialize tracing once; returns True when a provider was installed by this call."""
    global _OTEL_INITIALIZED

    if _OTEL_INITIALIZED:
        return False
    if not getattr(settings, "OTEL_ENABLED", False):
        return False

    service_name = getattr(settings, "SERVICE_NAME", None) or "configapi"
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)

    if app is not None:
        FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)

    if engine is not None:
        # AsyncEngine wraps a sync Engine; the instrumentor hooks the sync one
        SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine, tracer_provider=provider)

    _OTEL_INITIALIZED = True
    logger.info("tracing initialized", extra={"service_name": service_name})
    return True
