from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)

_OTEL_CONFIGURED = False
logger = logging.getLogger(__name__)

SERVICE_VERSION_VALUE = "0.1.0"


def build_tracer_provider(
    console_stream: TextIO | None = None,
) -> TracerProvider:
    """Build the provider for drafting runs.

    ``OTEL_TRACES_EXPORTER`` selects ``otlp`` (needs
    ``OTEL_EXPORTER_OTLP_ENDPOINT``), ``console`` or ``none``. Without it an
    endpoint implies ``otlp``; otherwise spans are kept in-process only.
    """
    service_name = os.getenv("OTEL_SERVICE_NAME", "invoicing")
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    exporter_name = os.getenv("OTEL_TRACES_EXPORTER", "otlp" if endpoint else "none").lower()

    provider = TracerProvider(
        resource=Resource.create(
            {SERVICE_NAME: service_name, SERVICE_VERSION: SERVICE_VERSION_VALUE}
        )
    )
    if exporter_name == "console":
        # Console spans are exported synchronously, as each span ends.
        provider.add_span_processor(
            SimpleSpanProcessor(ConsoleSpanExporter(out=console_stream or sys.stderr))
        )
    elif exporter_name == "otlp" and endpoint:
        try:
            exporter = OTLPSpanExporter(
                endpoint=endpoint,
                insecure=endpoint.startswith("http://"),
            )
            provider.add_span_processor(BatchSpanProcessor(exporter))
        except Exception:
            logger.exception("otel_exporter_setup_failed")
    elif exporter_name not in {"none", "otlp"}:
        logger.warning("otel_exporter_unknown", extra={"error": exporter_name})
    return provider


def configure_otel(console_stream: TextIO | None = None) -> TracerProvider | None:
    global _OTEL_CONFIGURED
    if _OTEL_CONFIGURED:
        return None

    provider = build_tracer_provider(console_stream)
    trace.set_tracer_provider(provider)
    _OTEL_CONFIGURED = True
    return provider
