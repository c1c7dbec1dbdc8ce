"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from mrcars_admin.shared.telemetry.logging import request_id_var, setup_logging
from mrcars_admin.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from mrcars_admin.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "setup_logging",
    "request_id_var",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
    "add_span_event",
]
