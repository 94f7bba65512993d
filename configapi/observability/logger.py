# configapi/observability/logger.py

# structured JSON logger
import logging
import sys
import traceback

from opentelemetry import trace
from pythonjsonlogger.json import JsonFormatter


APP_LOGGER = "app"
ACCESS_LOGGER = "access"
ERROR_LOGGER = "error"

app_logger = logging.getLogger(APP_LOGGER)
access_logger = logging.getLogger(ACCESS_LOGGER)
error_logger = logging.getLogger(ERROR_LOGGER)


class TraceIdFilter(logging.Filter):
    """Inject trace_id into the record when an OpenTelemetry span is active."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            ctx = trace.get_current_span().get_span_context()
            record.trace_id = f"{ctx.trace_id:032x}" if ctx.trace_id else None
        return True


def _build_formatter() -> logging.Formatter:
    return JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def configure_logging(settings) -> None:
    """Configure root logging with a single JSON console handler.

    - Root level follows settings.LOG_LEVEL.
    - app/access/error loggers propagate to root so every record is JSON on stdout.
    - trace_id is attached to each record when tracing is enabled.
    Safe to call more than once.
    """
    root = logging.getLogger()
    root.setLevel(getattr(settings, "LOG_LEVEL", "INFO"))

    formatter = _build_formatter()
    trace_filter = TraceIdFilter()

    for name in (APP_LOGGER, ACCESS_LOGGER, ERROR_LOGGER):
        lg = logging.getLogger(name)
        lg.setLevel(logging.ERROR if name == ERROR_LOGGER else logging.INFO)
        lg.propagate = True

    # Single JSON console handler on root
    have_console = any(getattr(h, "_configapi_console", False) for h in root.handlers)
    if not have_console:
        console = logging.StreamHandler(stream=sys.stdout)
        console.setFormatter(formatter)
        console.addFilter(trace_filter)
        console._configapi_console = True
        root.addHandler(console)

    app_logger.info("logging configured")


def log_info(message: str) -> None:
    # lifecycle messages; the access logger carries request lines only
    app_logger.info(message)


def log_exception(e: Exception, context: str = "") -> None:
    error_logger.error(
        f"Exception in {context}: {type(e).__name__}: {e}\n{traceback.format_exc()}"
    )
