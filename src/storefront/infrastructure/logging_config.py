"""Logging setup with per-request correlation.

``REQUEST_ID_CTX`` is set by the HTTP middleware for the duration of a
request; ``RequestIdFilter`` copies it onto every log record so
formatters can reference ``%(request_id)s`` whether or not a request is
in flight.
"""

import contextvars
import logging

from pythonjsonlogger import jsonlogger

REQUEST_ID_CTX = contextvars.ContextVar("request_id", default="-")

JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s"
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(request_id)s] %(message)s"


class RequestIdFilter(logging.Filter):
    """Attach a ``request_id`` attribute to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = REQUEST_ID_CTX.get()
        return True


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install one stream handler on the root logger.

    Safe to call more than once; the previous handler is replaced.
    """
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    if fmt == "json":
        handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_storefront", False):
            root.removeHandler(existing)
    handler._storefront = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
