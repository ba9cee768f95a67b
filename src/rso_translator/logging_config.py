"""Logging setup for the service.

Modules log through ``logging.getLogger(__name__)`` and never configure
handlers themselves.  :func:`configure_logging` is called once by the CLI
before the server starts and installs:

- a stderr handler in one of three formats (``simple``, ``detailed``,
  ``json``);
- an :class:`AxiomHandler` when an Axiom dataset and token are configured,
  so operational logs also land in Axiom.

Axiom shipping
--------------
Records are buffered in memory and POSTed as a JSON array to the Axiom
ingest endpoint (``{axiom_url}/v1/datasets/{dataset}/ingest``) once the
buffer is full, on ERROR records, and when the handler is closed at
shutdown.  An ingest failure goes through ``Handler.handleError`` and is
never raised into the code that emitted the record.

The ingest POST is blocking, so the root logger never calls the
``AxiomHandler`` directly.  It gets a ``QueueHandler`` instead, and a
``QueueListener`` thread hands records to the ``AxiomHandler``.  Logging
from the event loop only enqueues.  :func:`shutdown_logging` stops the
listener (draining the queue) and runs at interpreter exit.
"""

from __future__ import annotations

import atexit
import json
import logging
import logging.handlers
import queue
from datetime import UTC, datetime

import requests

from rso_translator.config import LoggingSettings

_FORMATS = {
    "simple": "%(levelname)s: %(message)s",
    "detailed": "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
}

# Uvicorn's loggers propagate to the root logger once their own handlers
# are removed, so access and error logs share the configured format.
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_installed_handlers: list[logging.Handler] = []
_listener: logging.handlers.QueueListener | None = None


def record_to_dict(record: logging.LogRecord) -> dict:
    """Flatten a log record into the fields shipped to structured sinks."""
    data = {
        "_time": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
        "level": record.levelname.lower(),
        "logger": record.name,
        "message": record.getMessage(),
    }
    if record.exc_info:
        data["exception"] = logging.Formatter().formatException(record.exc_info)
    return data


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(record_to_dict(record), ensure_ascii=False)


class AxiomHandler(logging.handlers.BufferingHandler):
    """Buffering handler that ships records to the Axiom ingest API.

    Attributes:
        ingest_url: Full ingest URL for the dataset.
        timeout:    HTTP timeout for one ingest call.
    """

    def __init__(
        self,
        *,
        dataset: str,
        token: str,
        base_url: str = "https://api.axiom.co",
        capacity: int = 50,
        timeout: float = 5.0,
    ) -> None:
        super().__init__(capacity)
        self.ingest_url = f"{base_url.rstrip('/')}/v1/datasets/{dataset}/ingest"
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(
            {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}
        )

    def shouldFlush(self, record: logging.LogRecord) -> bool:  # noqa: N802 - logging API
        return super().shouldFlush(record) or record.levelno >= logging.ERROR

    def flush(self) -> None:
        self.acquire()
        try:
            if not self.buffer:
                return
            records, self.buffer = self.buffer, []
            events = [record_to_dict(record) for record in records]
            try:
                response = self._session.post(self.ingest_url, json=events, timeout=self.timeout)
                response.raise_for_status()
            except requests.exceptions.RequestException:
                self.handleError(records[-1])
        finally:
            self.release()

    def close(self) -> None:
        try:
            self.flush()
            self._session.close()
        finally:
            super().close()

def shutdown_logging() -> None:
    """Remove the handlers installed by :func:`configure_logging`.

    Stops the Axiom listener thread first, so records still queued are
    handed to the ``AxiomHandler`` and flushed when it is closed.
    """
    global _listener
    root = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()

    if _listener is not None:
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
        _listener = None


def configure_logging(settings: LoggingSettings) -> list[logging.Handler]:
    """Install root handlers according to ``settings``.

    Safe to call more than once; handlers installed by a previous call are
    closed and replaced.  Handlers added by anything else are left alone.

    Returns:
        The handlers now installed on the root logger by this function.
    """
    global _listener
    shutdown_logging()

    console = logging.StreamHandler()
    if settings.format == "json":
        console.setFormatter(JsonFormatter())
    else:
        console.setFormatter(logging.Formatter(_FORMATS[settings.format]))
    _installed_handlers.append(console)

    if settings.axiom_enabled:
        axiom = AxiomHandler(
            dataset=settings.axiom_dataset,
            token=settings.axiom_token,
            base_url=settings.axiom_url,
        )
        records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
        queue_handler = logging.handlers.QueueHandler(records)
        _listener = logging.handlers.QueueListener(records, axiom)
        queue_handler.listener = _listener
        _listener.start()
        _installed_handlers.append(queue_handler)

    root = logging.getLogger()
    for handler in _installed_handlers:
        root.addHandler(handler)
    root.setLevel(settings.level)

    for name in _UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    return list(_installed_handlers)


# Registered after logging's own exit hook, so it runs first.
atexit.register(shutdown_logging)
