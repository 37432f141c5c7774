"""Structured JSON logging with service and operation context fields."""
import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from config.settings import BaseAppSettings


class ContextFilter(logging.Filter):
    """Inject the service name and operation defaults into every log record."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        if not hasattr(record, "operation"):
            record.operation = ""
        return True


def configure_logging(settings: BaseAppSettings) -> None:
    """Configure the root logger once per service process.

    Args:
        settings (BaseAppSettings): Application settings with the service
            name and log level.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ContextFilter(settings.SERVICE_NAME))
    handler.setFormatter(
        JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(service_name)s "
            "%(operation)s %(message)s"
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.LOG_LEVEL.upper())
