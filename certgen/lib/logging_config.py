"""JSON logging configuration for the certgen tools."""

import logging

from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter trimmed to timestamp, level, message, exc_info, funcName, lineno."""

    allowed_fields = frozenset({"timestamp", "level", "message", "exc_info", "funcName", "lineno"})

    def add_fields(self, log_record, record, message_dict):
        """Rename levelname to level and drop every field outside allowed_fields."""
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")

        for key in [key for key in log_record if key not in self.allowed_fields]:
            log_record.pop(key)


def _setup_logger() -> logging.Logger:
    """Initialize the shared certgen logger once per process."""
    logger = logging.getLogger("certgen")

    # Module reloads must not stack handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        CustomJsonFormatter(
            fmt="%(timestamp)s %(levelname)s %(funcName)s %(lineno)d %(message)s",
            timestamp=True,
        )
    )

    logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


LOGGER = _setup_logger()
