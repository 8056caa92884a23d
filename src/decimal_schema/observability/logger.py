import json
import logging
import os
import sys
import time
import uuid

LOGGER_NAME = "decimal_schema"

_RESET = "\033[0m"
# first matching marker in the event type picks the colour
_EVENT_COLORS = (
    ("FAILED", "\033[31m"),
    ("WARNING", "\033[33m"),
    ("STARTED", "\033[32m"),
    ("COMPLETED", "\033[32m"),
    ("INFERRED", "\033[36m"),
)


def _use_color() -> bool:
    return os.getenv("LOG_COLOR", "0") == "1" and sys.stdout.isatty()


def _event_level(event_type: str) -> int:
    if event_type.endswith("_FAILED"):
        return logging.ERROR
    if event_type.endswith("_WARNING"):
        return logging.WARNING
    return logging.INFO


def get_logger() -> logging.Logger:
    """
    Logger writing one JSON record per line to stdout.
    Level comes from DECIMAL_SCHEMA_LOG_LEVEL (default INFO).
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    level = os.getenv("DECIMAL_SCHEMA_LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level, logging.INFO))
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


logger = get_logger()


def generate_request_id() -> str:
    return str(uuid.uuid4())


def log_event(event_type: str, payload: dict) -> None:
    """
    Emit a structured event. *_FAILED events go out at ERROR level,
    *_WARNING at WARNING, everything else at INFO.
    """
    text = json.dumps({"event_type": event_type, **payload}, default=str)

    if _use_color():
        color = next((c for marker, c in _EVENT_COLORS if marker in event_type), "\033[35m")
        text = f"{color}{text}{_RESET}"

    logger.log(_event_level(event_type), text)


class RequestTimer:
    """
    Wall-clock timer for one request or run.
    """
    def __init__(self):
        self.start_time = time.perf_counter()

    def duration(self) -> float:
        return round(time.perf_counter() - self.start_time, 4)
