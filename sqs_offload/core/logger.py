# core/logger.py
import logging
from sqs_offload.core.config import settings

_level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

logger = logging.getLogger("sqs-extended-client")
logger.setLevel(_level)
logger.propagate = False

# Single console handler with a simple, structured-ish format
if not logger.handlers:
    _console = logging.StreamHandler()
    _console.setLevel(_level)
    _console.setFormatter(logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    ))
    logger.addHandler(_console)
