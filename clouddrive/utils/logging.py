import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Attributes passed through ``extra=`` that are worth indexing
CONTEXT_FIELDS = ("user_id", "entry_id", "blob_ref", "parent_id")

QUIET_LOGGERS = {
    "uvicorn.access": logging.INFO,
    "uvicorn.error": logging.INFO,
    "pymongo": logging.WARNING,
    "motor": logging.WARNING,
    "beanie": logging.WARNING,
    "urllib3": logging.WARNING,
    "minio": logging.WARNING,
    "sentry_sdk": logging.WARNING,
    "python_multipart": logging.WARNING,
}

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with storage context when the caller attached it"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Console formatter; colours only the level and logger name"""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    NAME_COLOR = "\033[94m"
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so the file handler keeps the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        record.name = f"{self.NAME_COLOR}{record.name}{self.RESET}"
        return super().format(record)


def _console_handler(level: int, enable_json: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if enable_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ColoredFormatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(level: int, log_file: str) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(
    level: str = "INFO",
    app_name: str = "Clouddrive",
    enable_json: bool = False,
    log_file: str | None = None
) -> None:
    """
    Configure the root logger for the API process

    Args:
        level: Logging level name
        app_name: Logger used to announce the configuration
        enable_json: Emit JSON lines on stdout instead of coloured text
        log_file: Optional path for a rotating JSON log file
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(numeric_level)

    root_logger.addHandler(_console_handler(numeric_level, enable_json))
    if log_file:
        root_logger.addHandler(_file_handler(numeric_level, log_file))

    configure_loggers()
    logging.getLogger(app_name).info(f"Logging configured - level: {level}, json: {enable_json}")


def configure_loggers() -> None:
    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
