"""
Goal: Set up loguru logging to stderr and a rolling log file under LOG_DIR.
stdout belongs to the JSON the launcher reads, so nothing is ever logged there.
Tab URLs often carry session tokens in their query strings; scrub them before writing.
"""

import re
import sys
from pathlib import Path

from loguru import logger

from tabbridge import settings

_URL_TAIL = re.compile(r"(https?://[^\s?#'\"]+)[?#][^\s'\"]*")
_LONG_TOKEN = re.compile(r"[A-Za-z0-9_-]{32,}")


def _sanitize_log_message(msg: str) -> str:
    """Remove sensitive information from log messages."""
    # Keep scheme/host/path of URLs, drop query strings and fragments
    msg = _URL_TAIL.sub(r"\1?[REDACTED]", msg)

    # Anything that looks like a token
    msg = _LONG_TOKEN.sub("[REDACTED]", msg)

    return msg


def _scrub_record(record) -> bool:
    """File-sink filter: sanitize in place, never drop."""
    record["message"] = _sanitize_log_message(record["message"])
    return True


def configure_logging(console_level: str | None = None) -> None:
    logger.remove()
    logger.add(
        lambda msg: sys.stderr.write(_sanitize_log_message(msg)),
        level=console_level or settings.CONSOLE_LOG_LEVEL,
        colorize=False,
        backtrace=False,
        diagnose=False,
    )
    try:
        settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError:
        logger.warning("Log folder {} is not writable; logging to stderr only", settings.LOG_DIR)
        return
    logger.add(
        str(Path(settings.LOG_DIR) / "tabbridge_{time:YYYY-MM-DD}.log"),
        rotation="00:00",
        retention="14 days",
        level=settings.LOG_LEVEL,
        backtrace=False,
        diagnose=False,
        serialize=False,
        enqueue=True,
        filter=_scrub_record,
    )
