"""
Logging setup for wifi-health.

setup_logging() is called once by each entry point (the CLI launcher and
the API server).  Library modules only ever do
``log = logging.getLogger("<area>")`` and never attach handlers.

Snapshot collection fans out over a thread pool, so both formats carry
the thread name to keep concurrent command logs apart.
"""
import json
import logging
import logging.handlers
import os
import time

_configured = False

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_MAX_BYTES = 1_000_000
LOG_FILE_BACKUPS = 3


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Example::

        {"ts":"2025-01-15T12:00:00Z","level":"WARNING","logger":"collector",
         "thread":"ThreadPoolExecutor-0_1","msg":"dig failed (rc=9): ..."}
    """

    def format(self, record):
        entry = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _make_formatter(structured):
    if structured:
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)


def _make_file_handler(path, level, formatter):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS,
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(level=logging.INFO, log_file=None, console_level=None,
                  structured=False):
    """Attach console (and optionally file) handlers to the root logger.

    Only the first call has any effect.

    Args:
        level: Root level; the file handler records everything at this level.
        log_file: Path of a rotating log file, or None for console only.
        console_level: Separate console threshold, so the terminal report
                       is not interleaved with INFO lines.  Defaults to *level*.
        structured: Emit JSON lines instead of plain text.
    """
    global _configured
    if _configured:
        return
    _configured = True

    formatter = _make_formatter(structured)
    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler()
    console.setLevel(console_level or level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        root.addHandler(_make_file_handler(log_file, level, formatter))


def default_log_dir():
    """``~/.config/wifi-health/logs`` of the invoking user, created on demand."""
    from wifihealth.utils.common import get_real_user_home
    path = os.path.join(get_real_user_home(), ".config", "wifi-health", "logs")
    os.makedirs(path, exist_ok=True)
    return path


def default_log_path():
    return os.path.join(default_log_dir(), "wifi-health.log")
