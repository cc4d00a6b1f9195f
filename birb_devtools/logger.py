"""
logger.py

Responsibility: The debug logger used while developing Birb.JS.

Every run gets its own append-only log file under `logs/`, and the same messages are
mirrored to the console (leveled: the file records everything, the console only what the
configured level allows). A configured token is redacted from both outputs.

The logger is a plain object passed to whoever needs it. Shutdown hooks (exit trailer,
SIGINT handling) are only installed when `install_hooks()` is called.

Built on the standard `logging` module: other modules keep logging through
`logging.getLogger(__name__)` and their records reach the same handlers.
"""

from __future__ import annotations

import atexit
import logging
import secrets
import signal
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

REDACTED = "*" * 54

BANNER = "Birb.JS DevTools - Ease the pain of developing Birb.JS..."

_LEVEL_MAP: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Tag shown for records that did not come through one of the DevLogger methods.
_LEVEL_TAGS: dict[int, str] = {
    logging.DEBUG: "debug",
    logging.INFO: "log",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


@dataclass(frozen=True)
class LoggerConfig:
    """
    Attributes:
        level: Minimum severity mirrored to the console.
        console: Mirror messages to the console (`log` to stdout, other tags to stderr).
        log_dir: Directory for the per-run log file, or None to disable the file.
        token: Secret to redact from every message.
    """

    level: str = "INFO"
    console: bool = True
    log_dir: str | Path | None = "logs"
    token: str | None = None


def parse_level(level: str | None) -> int:
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _tag(record: logging.LogRecord) -> str:
    return getattr(record, "tag", None) or _LEVEL_TAGS.get(record.levelno, "log")


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _clock(d: datetime) -> str:
    return f"{d.hour}-{d.minute}-{d.second}-{d.microsecond // 1000}"


def log_file_name(now: datetime | None = None) -> str:
    d = now or datetime.now()
    return f"debug-{d.day}-{d.month}-{d.year}_{_clock(d)}.{secrets.token_hex(4)}.log"


class TokenRedactionFilter(logging.Filter):
    """Replace every occurrence of the token in the rendered message."""

    def __init__(self, token: str | None) -> None:
        super().__init__()
        self._token = token or ""

    def filter(self, record: logging.LogRecord) -> bool:
        if self._token:
            message = record.getMessage()
            if self._token in message:
                record.msg = message.replace(self._token, REDACTED)
                record.args = ()
        return True


class ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        text = f"[{_tag(record)}] {record.getMessage()}"
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


class FileFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, "lifecycle", False):
            return f"[info] {record.getMessage()}"
        stamp = datetime.fromtimestamp(record.created)
        text = f"[{_tag(record)} @ {_clock(stamp)}] {record.getMessage()}"
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


def _not_lifecycle(record: logging.LogRecord) -> bool:
    return not getattr(record, "lifecycle", False)


def _is_log_tag(record: logging.LogRecord) -> bool:
    return _tag(record) == "log"


def _not_log_tag(record: logging.LogRecord) -> bool:
    return _tag(record) != "log"


class DevLogger:
    def __init__(self, config: LoggerConfig | None = None, *, name: str = "birb_devtools") -> None:
        self.config = config or LoggerConfig()
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self.file_path: Path | None = None

        self._handlers: list[logging.Handler] = []
        self._closed = False
        self._hooks_installed = False
        self._previous_sigint: Any = None

        redact = TokenRedactionFilter(self.config.token)

        if self.config.console:
            # Plain `log` lines go to stdout, every other tag to stderr.
            for stream, route in ((sys.stdout, _is_log_tag), (sys.stderr, _not_log_tag)):
                sh = logging.StreamHandler(stream)
                sh.setLevel(parse_level(self.config.level))
                sh.setFormatter(ConsoleFormatter())
                sh.addFilter(redact)
                sh.addFilter(_not_lifecycle)
                sh.addFilter(route)
                self._add_handler(sh)
            sys.stdout.write(f"\n{BANNER}\n\n")

        if self.config.log_dir is not None:
            log_dir = Path(self.config.log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            self.file_path = log_dir / log_file_name()
            fh = logging.FileHandler(self.file_path, mode="a", encoding="utf-8")
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(FileFormatter())
            fh.addFilter(redact)
            self._add_handler(fh)
            self._lifecycle(f"file creation: {self.file_path.name}")

        self._lifecycle(f"Birb.JS Debug Log start at {_utc_iso()}")

    def _add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)
        self._handlers.append(handler)

    def _lifecycle(self, message: str) -> None:
        self.logger.info(message, extra={"lifecycle": True})

    def _emit(self, level: int, tag: str, message: tuple[Any, ...]) -> None:
        self.logger.log(level, " ".join(str(m) for m in message), extra={"tag": tag})

    def log(self, *message: Any) -> None:
        self._emit(logging.INFO, "log", message)

    def warn(self, *message: Any) -> None:
        self._emit(logging.WARNING, "warn", message)

    def error(self, *message: Any) -> None:
        self._emit(logging.ERROR, "error", message)

    def send(self, *message: Any) -> None:
        self._emit(logging.INFO, "SEND", message)

    def receive(self, *message: Any) -> None:
        self._emit(logging.INFO, "RECEIVE", message)

    def http(self, *message: Any) -> None:
        self._emit(logging.INFO, "HTTP", message)

    def install_hooks(self) -> None:
        """Write the trailer at interpreter exit and on Ctrl+C (exit status 2)."""
        if self._hooks_installed:
            return
        atexit.register(self.close)
        self._previous_sigint = signal.signal(signal.SIGINT, self._on_sigint)
        self._hooks_installed = True

    def _on_sigint(self, signum: int, frame: Any) -> None:
        self._lifecycle("SIGINT (ctrl+c) received")
        self.close()
        sys.exit(2)

    def close(self) -> None:
        """Write the end-of-log trailer once and detach the handlers."""
        if self._closed:
            return
        self._closed = True
        self._lifecycle(f"Birb.JS Debug Log end at {_utc_iso()}")

        for handler in self._handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()

        if self._hooks_installed:
            atexit.unregister(self.close)
            # signal.signal returns None when the old handler was not installed from Python.
            previous = self._previous_sigint if self._previous_sigint is not None else signal.SIG_DFL
            signal.signal(signal.SIGINT, previous)
            self._previous_sigint = None
            self._hooks_installed = False

    def __enter__(self) -> DevLogger:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
