"""Console logging for workflow progress, and a thread-safe wrapper."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass
from typing import Protocol, TextIO


class Logger(Protocol):
    def step(self, msg: str) -> None: ...
    def info(self, msg: str) -> None: ...
    def prompt(self, msg: str) -> None: ...
    def warning(self, msg: str) -> None: ...
    def success(self, msg: str) -> None: ...
    def error(self, msg: str) -> None: ...
    def error_code(self, code: str, msg: str) -> None: ...


@dataclass
class ConsoleLogger:
    """Writes prefixed log lines to a text stream, stdout by default."""

    out: TextIO | None = None

    @property
    def _stream(self) -> TextIO:
        return self.out if self.out is not None else sys.stdout

    def _line(self, prefix: str, msg: str) -> None:
        self._stream.write(f"{prefix} {msg}\n")

    def step(self, msg: str) -> None:
        self._line("[STEP]", msg)

    def info(self, msg: str) -> None:
        self._line("[INFO]", msg)

    def prompt(self, msg: str) -> None:
        """Write a prompt without a trailing newline."""
        stream = self._stream
        stream.write(f"[PROMPT] {msg}")
        stream.flush()

    def warning(self, msg: str) -> None:
        self._line("[WARNING]", msg)

    def success(self, msg: str) -> None:
        self._line("[OK]", msg)

    def error(self, msg: str) -> None:
        self._line("[ERROR]", msg)

    def error_code(self, code: str, msg: str) -> None:
        self._line(f"[ERROR][{code}]", msg)


class SynchronizedLogger:
    """Forwards every call to another logger while holding a lock."""

    def __init__(self, inner: Logger) -> None:
        self.inner = inner
        self._lock = threading.Lock()

    def step(self, msg: str) -> None:
        with self._lock:
            self.inner.step(msg)

    def info(self, msg: str) -> None:
        with self._lock:
            self.inner.info(msg)

    def prompt(self, msg: str) -> None:
        with self._lock:
            self.inner.prompt(msg)

    def warning(self, msg: str) -> None:
        with self._lock:
            self.inner.warning(msg)

    def success(self, msg: str) -> None:
        with self._lock:
            self.inner.success(msg)

    def error(self, msg: str) -> None:
        with self._lock:
            self.inner.error(msg)

    def error_code(self, code: str, msg: str) -> None:
        with self._lock:
            self.inner.error_code(code, msg)


def synchronized(logger: Logger | None) -> Logger | None:
    """Wrap logger in a SynchronizedLogger unless it is None or already wrapped."""
    if logger is None or isinstance(logger, SynchronizedLogger):
        return logger
    return SynchronizedLogger(logger)