import threading
from contextlib import contextmanager
from typing import Callable, Dict, Tuple

from tracerr import wrapper
from tracerr.error import SourceNotFoundError
from tracerr.logging import logger


class ReadWriteLock:
    """
    Allows any number of concurrent readers, or a single writer.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self):
        with self._condition:
            while self._writing:
                self._condition.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write(self):
        with self._condition:
            while self._writing or self._readers > 0:
                self._condition.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._condition:
                self._writing = False
                self._condition.notify_all()


def read_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as file:
        return file.read()


class SourceCache:
    def __init__(self, reader: Callable[[str], str] = read_file) -> None:
        self._reader = reader
        self._lines: Dict[str, Tuple[str, ...]] = {}
        self._lock = ReadWriteLock()

    def read_lines(self, path: str) -> Tuple[str, ...]:
        """
        Returns the lines of the file at `path`, reading it on first use.
        Cached lines are never refreshed, even if the file changes.
        """
        with self._lock.read():
            lines = self._lines.get(path)
        if lines is not None:
            return lines

        logger.debug(f"Loading source lines from {path}")
        try:
            content = self._reader(path)
        except (OSError, UnicodeDecodeError) as e:
            raise wrapper.wrap(SourceNotFoundError(path)) from e

        # Concurrent misses may both read the file; the first insert wins.
        with self._lock.write():
            return self._lines.setdefault(path, tuple(content.split("\n")))

    def reset(self):
        with self._lock.write():
            self._lines.clear()

    def __contains__(self, path: str) -> bool:
        with self._lock.read():
            return path in self._lines


_cache = SourceCache()


def cache() -> SourceCache:
    return _cache


def read_lines(path: str) -> Tuple[str, ...]:
    return _cache.read_lines(path)
