import threading
from pathlib import Path
from types import ModuleType
from typing import Iterator, Optional

import pytest

from tracerr import source


@pytest.fixture(scope="function")
def config() -> Iterator[ModuleType]:
    import tracerr.settings

    tracerr.settings.reset()
    yield tracerr.settings
    tracerr.settings.reset()


@pytest.fixture(scope="function")
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "source.py"
    path.write_text("\n".join(f"line {i}" for i in range(1, 11)), encoding="utf-8")
    return path


class CountingReader:
    def __init__(self, barrier: Optional[threading.Barrier] = None) -> None:
        self.calls = 0
        self._lock = threading.Lock()
        self._barrier = barrier

    def __call__(self, path: str) -> str:
        with self._lock:
            self.calls += 1
        if self._barrier is not None:
            self._barrier.wait(timeout=5)
        return source.read_file(path)
