import threading

import pytest

from tracerr import source
from tracerr.error import SourceNotFoundError
from tracerr.source import ReadWriteLock, SourceCache
from tracerr.wrapper import TracedError
from tests.fixtures import *


def test_read_lines_splits_on_newlines(tmp_path):
    path = tmp_path / "file.txt"
    path.write_text("a\nb\n", encoding="utf-8")

    lines = SourceCache().read_lines(str(path))

    assert lines == ("a", "b", "")


def test_read_lines_is_cached(source_file):
    reader = CountingReader()
    cache = SourceCache(reader)

    first = cache.read_lines(str(source_file))
    second = cache.read_lines(str(source_file))

    assert first is second
    assert reader.calls == 1
    assert str(source_file) in cache


def test_cached_lines_are_not_refreshed(source_file):
    cache = SourceCache()
    before = cache.read_lines(str(source_file))

    source_file.write_text("changed", encoding="utf-8")

    assert cache.read_lines(str(source_file)) is before


def test_reset_clears_cache(source_file):
    reader = CountingReader()
    cache = SourceCache(reader)
    cache.read_lines(str(source_file))

    cache.reset()

    assert str(source_file) not in cache
    cache.read_lines(str(source_file))
    assert reader.calls == 2


def test_missing_file_raises_traced_error(tmp_path):
    path = str(tmp_path / "missing.py")

    with pytest.raises(TracedError) as info:
        SourceCache().read_lines(path)

    assert isinstance(info.value.unwrap(), SourceNotFoundError)
    assert info.value.unwrap().path() == path
    assert str(info.value) == f"tracerr: file {path} not found"
    assert info.value.stack_trace()[0].func == "SourceCache.read_lines"


def test_concurrent_misses_converge_on_one_entry(source_file):
    reader = CountingReader(threading.Barrier(2))
    cache = SourceCache(reader)
    path = str(source_file)
    results = [None, None]

    def read(index):
        results[index] = cache.read_lines(path)

    threads = [threading.Thread(target=read, args=(i,)) for i in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    expected = tuple(source_file.read_text(encoding="utf-8").split("\n"))
    assert results[0] == expected
    assert results[1] == expected
    assert reader.calls == 2

    cached = cache.read_lines(path)
    assert cached is results[0]
    assert cached is results[1]
    assert reader.calls == 2


def test_module_cache_is_shared(source_file):
    lines = source.read_lines(str(source_file))

    assert source.cache().read_lines(str(source_file)) is lines


def test_read_write_lock_allows_concurrent_readers():
    lock = ReadWriteLock()
    barrier = threading.Barrier(2)
    errors = []

    def reader():
        with lock.read():
            try:
                barrier.wait(timeout=5)
            except threading.BrokenBarrierError as e:
                errors.append(e)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []


def test_read_write_lock_writer_excludes_readers():
    lock = ReadWriteLock()
    events = []

    with lock.write():
        thread = threading.Thread(target=lambda: _read_and_record(lock, events))
        thread.start()
        thread.join(timeout=0.2)
        events.append("writer done")

    thread.join()

    assert events == ["writer done", "reader done"]


def _read_and_record(lock, events):
    with lock.read():
        events.append("reader done")


def test_undecodable_file_raises_traced_error(tmp_path):
    path = tmp_path / "binary.py"
    path.write_bytes(b"\xff\xfe\x00")

    with pytest.raises(TracedError) as info:
        SourceCache().read_lines(str(path))

    assert isinstance(info.value.unwrap(), SourceNotFoundError)
    assert str(path) not in SourceCache()
