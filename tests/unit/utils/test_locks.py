"""Tests for the reader/writer lock."""

from __future__ import annotations

import threading
import time

from seedsift.utils.locks import ReadWriteLock


class TestReadWriteLock:
    def test_readers_share(self) -> None:
        lock = ReadWriteLock()
        inside = threading.Barrier(3, timeout=2)

        def reader() -> None:
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)
        assert not inside.broken

    def test_writer_excludes_readers(self) -> None:
        lock = ReadWriteLock()
        events: list[str] = []

        def writer() -> None:
            with lock.write():
                events.append("write-start")
                time.sleep(0.05)
                events.append("write-end")

        with lock.read():
            t = threading.Thread(target=writer)
            t.start()
            time.sleep(0.02)
            # The writer waits for the active reader
            assert events == []
        t.join(timeout=5)

        with lock.read():
            events.append("read")
        assert events == ["write-start", "write-end", "read"]

    def test_lock_released_on_error(self) -> None:
        lock = ReadWriteLock()
        for ctx in (lock.read, lock.write):
            try:
                with ctx():
                    raise ValueError("boom")
            except ValueError:
                pass
        with lock.write():
            pass
