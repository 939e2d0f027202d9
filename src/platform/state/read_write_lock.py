"""
Read/Write Lock for in-process shared state

Many readers may hold the lock together; a writer holds it alone.
A waiting writer blocks new readers so a stream of reads cannot starve it.
The thread that owns the write lock may re-enter it and may take read locks.
"""

from collections.abc import Iterator
from contextlib import contextmanager
import threading
from typing import Optional

from src.platform.logging.loguru_io import Logger


class ReadWriteLock:
    def __init__(self, *, name: str = 'rw_lock') -> None:
        self.name = name
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writer: Optional[int] = None
        self._writer_depth = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        me = threading.get_ident()
        with self._cond:
            held_by_me = self._writer == me
            if not held_by_me:
                while self._writer is not None or self._writers_waiting:
                    self._cond.wait()
                self._readers += 1
        try:
            yield
        finally:
            if not held_by_me:
                with self._cond:
                    self._readers -= 1
                    if not self._readers:
                        self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        me = threading.get_ident()
        with self._cond:
            if self._writer == me:
                self._writer_depth += 1
            else:
                self._writers_waiting += 1
                try:
                    while self._writer is not None or self._readers:
                        self._cond.wait()
                finally:
                    self._writers_waiting -= 1
                self._writer = me
                self._writer_depth = 1
                Logger.base.debug(f'🔒 [LOCK] Acquired write lock: {self.name}')
        try:
            yield
        finally:
            with self._cond:
                self._writer_depth -= 1
                if not self._writer_depth:
                    self._writer = None
                    Logger.base.debug(f'🔓 [LOCK] Released write lock: {self.name}')
                    self._cond.notify_all()

    @property
    def is_write_locked(self) -> bool:
        with self._cond:
            return self._writer is not None
