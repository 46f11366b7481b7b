# ============================================================================
# carwash/services/booking/slot_lock.py
# ============================================================================
"""
Mutual exclusion around "check slot capacity + insert booking".

Without a lock two concurrent requests can both see one free staff member
and both insert, overbooking the slot. The default backend keeps that
check-then-act behaviour; "local" serialises within one process and
"redis" across processes.
"""
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date
from typing import ContextManager, Dict, Iterator, List

import redis

from carwash.config.redis import RedisKeys, get_sync_redis
from carwash.core.exceptions import ConflictError

logger = logging.getLogger(__name__)


class SlotLock(ABC):

    @abstractmethod
    def hold(self, day: date, time: str) -> ContextManager[None]:
        """Hold the lock for one (date, time) slot for the duration of the block"""


class NullSlotLock(SlotLock):
    """No locking (check-then-act)"""

    @contextmanager
    def hold(self, day: date, time: str) -> Iterator[None]:
        yield


class LocalSlotLock(SlotLock):
    """
    One threading.Lock per slot key, shared by every request in this process.

    Entries are reference counted and dropped once no thread holds or waits
    on the key, so the map only ever holds slots being admitted right now.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, List] = {}  # key -> [lock, holders + waiters]

    def _checkout(self, key: str) -> threading.Lock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._locks[key] = entry
            entry[1] += 1
            return entry[0]

    def _checkin(self, key: str) -> None:
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, day: date, time: str) -> Iterator[None]:
        key = f"{day.isoformat()}:{time}"
        lock = self._checkout(key)
        try:
            with lock:
                yield
        finally:
            self._checkin(key)


class RedisSlotLock(SlotLock):
    """Distributed lock keyed lock:slot:{date}:{time}"""

    def __init__(self, client: redis.Redis, timeout_seconds: int = 10):
        self.client = client
        self.timeout_seconds = timeout_seconds

    @contextmanager
    def hold(self, day: date, time: str) -> Iterator[None]:
        key = RedisKeys.SLOT_LOCK.format(date=day.isoformat(), time=time)
        lock = self.client.lock(
            key,
            timeout=self.timeout_seconds,
            blocking_timeout=self.timeout_seconds,
        )
        if not lock.acquire():
            logger.warning(f"Timed out waiting for slot lock {key}")
            raise ConflictError("Slot is busy, please try again")
        try:
            yield
        finally:
            try:
                lock.release()
            except redis.exceptions.LockError:
                # Expired while held; nothing left to release
                logger.warning(f"Slot lock {key} expired before release")


_local_lock = LocalSlotLock()


def build_slot_lock(backend: str, timeout_seconds: int = 10) -> SlotLock:
    """Pick the lock backend named by SLOT_LOCK_BACKEND"""
    backend = (backend or "none").lower()
    if backend == "none":
        return NullSlotLock()
    if backend == "local":
        return _local_lock
    if backend == "redis":
        return RedisSlotLock(get_sync_redis(), timeout_seconds)
    raise ValueError(f"Unknown slot lock backend: {backend}")
