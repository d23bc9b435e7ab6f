import threading
import weakref
from contextlib import contextmanager
from typing import Iterator


class MemberLocks:
    """One re-entrant lock per member id.

    Every read-modify-write on a member's balance, streak, tasks or reward
    requests holds that member's lock for the whole transaction. Locks are
    weakly held: an entry lives only while some thread holds or waits on it.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: weakref.WeakValueDictionary[str, threading.RLock] = weakref.WeakValueDictionary()

    def __len__(self) -> int:
        return len(self._locks)

    def _lock_for(self, member_id: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(member_id)
            if lock is None:
                lock = self._locks[member_id] = threading.RLock()
            return lock

    @contextmanager
    def hold(self, member_id: str) -> Iterator[None]:
        lock = self._lock_for(member_id)
        with lock:
            yield
