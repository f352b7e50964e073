"""
Per-(product, warehouse) serialization.

Every read-modify-write on a StockRecord runs as:

    with key_lock(stock_key(product, warehouse)):
        with transaction.atomic():
            record = lock_for_update(StockRecord.objects.for_key(...)).first()
            ...

The process-local mutex covers backends that ignore SELECT ... FOR UPDATE
(SQLite) and threads sharing one process; the row lock covers other
processes on backends that honor it. Locks for several keys are always
taken in sorted order, and rows for several keys are locked in one query
ordered by pk.

The registry only keeps a key's mutex while some caller holds or waits on
it, so its size is bounded by the keys in use, not by every key ever seen.
"""

import threading
import weakref
from contextlib import ExitStack, contextmanager

from django.contrib.contenttypes.models import ContentType

StockKey = tuple[int, int, int]


class _KeyMutex:
    """Weak-referenceable holder of one key's lock."""

    __slots__ = ('lock', '__weakref__')

    def __init__(self):
        self.lock = threading.Lock()


_registry_lock = threading.Lock()
_key_locks: 'weakref.WeakValueDictionary[StockKey, _KeyMutex]' = weakref.WeakValueDictionary()


def stock_key(product, warehouse) -> StockKey:
    """Lock key for a (product, warehouse) pair."""
    ct = ContentType.objects.get_for_model(product)
    warehouse_id = getattr(warehouse, 'pk', warehouse)
    return (ct.pk, product.pk, warehouse_id)


def _mutex_for(key: StockKey) -> _KeyMutex:
    with _registry_lock:
        mutex = _key_locks.get(key)
        if mutex is None:
            mutex = _key_locks[key] = _KeyMutex()
        return mutex


@contextmanager
def key_lock(*keys: StockKey):
    """Hold the mutex of every given key (deduplicated, sorted) for the block."""
    # Strong references keep each entry alive until the block exits
    held = [_mutex_for(key) for key in sorted(set(keys))]
    with ExitStack() as stack:
        for mutex in held:
            mutex.lock.acquire()
            stack.callback(mutex.lock.release)
        yield


def lock_for_update(queryset):
    """
    Apply row-level locking for critical operations.

    NOTE: SQLite ignores SELECT ... FOR UPDATE, which is why key_lock() exists.
    """
    return queryset.select_for_update()
