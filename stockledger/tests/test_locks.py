"""
Tests for the process-local key locks.
"""

import gc
import threading

from stockledger import locks
from stockledger.locks import key_lock


class TestKeyLock:

    def test_registry_released_after_use(self):
        """Entries live only while some block holds the key."""
        key = (901, 1, 2)

        with key_lock(key):
            assert key in locks._key_locks

        gc.collect()
        assert key not in locks._key_locks

    def test_registry_bounded_by_keys_in_use(self):
        for pk in range(500):
            with key_lock((902, pk, 1)):
                pass

        gc.collect()
        assert not any(key[0] == 902 for key in list(locks._key_locks.keys()))

    def test_duplicate_keys_locked_once(self):
        key = (904, 1, 1)

        with key_lock(key, key):
            assert key in locks._key_locks

    def test_blocks_other_thread(self):
        """A second thread waits until the first block exits."""
        key = (905, 1, 1)
        events = []
        started = threading.Event()

        def worker():
            started.set()
            with key_lock(key):
                events.append('worker')

        with key_lock(key):
            thread = threading.Thread(target=worker)
            thread.start()
            started.wait(timeout=5)
            events.append('main')

        thread.join(timeout=5)
        assert events == ['main', 'worker']
