"""Object pool for transactions received from a shred stream."""

from __future__ import annotations

import threading
from collections import deque
from functools import lru_cache
from typing import Any

from .types import TransactionWithSlot


class TransactionWithSlotPool:
    """A bounded pool of reusable TransactionWithSlot objects."""

    def __init__(self, initial_size: int, max_size: int) -> None:
        self.max_size = max_size
        self._items: deque[TransactionWithSlot] = deque(
            TransactionWithSlot() for _ in range(initial_size)
        )
        self._lock = threading.Lock()

    def acquire(self) -> PooledTransactionWithSlot:
        """Take an object from the pool, or a fresh one if it is empty."""
        with self._lock:
            item = self._items.popleft() if self._items else TransactionWithSlot()
        return PooledTransactionWithSlot(item, self)

    def _give_back(self, item: TransactionWithSlot) -> None:
        with self._lock:
            if len(self._items) < self.max_size:
                item.slot = 0
                item.recv_us = 0
                item.transaction = None
                self._items.append(item)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class PooledTransactionWithSlot:
    """A pooled TransactionWithSlot that returns to its pool when released."""

    def __init__(self, item: TransactionWithSlot, pool: TransactionWithSlotPool) -> None:
        self._item: TransactionWithSlot | None = item
        self._pool = pool

    @property
    def value(self) -> TransactionWithSlot:
        """The borrowed object; raises RuntimeError once released."""
        if self._item is None:
            raise RuntimeError("pooled object has already been released")
        return self._item

    def reset_from_data(self, transaction: Any, slot: int, recv_us: int) -> None:
        """Fill the borrowed object with new data."""
        item = self.value
        item.transaction = transaction
        item.slot = slot
        item.recv_us = recv_us

    def into_transaction_with_slot(self) -> TransactionWithSlot:
        """Hand the data out and return an empty object to the pool."""
        result = self.value
        self._item = TransactionWithSlot()
        self.release()
        return result

    def release(self) -> None:
        """Return the object to the pool; later calls do nothing."""
        if self._item is not None:
            item, self._item = self._item, None
            self._pool._give_back(item)

    def __enter__(self) -> PooledTransactionWithSlot:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class ShredPoolManager:
    """Owns the transaction pool used for shred stream entries."""

    def __init__(self, initial_size: int = 5000, max_size: int = 15000) -> None:
        self.transaction_pool = TransactionWithSlotPool(initial_size, max_size)

    def create_transaction_with_slot_optimized(
        self, transaction: Any, slot: int, recv_us: int
    ) -> TransactionWithSlot:
        """Build a TransactionWithSlot using a pooled object."""
        pooled = self.transaction_pool.acquire()
        pooled.reset_from_data(transaction, slot, recv_us)
        return pooled.into_transaction_with_slot()


@lru_cache(maxsize=None)
def _global_manager() -> ShredPoolManager:
    return ShredPoolManager()


def create_transaction_with_slot_pooled(
    transaction: Any, slot: int, recv_us: int
) -> TransactionWithSlot:
    """Build a TransactionWithSlot from the process-wide pool."""
    return _global_manager().create_transaction_with_slot_optimized(
        transaction, slot, recv_us
    )