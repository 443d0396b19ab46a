import pytest

from solstream.shred_pool import (
    ShredPoolManager,
    TransactionWithSlotPool,
    create_transaction_with_slot_pooled,
)
from solstream.types import TransactionWithSlot


def test_pool_prefilled():
    pool = TransactionWithSlotPool(4, 10)
    assert len(pool) == 4


def test_acquire_takes_and_release_returns():
    pool = TransactionWithSlotPool(2, 10)
    pooled = pool.acquire()
    assert len(pool) == 1
    pooled.release()
    assert len(pool) == 2


def test_acquire_from_empty_pool_creates_fresh():
    pool = TransactionWithSlotPool(0, 10)
    pooled = pool.acquire()
    assert pooled.value == TransactionWithSlot()
    assert len(pool) == 0


def test_release_respects_max_size():
    pool = TransactionWithSlotPool(0, 1)
    first = pool.acquire()
    second = pool.acquire()
    first.release()
    second.release()
    assert len(pool) == 1


def test_release_scrubs_data():
    pool = TransactionWithSlotPool(1, 5)
    pooled = pool.acquire()
    pooled.reset_from_data("tx", 10, 20)
    pooled.release()
    reused = pool.acquire()
    assert reused.value == TransactionWithSlot()


def test_release_is_idempotent():
    pool = TransactionWithSlotPool(1, 5)
    pooled = pool.acquire()
    pooled.release()
    pooled.release()
    assert len(pool) == 1


def test_value_after_release_raises():
    pool = TransactionWithSlotPool(1, 5)
    pooled = pool.acquire()
    pooled.reset_from_data("tx", 3, 4)
    assert pooled.value == TransactionWithSlot("tx", 3, 4)
    pooled.release()
    assert len(pool) == 1
    with pytest.raises(RuntimeError):
        _ = pooled.value


def test_context_manager_returns_object():
    pool = TransactionWithSlotPool(1, 5)
    with pool.acquire() as pooled:
        pooled.reset_from_data("tx", 1, 2)
        assert pooled.value.slot == 1
        assert len(pool) == 0
    assert len(pool) == 1


def test_into_transaction_with_slot_moves_data():
    pool = TransactionWithSlotPool(1, 5)
    pooled = pool.acquire()
    pooled.reset_from_data("payload", 77, 88)
    result = pooled.into_transaction_with_slot()
    assert result == TransactionWithSlot("payload", 77, 88)
    assert len(pool) == 1
    assert pool.acquire().value == TransactionWithSlot()


def test_manager_creates_and_keeps_pool_size():
    manager = ShredPoolManager(3, 5)
    result = manager.create_transaction_with_slot_optimized("payload", 5, 6)
    assert (result.transaction, result.slot, result.recv_us) == ("payload", 5, 6)
    assert len(manager.transaction_pool) == 3


def test_manager_results_are_distinct_objects():
    manager = ShredPoolManager(1, 2)
    first = manager.create_transaction_with_slot_optimized("a", 1, 1)
    second = manager.create_transaction_with_slot_optimized("b", 2, 2)
    assert first is not second
    assert first.transaction == "a"
    assert second.transaction == "b"


def test_global_factory():
    result = create_transaction_with_slot_pooled("payload", 123, 456)
    assert result == TransactionWithSlot("payload", 123, 456)