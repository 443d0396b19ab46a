"""Bounded object pools for building account, block and transaction events."""

from __future__ import annotations

import threading
from collections import deque
from contextlib import contextmanager
from functools import lru_cache
from typing import Callable, Generic, Iterator, TypeVar

from .types import (
    AccountPretty,
    AccountUpdate,
    BlockMetaPretty,
    BlockMetaUpdate,
    Pubkey,
    Signature,
    Timestamp,
    TransactionPretty,
    TransactionUpdate,
    now_us,
)

T = TypeVar("T")


class ObjectPool(Generic[T]):
    """A thread-safe pool that keeps at most ``max_size`` idle objects."""

    def __init__(
        self,
        factory: Callable[[], T],
        initial_size: int,
        max_size: int,
        scrub: Callable[[T], None] | None = None,
    ) -> None:
        self.factory = factory
        self.max_size = max_size
        self.scrub = scrub
        self._items: deque[T] = deque(factory() for _ in range(initial_size))
        self._lock = threading.Lock()

    def acquire(self) -> T:
        """Take an idle object, or make a new one when none is left."""
        with self._lock:
            if self._items:
                return self._items.popleft()
        return self.factory()

    def release(self, obj: T) -> None:
        """Give an object back; it is dropped when the pool is full."""
        with self._lock:
            if len(self._items) < self.max_size:
                if self.scrub is not None:
                    self.scrub(obj)
                self._items.append(obj)

    @contextmanager
    def borrow(self) -> Iterator[T]:
        """Lend an object for the length of a ``with`` block."""
        obj = self.acquire()
        try:
            yield obj
        finally:
            self.release(obj)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def _scrub_account(account: AccountPretty) -> None:
    account.data = b""
    account.signature = Signature()
    account.pubkey = Pubkey()
    account.owner = Pubkey()


def _scrub_block_meta(block_meta: BlockMetaPretty) -> None:
    block_meta.block_hash = ""
    block_meta.block_time = None


def _scrub_transaction(transaction: TransactionPretty) -> None:
    transaction.block_hash = ""
    transaction.block_time = None
    transaction.signature = Signature()


def reset_account_from_update(account: AccountPretty, update: AccountUpdate) -> None:
    """Fill an account event from an account update message."""
    info = update.account
    if info is None:
        raise ValueError("account update carries no account")
    account.slot = update.slot
    account.signature = (
        Signature.from_bytes(info.txn_signature)
        if info.txn_signature is not None
        else Signature()
    )
    account.pubkey = Pubkey.from_bytes(info.pubkey)
    account.executable = info.executable
    account.lamports = info.lamports
    account.owner = Pubkey.from_bytes(info.owner)
    account.rent_epoch = info.rent_epoch
    account.data = bytes(info.data)
    account.recv_us = now_us()


def reset_block_meta_from_update(
    block_meta: BlockMetaPretty,
    update: BlockMetaUpdate,
    block_time: Timestamp | None,
) -> None:
    """Fill a block metadata event from a block meta update message."""
    block_meta.slot = update.slot
    block_meta.block_hash = update.blockhash
    block_meta.block_time = block_time
    block_meta.recv_us = now_us()


def reset_transaction_from_update(
    transaction: TransactionPretty,
    update: TransactionUpdate,
    block_time: Timestamp | None,
) -> None:
    """Fill a transaction event from a transaction update message."""
    info = update.transaction
    if info is None:
        raise ValueError("transaction update carries no transaction")
    signature = Signature.from_bytes(info.signature)
    transaction.slot = update.slot
    transaction.transaction_index = info.index
    transaction.block_time = block_time
    transaction.block_hash = ""
    transaction.signature = signature
    transaction.is_vote = info.is_vote
    transaction.recv_us = now_us()
    transaction.grpc_tx = info


class EventPrettyPool:
    """Pools for the three event kinds, used to build events from updates."""

    def __init__(
        self,
        account_sizes: tuple[int, int] = (10000, 20000),
        block_sizes: tuple[int, int] = (500, 1000),
        transaction_sizes: tuple[int, int] = (10000, 20000),
    ) -> None:
        self.account_pool: ObjectPool[AccountPretty] = ObjectPool(
            AccountPretty, *account_sizes, scrub=_scrub_account
        )
        self.block_pool: ObjectPool[BlockMetaPretty] = ObjectPool(
            BlockMetaPretty, *block_sizes, scrub=_scrub_block_meta
        )
        self.transaction_pool: ObjectPool[TransactionPretty] = ObjectPool(
            TransactionPretty, *transaction_sizes, scrub=_scrub_transaction
        )

    @staticmethod
    def _build(pool: ObjectPool[T], fill: Callable[[T], None]) -> T:
        obj = pool.acquire()
        try:
            fill(obj)
        except BaseException:
            pool.release(obj)
            raise
        pool.release(pool.factory())
        return obj

    def create_account_event_optimized(self, update: AccountUpdate) -> AccountPretty:
        """Build an account event from an update."""
        return self._build(
            self.account_pool, lambda obj: reset_account_from_update(obj, update)
        )

    def create_block_event_optimized(
        self, update: BlockMetaUpdate, block_time: Timestamp | None
    ) -> BlockMetaPretty:
        """Build a block metadata event from an update."""
        return self._build(
            self.block_pool,
            lambda obj: reset_block_meta_from_update(obj, update, block_time),
        )

    def create_transaction_event_optimized(
        self, update: TransactionUpdate, block_time: Timestamp | None
    ) -> TransactionPretty:
        """Build a transaction event from an update."""
        return self._build(
            self.transaction_pool,
            lambda obj: reset_transaction_from_update(obj, update, block_time),
        )


class PoolManager:
    """Owns the event pool shared by a process."""

    def __init__(self, event_pool: EventPrettyPool | None = None) -> None:
        self.event_pool = event_pool if event_pool is not None else EventPrettyPool()


@lru_cache(maxsize=None)
def _global_manager() -> PoolManager:
    return PoolManager()


def create_account_pretty_pooled(update: AccountUpdate) -> AccountPretty:
    """Build an account event using the process-wide pool."""
    return _global_manager().event_pool.create_account_event_optimized(update)


def create_block_meta_pretty_pooled(
    update: BlockMetaUpdate, block_time: Timestamp | None
) -> BlockMetaPretty:
    """Build a block metadata event using the process-wide pool."""
    return _global_manager().event_pool.create_block_event_optimized(update, block_time)


def create_transaction_pretty_pooled(
    update: TransactionUpdate, block_time: Timestamp | None
) -> TransactionPretty:
    """Build a transaction event using the process-wide pool."""
    return _global_manager().event_pool.create_transaction_event_optimized(
        update, block_time
    )