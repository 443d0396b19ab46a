"""Stateful subscription session with runtime filter updates."""

from __future__ import annotations

import queue
import threading
from dataclasses import replace
from typing import Any, Iterable

from .filters import (
    AccountFilter,
    CommitmentLevel,
    SubscribeRequest,
    SubscriptionManager,
    TransactionFilter,
)

_CONTROL_CAPACITY = 100


class SubscriptionError(RuntimeError):
    """Raised when a subscription cannot be started or updated."""


class SubscriptionSession:
    """Tracks one active subscription and queues filter updates for it.

    Updates sent while the subscription is active are placed on ``updates``,
    from which the stream task forwards them to the server.
    """

    def __init__(self, manager: SubscriptionManager) -> None:
        self.manager = manager
        self.event_type_filter: Any = None
        self._lock = threading.Lock()
        self._active = False
        self._current_request: SubscribeRequest | None = None
        self._updates: queue.Queue[SubscribeRequest] | None = None

    @property
    def active(self) -> bool:
        """Whether a subscription is currently running."""
        with self._lock:
            return self._active

    @property
    def current_request(self) -> SubscribeRequest | None:
        """The request most recently sent, or None when stopped."""
        with self._lock:
            return self._current_request

    @property
    def updates(self) -> queue.Queue[SubscribeRequest] | None:
        """The control queue of pending request updates, or None when stopped."""
        with self._lock:
            return self._updates

    def start(
        self,
        transaction_filter: Iterable[TransactionFilter] = (),
        account_filter: Iterable[AccountFilter] = (),
        event_type_filter: Any = None,
        commitment: CommitmentLevel | int | None = None,
    ) -> SubscribeRequest:
        """Begin a subscription and return the initial request."""
        with self._lock:
            self.event_type_filter = event_type_filter
            if self._active:
                raise SubscriptionError(
                    "Already subscribed. Use update_subscription() to modify filters"
                )
            self._active = True
        try:
            transactions = self.manager.get_subscribe_request_filter(
                transaction_filter, event_type_filter
            )
            accounts = self.manager.subscribe_with_account_request(
                account_filter, event_type_filter
            )
            request = self.manager.build_request(
                transactions, accounts, commitment, event_type_filter
            )
        except BaseException:
            with self._lock:
                self._active = False
            raise
        with self._lock:
            self._current_request = request
            self._updates = queue.Queue(maxsize=_CONTROL_CAPACITY)
        return request

    def update_subscription(
        self,
        transaction_filter: Iterable[TransactionFilter] = (),
        account_filter: Iterable[AccountFilter] = (),
    ) -> SubscribeRequest:
        """Replace the filters of the running subscription without reconnecting."""
        with self._lock:
            if not self._active or self._updates is None:
                raise SubscriptionError("No active subscription to update")
            if self._current_request is None:
                raise SubscriptionError("No active subscription")
            control = self._updates
            current = self._current_request
            event_type_filter = self.event_type_filter

        transactions = self.manager.get_subscribe_request_filter(
            transaction_filter, event_type_filter
        )
        accounts = self.manager.subscribe_with_account_request(
            account_filter, event_type_filter
        )
        request = replace(
            current,
            transactions=transactions or {},
            accounts=accounts or {},
        )
        try:
            control.put_nowait(request)
        except queue.Full:
            raise SubscriptionError("Failed to send update: channel is full") from None
        with self._lock:
            self._current_request = request
        return request

    def stop(self) -> None:
        """End the subscription and forget its state."""
        with self._lock:
            self._updates = None
            self._current_request = None
            self._active = False