"""Subscription filters and request building for a Geyser-style stream."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterable, Protocol


class CommitmentLevel(IntEnum):
    """How final a slot must be before its updates are delivered."""

    PROCESSED = 0
    CONFIRMED = 1
    FINALIZED = 2


class _EventTypeFilter(Protocol):
    def include_transaction_event(self) -> bool: ...

    def include_account_event(self) -> bool: ...

    def include_block_event(self) -> bool: ...


@dataclass
class TransactionFilter:
    """Accounts a transaction must or must not touch."""

    account_include: list[str] = field(default_factory=list)
    account_exclude: list[str] = field(default_factory=list)
    account_required: list[str] = field(default_factory=list)


@dataclass
class AccountFilter:
    """Accounts and owners whose updates are wanted."""

    account: list[str] = field(default_factory=list)
    owner: list[str] = field(default_factory=list)
    filters: list[Any] = field(default_factory=list)


@dataclass
class TransactionsRequestFilter:
    """The transaction filter as sent in a subscribe request."""

    vote: bool | None = None
    failed: bool | None = None
    signature: str | None = None
    account_include: list[str] = field(default_factory=list)
    account_exclude: list[str] = field(default_factory=list)
    account_required: list[str] = field(default_factory=list)


@dataclass
class AccountsRequestFilter:
    """The account filter as sent in a subscribe request."""

    account: list[str] = field(default_factory=list)
    owner: list[str] = field(default_factory=list)
    filters: list[Any] = field(default_factory=list)
    nonempty_txn_signature: bool | None = None


@dataclass
class SubscribeRequest:
    """A subscribe request; each empty dict in ``blocks_meta`` asks for block metadata."""

    accounts: dict[str, AccountsRequestFilter] = field(default_factory=dict)
    transactions: dict[str, TransactionsRequestFilter] = field(default_factory=dict)
    blocks_meta: dict[str, dict] = field(default_factory=dict)
    commitment: CommitmentLevel | None = None
    ping: int | None = None


@dataclass
class SubscriptionManager:
    """Builds subscription filters and requests for one endpoint."""

    endpoint: str
    x_token: str | None = None
    config: Any = None

    def get_subscribe_request_filter(
        self,
        transaction_filter: Iterable[TransactionFilter],
        event_type_filter: _EventTypeFilter | None = None,
    ) -> dict[str, TransactionsRequestFilter] | None:
        """Transaction filters keyed by name, or None when transactions are filtered out."""
        if event_type_filter is not None and not event_type_filter.include_transaction_event():
            return None
        transactions: dict[str, TransactionsRequestFilter] = {}
        for tf in transaction_filter:
            transactions["client"] = TransactionsRequestFilter(
                vote=False,
                failed=False,
                signature=None,
                account_include=list(tf.account_include),
                account_exclude=list(tf.account_exclude),
                account_required=list(tf.account_required),
            )
        return transactions

    def subscribe_with_account_request(
        self,
        account_filter: Iterable[AccountFilter],
        event_type_filter: _EventTypeFilter | None = None,
    ) -> dict[str, AccountsRequestFilter] | None:
        """Account filters keyed by name, or None when there are none or they are filtered out."""
        if event_type_filter is not None and not event_type_filter.include_account_event():
            return None
        filters = list(account_filter)
        if not filters:
            return None
        accounts: dict[str, AccountsRequestFilter] = {}
        for af in filters:
            accounts[""] = AccountsRequestFilter(
                account=list(af.account),
                owner=list(af.owner),
                filters=list(af.filters),
                nonempty_txn_signature=None,
            )
        return accounts

    def build_request(
        self,
        transactions: dict[str, TransactionsRequestFilter] | None = None,
        accounts: dict[str, AccountsRequestFilter] | None = None,
        commitment: CommitmentLevel | int | None = None,
        event_type_filter: _EventTypeFilter | None = None,
    ) -> SubscribeRequest:
        """Assemble a subscribe request; commitment defaults to PROCESSED."""
        if event_type_filter is None or event_type_filter.include_block_event():
            blocks_meta: dict[str, dict] = {"": {}}
        else:
            blocks_meta = {}
        level = (
            CommitmentLevel(commitment)
            if commitment is not None
            else CommitmentLevel.PROCESSED
        )
        return SubscribeRequest(
            accounts=dict(accounts or {}),
            transactions=dict(transactions or {}),
            blocks_meta=blocks_meta,
            commitment=level,
        )