"""Watching transactions that involve the system program."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union

from .filters import TransactionFilter
from .types import TransactionInfo, TransactionPretty

SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"


@dataclass
class TransferInfo:
    """A transaction seen touching the system program."""

    slot: int = 0
    signature: str = ""
    tx: TransactionInfo | None = None


@dataclass
class NewTransfer:
    """Event delivered when a new system transfer is seen."""

    info: TransferInfo


@dataclass
class SystemError:  # noqa: A001 - event variant name
    """Event delivered when the system stream reports a failure."""

    message: str


SystemEvent = Union[NewTransfer, SystemError]


def system_transaction_filter(
    account_include: list[str] | None = None,
    account_exclude: list[str] | None = None,
) -> list[TransactionFilter]:
    """Transaction filters that require the system program account."""
    return [
        TransactionFilter(
            account_include=list(account_include or []),
            account_exclude=list(account_exclude or []),
            account_required=[SYSTEM_PROGRAM_ID],
        )
    ]


def process_system_transaction(
    event: Any, callback: Callable[[SystemEvent], None]
) -> None:
    """Report a transaction event to ``callback``; other events are ignored."""
    if isinstance(event, TransactionPretty):
        callback(
            NewTransfer(
                TransferInfo(
                    slot=event.slot,
                    signature=str(event.signature),
                    tx=event.grpc_tx,
                )
            )
        )