"""Core value types for streamed accounts, blocks and transactions."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: value for value, char in enumerate(_ALPHABET)}


def b58encode(data: bytes) -> str:
    """Encode bytes as base58 text."""
    data = bytes(data)
    stripped = data.lstrip(b"\0")
    leading = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_ALPHABET[remainder])
    return "1" * leading + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode base58 text into bytes; raises ValueError on invalid characters."""
    stripped = text.lstrip("1")
    leading = len(text) - len(stripped)
    number = 0
    for char in stripped:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character: {char!r}") from None
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\0" * leading + body


def now_us() -> int:
    """Current wall-clock time in microseconds since the Unix epoch."""
    return time.time_ns() // 1000


def _checked_bytes(owner: object, data: bytes, length: int) -> bytes:
    value = bytes(data)
    if len(value) != length:
        raise ValueError(
            f"{type(owner).__name__} needs {length} bytes, got {len(value)}"
        )
    return value


@dataclass(frozen=True, repr=False)
class Pubkey:
    """A 32-byte public key."""

    data: bytes = bytes(32)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _checked_bytes(self, self.data, 32))

    @classmethod
    def from_bytes(cls, data):
        """Build from exactly 32 raw bytes."""
        return cls(bytes(data))

    @classmethod
    def from_string(cls, text):
        """Build from base58 text."""
        return cls(b58decode(text))

    def __str__(self) -> str:
        return b58encode(self.data)

    def __repr__(self) -> str:
        return f"Pubkey({self})"


@dataclass(frozen=True, repr=False)
class Signature:
    """A 64-byte transaction signature."""

    data: bytes = bytes(64)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _checked_bytes(self, self.data, 64))

    @classmethod
    def from_bytes(cls, data):
        """Build from exactly 64 raw bytes."""
        return cls(bytes(data))

    @classmethod
    def from_string(cls, text):
        """Build from base58 text."""
        return cls(b58decode(text))

    def __str__(self) -> str:
        return b58encode(self.data)

    def __repr__(self) -> str:
        return f"Signature({self})"


@dataclass(frozen=True)
class Timestamp:
    """A point in time as seconds and nanoseconds."""

    seconds: int = 0
    nanos: int = 0


@dataclass
class AccountInfo:
    """Raw account data as delivered by a subscription update."""

    pubkey: bytes = b""
    lamports: int = 0
    owner: bytes = b""
    executable: bool = False
    rent_epoch: int = 0
    data: bytes = b""
    write_version: int = 0
    txn_signature: bytes | None = None


@dataclass
class AccountUpdate:
    """An account update message."""

    account: AccountInfo | None = None
    slot: int = 0
    is_startup: bool = False


@dataclass
class BlockMetaUpdate:
    """A block metadata update message."""

    slot: int = 0
    blockhash: str = ""
    parent_slot: int = 0
    parent_blockhash: str = ""
    block_time: Timestamp | None = None
    block_height: int | None = None
    executed_transaction_count: int = 0


@dataclass
class TransactionInfo:
    """Raw transaction data as delivered by a subscription update."""

    signature: bytes = b""
    is_vote: bool = False
    index: int = 0
    transaction: Any = None
    meta: Any = None


@dataclass
class TransactionUpdate:
    """A transaction update message."""

    transaction: TransactionInfo | None = None
    slot: int = 0


@dataclass
class AccountPretty:
    """A decoded account event."""

    slot: int = 0
    signature: Signature = field(default_factory=Signature)
    pubkey: Pubkey = field(default_factory=Pubkey)
    executable: bool = False
    lamports: int = 0
    owner: Pubkey = field(default_factory=Pubkey)
    rent_epoch: int = 0
    data: bytes = b""
    recv_us: int = field(default=0, repr=False)


@dataclass
class BlockMetaPretty:
    """A decoded block metadata event."""

    slot: int = 0
    block_hash: str = ""
    block_time: Timestamp | None = None
    recv_us: int = 0


@dataclass
class TransactionPretty:
    """A decoded transaction event."""

    slot: int = 0
    transaction_index: int | None = None
    block_hash: str = field(default="", repr=False)
    block_time: Timestamp | None = field(default=None, repr=False)
    signature: Signature = field(default_factory=Signature)
    is_vote: bool = False
    recv_us: int = 0
    grpc_tx: TransactionInfo = field(default_factory=TransactionInfo, repr=False)


@dataclass
class TransactionWithSlot:
    """A transaction together with the slot it was seen in."""

    transaction: Any = None
    slot: int = 0
    recv_us: int = 0