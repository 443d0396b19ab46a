# solstream

Plain-Python building blocks for consuming Solana update streams: transaction,
account and block-meta updates from a Geyser-style feed, and transactions
taken from a shred stream. The package has no third-party dependencies.

## Modules

- `solstream.types`: `Pubkey` (32 bytes) and `Signature` (64 bytes), each
  with `from_bytes`, `from_string` (base58) and a base58 `str()`; a wrong
  length raises `ValueError`. `Timestamp`, and the raw update records
  `AccountInfo`, `AccountUpdate`, `BlockMetaUpdate`, `TransactionInfo` and
  `TransactionUpdate`. The event records `AccountPretty`, `BlockMetaPretty`,
  `TransactionPretty` and `TransactionWithSlot`. Helpers `b58encode`,
  `b58decode` and `now_us` (wall-clock microseconds).
- `solstream.pool`: `ObjectPool`, a thread-safe pool that keeps at most
  `max_size` idle objects, with `acquire`, `release`, a `borrow()` context
  manager and an optional `scrub` callback run on objects given back.
  `EventPrettyPool` builds events from updates
  (`create_account_event_optimized`, `create_block_event_optimized`,
  `create_transaction_event_optimized`); its default pool sizes are
  10000/20000 for accounts and transactions and 500/1000 for block meta.
  The `reset_*_from_update` functions fill an existing event, and
  `create_account_pretty_pooled`, `create_block_meta_pretty_pooled` and
  `create_transaction_pretty_pooled` use a process-wide `PoolManager`.
  An update without its account or transaction raises `ValueError`.
- `solstream.shred_pool`: `TransactionWithSlotPool`, whose `acquire()`
  returns a `PooledTransactionWithSlot`. That object can be used in a `with`
  block, filled with `reset_from_data`, and handed out with
  `into_transaction_with_slot`. Also `ShredPoolManager` (default sizes
  5000/15000) and `create_transaction_with_slot_pooled`.
- `solstream.filters`: `CommitmentLevel`, `TransactionFilter`,
  `AccountFilter`, the request-side `TransactionsRequestFilter` and
  `AccountsRequestFilter`, `SubscribeRequest`, and `SubscriptionManager`.
  The manager turns filters into request maps and assembles a request with
  `build_request`. An optional event-type filter is any object with
  `include_transaction_event()`, `include_account_event()` and
  `include_block_event()` methods; it drops the parts it excludes. The
  commitment defaults to `PROCESSED`, and block metadata is requested unless
  the event-type filter excludes it.
- `solstream.session`: `SubscriptionSession` tracks one active subscription.
  `start` returns the initial request. `update_subscription` builds a new
  request and places it on the `updates` queue (capacity 100). `stop` clears
  the session. Misuse, such as starting twice, updating when stopped, or a
  full queue, raises `SubscriptionError`.
- `solstream.system`: `system_transaction_filter` builds a filter that
  requires the System Program account. `process_system_transaction` reports
  a `TransactionPretty` to a callback as `NewTransfer(TransferInfo(...))`
  and ignores other events. `SystemError` is the failure event.

## Example

```python
from solstream.filters import CommitmentLevel, SubscriptionManager
from solstream.session import SubscriptionSession
from solstream.system import system_transaction_filter

manager = SubscriptionManager("http://localhost:10000")
session = SubscriptionSession(manager)

request = session.start(
    system_transaction_filter(),
    [],
    None,
    CommitmentLevel.CONFIRMED,
)

# Change filters later; the new request is queued on session.updates.
session.update_subscription(system_transaction_filter(account_exclude=["Vote111111111111111111111111111111111111111"]), [])
session.stop()
```

## What this package does not do

It opens no network connections and decodes no wire messages. It has no
command-line program. You supply the transport that receives updates and
sends the requests this package builds. You also convert the incoming
messages into the `solstream.types` records.

## Running the tests

```
pip install -e .[test]
pytest
```