from solstream.system import (
    SYSTEM_PROGRAM_ID,
    NewTransfer,
    SystemError,
    TransferInfo,
    process_system_transaction,
    system_transaction_filter,
)
from solstream.types import (
    AccountPretty,
    BlockMetaPretty,
    Signature,
    TransactionInfo,
    TransactionPretty,
)


def test_filter_requires_system_program():
    [tf] = system_transaction_filter(["inc"], ["exc"])
    assert tf.account_required == ["11111111111111111111111111111111"]
    assert tf.account_required == [SYSTEM_PROGRAM_ID]
    assert tf.account_include == ["inc"]
    assert tf.account_exclude == ["exc"]


def test_filter_defaults_to_empty_lists():
    [tf] = system_transaction_filter()
    assert tf.account_include == []
    assert tf.account_exclude == []


def test_transaction_event_produces_transfer():
    signature = Signature.from_bytes(bytes(range(64)))
    info = TransactionInfo(signature=signature.data, index=3)
    event = TransactionPretty(slot=42, signature=signature, grpc_tx=info)
    received = []
    process_system_transaction(event, received.append)
    assert received == [
        NewTransfer(TransferInfo(slot=42, signature=str(signature), tx=info))
    ]
    assert Signature.from_string(received[0].info.signature) == signature


def test_other_events_are_ignored():
    received = []
    process_system_transaction(AccountPretty(slot=1), received.append)
    process_system_transaction(BlockMetaPretty(slot=2), received.append)
    assert received == []


def test_error_event_carries_message():
    event = SystemError("stream closed")
    assert event.message == "stream closed"
    assert event == SystemError("stream closed")