import pytest

from solstream.filters import (
    AccountFilter,
    CommitmentLevel,
    SubscriptionManager,
    TransactionFilter,
)
from solstream.session import SubscriptionError, SubscriptionSession


class _EventTypes:
    def __init__(self, transactions=True, accounts=True, blocks=True):
        self._t, self._a, self._b = transactions, accounts, blocks

    def include_transaction_event(self):
        return self._t

    def include_account_event(self):
        return self._a

    def include_block_event(self):
        return self._b


@pytest.fixture
def session():
    return SubscriptionSession(SubscriptionManager("http://localhost:10000"))


def test_start_builds_default_request(session):
    request = session.start([TransactionFilter(account_include=["a"])], [])
    assert session.active
    assert request.commitment == CommitmentLevel.PROCESSED
    assert request.blocks_meta == {"": {}}
    assert request.transactions["client"].account_include == ["a"]
    assert request.accounts == {}
    assert session.current_request == request


def test_start_passes_commitment(session):
    request = session.start([], [], None, CommitmentLevel.FINALIZED)
    assert request.commitment == CommitmentLevel.FINALIZED


def test_start_twice_raises(session):
    session.start()
    with pytest.raises(SubscriptionError):
        session.start()
    assert session.active


def test_update_without_start_raises(session):
    with pytest.raises(SubscriptionError):
        session.update_subscription([TransactionFilter()], [])
    assert session.current_request is None


def test_update_replaces_filters_and_queues(session):
    session.start([TransactionFilter(account_include=["a"])], [], None, CommitmentLevel.CONFIRMED)
    updated = session.update_subscription(
        [TransactionFilter(account_include=["b"])],
        [AccountFilter(account=["acc"], owner=["own"])],
    )
    assert updated.transactions["client"].account_include == ["b"]
    assert updated.accounts[""].account == ["acc"]
    assert updated.commitment == CommitmentLevel.CONFIRMED
    assert session.current_request == updated
    assert session.updates.get_nowait() == updated


def test_update_respects_event_type_filter(session):
    session.start(
        [TransactionFilter(account_include=["a"])],
        [AccountFilter(account=["x"])],
        _EventTypes(transactions=False, blocks=False),
    )
    updated = session.update_subscription(
        [TransactionFilter(account_include=["b"])], [AccountFilter(account=["y"])]
    )
    assert updated.transactions == {}
    assert updated.accounts[""].account == ["y"]
    assert updated.blocks_meta == {}


def test_stop_clears_state_and_allows_restart(session):
    session.start()
    session.stop()
    assert not session.active
    assert session.current_request is None
    assert session.updates is None
    with pytest.raises(SubscriptionError):
        session.update_subscription([], [])
    session.start()
    assert session.active


def test_full_control_channel_raises(session):
    session.start()
    for _ in range(100):
        session.update_subscription([], [])
    before = session.current_request
    with pytest.raises(SubscriptionError):
        session.update_subscription([TransactionFilter(account_include=["z"])], [])
    assert session.current_request is before
    assert session.updates.qsize() == 100