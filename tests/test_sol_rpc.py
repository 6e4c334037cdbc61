"""
Tests for SolanaLedgerClient with a mocked solana-py client
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from solana.exceptions import SolanaRpcException
from solana.rpc.core import RPCException
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction_status import TransactionConfirmationStatus

from solcli.core.config import Config, ConfirmationPolicy
from solcli.core.exceptions import ConfirmationTimeout, NetworkError, RpcError
from solcli.utils.wallet.sol_rpc import SolanaLedgerClient


class TransportFailure(SolanaRpcException):
    """SolanaRpcException without the wrapped-call bookkeeping"""

    def __init__(self, message):
        Exception.__init__(self, message)


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def status(level=None, err=None, confirmations=1):
    return SimpleNamespace(confirmation_status=level, err=err, confirmations=confirmations)


def statuses_response(*values):
    return [SimpleNamespace(value=[value]) for value in values]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client():
    return MagicMock()


def make_ledger(client, clock, commitment="finalized", **policy):
    settings = dict(poll_interval=0.5, backoff=1.5, max_interval=4.0, max_attempts=30, timeout=60.0)
    settings.update(policy)
    config = Config(endpoint="http://127.0.0.1:8899", commitment=commitment,
                    confirmation=ConfirmationPolicy(**settings))
    return SolanaLedgerClient(config, client=client, sleep=clock.sleep, clock=clock)


def test_get_balance(client, clock, key):
    client.get_balance.return_value = SimpleNamespace(value=2_500_000_000)
    ledger = make_ledger(client, clock)

    assert ledger.get_balance(key.public_identifier()) == 2_500_000_000
    pubkey = client.get_balance.call_args[0][0]
    assert pubkey == Pubkey.from_bytes(key.public_identifier())


def test_request_airdrop(client, clock, key):
    signature = Signature.new_unique()
    client.request_airdrop.return_value = SimpleNamespace(value=signature)
    ledger = make_ledger(client, clock)

    assert ledger.request_airdrop(key.public_identifier(), 1_000_000_001) == signature
    args = client.request_airdrop.call_args[0]
    assert args[1] == 1_000_000_001


@pytest.mark.parametrize("amount", [0, -5])
def test_request_airdrop_rejects_non_positive(client, clock, key, amount):
    ledger = make_ledger(client, clock)
    with pytest.raises(ValueError):
        ledger.request_airdrop(key.public_identifier(), amount)
    client.request_airdrop.assert_not_called()


def test_rpc_error_mapping(client, clock, key):
    client.get_balance.side_effect = RPCException("airdrop limit reached")
    with pytest.raises(RpcError) as exc_info:
        make_ledger(client, clock).get_balance(key.public_identifier())
    assert not exc_info.value.retryable


@pytest.mark.parametrize("error", [
    TransportFailure("connection refused"),
    httpx.ConnectError("connection refused"),
])
def test_network_error_mapping(client, clock, key, error):
    client.request_airdrop.side_effect = error
    with pytest.raises(NetworkError) as exc_info:
        make_ledger(client, clock).request_airdrop(key.public_identifier(), 1)
    assert exc_info.value.retryable
    assert "127.0.0.1:8899" in str(exc_info.value)


def test_confirm_immediately(client, clock):
    client.get_signature_statuses.side_effect = statuses_response(
        status(TransactionConfirmationStatus.Finalized)
    )
    assert make_ledger(client, clock).confirm_transaction(Signature.new_unique()) is True
    assert clock.sleeps == []


def test_confirm_polls_with_backoff(client, clock):
    client.get_signature_statuses.side_effect = statuses_response(
        None,
        status(TransactionConfirmationStatus.Processed),
        status(TransactionConfirmationStatus.Confirmed),
        status(TransactionConfirmationStatus.Finalized),
    )
    assert make_ledger(client, clock).confirm_transaction(Signature.new_unique()) is True
    assert clock.sleeps == [0.5, 0.75, 1.125]
    assert client.get_signature_statuses.call_count == 4


def test_confirm_backoff_is_capped(client, clock):
    client.get_signature_statuses.return_value = SimpleNamespace(value=[None])
    ledger = make_ledger(client, clock, max_attempts=8, max_interval=2.0)
    with pytest.raises(ConfirmationTimeout):
        ledger.confirm_transaction(Signature.new_unique())
    assert max(clock.sleeps) == 2.0


def test_confirm_lower_commitment(client, clock):
    client.get_signature_statuses.side_effect = statuses_response(
        status(TransactionConfirmationStatus.Processed),
        status(TransactionConfirmationStatus.Confirmed),
    )
    ledger = make_ledger(client, clock, commitment="confirmed")
    assert ledger.confirm_transaction(Signature.new_unique()) is True
    assert client.get_signature_statuses.call_count == 2


def test_confirm_legacy_rooted_status(client, clock):
    client.get_signature_statuses.side_effect = statuses_response(status(None, confirmations=None))
    assert make_ledger(client, clock).confirm_transaction(Signature.new_unique()) is True


def test_confirm_failed_transaction(client, clock):
    client.get_signature_statuses.side_effect = statuses_response(
        status(TransactionConfirmationStatus.Confirmed, err="InstructionError")
    )
    assert make_ledger(client, clock).confirm_transaction(Signature.new_unique()) is False


def test_confirm_max_attempts(client, clock):
    client.get_signature_statuses.return_value = SimpleNamespace(value=[None])
    signature = Signature.new_unique()
    with pytest.raises(ConfirmationTimeout) as exc_info:
        make_ledger(client, clock, max_attempts=3).confirm_transaction(signature)
    assert exc_info.value.attempts == 3
    assert exc_info.value.signature == signature
    assert client.get_signature_statuses.call_count == 3


def test_confirm_deadline(client, clock):
    client.get_signature_statuses.return_value = SimpleNamespace(value=[None])
    ledger = make_ledger(client, clock, poll_interval=0.5, backoff=1.0, max_interval=0.5,
                         max_attempts=100, timeout=1.0)
    with pytest.raises(ConfirmationTimeout) as exc_info:
        ledger.confirm_transaction(Signature.new_unique())
    # checks at t=0, 0.5 and 1.0; the next one would pass the deadline
    assert client.get_signature_statuses.call_count == 3
    assert exc_info.value.elapsed == 1.0
    assert clock.now <= 1.0


def test_confirm_deadline_without_delay(client, clock):
    def slow_status(signatures):
        clock.now += 10.0
        return SimpleNamespace(value=[None])

    client.get_signature_statuses.side_effect = slow_status
    ledger = make_ledger(client, clock, poll_interval=0.0, max_interval=0.0,
                         max_attempts=30, timeout=60.0)
    with pytest.raises(ConfirmationTimeout) as exc_info:
        ledger.confirm_transaction(Signature.new_unique())
    assert exc_info.value.elapsed <= 60.0
    assert client.get_signature_statuses.call_count == 6
    assert clock.sleeps == []


def test_confirm_propagates_network_errors(client, clock):
    client.get_signature_statuses.side_effect = TransportFailure("timed out")
    with pytest.raises(NetworkError):
        make_ledger(client, clock).confirm_transaction(Signature.new_unique())
    assert client.get_signature_statuses.call_count == 1
