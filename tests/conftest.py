#!/usr/bin/env python3
"""
Root-level pytest configuration for solcli.
"""

import io
import os
import sys

import pytest
from rich.console import Console
from solders.signature import Signature

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from solcli.core.config import Config, ConfirmationPolicy
from solcli.core.exceptions import ConfirmationTimeout
from solcli.utils.wallet.keypair import KeyMaterial
from solcli.utils.wallet.sol_rpc import LedgerClient


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "cli: end-to-end tests through the click entry point"
    )


class FakeLedger(LedgerClient):
    """In-memory ledger recording every call"""

    def __init__(self, balance=0, confirm=True, airdrop_error=None, confirm_error=None):
        self.balance = balance
        self.confirm = confirm
        self.airdrop_error = airdrop_error
        self.confirm_error = confirm_error
        self.signature = Signature.new_unique()
        self.calls = []

    def get_balance(self, identifier):
        self.calls.append(("get_balance", identifier))
        return self.balance

    def request_airdrop(self, identifier, amount_base_units):
        self.calls.append(("request_airdrop", identifier, amount_base_units))
        if self.airdrop_error:
            raise self.airdrop_error
        return self.signature

    def confirm_transaction(self, signature):
        self.calls.append(("confirm_transaction", signature))
        if self.confirm_error:
            raise self.confirm_error
        return self.confirm


@pytest.fixture
def key():
    return KeyMaterial.from_seed(bytes(range(32)))


@pytest.fixture
def environ(key):
    return {"PRIVATE_KEY": key.encode()}


@pytest.fixture
def config():
    return Config(
        endpoint="http://127.0.0.1:8899",
        confirmation=ConfirmationPolicy(poll_interval=0.1, max_interval=0.1, max_attempts=3, timeout=1.0),
    )


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def timeout_ledger():
    signature = Signature.new_unique()
    fake = FakeLedger(confirm_error=ConfirmationTimeout(signature, 3, 1.0))
    fake.signature = signature
    return fake


@pytest.fixture
def output():
    """Console writing into a buffer, buffer available as .file"""
    return Console(file=io.StringIO(), soft_wrap=True, highlight=False, color_system=None)
