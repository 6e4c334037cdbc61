"""
Solana RPC access for balance checks and airdrops.

LedgerClient is the interface the command router consumes; SolanaLedgerClient
implements it on top of solana-py's synchronous Client. Failed calls are never
retried here. Confirmation polling follows an explicit ConfirmationPolicy
instead of the library's built-in wait.
"""

import time
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solana.rpc.commitment import Commitment
from solana.rpc.core import RPCException
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction_status import TransactionConfirmationStatus

from ...core.config import Config, COMMITMENT_LEVELS
from ...core.exceptions import ConfirmationTimeout, NetworkError, RpcError

logger = logging.getLogger(__name__)

# Weakest to strongest, same order as COMMITMENT_LEVELS
CONFIRMATION_ORDER = [
    TransactionConfirmationStatus.Processed,
    TransactionConfirmationStatus.Confirmed,
    TransactionConfirmationStatus.Finalized,
]


class LedgerClient(ABC):
    """Balance and airdrop operations against a Solana cluster"""

    @abstractmethod
    def get_balance(self, identifier: bytes) -> int:
        """Balance of the 32-byte public key in lamports"""

    @abstractmethod
    def request_airdrop(self, identifier: bytes, amount_base_units: int) -> Signature:
        """Request ``amount_base_units`` lamports for the public key"""

    @abstractmethod
    def confirm_transaction(self, signature: Signature) -> bool:
        """Block until the transaction is confirmed.

        Returns False if the transaction landed but failed.
        """


def _status_rank(status) -> int:
    """Position of a signature status in CONFIRMATION_ORDER, -1 if not landed"""
    if status is None:
        return -1
    if status.confirmation_status is None:
        # Nodes without confirmation_status report rooted slots as confirmations=None
        return len(CONFIRMATION_ORDER) - 1 if status.confirmations is None else 0
    for rank, level in enumerate(CONFIRMATION_ORDER):
        if status.confirmation_status == level:
            return rank
    return -1


class SolanaLedgerClient(LedgerClient):
    """
    LedgerClient backed by a Solana JSON-RPC endpoint.

    Example:
        >>> ledger = SolanaLedgerClient(Config())
        >>> lamports = ledger.get_balance(key.public_identifier())
    """

    def __init__(
        self,
        config: Config,
        client: Optional[Client] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            config: Endpoint, commitment and confirmation policy
            client: Pre-built solana-py client, mainly for tests
            sleep: Sleep function used between confirmation checks
            clock: Monotonic clock used for the confirmation deadline
        """
        self.config = config
        self.commitment = Commitment(config.commitment)
        self.policy = config.confirmation
        self.client = client or Client(config.endpoint, commitment=self.commitment, timeout=config.rpc_timeout)
        self._sleep = sleep
        self._clock = clock

    def _call(self, description: str, func, *args, **kwargs):
        """Run one RPC call, mapping library exceptions to ledger errors"""
        try:
            return func(*args, **kwargs)
        except RPCException as e:
            logger.error(f"RPC error during {description}: {e}")
            raise RpcError(f"{description} failed: {e}") from e
        except (SolanaRpcException, httpx.HTTPError) as e:
            logger.error(f"Network error during {description}: {e}")
            raise NetworkError(f"{description} failed: could not reach {self.config.endpoint}: {e}") from e

    def get_balance(self, identifier: bytes) -> int:
        pubkey = Pubkey.from_bytes(identifier)
        response = self._call("get_balance", self.client.get_balance, pubkey, commitment=self.commitment)
        logger.info(f"Balance of {pubkey}: {response.value} lamports")
        return response.value

    def request_airdrop(self, identifier: bytes, amount_base_units: int) -> Signature:
        if amount_base_units <= 0:
            raise ValueError(f"Airdrop amount must be positive, got {amount_base_units} lamports")

        pubkey = Pubkey.from_bytes(identifier)
        logger.info(f"Requesting airdrop of {amount_base_units} lamports for {pubkey}")
        response = self._call(
            "request_airdrop", self.client.request_airdrop, pubkey, amount_base_units, commitment=self.commitment
        )
        signature = response.value
        logger.info(f"Airdrop requested: {signature}")
        return signature

    def get_signature_statuses(self, signatures: List[Signature]):
        response = self._call(
            "get_signature_statuses", self.client.get_signature_statuses, signatures
        )
        return response.value

    def confirm_transaction(self, signature: Signature) -> bool:
        """
        Poll the signature status until it reaches the configured commitment

        Returns:
            bool: True once confirmed, False if the transaction failed

        Raises:
            ConfirmationTimeout: If the policy's attempts or deadline run out
            NetworkError, RpcError: If a status check fails
        """
        target = COMMITMENT_LEVELS.index(self.config.commitment)
        start = self._clock()
        deadline = start + self.policy.timeout
        attempt = 0

        while attempt < self.policy.max_attempts:
            if attempt:
                delay = self.policy.delay(attempt)
                now = self._clock()
                if now >= deadline or now + delay > deadline:
                    break
                if delay:
                    self._sleep(delay)

            attempt += 1
            status = self.get_signature_statuses([signature])[0]
            if status is not None and status.err is not None:
                logger.error(f"Transaction {signature} failed: {status.err}")
                return False
            if _status_rank(status) >= target:
                logger.info(f"Transaction {signature} reached {self.config.commitment} after {attempt} checks")
                return True
            logger.debug(f"Transaction {signature} not yet {self.config.commitment} (check {attempt})")

        elapsed = self._clock() - start
        logger.warning(f"Gave up waiting for {signature} after {attempt} checks ({elapsed:.1f}s)")
        raise ConfirmationTimeout(signature, attempt, elapsed)
