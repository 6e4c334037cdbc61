"""
Command router for the four wallet operations.

Each command is independent: it resolves what it needs, calls the ledger at
most once per step and prints the result. Errors propagate to the caller.
"""

import logging
from typing import Optional

from rich.console import Console

from ..core.config import Config
from ..core.exceptions import RpcError
from ..core.models import AccountBalance, AirdropRequest, AirdropResult
from ..utils.units import SolAmount, format_sol, lamports_to_sol
from ..utils.wallet.keypair import KeyMaterial
from ..utils.wallet.provider import EnvKeyProvider
from ..utils.wallet.sol_rpc import LedgerClient, SolanaLedgerClient

logger = logging.getLogger(__name__)


class CommandRouter:
    """Runs wallet commands against a configured ledger"""

    def __init__(
        self,
        config: Config,
        provider: Optional[EnvKeyProvider] = None,
        ledger: Optional[LedgerClient] = None,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        """
        Args:
            config: Run configuration
            provider: Credential source, defaults to the config's variable
            ledger: Ledger client, built from the config on first use
            console: Console for results
            err_console: Console for warnings
        """
        self.config = config
        self.provider = provider or EnvKeyProvider(config.credential_var)
        self._ledger = ledger
        self.console = console or Console(soft_wrap=True, highlight=False)
        self.err_console = err_console or Console(stderr=True, soft_wrap=True, highlight=False)

    @property
    def ledger(self) -> LedgerClient:
        if self._ledger is None:
            self._ledger = SolanaLedgerClient(self.config)
        return self._ledger

    def generate(self) -> KeyMaterial:
        """Create a new keypair and print it"""
        key = KeyMaterial.generate()
        logger.info(f"Generated keypair {key.address}")

        self.console.print("New keypair generated:")
        self.console.print(f"Public key: {key.address}")
        self.console.print(f"Private key: {key.encode()}")
        self.err_console.print(
            "[bold yellow]WARNING:[/bold yellow] the private key above controls this wallet. "
            "Never share it and clear your terminal history if others can read it."
        )
        self.err_console.print(
            f"Remember to update your .env file with the new private key ({self.config.credential_var}=...)!"
        )
        return key

    def show_public_key(self) -> KeyMaterial:
        """Print the public key of the configured wallet"""
        key = self.provider.resolve()
        self.console.print(f"Public key: {key.address}")
        return key

    def show_balance(self) -> AccountBalance:
        """Fetch and print the SOL balance of the configured wallet"""
        key = self.provider.resolve()
        lamports = self.ledger.get_balance(key.public_identifier())
        balance = AccountBalance(address=key.address, lamports=lamports)
        self.console.print(f"Balance: {balance.display()} SOL")
        return balance

    def airdrop(self, amount: SolAmount) -> AirdropResult:
        """
        Request an airdrop to the configured wallet and wait for confirmation

        Args:
            amount: SOL to request, floored to whole lamports

        Returns:
            AirdropResult for the confirmed transaction

        Raises:
            ValueError: If the amount is not positive or below one lamport
            CredentialError: If the wallet cannot be resolved
            LedgerError: If the request or its confirmation fails
        """
        key = self.provider.resolve()
        request = AirdropRequest.for_amount(key.address, amount)
        if lamports_to_sol(request.lamports) != request.amount_sol:
            logger.info(f"Airdrop amount {request.amount_sol} SOL truncated to {request.lamports} lamports")

        signature = self.ledger.request_airdrop(key.public_identifier(), request.lamports)
        if not self.ledger.confirm_transaction(signature):
            raise RpcError(f"Airdrop transaction {signature} failed")

        self.console.print(f"Airdrop of {format_sol(request.amount_sol, from_lamports=False)} SOL successful")
        logger.info(f"Airdrop signature: {signature}")
        return AirdropResult(signature=signature, lamports=request.lamports)
