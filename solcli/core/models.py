"""
Data models for wallet balances and airdrops
"""

from dataclasses import dataclass
from decimal import Decimal

from solders.signature import Signature

from ..utils.units import lamports_to_sol, format_sol, sol_to_lamports, SolAmount, to_decimal


@dataclass(frozen=True)
class AccountBalance:
    """Native SOL balance of an address, fetched fresh for each query"""

    address: str
    lamports: int

    @property
    def sol(self) -> Decimal:
        return lamports_to_sol(self.lamports)

    def display(self) -> str:
        return format_sol(self.lamports)


@dataclass(frozen=True)
class AirdropRequest:
    """A one-shot airdrop of ``lamports`` to ``address``"""

    address: str
    amount_sol: Decimal
    lamports: int

    @classmethod
    def for_amount(cls, address: str, amount: SolAmount) -> "AirdropRequest":
        """
        Build a request from a SOL amount, flooring to whole lamports

        Raises:
            ValueError: If the amount is not positive or rounds down to zero lamports
        """
        amount_sol = to_decimal(amount)
        if amount_sol <= 0:
            raise ValueError(f"Airdrop amount must be positive, got {amount_sol}")
        lamports = sol_to_lamports(amount_sol)
        if lamports == 0:
            raise ValueError(f"Airdrop amount {amount_sol} SOL is less than one lamport")
        return cls(address=address, amount_sol=amount_sol, lamports=lamports)


@dataclass(frozen=True)
class AirdropResult:
    """Outcome of a confirmed airdrop"""

    signature: Signature
    lamports: int
