"""
Solana wallet utilities: key material, credential resolution and RPC access.
"""

from .keypair import KeyMaterial
from .provider import EnvKeyProvider
from .sol_rpc import LedgerClient, SolanaLedgerClient

__all__ = ["KeyMaterial", "EnvKeyProvider", "LedgerClient", "SolanaLedgerClient"]
