"""
solcli - Solana devnet wallet CLI

Generate keypairs, inspect the configured wallet and request devnet airdrops.
"""

__version__ = "0.1.0"
__author__ = "solcli Team"
