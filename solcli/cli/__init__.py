"""
solcli command-line interface

- generate: create a new keypair
- show-public-key / show-balance: inspect the wallet in PRIVATE_KEY
- airdrop: request devnet SOL for that wallet
"""

from .main import main

__all__ = ['main']
