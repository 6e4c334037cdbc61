"""
Key material for a single Solana wallet.

A wallet is an ed25519 keypair. Only the 32-byte seed is held; the public key
is always derived from it. The external text format is base58 of the full
64-byte keypair (seed followed by public key), the same layout solana-keygen
writes to id.json and Phantom accepts as a private key.
"""

import logging

import base58
from solders.keypair import Keypair

from ...core.exceptions import DecodeError, InvalidKeyMaterial

logger = logging.getLogger(__name__)

SEED_LENGTH = 32
PUBKEY_LENGTH = 32
KEYPAIR_LENGTH = SEED_LENGTH + PUBKEY_LENGTH


class KeyMaterial:
    """
    One ed25519 signing identity.

    Example:
        >>> key = KeyMaterial.generate()
        >>> KeyMaterial.decode(key.encode()) == key
        True
    """

    __slots__ = ("_keypair",)

    def __init__(self, keypair: Keypair):
        self._keypair = keypair

    @classmethod
    def generate(cls) -> "KeyMaterial":
        """Create a new identity from the OS random source"""
        return cls(Keypair())

    @classmethod
    def from_seed(cls, seed: bytes) -> "KeyMaterial":
        """Create the identity for a 32-byte seed"""
        seed = bytes(seed)
        if len(seed) != SEED_LENGTH:
            raise InvalidKeyMaterial(f"Seed must be {SEED_LENGTH} bytes, got {len(seed)}")
        return cls(Keypair.from_seed(seed))

    @classmethod
    def decode(cls, text: str) -> "KeyMaterial":
        """
        Decode a base58 keypair

        Args:
            text: Base58 text of the 64-byte keypair

        Returns:
            KeyMaterial instance

        Raises:
            DecodeError: If the text is empty or not valid base58
            InvalidKeyMaterial: If the bytes are not a 64-byte keypair whose
                public half matches its seed
        """
        text = text.strip()
        if not text:
            raise DecodeError("Private key is empty")
        try:
            raw = base58.b58decode(text)
        except ValueError as e:
            raise DecodeError(f"Private key is not valid base58: {e}") from e

        if len(raw) != KEYPAIR_LENGTH:
            raise InvalidKeyMaterial(
                f"Private key must decode to {KEYPAIR_LENGTH} bytes, got {len(raw)}"
            )

        key = cls.from_seed(raw[:SEED_LENGTH])
        if key.public_identifier() != raw[SEED_LENGTH:]:
            raise InvalidKeyMaterial("Public key does not match the private key seed")
        return key

    def encode(self) -> str:
        """Base58 text of the full 64-byte keypair"""
        return base58.b58encode(bytes(self._keypair)).decode("ascii")

    def encode_seed(self) -> str:
        """Base58 text of the 32-byte seed only"""
        return base58.b58encode(self.seed).decode("ascii")

    @property
    def seed(self) -> bytes:
        return bytes(self._keypair.secret())

    def public_identifier(self) -> bytes:
        """32-byte public key"""
        return bytes(self._keypair.pubkey())

    @property
    def address(self) -> str:
        """Base58 public key"""
        return str(self._keypair.pubkey())

    def __eq__(self, other):
        if not isinstance(other, KeyMaterial):
            return NotImplemented
        return self.seed == other.seed

    def __hash__(self):
        return hash(self.public_identifier())

    def __repr__(self):
        return f"KeyMaterial(address={self.address})"
