"""
Solana RPC and wallet configuration.

Values come from environment variables, optionally loaded from a .env file.
The resulting Config is passed explicitly to the command router; nothing
here is process-wide state.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

# Network configuration
NETWORK_URLS = {
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "mainnet": "https://api.mainnet-beta.solana.com",
    "localnet": "http://127.0.0.1:8899",
}
DEFAULT_NETWORK = "devnet"

COMMITMENT_LEVELS = ("processed", "confirmed", "finalized")
DEFAULT_COMMITMENT = "finalized"

PRIVATE_KEY_VAR = "PRIVATE_KEY"


@dataclass
class ConfirmationPolicy:
    """How long and how often to poll for a transaction confirmation.

    The first status check is immediate. Each later check waits
    ``poll_interval * backoff ** n`` seconds, capped at ``max_interval``.
    Polling stops after ``max_attempts`` checks or once ``timeout`` seconds
    have passed.
    """

    poll_interval: float = 0.5
    backoff: float = 1.5
    max_interval: float = 4.0
    max_attempts: int = 30
    timeout: float = 60.0

    def __post_init__(self):
        if self.poll_interval < 0:
            raise ConfigError("poll_interval must not be negative")
        if self.backoff < 1:
            raise ConfigError("backoff must be at least 1")
        if self.max_interval < self.poll_interval:
            raise ConfigError("max_interval must not be smaller than poll_interval")
        if self.max_attempts < 1:
            raise ConfigError("max_attempts must be at least 1")
        if self.timeout <= 0:
            raise ConfigError("timeout must be positive")

    def delay(self, attempt: int) -> float:
        """Delay before the given check (0-based), zero for the first one"""
        if attempt <= 0:
            return 0.0
        return min(self.poll_interval * (self.backoff ** (attempt - 1)), self.max_interval)


@dataclass
class Config:
    """Configuration for one solcli run"""

    endpoint: str = NETWORK_URLS[DEFAULT_NETWORK]
    commitment: str = DEFAULT_COMMITMENT
    rpc_timeout: float = 10.0
    credential_var: str = PRIVATE_KEY_VAR
    confirmation: ConfirmationPolicy = field(default_factory=ConfirmationPolicy)

    def __post_init__(self):
        if not self.endpoint:
            raise ConfigError("RPC endpoint must not be empty")
        if self.commitment not in COMMITMENT_LEVELS:
            raise ConfigError(
                f"Invalid commitment: {self.commitment}. Must be one of: {', '.join(COMMITMENT_LEVELS)}"
            )
        if self.rpc_timeout <= 0:
            raise ConfigError("rpc_timeout must be positive")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        endpoint: Optional[str] = None,
        dotenv: bool = True,
    ) -> "Config":
        """
        Build a Config from environment variables

        Args:
            environ: Mapping to read instead of os.environ
            endpoint: Explicit endpoint, takes precedence over the environment
            dotenv: Load a .env file first (never overrides existing variables)

        Returns:
            Config instance
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        if not endpoint:
            endpoint = get_rpc_url(environ.get("SOLANA_NETWORK"), environ.get("SOLANA_RPC_URL"))

        poll_interval = _env_float(environ, "SOLCLI_CONFIRM_INTERVAL", 0.5)
        policy = ConfirmationPolicy(
            poll_interval=poll_interval,
            max_interval=max(ConfirmationPolicy.max_interval, poll_interval),
            max_attempts=_env_int(environ, "SOLCLI_CONFIRM_ATTEMPTS", 30),
            timeout=_env_float(environ, "SOLCLI_CONFIRM_TIMEOUT", 60.0),
        )
        config = cls(
            endpoint=endpoint,
            commitment=(environ.get("SOLANA_COMMITMENT") or "").strip().lower() or DEFAULT_COMMITMENT,
            rpc_timeout=_env_float(environ, "SOLCLI_RPC_TIMEOUT", 10.0),
            confirmation=policy,
        )
        logger.info(f"Using RPC endpoint {config.endpoint} ({config.commitment})")
        return config


def get_rpc_url(network: Optional[str] = None, url: Optional[str] = None) -> str:
    """Get the RPC URL for an explicit URL or a named network"""
    if url:
        return url
    network = (network or DEFAULT_NETWORK).strip().lower()
    if network not in NETWORK_URLS:
        raise ConfigError(f"Unknown network: {network}. Must be one of: {', '.join(NETWORK_URLS.keys())}")
    return NETWORK_URLS[network]


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    value = environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {value!r}") from None


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    value = environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
