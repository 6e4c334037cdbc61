"""
Error types raised by solcli.

Credential errors come from resolving and decoding the wallet keypair,
ledger errors from talking to the Solana RPC endpoint.
"""


class SolcliError(Exception):
    """Base class for all solcli errors"""
    pass


class ConfigError(SolcliError):
    """Invalid configuration value"""
    pass


class CredentialError(SolcliError):
    """The wallet keypair could not be resolved"""
    pass


class MissingCredential(CredentialError):
    """The credential variable is not set or is blank"""

    def __init__(self, var_name: str):
        self.var_name = var_name
        super().__init__(f"{var_name} not found in environment or .env file")


class DecodeError(CredentialError):
    """The credential is not valid base58"""
    pass


class InvalidKeyMaterial(CredentialError):
    """Decoded bytes are not a valid ed25519 keypair"""
    pass


class LedgerError(SolcliError):
    """Base class for RPC failures.

    ``retryable`` tells embedders whether repeating the same call may succeed.
    solcli itself never retries.
    """

    retryable = False


class NetworkError(LedgerError):
    """Transport level failure reaching the RPC endpoint"""

    retryable = True


class RpcError(LedgerError):
    """The RPC endpoint answered with an error"""
    pass


class ConfirmationTimeout(LedgerError):
    """Transaction was not confirmed within the confirmation policy"""

    retryable = True

    def __init__(self, signature, attempts: int, elapsed: float):
        self.signature = signature
        self.attempts = attempts
        self.elapsed = elapsed
        super().__init__(
            f"Transaction {signature} not confirmed after {attempts} checks ({elapsed:.1f}s)"
        )
