"""
Resolve the active wallet keypair from the environment.
"""

import os
import logging
from typing import Mapping, Optional

from .keypair import KeyMaterial
from ...core.config import PRIVATE_KEY_VAR
from ...core.exceptions import MissingCredential

logger = logging.getLogger(__name__)


class EnvKeyProvider:
    """Reads a base58 keypair from an environment variable"""

    def __init__(self, var_name: str = PRIVATE_KEY_VAR, environ: Optional[Mapping[str, str]] = None):
        """
        Args:
            var_name: Name of the variable holding the keypair
            environ: Mapping to read instead of os.environ
        """
        self.var_name = var_name
        self.environ = environ

    def resolve(self) -> KeyMaterial:
        """
        Decode the keypair held in the variable

        Raises:
            MissingCredential: If the variable is unset or blank
            DecodeError: If the value is not valid base58
            InvalidKeyMaterial: If the value is not a valid keypair
        """
        environ = os.environ if self.environ is None else self.environ
        value = environ.get(self.var_name)
        if value is None or not value.strip():
            raise MissingCredential(self.var_name)

        key = KeyMaterial.decode(value)
        logger.info(f"Loaded wallet {key.address} from {self.var_name}")
        return key

    def __repr__(self):
        return f"EnvKeyProvider(var_name={self.var_name!r})"
