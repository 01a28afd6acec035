"""
Outbound port for secret retrieval.

Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Any


class SecretStore(ABC):
    """Outbound port for fetching credentials at runtime."""

    @abstractmethod
    def get_secret(self, secret_id: str, use_cache: bool = True) -> dict[str, Any]:
        """
        Fetch and parse a JSON secret.

        Args:
            secret_id: The ARN or name of the secret
            use_cache: Whether a cached value may be returned

        Returns:
            Parsed secret as a dictionary
        """
        ...

    def get_secret_value(self, secret_id: str, key: str, use_cache: bool = True) -> Any:
        """
        Fetch a specific key from a secret.

        Raises:
            KeyError: If key doesn't exist in secret
        """
        secret = self.get_secret(secret_id, use_cache)
        if key not in secret:
            raise KeyError(f"Key '{key}' not found in secret '{secret_id}'")
        return secret[key]
