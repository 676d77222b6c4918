"""Configuration types for the registry image client."""

import os
from dataclasses import dataclass
from typing import Optional

from ..exceptions import ValidationError

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "registry-image-client"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, str(default))
    try:
        return int(value)
    except ValueError as e:
        raise ValidationError(f"{name} must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class RegistryConfig:
    """Registry connection settings."""

    timeout: int = DEFAULT_TIMEOUT
    username: Optional[str] = None
    password: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def has_credentials(self) -> bool:
        return self.username is not None and self.password is not None

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """Build configuration from REGISTRY_* environment variables.

        Raises:
            ValidationError: If REGISTRY_TIMEOUT is not an integer
        """
        return cls(
            timeout=_env_int("REGISTRY_TIMEOUT", DEFAULT_TIMEOUT),
            username=os.getenv("REGISTRY_USERNAME"),
            password=os.getenv("REGISTRY_PASSWORD"),
        )
