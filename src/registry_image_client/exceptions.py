"""Custom exceptions for the registry image client."""


class RegistryError(Exception):
    """Base exception for all registry-related errors."""

    pass


class ValidationError(RegistryError):
    """Raised when an image reference is malformed."""

    pass


class DisallowedError(RegistryError):
    """Raised when an image reference violates the registry/insecure policy."""

    pass


class RegistryConnectionError(RegistryError):
    """Raised when unable to talk to the registry."""

    pass


class AuthenticationFailedError(RegistryError):
    """Raised when answering a registry challenge fails."""

    pass


class UnauthorizedError(RegistryError):
    """Raised when the registry still rejects the request after authentication."""

    pass


class NotFoundError(RegistryError):
    """Raised when the registry has no manifest for the reference."""

    pass


class MalformedManifestError(RegistryError):
    """Raised when a manifest body cannot be decoded."""

    pass


class RegistryResponseError(RegistryError):
    """Raised when the registry answers with an unexpected status."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"{status} - {body}")
        self.status = status
        self.body = body
