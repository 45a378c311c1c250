"""Infrastructure layer errors."""

from enum import Enum


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class IdentityErrorKind(str, Enum):
    """Identity Store failure vocabulary.

    Adapters translate the store's own error codes into one of these kinds.
    Only INVALID_CREDENTIALS opens the allow-list / join-request path.
    """

    INVALID_CREDENTIALS = "invalid_credentials"
    ALREADY_EXISTS = "already_exists"
    OTHER = "other"


class IdentityStoreError(ProviderError):
    """The Identity Store answered and rejected the call."""

    def __init__(self, kind: IdentityErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(f"{kind.value}: {message}")


class IdentityStoreUnavailableError(ProviderError):
    """The Identity Store could not be reached or answered unexpectedly."""

    pass


class EmailDeliveryError(ProviderError):
    """Outbound e-mail could not be handed to the delivery provider."""

    pass
