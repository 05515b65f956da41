"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class LookupNotFoundError(EntityNotFoundError):
    """A scanned code has no matching product in the catalog."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Item Not Found in Database: {code}")
        self.code = code


class LookupTransportError(DomainException):
    """The catalog could not be reached (network, auth, server error)."""


class CommitFailureError(DomainException):
    """The sale ledger rejected or failed to record a checkout."""

    GENERIC_MESSAGE = "Checkout failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.GENERIC_MESSAGE)


class CheckoutInProgressError(DomainException):
    """A checkout is already being submitted for this cart."""


class AuthenticationRequiredError(DomainException):
    """No bearer credential is available for the current session."""
