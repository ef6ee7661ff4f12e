class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the admin passphrase does not match."""


class AuthorizationError(DomainError):
    """Raised when the current session lacks permission for an action."""


class ParseError(DomainError):
    """Raised for a log row that cannot be turned into an event.

    Never leaves the normalizer: the row is dropped and a diagnostic logged.
    """


class RemoteStoreError(Exception):
    """Base exception for failures talking to the remote log store."""


class TransportError(RemoteStoreError):
    """Network failure or non-success HTTP status."""


class LogicalError(RemoteStoreError):
    """Well-formed response whose body reports a failure."""


class CriticalProcessingError(Exception):
    """Unexpected failure while deriving summaries from cached logs."""
