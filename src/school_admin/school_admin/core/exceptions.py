class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class RemoteSyncError(DomainError):
    """Base exception for failures talking to the remote spreadsheet bridge."""


class RemoteBusinessError(RemoteSyncError):
    """The bridge answered with ``status: "error"``. Never retried."""


class StaleDeploymentError(RemoteBusinessError):
    """The bridge does not know the requested action (old script deployed)."""


class RemoteTransportError(RemoteSyncError):
    """Bad HTTP status, empty body or a body that is not JSON."""


class RemoteTimeoutError(RemoteSyncError):
    """Every attempt ran into the request timeout."""
