class DomainError(Exception):
    """Base class for rule violations; ``str(e)`` is shown to the user as-is."""


class ValidationError(DomainError):
    """Bad form/RPC input, or a write that would break a data rule (duplicates, full bus, ...)."""


class AuthenticationError(DomainError):
    """Unknown email or wrong password on sign in."""


class AuthorizationError(DomainError):
    """The signed-in role may not perform this action."""
