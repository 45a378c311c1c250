"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class NotAuthenticatedError(InterfaceError):
    """Request carries no valid Identity Store session."""

    pass
