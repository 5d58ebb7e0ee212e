"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationRequiredError(InterfaceError):
    """Request to a protected route carried no bearer token."""

    def __init__(self, message: str = "Access token required"):
        super().__init__(message)
