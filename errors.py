"""Error kinds raised by the repositories and the authorization guard.

Every error carries the HTTP status the boundary maps it to; main.py
installs the single handler that does the translation.
"""


class PortfolioManagerError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(PortfolioManagerError):
    """Referenced entity does not exist."""
    status_code = 404


class DuplicateResourceError(PortfolioManagerError):
    """Natural key already taken."""
    status_code = 409


class UnauthorizedError(PortfolioManagerError):
    """Credential invalid. Raised the same way for unknown usernames and wrong passwords."""
    status_code = 401


class ForbiddenError(PortfolioManagerError):
    """Authenticated caller does not own the resource."""
    status_code = 403


class BadRequestError(PortfolioManagerError):
    status_code = 400


class EmptyUpdateError(BadRequestError):
    def __init__(self, message: str = "No data"):
        super().__init__(message)
