"""
Typed failures raised by services and rendered by the API exception handlers
"""


class AppError(Exception):
    """Base class for failures that map onto a client-visible status code"""

    status_code = 500

    def __init__(self, message: str = "Server Error"):
        super().__init__(message)
        self.message = message


class ValidationFailed(AppError):
    """Malformed or out-of-range input"""

    status_code = 400


class DuplicateKey(AppError):
    """Unique constraint violation"""

    status_code = 400


class NotFound(AppError):
    status_code = 404


class AccountNotFound(NotFound):
    """The account behind a valid token no longer exists"""

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class Unauthenticated(AppError):
    status_code = 401

    def __init__(self, message: str = "Not authorized to access this route"):
        super().__init__(message)


class InvalidCredentials(Unauthenticated):
    """Unknown email or wrong password; the two cases are indistinguishable"""

    def __init__(self):
        super().__init__("Invalid credentials")


class Forbidden(AppError):
    status_code = 403
