"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when a packaged settings file is missing or invalid."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="CFG_INVALID")


class CredentialStoreError(ApplicationError):
    """Raised when the credential file cannot be read or written."""

    def __init__(self, message: str = "Credential store error") -> None:
        super().__init__(message, code="CFG_CREDENTIALS")


class ApiStatusError(ApplicationError):
    """Raised when the API answers with a status the command does not accept."""

    def __init__(self, status_code: int, reason: str = "", body: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"Request failed: {self.status_line}", code="API_STATUS_ERROR")

    @property
    def status_line(self) -> str:
        """Status code followed by the reason phrase, e.g. ``404 Not Found``."""
        return f"{self.status_code} {self.reason}".strip()


class InvalidResponseError(ApplicationError):
    """Raised when a response body lacks a field a command depends on."""

    def __init__(self, message: str = "Unexpected API response") -> None:
        super().__init__(message, code="API_INVALID_RESPONSE")
