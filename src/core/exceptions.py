"""Custom exceptions for the application."""


class ApiException(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: dict | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UnauthorizedError(ApiException):
    """Unauthorized access exception."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(401, message)


class SignatureVerificationError(UnauthorizedError):
    """Webhook signature verification failed."""

    def __init__(self, source: str = "webhook") -> None:
        super().__init__(f"Invalid {source} signature")


class ExternalServiceError(ApiException):
    """External service (GitHub, model provider, etc.) error."""

    def __init__(self, service: str, message: str) -> None:
        self.service = service
        super().__init__(502, f"{service} error: {message}")


class ChangeSetFetchError(ExternalServiceError):
    """Listing the changed files of a pull request failed."""

    def __init__(self, pr_label: str, reason: str) -> None:
        super().__init__("GitHub", f"could not list files of {pr_label}: {reason}")


class PostingError(ExternalServiceError):
    """Creating a pull request comment failed."""

    def __init__(self, pr_label: str, reason: str) -> None:
        super().__init__("GitHub", f"could not comment on {pr_label}: {reason}")


class ModelTransportError(ExternalServiceError):
    """The review model could not be reached or answered with an error."""

    def __init__(self, reason: str) -> None:
        super().__init__("Model", reason)
