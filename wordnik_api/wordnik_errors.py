from __future__ import annotations

from typing import Optional


class WordnikError(Exception):
    pass


class ConfigurationError(WordnikError, ValueError):
    pass


class ValidationError(WordnikError, ValueError):
    pass


class AuthenticationRequiredError(WordnikError):
    def __init__(self, operation: str) -> None:
        super().__init__(
            f"{operation} requires an authenticated client. Call authenticate first."
        )
        self.operation = operation


class AuthenticationError(WordnikError):
    def __init__(self, url: str, server_message: Optional[str]) -> None:
        detail = server_message or "no message"
        super().__init__(f"Unauthorized API request to {url}: {detail}")
        self.url = url
        self.server_message = server_message


class NetworkError(WordnikError):
    pass


class ApiError(WordnikError):
    def __init__(self, url: str, status_code: int, reason: Optional[str] = None) -> None:
        message = f"API call to {url} failed with response code {status_code}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url
        self.status_code = status_code
