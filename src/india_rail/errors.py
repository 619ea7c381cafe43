from __future__ import annotations

from typing import Optional, Sequence


class RailError(RuntimeError):
    """Base class for every error raised by this package."""


class ValidationError(RailError):
    """Raised when a request is missing required parameters."""

    def __init__(self, request_name: str, missing: Sequence[str]) -> None:
        self.request_name = request_name
        self.missing = list(missing)
        super().__init__(f"invalid {request_name}: missing {', '.join(self.missing)}")


class MissingApiKeyError(RailError):
    """Raised when a request is dispatched without an API key."""


class TransportError(RailError):
    """Raised when the HTTP request could not be completed."""


class ApiStatusError(RailError):
    """Raised when the API answers with a status other than 200."""

    def __init__(self, status_code: int, url: str, reason: str = "") -> None:
        self.status_code = status_code
        self.url = url
        message = f"request to {url} returned {status_code}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class DecodeError(RailError):
    """Raised when a response body cannot be decoded into its result type."""


class FormatError(DecodeError):
    """Raised when a present textual field does not match its expected format."""

    def __init__(
        self,
        value: str,
        expected: str,
        *,
        field: Optional[str] = None,
        key: Optional[str] = None,
    ) -> None:
        self.value = value
        self.expected = expected
        self.field = field
        self.key = key
        super().__init__(self._message())

    def _message(self) -> str:
        detail = f"{self.value!r} does not match {self.expected}"
        if not self.field:
            return detail
        source = f" ({self.key})" if self.key else ""
        return f"parse {self.field}{source} failed: {detail}"
