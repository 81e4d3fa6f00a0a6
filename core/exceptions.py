"""
Shared exceptions for the HTTP client layer

Raised by BaseServiceClient; service modules translate them into their own
domain errors.
"""
from typing import Optional


class ServiceClientError(Exception):
    """Remote API answered with a non-2xx response"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_rejection(self) -> bool:
        """True when the server refused the request as invalid for this caller"""
        return self.status_code in (400, 403, 409, 422)


class ServiceUnavailableError(ServiceClientError):
    """Remote API could not be reached or did not answer in time"""

    def __init__(self, message: str, timed_out: bool = False):
        super().__init__(message, status_code=None)
        self.timed_out = timed_out


__all__ = ["ServiceClientError", "ServiceUnavailableError"]
