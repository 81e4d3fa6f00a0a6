"""
Component Test Mocks

Shared doubles for the HTTP layer. Service-level doubles live in each
service's mocks.py.
"""
from .http_mock import MockHttpClient, MockHttpResponse

__all__ = [
    "MockHttpClient",
    "MockHttpResponse",
]
