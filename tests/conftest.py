"""
Shared fixtures for BSD Tools client tests.
"""

import pytest
import requests


def build_response(status_code: int, body: bytes = b"") -> requests.Response:
    """Create a requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.encoding = 'utf-8'
    return response


@pytest.fixture
def make_response():
    """Factory for canned responses."""
    return build_response
