"""
Pytest configuration and shared fixtures for the Norsk Pensjon plugin tests
"""
import json
import sys
from pathlib import Path

import pytest

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from pensjon_plugin.integrations.norsk_pensjon_client import NorskPensjonClient

UPSTREAM_URL = "https://upstream.test/pensjon"


class FakeResponse:
    """Stands in for aiohttp's response context manager"""

    def __init__(self, status=200, body=b"", error=None):
        self.status = status
        self.body = body
        self.error = error
        self.read_called = False

    async def __aenter__(self):
        if self.error is not None:
            raise self.error
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def read(self):
        self.read_called = True
        return self.body


class FakeSession:
    """Records outbound POSTs and replays one canned response"""

    def __init__(self, response):
        self.response = response
        self.calls = []

    def post(self, url, json=None):
        self.calls.append({"url": url, "json": json})
        return self.response


@pytest.fixture
def make_client():
    """Build a client around a fake session: make_client(status, body) -> (client, session)"""

    def _make(status=200, body=b"", error=None):
        session = FakeSession(FakeResponse(status=status, body=body, error=error))
        return NorskPensjonClient(session, UPSTREAM_URL), session

    return _make


@pytest.fixture
def harvest_body():
    def _body(ssn="01010199999", **extra):
        return json.dumps({"subjectParty": {"norwegianSocialSecurityNumber": ssn}, **extra}).encode()

    return _body
