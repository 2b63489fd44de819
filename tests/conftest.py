"""
Shared pytest fixtures for the rank tracker tests.
"""

import os

os.environ.setdefault("LOG_TO_FILE", "False")
os.environ.pop("RIOT_API_KEY", None)

import pytest

from helpers import FakeClock
from utils.riot_credentials import CredentialStore


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def credentials():
    return CredentialStore("RGAPI-test-key")


@pytest.fixture
def empty_credentials():
    return CredentialStore()


@pytest.fixture
def no_sleep():
    """Async sleep replacement that records the requested delays."""
    calls = []

    async def sleep(seconds):
        calls.append(seconds)

    sleep.calls = calls
    return sleep
