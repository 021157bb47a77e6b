# tests/conftest.py

import pytest

from hybridseal.keys import generate_keypair


@pytest.fixture(scope="session")
def keypair():
    """A 1024-bit key pair, shared across the session for speed."""
    return generate_keypair(1024)


@pytest.fixture(scope="session")
def second_keypair():
    """A second independent key pair."""
    return generate_keypair(1024)
