"""
Shared fixtures.
"""
import pytest

from helpers import MockGateway, mk_address, mk_block, mk_private_key


@pytest.fixture
def builder_registry():
    """Registry of all available transaction builders."""
    from linda_client.tx.builders.registry import BUILDER_REGISTRY

    # Return the actual builder classes, not instances
    return BUILDER_REGISTRY.copy()


@pytest.fixture
def owner_address():
    return mk_address(1)


@pytest.fixture
def recipient_address():
    return mk_address(2)


@pytest.fixture
def private_key_hex():
    """Deterministic secp256k1 private key."""
    return mk_private_key(7)


@pytest.fixture
def latest_block():
    return mk_block(number=4_200_000)


@pytest.fixture
def mock_gateway(latest_block):
    return MockGateway(latest_block)
