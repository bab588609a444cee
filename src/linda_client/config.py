"""
Client configuration.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from . import __version__
from .runtime.address import DEFAULT_ADDRESS_PREFIX

# Well-known endpoints
ENDPOINTS = {
    'mainnet': 'https://lindascan.org',
    'local': 'http://127.0.0.1:8090',
}


@dataclass
class ClientConfig:
    """Configuration for the transaction client and its HTTP gateway."""

    endpoint: str
    timeout: float = 30.0
    api_key: Optional[str] = None
    api_key_header: str = "LINDA-PRO-API-KEY"
    native_token: str = "TRX"
    address_prefix: int = DEFAULT_ADDRESS_PREFIX
    verify_ssl: bool = True
    debug: bool = False
    user_agent: str = f"linda-client-python/{__version__}"

    @property
    def base_url(self) -> str:
        """Endpoint with well-known aliases resolved and no trailing slash."""
        url = ENDPOINTS.get(self.endpoint.lower(), self.endpoint)
        return url.rstrip('/')


__all__ = [
    "ClientConfig",
    "ENDPOINTS",
]
