"""
Network gateway.

``NetworkGateway`` is what the client needs from a node: the latest block
for reference binding and a broadcast endpoint. ``HttpGateway`` talks to the
explorer REST API with ``requests``. Retries are left to callers.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

import requests
from pydantic import ValidationError

from .config import ClientConfig
from .runtime.errors import NetworkError, StaleReferenceError, error_from_response
from .transactions import BlockReference, BroadcastResult

logger = logging.getLogger(__name__)


class NetworkGateway(ABC):
    """Capability consumed by the reference binder and the client."""

    @abstractmethod
    def fetch_latest_block(self) -> BlockReference:
        """
        Get the current head block.

        Raises:
            NetworkError: If the node cannot be reached
            StaleReferenceError: If the node answers with an unusable block
        """
        pass

    @abstractmethod
    def broadcast(self, transaction_hex: str) -> BroadcastResult:
        """
        Submit a signed transaction.

        Raises:
            NetworkError: If the node cannot be reached
            BroadcastError: If the node rejects the transaction
        """
        pass


class HttpGateway(NetworkGateway):
    """REST gateway: ``GET /api/block/latest`` and ``POST /api/broadcast``."""

    def __init__(self, config: Union[str, ClientConfig], session: Optional[requests.Session] = None):
        """
        Initialize the gateway.

        Args:
            config: Either an endpoint URL / alias or a ClientConfig object
            session: Optional pre-configured requests session
        """
        if isinstance(config, str):
            self.config = ClientConfig(endpoint=config)
        else:
            self.config = config

        self.base_url = self.config.base_url
        self._session = session or requests.Session()
        self._session.headers.update(self._headers())

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }
        if self.config.api_key:
            headers[self.config.api_key_header] = self.config.api_key
        return headers

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                json=payload,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise NetworkError(f"HTTP error from {url}: {e}", details={"status": status}, cause=e)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Network error: {e}", cause=e)
        except ValueError as e:
            raise NetworkError(f"Invalid JSON from {url}", cause=e)

    def fetch_latest_block(self) -> BlockReference:
        data = self._request("GET", "/api/block/latest")
        if not isinstance(data, dict):
            raise StaleReferenceError("Latest block response is not an object")

        error = error_from_response(data)
        if error is not None:
            raise StaleReferenceError(f"Latest block unavailable: {error.message}", cause=error)

        try:
            block = BlockReference.model_validate(data)
        except ValidationError as e:
            raise StaleReferenceError(f"Malformed latest block: {e}", details={"response": data}, cause=e)

        logger.debug("Latest block %d (%s)", block.number, block.hash)
        return block

    def broadcast(self, transaction_hex: str) -> BroadcastResult:
        data = self._request("POST", "/api/broadcast", {"transaction": transaction_hex})
        if not isinstance(data, dict):
            raise NetworkError("Broadcast response is not an object", details={"response": data})

        error = error_from_response(data)
        if error is not None:
            raise error

        result = dict(data)
        result.setdefault("result", bool(data.get("success", True)))
        try:
            broadcast_result = BroadcastResult.model_validate(result)
        except ValidationError as e:
            raise NetworkError("Malformed broadcast response", details={"response": data}, cause=e)

        logger.debug("Broadcast accepted: %s", broadcast_result.txid)
        return broadcast_result

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> HttpGateway:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


__all__ = [
    "NetworkGateway",
    "HttpGateway",
]
