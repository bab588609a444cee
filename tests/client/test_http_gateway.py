"""
Test the REST gateway with a mocked requests session.
"""

from unittest.mock import Mock

import pytest
import requests

from helpers import FIXED_TIMESTAMP, mk_block_payload

from linda_client import ClientConfig
from linda_client.gateway import HttpGateway
from linda_client.runtime.errors import BroadcastError, NetworkError, StaleReferenceError


def mk_session(payload=None, status_error=None, request_error=None, json_error=None):
    response = Mock()
    response.json.return_value = payload
    if json_error is not None:
        response.json.side_effect = json_error
    if status_error is not None:
        response.raise_for_status.side_effect = status_error

    session = Mock()
    session.headers = {}
    session.request.return_value = response
    if request_error is not None:
        session.request.side_effect = request_error
    return session


def mk_gateway(session, **config):
    return HttpGateway(ClientConfig(endpoint=config.pop("endpoint", "local"), **config), session=session)


def test_session_headers_include_api_key():
    session = mk_session()
    mk_gateway(session, api_key="secret")

    assert session.headers["LINDA-PRO-API-KEY"] == "secret"
    assert session.headers["Content-Type"] == "application/json"
    assert session.headers["User-Agent"].startswith("linda-client-python/")


def test_no_api_key_header_by_default():
    session = mk_session()
    mk_gateway(session)
    assert "LINDA-PRO-API-KEY" not in session.headers


@pytest.mark.parametrize("endpoint,base_url", [
    ("mainnet", "https://lindascan.org"),
    ("LOCAL", "http://127.0.0.1:8090"),
    ("https://node.example/", "https://node.example"),
])
def test_endpoint_alias_resolution(endpoint, base_url):
    assert HttpGateway(endpoint, session=mk_session()).base_url == base_url


def test_fetch_latest_block():
    session = mk_session(mk_block_payload(number=512))
    gateway = mk_gateway(session, timeout=5.0)

    block = gateway.fetch_latest_block()

    assert block.number == 512
    assert block.timestamp_ms == FIXED_TIMESTAMP
    assert block.hash == mk_block_payload(number=512)["hash"]
    session.request.assert_called_once_with(
        "GET", "http://127.0.0.1:8090/api/block/latest",
        json=None, timeout=5.0, verify=True,
    )


@pytest.mark.parametrize("payload", [
    [],
    {"number": 1},
    {"number": -1, "hash": "00", "timestamp": 0},
    {"error": "no blocks yet"},
])
def test_fetch_latest_block_malformed(payload):
    gateway = mk_gateway(mk_session(payload))
    with pytest.raises(StaleReferenceError):
        gateway.fetch_latest_block()


def test_http_error_becomes_network_error():
    error = requests.exceptions.HTTPError("502 Server Error", response=Mock(status_code=502))
    gateway = mk_gateway(mk_session(status_error=error))

    with pytest.raises(NetworkError) as exc_info:
        gateway.fetch_latest_block()

    assert exc_info.value.details["status"] == 502
    assert exc_info.value.cause is error


def test_connection_error_becomes_network_error():
    gateway = mk_gateway(mk_session(request_error=requests.exceptions.ConnectionError("refused")))

    with pytest.raises(NetworkError) as exc_info:
        gateway.broadcast("0a00")

    assert not isinstance(exc_info.value, StaleReferenceError)


def test_invalid_json_becomes_network_error():
    gateway = mk_gateway(mk_session(json_error=ValueError("Expecting value")))
    with pytest.raises(NetworkError):
        gateway.broadcast("0a00")


def test_broadcast_success():
    session = mk_session({"success": True, "code": "SUCCESS", "txid": "ab" * 32})
    gateway = mk_gateway(session)

    result = gateway.broadcast("0a02")

    assert result.result is True
    assert result.txid == "ab" * 32
    session.request.assert_called_once_with(
        "POST", "http://127.0.0.1:8090/api/broadcast",
        json={"transaction": "0a02"}, timeout=30.0, verify=True,
    )


def test_broadcast_rejected():
    session = mk_session({"success": False, "code": "SIGERROR", "message": "validate signature error"})
    gateway = mk_gateway(session)

    with pytest.raises(BroadcastError) as exc_info:
        gateway.broadcast("0a02")

    assert exc_info.value.message == "validate signature error"
    assert exc_info.value.details["code"] == "SIGERROR"


def test_broadcast_non_object_response():
    gateway = mk_gateway(mk_session("ok"))
    with pytest.raises(NetworkError):
        gateway.broadcast("0a02")


def test_context_manager_closes_session():
    session = mk_session()
    with mk_gateway(session):
        pass
    session.close.assert_called_once()
