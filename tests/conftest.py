from unittest.mock import MagicMock

import pytest
import requests

_NETWORK_BLOCK_MSG = (
    "Network access is blocked during tests. Mock GitHubAPI.session methods."
)


def _block_network(*_args, **_kwargs):
    """
    Prevent network calls in tests by raising a RuntimeError.

    Raises:
        RuntimeError: with `_NETWORK_BLOCK_MSG`.
    """
    raise RuntimeError(_NETWORK_BLOCK_MSG)


@pytest.fixture(autouse=True)
def block_network(monkeypatch):
    """Every Session.get/head ends up in Session.request; refuse it."""
    monkeypatch.setattr(requests.Session, "request", _block_network)


def make_response(status_code=200, json_data=None, json_error=None, chunks=None):
    """
    Build a requests.Response stand-in.

    Parameters:
        status_code: HTTP status to report.
        json_data: Value returned by `.json()`.
        json_error: Exception raised by `.json()` instead.
        chunks: Byte chunks yielded by `.iter_content()`.
    """
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    response.iter_content.return_value = iter(chunks or [])
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Client Error"
        )
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


@pytest.fixture
def response_factory():
    return make_response
