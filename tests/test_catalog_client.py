"""
Tests for the requests-based catalog client.
"""

from unittest.mock import MagicMock

import pytest
import requests

from compareGraph.core.catalog import CatalogClient, TOOL_TEMPLATE, validate_tool_payload
from compareGraph.core.errors import MalformedResponseError, ToolLookupError, ToolNotFoundError


BASE_URL = "http://catalog.test"


def _response(status_code=200, text="", headers=None, json_body=None):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.headers = headers or {}
    if json_body is not None:
        response.json.return_value = json_body
    return response


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(http):
    return CatalogClient(base_url=BASE_URL + "/", timeout=3, session=http)


def test_fetch_tool_parses_record(client, http):
    http.get.return_value = _response(text='{"toolId": "my tool", "name": "My Tool", "categories": ["CLI"]}')

    record = client.fetch_tool("my tool")

    http.get.assert_called_once_with(f"{BASE_URL}/tools/my%20tool", timeout=3)
    assert record.tool_id == "my tool"
    assert record.display_name == "My Tool"
    assert record.categories == ("CLI",)


def test_non_200_is_not_found(client, http):
    http.get.return_value = _response(status_code=404, text='{"message": "Not Found"}')

    with pytest.raises(ToolNotFoundError) as excinfo:
        client.fetch_tool("nope")

    assert excinfo.value.status_code == 404
    assert excinfo.value.tool_id == "nope"


@pytest.mark.parametrize("body", [
    "<html>oops</html>",
    "[1, 2, 3]",
    '{"name": "no id"}',
    '{"toolId": "someone-else"}',
])
def test_malformed_bodies(client, http, body):
    http.get.return_value = _response(text=body)

    with pytest.raises(MalformedResponseError):
        client.fetch_tool("wanted")


def test_network_failure_is_lookup_error(client, http):
    http.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(ToolLookupError) as excinfo:
        client.fetch_tool("A")

    assert not isinstance(excinfo.value, ToolNotFoundError)
    assert excinfo.value.status_code is None


def test_create_tool_posts_payload(client, http):
    http.post.return_value = _response(
        status_code=201,
        headers={"content-type": "application/json"},
        json_body={"toolId": "new"}
    )

    result = client.create_tool({"toolId": "new", "name": "New"})

    http.post.assert_called_once_with(f"{BASE_URL}/tools", json={"toolId": "new", "name": "New"}, timeout=3)
    assert result.ok
    assert result.status_code == 201
    assert result.body == {"toolId": "new"}


def test_create_tool_keeps_text_body_on_error(client, http):
    http.post.return_value = _response(status_code=400, text="bad request", headers={"content-type": "text/plain"})

    result = client.create_tool({"toolId": "new", "name": "New"})

    assert not result.ok
    assert result.body == "bad request"


def test_create_tool_validates_before_sending(client, http):
    with pytest.raises(ValueError):
        client.create_tool({"toolId": "new"})

    http.post.assert_not_called()


def test_validate_tool_payload():
    assert validate_tool_payload(TOOL_TEMPLATE) == []
    assert validate_tool_payload({}) == ["toolId is required", "name is required"]
    assert validate_tool_payload({"toolId": "x", "name": ""}) == ["name is required"]
    assert validate_tool_payload("not json") == ["payload must be a JSON object"]


def test_close_closes_session(client, http):
    client.close()

    http.close.assert_called_once()


def test_deeply_nested_body_is_malformed(client, http):
    http.get.return_value = _response(text="[" * 200000 + "]" * 200000)

    with pytest.raises(MalformedResponseError) as excinfo:
        client.fetch_tool("deep")

    assert excinfo.value.status_code == 200
