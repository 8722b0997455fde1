import json

import pytest
import requests
import responses

from termchat.clients.claude import API_URL, ClaudeAIClient
from termchat.errors import ApiError, ApiErrorInfo


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def client():
    c = ClaudeAIClient()
    c.set_api_key("placeholder")
    return c


def test_history_excludes_system_prompt(client):
    client.set_system_prompt("be brief")
    client.push_user_message("hi")
    assert client.build_message_history("next") == [
        {"role": "user", "content": "hi"},
        {"role": "user", "content": "next"},
    ]


def test_reply_joins_text_blocks(client, mocked):
    mocked.add(responses.POST, API_URL, json={"content": [
        {"type": "text", "text": "Hello"},
        {"type": "tool_use"},
        {"type": "text", "text": " world"},
    ]})
    assert client.send_message([{"role": "user", "content": "hi"}]) == "Hello world"


def test_request_headers_and_body(client, mocked):
    mocked.add(responses.POST, API_URL, json={"content": [{"text": "ok"}]})
    client.set_system_prompt("be brief")
    reply = client.send_message([{"role": "user", "content": "hi"}])
    assert reply == "ok"
    request = mocked.calls[0].request
    assert request.headers["x-api-key"] == "placeholder"
    assert request.headers["anthropic-version"] == "2023-06-01"
    body = json.loads(request.body)
    assert body["model"] == "claude"
    assert body["max_tokens"] == 1024
    assert body["system"] == "be brief"
    assert body["messages"] == [{"role": "user", "content": "hi"}]


def test_no_system_field_without_prompt(client, mocked):
    mocked.add(responses.POST, API_URL, json={"content": [{"text": "ok"}]})
    reply = client.send_message([], "claude-3-opus-20240229")
    assert reply == "ok"
    body = json.loads(mocked.calls[0].request.body)
    assert "system" not in body
    assert body["model"] == "claude-3-opus-20240229"


def test_error_object_is_reported(client, mocked):
    mocked.add(responses.POST, API_URL, status=400, json={"error": {"type": "bad"}})
    with pytest.raises(ApiErrorInfo) as info:
        client.send_message([])
    assert info.value.code is ApiError.MALFORMED_RESPONSE
    assert json.loads(info.value.message) == {"type": "bad"}


def test_empty_content_is_malformed(client, mocked):
    mocked.add(responses.POST, API_URL, json={"content": []})
    with pytest.raises(ApiErrorInfo) as info:
        client.send_message([])
    assert info.value.message == "Malformed response"


def test_invalid_json(client, mocked):
    mocked.add(responses.POST, API_URL, body="not json")
    with pytest.raises(ApiErrorInfo) as info:
        client.send_message([])
    assert info.value.code is ApiError.JSON_PARSE_ERROR


def test_network_error(client, mocked):
    mocked.add(responses.POST, API_URL, body=requests.ConnectionError("down"))
    with pytest.raises(ApiErrorInfo) as info:
        client.send_message([])
    assert info.value.code is ApiError.NETWORK_ERROR


def test_missing_key_sends_nothing(mocked):
    with pytest.raises(ApiErrorInfo) as info:
        ClaudeAIClient().send_message([])
    assert info.value.code is ApiError.API_KEY_NOT_SET
    assert len(mocked.calls) == 0