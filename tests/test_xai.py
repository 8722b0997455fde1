import json

import pytest
import requests
import responses

from termchat.clients.xai import API_URL, XAIClient, clean_content, split_chunks
from termchat.errors import ApiError, ApiErrorInfo


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def client():
    c = XAIClient()
    c.set_api_key("placeholder")
    c.chunk_delay = 0
    return c


def reply_json(content):
    return {"choices": [{"message": {"content": content}}]}


def test_split_chunks_worked_example():
    assert split_chunks("alpha beta", 4) == ["alph", "a ", "beta"]


def test_split_chunks_short_text_is_one_chunk():
    assert split_chunks("short reply") == ["short reply"]
    assert split_chunks("") == []


def test_split_chunks_invariants():
    text = " ".join(f"word{n}" for n in range(60))
    chunks = split_chunks(text, 40)
    assert "".join(chunks) == text
    for chunk in chunks[:-1]:
        assert len(chunk) <= 41
        assert chunk.endswith(" ") or len(chunk) == 40


def test_clean_content_drops_control_characters():
    assert clean_content("a\tb\nc\x7fé日") == "abcé日"


def test_default_model_falls_back(client, mocked):
    mocked.add(responses.POST, API_URL, json=reply_json("ok"))
    reply = client.send_message([])
    assert reply == "ok"
    body = json.loads(mocked.calls[0].request.body)
    assert body["model"] == "grok-2"
    assert "max_tokens" not in body


def test_set_model_used(client, mocked):
    mocked.add(responses.POST, API_URL, json=reply_json("ok"))
    client.set_model("grok-3-beta")
    reply = client.send_message([])
    assert reply == "ok"
    assert json.loads(mocked.calls[0].request.body)["model"] == "grok-3-beta"


def test_send_prompt_includes_system_and_history(client, mocked):
    mocked.add(responses.POST, API_URL, json=reply_json("Line one\nline two"))
    client.set_system_prompt("be brief")
    client.push_user_message("hi")
    assert client.send_prompt("more") == "Line oneline two"
    request = mocked.calls[0].request
    assert request.headers["Authorization"] == "Bearer placeholder"
    assert json.loads(request.body)["messages"] == [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "hi"},
        {"role": "user", "content": "more"},
    ]


def test_missing_message_is_parse_error(client, mocked):
    mocked.add(responses.POST, API_URL, json={"choices": [{}]})
    with pytest.raises(ApiErrorInfo) as info:
        client.send_message([])
    assert info.value.code is ApiError.JSON_PARSE_ERROR


def test_error_object(client, mocked):
    mocked.add(responses.POST, API_URL, json={"error": "nope"})
    with pytest.raises(ApiErrorInfo) as info:
        client.send_message([])
    assert info.value.code is ApiError.MALFORMED_RESPONSE
    assert info.value.message == '"nope"'


def test_network_error(client, mocked):
    mocked.add(responses.POST, API_URL, body=requests.ConnectionError("down"))
    with pytest.raises(ApiErrorInfo) as info:
        client.send_message([])
    assert info.value.code is ApiError.NETWORK_ERROR


def test_stream_delivers_chunks(client, mocked):
    reply = " ".join(f"token{n}" for n in range(30))
    mocked.add(responses.POST, API_URL, json=reply_json(reply))
    chunks, done, errors = [], [], []
    thread = client.send_message_stream(
        "hi", "", lambda c, last: chunks.append((c, last)),
        lambda: done.append(True), errors.append,
    )
    thread.join(5)
    assert "".join(c for c, _ in chunks) == reply
    assert [last for _, last in chunks] == [False] * (len(chunks) - 1) + [True]
    assert done == [True] and errors == []


def test_stream_reports_errors():
    chunks, done, errors = [], [], []
    thread = XAIClient().send_message_stream(
        "hi", "", lambda c, last: chunks.append(c),
        lambda: done.append(True), errors.append,
    )
    thread.join(5)
    assert [e.code for e in errors] == [ApiError.API_KEY_NOT_SET]
    assert chunks == [] and done == []


def test_available_models():
    assert XAIClient().available_models() == ["xai-default", "xai-advanced"]