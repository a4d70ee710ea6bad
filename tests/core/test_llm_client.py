"""Tests for stash.core.llm.client — request shapes and transport handling."""

from __future__ import annotations

import io
import json
import time
import urllib.error
from unittest.mock import patch

import pytest

from stash.core.exceptions import LLMError
from stash.core.llm.client import AnthropicClient, GoogleClient, OpenAIClient, create_client
from stash.core.llm.config import AIProvider, ProviderConfig


class _DummyResp:
    def __init__(self, payload: object):
        self._payload = json.dumps(payload).encode("utf-8")

    def read(self):
        return self._payload

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def _sent(mock_urlopen):
    req = mock_urlopen.call_args[0][0]
    return req, json.loads(req.data.decode("utf-8"))


def test_requires_api_key():
    with pytest.raises(ValueError):
        GoogleClient(model="m", api_key="")


def test_create_client_dispatch():
    for provider, cls in [
        (AIProvider.GOOGLE, GoogleClient),
        (AIProvider.OPENAI, OpenAIClient),
        (AIProvider.ANTHROPIC, AnthropicClient),
    ]:
        client = create_client(ProviderConfig.for_provider(provider, timeout=5), "key")
        assert isinstance(client, cls)
        assert client.timeout == 5


class TestGoogleRequest:
    def test_shape(self):
        req = GoogleClient(model="gemini-x", api_key="k123").build_request("PROMPT", system="ignored")
        assert req.url == (
            "https://generativelanguage.googleapis.com/v1beta/models/gemini-x:generateContent?key=k123"
        )
        assert req.payload == {
            "contents": [{"parts": [{"text": "PROMPT"}]}],
            "generationConfig": {"temperature": 0.1, "responseMimeType": "application/json"},
        }
        assert req.headers == {}

    @patch("stash.core.llm.client.urllib.request.urlopen")
    def test_sent_as_json_post(self, mock_urlopen):
        mock_urlopen.return_value = _DummyResp({"candidates": [{"content": {"parts": [{"text": "{}"}]}}]})
        client = GoogleClient(model="gemini-x", api_key="k")
        client._send(client.build_request("hi"))
        req, body = _sent(mock_urlopen)
        assert req.get_method() == "POST"
        assert req.get_header("Content-type") == "application/json"
        assert body["contents"][0]["parts"][0]["text"] == "hi"
        assert mock_urlopen.call_args.kwargs["timeout"] == 12.0


class TestOpenAIRequest:
    def test_shape(self):
        req = OpenAIClient(model="gpt-x", api_key="sk-1").build_request("PROMPT", system="SYS")
        assert req.url == "https://api.openai.com/v1/chat/completions"
        assert req.headers == {"Authorization": "Bearer sk-1"}
        assert req.payload == {
            "model": "gpt-x",
            "temperature": 0.1,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": "SYS"},
                {"role": "user", "content": "PROMPT"},
            ],
        }

    @patch("stash.core.llm.client.urllib.request.urlopen")
    def test_bearer_header_sent(self, mock_urlopen):
        mock_urlopen.return_value = _DummyResp({})
        client = OpenAIClient(model="gpt-x", api_key="sk-1")
        client._send(client.build_request("hi"))
        req, _ = _sent(mock_urlopen)
        assert req.get_header("Authorization") == "Bearer sk-1"


class TestAnthropicRequest:
    def test_shape(self):
        req = AnthropicClient(model="claude-x", api_key="ak").build_request("PROMPT", system="SYS")
        assert req.url == "https://api.anthropic.com/v1/messages"
        assert req.headers == {"x-api-key": "ak", "anthropic-version": "2023-06-01"}
        assert req.payload == {
            "model": "claude-x",
            "max_tokens": 300,
            "temperature": 0.1,
            "system": "SYS",
            "messages": [{"role": "user", "content": "PROMPT"}],
        }

    def test_custom_api_base(self):
        client = AnthropicClient(model="m", api_key="k", api_base="http://localhost:8080/v1/")
        assert client.build_request("p").url == "http://localhost:8080/v1/messages"


class TestSend:
    @patch("stash.core.llm.client.urllib.request.urlopen")
    def test_http_error(self, mock_urlopen):
        mock_urlopen.side_effect = urllib.error.HTTPError(
            url="https://api.openai.com/v1/chat/completions",
            code=401,
            msg="Unauthorized",
            hdrs=None,
            fp=io.BytesIO(b'{"error": "bad key"}'),
        )
        client = OpenAIClient(model="m", api_key="k")
        with pytest.raises(LLMError, match="401"):
            client._send(client.build_request("p"))

    @patch("stash.core.llm.client.urllib.request.urlopen")
    def test_url_error(self, mock_urlopen):
        mock_urlopen.side_effect = urllib.error.URLError("no route to host")
        client = GoogleClient(model="m", api_key="k")
        with pytest.raises(LLMError, match="request failed"):
            client._send(client.build_request("p"))


class TestComplete:
    @pytest.mark.asyncio
    @patch("stash.core.llm.client.urllib.request.urlopen")
    async def test_returns_text(self, mock_urlopen):
        mock_urlopen.return_value = _DummyResp({"content": [{"type": "text", "text": '{"title": "x"}'}]})
        client = AnthropicClient(model="m", api_key="k")
        assert await client.complete("p", system="s") == '{"title": "x"}'

    @pytest.mark.asyncio
    @patch("stash.core.llm.client.urllib.request.urlopen")
    async def test_no_text(self, mock_urlopen):
        mock_urlopen.return_value = _DummyResp({"choices": []})
        client = OpenAIClient(model="m", api_key="k")
        assert await client.complete("p") is None

    @pytest.mark.asyncio
    async def test_timeout(self, monkeypatch):
        client = GoogleClient(model="m", api_key="k", timeout=0.05)

        def slow_send(_request):
            time.sleep(0.5)
            return b"{}"

        monkeypatch.setattr(client, "_send", slow_send)
        with pytest.raises(TimeoutError):
            await client.complete("p")
