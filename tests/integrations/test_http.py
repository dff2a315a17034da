"""Tests for the JSON POST helper."""

import http.client
import io
import json
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from presswire.errors import HttpError
from presswire.integrations.http import HttpResponse, post_json


def _mock_response(body: bytes, status: int = 200) -> MagicMock:
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.headers = {"Content-Type": "application/json"}
    mock_response.read.return_value = body
    mock_response.__enter__ = lambda s: s
    mock_response.__exit__ = MagicMock(return_value=False)
    return mock_response


class TestPostJson:
    def test_sends_json_body_and_headers(self):
        with patch(
            "urllib.request.urlopen", return_value=_mock_response(b'{"ok": true}')
        ) as mock_urlopen:
            resp = post_json("https://api.example.com/x", {"a": 1}, headers={"X-Key": "k"})

        req = mock_urlopen.call_args[0][0]
        assert req.full_url == "https://api.example.com/x"
        assert req.method == "POST"
        assert req.get_header("Content-type") == "application/json"
        assert req.get_header("X-key") == "k"
        assert json.loads(req.data) == {"a": 1}
        assert resp.ok
        assert resp.json() == {"ok": True}

    def test_http_error_returned_as_response(self):
        error = urllib.error.HTTPError(
            "https://api.example.com/x", 422, "Unprocessable", {}, io.BytesIO(b"bad input")
        )
        with patch("urllib.request.urlopen", side_effect=error):
            resp = post_json("https://api.example.com/x", {})

        assert resp.status == 422
        assert not resp.ok
        assert resp.text == "bad input"

    def test_connection_failure_raises(self):
        with patch(
            "urllib.request.urlopen", side_effect=urllib.error.URLError("connection refused")
        ):
            with pytest.raises(HttpError, match="connection refused"):
                post_json("https://api.example.com/x", {})

    def test_timeout_raises(self):
        with patch("urllib.request.urlopen", side_effect=TimeoutError("timed out")):
            with pytest.raises(HttpError):
                post_json("https://api.example.com/x", {})

    def test_truncated_response_raises(self):
        with patch(
            "urllib.request.urlopen", side_effect=http.client.IncompleteRead(b"ab", 10)
        ):
            with pytest.raises(HttpError):
                post_json("https://api.example.com/x", {})


class TestHttpResponse:
    def test_accepted_is_ok(self):
        assert HttpResponse(status=202).ok

    def test_empty_body_json_is_none(self):
        assert HttpResponse(status=200).json() is None
