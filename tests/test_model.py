"""
Tests for the model call and for pulling results out of model replies.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from truecheck.config import settings
from truecheck.errors import NetworkError, ParseError, UpstreamError
from truecheck.model import (
    BAD_JSON_MESSAGE, NO_JSON_MESSAGE, call_model, extract_json, extract_result,
    extract_simple_result,
)


def _response(status_code=200, payload=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.json.return_value = payload
    return resp


class TestExtractJson:

    def test_object_inside_prose(self):
        raw = 'noise noise {"status":"valid","message":"ok"} trailing'
        assert extract_json(raw) == {"status": "valid", "message": "ok"}

    def test_spans_first_to_last_brace(self):
        raw = 'Here: {"details": {"issues": []}, "status": "invalid"} done.'
        assert extract_json(raw) == {"details": {"issues": []}, "status": "invalid"}

    def test_markdown_fence(self):
        raw = '```json\n{"veracity": "false"}\n```'
        assert extract_json(raw) == {"veracity": "false"}

    @pytest.mark.parametrize("raw", ["no braces at all", "", "only { open", "} reversed {"])
    def test_missing_block(self, raw):
        with pytest.raises(ParseError, match=NO_JSON_MESSAGE):
            extract_json(raw)

    def test_malformed_block(self):
        with pytest.raises(ParseError, match=BAD_JSON_MESSAGE):
            extract_json("{status: valid,}")


class TestExtractSimpleResult:

    def test_reads_fields(self):
        result = extract_simple_result('noise noise {"status":"valid","message":"ok"} trailing', "email")
        assert result.type == "email"
        assert result.status == "valid"
        assert result.message == "ok"
        assert result.details == {}

    def test_defaults(self):
        result = extract_simple_result("{}", "phone")
        assert result.status == "error"
        assert result.message == "Verification completed"

    def test_unknown_status_becomes_error(self):
        assert extract_simple_result('{"status": "maybe"}', "ssn").status == "error"

    def test_keeps_details(self):
        raw = '{"status": "invalid", "message": "bad", "details": {"confidence": 0.4, "issues": ["no @"]}}'
        assert extract_simple_result(raw, "email").details == {"confidence": 0.4, "issues": ["no @"]}

    def test_no_block(self):
        result = extract_simple_result("I cannot help with that.", "email")
        assert result.status == "error"
        assert result.message == "Unable to parse AI response"

    def test_malformed_block_never_raises(self):
        result = extract_simple_result("{not json}", "email")
        assert result.status == "error"
        assert result.message == "Failed to parse verification results"


class TestExtractResult:

    def test_reads_fields(self):
        raw = 'Sure! {"veracity":"true","confidence":0.9,"reasoning":"valid format"}'
        result = extract_result(raw, "email")
        assert result.veracity == "true"
        assert result.confidence == 0.9
        assert result.reasoning == "valid format"

    def test_defaults(self):
        result = extract_result("{}", "custom")
        assert result.veracity == "uncertain"
        assert result.confidence == 0.0
        assert result.reasoning == "Verification completed"

    def test_boolean_veracity(self):
        assert extract_result('{"veracity": false}', "ssn").veracity == "false"

    def test_unknown_veracity(self):
        assert extract_result('{"veracity": "probably"}', "ssn").veracity == "uncertain"

    @pytest.mark.parametrize("value,expected", [("0.75", 0.75), (1.5, 1.0), (-2, 0.0), ("high", 0.0), (None, 0.0)])
    def test_confidence_coerced_into_range(self, value, expected):
        raw = '{"confidence": %s}' % ("null" if value is None else repr(value).replace("'", '"'))
        assert extract_result(raw, "email").confidence == expected

    def test_no_block(self):
        result = extract_result("nothing here", "email")
        assert result.veracity == "uncertain"
        assert result.confidence == 0.0
        assert result.reasoning == "Unable to parse AI response"

    def test_malformed_block(self):
        result = extract_result('{"veracity": "true",,}', "email")
        assert result.veracity == "uncertain"
        assert result.reasoning == "Failed to parse verification results"


class TestCallModel:

    def test_returns_first_candidate_text(self):
        payload = {"candidates": [{"content": {"parts": [{"text": "hello"}, {"text": "ignored"}]}}]}
        with patch("truecheck.model.requests.post", return_value=_response(200, payload)) as post:
            assert call_model("prompt", "secret") == "hello"

        args, kwargs = post.call_args
        assert args[0] == settings.model_url
        assert kwargs["json"] == {"contents": [{"parts": [{"text": "prompt"}]}]}
        assert kwargs["headers"]["x-goog-api-key"] == "secret"
        assert kwargs["timeout"] == settings.REQUEST_TIMEOUT
        assert "secret" not in args[0]

    def test_empty_reply(self):
        with patch("truecheck.model.requests.post", return_value=_response(200, {"candidates": []})):
            assert call_model("prompt", "secret") == ""

    def test_http_error(self):
        with patch("truecheck.model.requests.post", return_value=_response(403, {"error": {}})):
            with pytest.raises(UpstreamError) as exc:
                call_model("prompt", "bad-key")
        assert exc.value.status_code == 403

    def test_timeout(self):
        with patch("truecheck.model.requests.post", side_effect=requests.Timeout("slow")):
            with pytest.raises(NetworkError):
                call_model("prompt", "secret")

    def test_connection_error(self):
        with patch("truecheck.model.requests.post", side_effect=requests.ConnectionError("down")):
            with pytest.raises(NetworkError):
                call_model("prompt", "secret")

    @pytest.mark.parametrize("text", [123, None, {"a": 1}, ["x"]])
    def test_non_string_text_part(self, text):
        payload = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
        with patch("truecheck.model.requests.post", return_value=_response(200, payload)):
            raw = call_model("prompt", "secret")
        assert raw == ""
        assert extract_result(raw, "email").reasoning == NO_JSON_MESSAGE
