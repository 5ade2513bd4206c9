"""
Unit tests for the default response resolver and error handler coercion.
"""

import json

import pytest

from jsonapi_connect.adapters.base import RawResponse
from jsonapi_connect.exceptions import DecodeError, GenericHttpError
from jsonapi_connect.resolver import (
    ErrorHandler,
    ResponseResolver,
    as_error_handler,
    is_jsonapi_media_type,
)


def _response(status_code, content_type, body):
    return RawResponse(
        status_code=status_code,
        headers={"content-type": content_type},
        content=body.encode("utf-8"),
        url="http://h/v1/x",
    )


class TestResponseResolver:
    """Test status/content-type discrimination."""

    @pytest.mark.parametrize("status_code", [200, 201, 204, 299, 300])
    def test_success_statuses_proceed(self, status_code):
        response = _response(status_code, "text/plain", "anything")
        assert ResponseResolver().resolve(response) is None

    def test_300_is_success_even_with_error_body(self):
        response = _response(300, "text/plain", "choose one")
        assert ResponseResolver().resolve(response) is None

    def test_301_jsonapi_error_document_is_returned(self, not_found_document):
        response = _response(
            301, "application/vnd.api+json", json.dumps(not_found_document)
        )
        assert ResponseResolver().resolve(response) == not_found_document

    def test_jsonapi_media_type_with_parameters(self, not_found_document):
        response = _response(
            422,
            "application/vnd.api+json; charset=utf-8",
            json.dumps(not_found_document),
        )
        assert ResponseResolver().resolve(response) == not_found_document

    def test_header_lookup_is_case_insensitive(self, not_found_document):
        response = RawResponse(
            status_code=404,
            headers={"Content-Type": "application/vnd.api+json"},
            content=json.dumps(not_found_document).encode(),
        )
        assert ResponseResolver().resolve(response) == not_found_document

    def test_404_plain_text_raises_with_body(self):
        response = _response(404, "text/plain", "not found")
        with pytest.raises(GenericHttpError, match="^not found$") as exc_info:
            ResponseResolver().resolve(response)
        assert str(exc_info.value) == "not found"
        assert exc_info.value.status_code == 404
        assert exc_info.value.body == "not found"
        assert exc_info.value.url == "http://h/v1/x"

    def test_plain_json_is_not_jsonapi(self):
        response = _response(500, "application/json", '{"message": "boom"}')
        with pytest.raises(GenericHttpError):
            ResponseResolver().resolve(response)

    def test_missing_content_type_raises(self):
        response = RawResponse(status_code=502, content=b"Bad Gateway")
        with pytest.raises(GenericHttpError, match="Bad Gateway"):
            ResponseResolver().resolve(response)

    def test_malformed_jsonapi_error_body_raises_decode_error(self):
        response = _response(400, "application/vnd.api+json", "{oops")
        with pytest.raises(DecodeError):
            ResponseResolver().resolve(response)

    def test_jsonapi_error_body_with_invalid_utf8_raises_decode_error(self):
        response = RawResponse(
            status_code=404,
            headers={"Content-Type": "application/vnd.api+json"},
            content=b'{"errors": [{"title": "caf\xe9"}]}',
        )
        with pytest.raises(DecodeError):
            ResponseResolver().resolve(response)

    def test_callable(self):
        response = _response(200, "text/plain", "")
        assert ResponseResolver()(response) is None


class TestMediaType:
    def test_matches(self):
        assert is_jsonapi_media_type("application/vnd.api+json")
        assert is_jsonapi_media_type("Application/VND.API+JSON; ext=bulk")

    def test_no_match(self):
        assert not is_jsonapi_media_type("application/json")
        assert not is_jsonapi_media_type("")
        assert not is_jsonapi_media_type(None)


class TestAsErrorHandler:
    """Test coercion of handler arguments."""

    def test_none_is_default_resolver(self):
        assert isinstance(as_error_handler(None), ResponseResolver)

    def test_strategy_object_passes_through(self):
        class Strict:
            def resolve(self, response):
                if response.status_code >= 300:
                    raise RuntimeError("strict")

        handler = Strict()
        assert as_error_handler(handler) is handler
        assert isinstance(handler, ErrorHandler)

    def test_plain_function_is_wrapped(self):
        seen = []
        handler = as_error_handler(seen.append)
        response = RawResponse(status_code=418)
        assert handler.resolve(response) is None
        assert seen == [response]

    def test_invalid_handler(self):
        with pytest.raises(TypeError):
            as_error_handler(42)
