"""Tests for RequestBuilder and its helpers."""

import json
from enum import Enum

import pytest

from attio.config import AttioConfig
from attio.errors import AuthenticationError
from attio.http.request_builder import (
    RequestBuilder,
    build_headers,
    flatten_params,
    generate_request_id,
    normalize_header_key,
    normalize_params,
)
from attio.version import __version__


class Direction(Enum):
    ASC = "asc"


@pytest.fixture
def config():
    return AttioConfig(api_key="test-key")


class TestRequestBuilder:
    def test_get_sends_params_as_query(self, config):
        params = {"limit": 10, "filter": {"name": "Ada"}}

        request = RequestBuilder.build("get", "objects/people/records", params, config=config)

        assert request.method == "GET"
        assert request.url == "https://api.attio.com/v2/objects/people/records"
        assert request.query == [("limit", "10"), ("filter[name]", "Ada")]
        assert request.body is None

    def test_post_sends_params_as_json(self, config):
        request = RequestBuilder.build("POST", "/objects", {"data": {"api_slug": "deals"}}, config=config)

        assert request.url == "https://api.attio.com/v2/objects"
        assert json.loads(request.body) == {"data": {"api_slug": "deals"}}
        assert request.query == []

    def test_no_params(self, config):
        request = RequestBuilder.build("DELETE", "webhooks/wh_1", config=config)

        assert request.query == []
        assert request.body is None
        assert request.params is None

    def test_headers(self, config):
        request = RequestBuilder.build("GET", "objects", headers={"x_custom_header": "1"}, config=config)

        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.headers["User-Agent"] == f"attio-python/{__version__}"
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["X-Custom-Header"] == "1"
        assert request.request_id == request.headers["X-Request-ID"]

    def test_per_request_api_key_overrides_config(self, config):
        request = RequestBuilder.build("GET", "objects", api_key="override", config=config)

        assert request.headers["Authorization"] == "Bearer override"

    def test_missing_api_key_raises(self):
        with pytest.raises(AuthenticationError, match="No API key provided"):
            RequestBuilder.build("GET", "objects", config=AttioConfig())

    def test_enum_values_are_normalized(self, config):
        request = RequestBuilder.build("POST", "records", {"sort": {"direction": Direction.ASC}}, config=config)

        assert json.loads(request.body) == {"sort": {"direction": "asc"}}


class TestHelpers:
    def test_generate_request_id_is_unique(self):
        first = generate_request_id()

        assert first.startswith("req_")
        assert len(first) == len("req_") + 32
        assert first != generate_request_id()

    def test_build_headers_stringifies_extra_values(self):
        headers = build_headers("key", {"x-retry": 2})

        assert headers["X-Retry"] == "2"

    @pytest.mark.parametrize(
        "key,expected",
        [("x_request_id", "X-Request-Id"), ("content-type", "Content-Type"), ("IDEMPOTENCY_KEY", "Idempotency-Key")],
    )
    def test_normalize_header_key(self, key, expected):
        assert normalize_header_key(key) == expected

    def test_normalize_params_stringifies_keys(self):
        assert normalize_params({1: [{"a": Direction.ASC}], "b": (1, 2)}) == {"1": [{"a": "asc"}], "b": [1, 2]}

    def test_flatten_params_nested(self):
        params = {
            "filter": {"status": {"$eq": "open"}},
            "ids": ["a", "b"],
            "sorts": [{"field": "name"}],
            "active": True,
            "skip": None,
        }

        assert flatten_params(params) == [
            ("filter[status][$eq]", "open"),
            ("ids[0]", "a"),
            ("ids[1]", "b"),
            ("sorts[0][field]", "name"),
            ("active", "true"),
        ]
