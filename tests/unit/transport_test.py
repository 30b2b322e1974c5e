"""Unit tests for ModelRequest against a mocked httpx transport."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from driftjson.core.instance import ModelInstance
from driftjson.exceptions import (
    EmptyResponseError,
    HTTPStatusError,
    InvalidURLError,
    NetworkError,
    ParsingError,
    UnsupportedMethodError,
)
from driftjson.models import Configuration
from driftjson.transport.http import HTTPMethod, ModelRequest, RequestFailure, RequestSuccess

Handler = Callable[[httpx.Request], httpx.Response]


def _request(handler: Handler, configuration: Configuration | None = None) -> ModelRequest:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ModelRequest(configuration, client=client)


class TestHeaders:
    def test_default_headers(self) -> None:
        headers = ModelRequest().build_headers()
        assert headers == {"Content-Type": "application/json", "Accept": "application/json"}

    def test_merge_order(self) -> None:
        configuration = Configuration(
            auth_token_provider=lambda: "tok",
            common_headers={"X-App": "demo", "Accept": "text/plain"},
        )
        headers = ModelRequest(configuration).build_headers({"X-App": "override"})

        assert headers["Authorization"] == "Bearer tok"
        assert headers["Accept"] == "text/plain"
        assert headers["X-App"] == "override"
        assert headers["Content-Type"] == "application/json"

    def test_call_site_can_override_auth(self) -> None:
        configuration = Configuration(auth_token_provider=lambda: "tok")
        headers = ModelRequest(configuration).build_headers({"Authorization": "Basic abc"})
        assert headers["Authorization"] == "Basic abc"

    def test_empty_token_adds_no_auth(self) -> None:
        configuration = Configuration(auth_token_provider=lambda: None)
        assert "Authorization" not in ModelRequest(configuration).build_headers()


class TestExecute:
    @pytest.mark.asyncio
    async def test_object_response_is_mapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"user_id": 123, "user_name": "john"})

        model = ModelInstance("loginModel")
        result = await _request(handler).get("https://api.example.com/login", model=model)

        assert isinstance(result, RequestSuccess)
        assert result.model is model
        assert result.raw_response == {"user_id": 123, "user_name": "john"}
        assert model.userId.int == 123

    @pytest.mark.asyncio
    async def test_array_response_is_wrapped_in_items(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"id": 1}, {"id": 2}])

        model = ModelInstance("listModel")
        result = await _request(handler).get("https://api.example.com/list", model=model)

        assert isinstance(result, RequestSuccess)
        assert result.raw_response == {"items": [{"id": 1}, {"id": 2}]}
        assert model.items[1].id.int == 2

    @pytest.mark.asyncio
    async def test_success_without_model(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": True})

        result = await _request(handler).get("https://api.example.com/ping")

        assert isinstance(result, RequestSuccess)
        assert result.model is None

    @pytest.mark.asyncio
    async def test_get_params_become_query_string(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        await _request(handler).get("https://api.example.com/search", params={"q": "x", "page": 2})

        assert seen[0].url.params["q"] == "x"
        assert seen[0].url.params["page"] == "2"
        assert seen[0].content == b""

    @pytest.mark.asyncio
    async def test_post_params_become_json_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"created": True})

        result = await _request(handler).post("https://api.example.com/items", params={"name": "Widget"})

        assert isinstance(result, RequestSuccess)
        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {"name": "Widget"}
        assert seen[0].headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_method_accepts_lowercase_string(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.method)
            return httpx.Response(200, json={})

        await _request(handler).execute("delete", "https://api.example.com/items/1")

        assert seen == [HTTPMethod.DELETE.value]


class TestFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["not a url", "ftp://example.com/file", "https://"])
    async def test_invalid_url(self, url: str) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        result = await _request(handler).get(url)

        assert isinstance(result, RequestFailure)
        assert isinstance(result.error, InvalidURLError)

    @pytest.mark.asyncio
    async def test_http_error_status_leaves_model_untouched(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "boom"})

        model = ModelInstance("m")
        model.map({"kept": True})
        result = await _request(handler).get("https://api.example.com/fail", model=model)

        assert isinstance(result, RequestFailure)
        assert isinstance(result.error, HTTPStatusError)
        assert result.error.status_code == 500
        assert str(result.error) == "HTTP error: 500"
        assert model.kept.bool is True

    @pytest.mark.asyncio
    async def test_empty_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(204)

        result = await _request(handler).get("https://api.example.com/empty")

        assert isinstance(result, RequestFailure)
        assert isinstance(result.error, EmptyResponseError)

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"{not json")

        result = await _request(handler).get("https://api.example.com/bad")

        assert isinstance(result, RequestFailure)
        assert isinstance(result.error, ParsingError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"42", b'"text"', b"[1, 2]", b"null"])
    async def test_unexpected_root_type(self, body: bytes) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body)

        result = await _request(handler).get("https://api.example.com/odd")

        assert isinstance(result, RequestFailure)
        assert isinstance(result.error, ParsingError)
        assert result.error.detail == "Unexpected JSON root type."

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = await _request(handler).get("https://api.example.com/down")

        assert isinstance(result, RequestFailure)
        assert isinstance(result.error, NetworkError)
        assert isinstance(result.error.cause, httpx.ConnectError)


class TestUnusualInput:
    @pytest.mark.asyncio
    async def test_unknown_method_is_reported(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        result = await _request(handler).execute("FETCH", "https://api.example.com/x")

        assert isinstance(result, RequestFailure)
        assert isinstance(result.error, UnsupportedMethodError)
        assert result.error.method == "FETCH"

    @pytest.mark.asyncio
    async def test_enum_method_is_accepted(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.method)
            return httpx.Response(200, json={})

        result = await _request(handler).execute(HTTPMethod.PUT, "https://api.example.com/x")

        assert isinstance(result, RequestSuccess)
        assert seen == ["PUT"]

    @pytest.mark.asyncio
    async def test_deeply_nested_response_is_mapped(self) -> None:
        depth = 300
        body = '{"a":' * depth + "1" + "}" * depth

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body.encode())

        model = ModelInstance("deep")
        result = await _request(handler).get("https://api.example.com/deep", model=model)

        assert isinstance(result, RequestSuccess)
        node = model
        for _ in range(depth - 1):
            node = node.get("a").as_model()
        assert node.get("a").int == 1

    @pytest.mark.asyncio
    async def test_json_too_deep_to_decode_is_a_parsing_error(self) -> None:
        depth = 200_000
        body = "[" * depth + "]" * depth

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body.encode())

        result = await _request(handler).get("https://api.example.com/deeper")

        assert isinstance(result, RequestFailure)
        assert isinstance(result.error, ParsingError)
