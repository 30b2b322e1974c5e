"""HTTP requests whose JSON responses are mapped straight into a model.

Failures never raise: every call returns either :class:`RequestSuccess` or
:class:`RequestFailure`, and the model is only mapped on success.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from driftjson.core.instance import ModelInstance
from driftjson.exceptions import (
    DriftJSONError,
    EmptyResponseError,
    HTTPStatusError,
    InvalidURLError,
    NetworkError,
    ParsingError,
    UnsupportedMethodError,
)
from driftjson.models import Configuration

logger = logging.getLogger(__name__)


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class RequestSuccess:
    model: ModelInstance | None
    raw_response: dict[str, Any]


@dataclass(frozen=True)
class RequestFailure:
    error: DriftJSONError


RequestResult = RequestSuccess | RequestFailure


def _valid_url(url: str) -> httpx.URL | None:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError):
        return None
    if parsed.scheme not in ("http", "https") or not parsed.host:
        return None
    return parsed


class ModelRequest:
    def __init__(self, configuration: Configuration | None = None, client: httpx.AsyncClient | None = None) -> None:
        self._configuration = configuration or Configuration()
        self._client = client
        self._owns_client = client is None

    def build_headers(self, headers: dict[str, str] | None = None) -> dict[str, str]:
        """Default JSON headers, then auth, then common headers, then call-site headers."""
        merged = {"Content-Type": "application/json", "Accept": "application/json"}
        provider = self._configuration.auth_token_provider
        if provider is not None:
            token = provider()
            if token:
                merged["Authorization"] = f"Bearer {token}"
        merged.update(self._configuration.common_headers)
        merged.update(headers or {})
        return merged

    async def execute(
        self,
        method: HTTPMethod | str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        model: ModelInstance | None = None,
    ) -> RequestResult:
        target = _valid_url(url)
        if target is None:
            return RequestFailure(InvalidURLError(url))
        raw_method = method.value if isinstance(method, HTTPMethod) else str(method)
        try:
            method = HTTPMethod(raw_method.upper())
        except ValueError:
            return RequestFailure(UnsupportedMethodError(raw_method))

        request_kwargs: dict[str, Any] = {
            "headers": self.build_headers(headers),
            "timeout": self._configuration.request_timeout,
        }
        if params:
            if method is HTTPMethod.GET:
                request_kwargs["params"] = {k: str(v) for k, v in params.items()}
            else:
                request_kwargs["content"] = json.dumps(params).encode()

        logger.info("-> %s %s", method.value, url)
        client = self._client or httpx.AsyncClient()
        try:
            response = await client.request(method.value, target, **request_kwargs)
        except httpx.HTTPError as exc:
            logger.error("x %s -- %s", url, exc)
            return RequestFailure(NetworkError(exc))
        finally:
            if self._owns_client:
                await client.aclose()

        return self._handle_response(response, url, model)

    def _handle_response(self, response: httpx.Response, url: str, model: ModelInstance | None) -> RequestResult:
        if not 200 <= response.status_code <= 299:
            logger.error("x %s -- HTTP %d", url, response.status_code)
            return RequestFailure(HTTPStatusError(response.status_code))
        if not response.content:
            return RequestFailure(EmptyResponseError())

        try:
            body = json.loads(response.content)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
            logger.error("x JSON parse error: %s", exc)
            return RequestFailure(ParsingError(str(exc)))

        target = model.name if model is not None else "no model"
        if isinstance(body, dict):
            if model is not None:
                model.map(body)
            logger.info("ok %s -- mapped %d key(s) into %s", url, len(body), target)
            return RequestSuccess(model=model, raw_response=body)
        if isinstance(body, list) and all(isinstance(item, dict) for item in body):
            if model is not None:
                model.map(body)
            logger.info("ok %s -- mapped array (%d item(s)) into %s", url, len(body), target)
            return RequestSuccess(model=model, raw_response={"items": body})
        return RequestFailure(ParsingError("Unexpected JSON root type."))

    async def get(self, url: str, **kwargs: Any) -> RequestResult:
        return await self.execute(HTTPMethod.GET, url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> RequestResult:
        return await self.execute(HTTPMethod.POST, url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> RequestResult:
        return await self.execute(HTTPMethod.PUT, url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> RequestResult:
        return await self.execute(HTTPMethod.PATCH, url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> RequestResult:
        return await self.execute(HTTPMethod.DELETE, url, **kwargs)
