# yandex_sdk/api/yandex_api.py
# SPDX-License-Identifier: Apache-2.0
"""
Async HTTP client for the Foundation Models REST endpoints.

`YandexApi` owns (or borrows) an `httpx.AsyncClient` preconfigured with the
base URL and the headers every call needs:

    Authorization: Api-Key <key>
    Content-Type:  application/json
    x-folder-id:   <folder>          (added by the factory when configured)

Failure mapping
---------------
- httpx.RequestError (DNS, connect, timeout, ...) -> TransportError(status=None, retryable=True)
- non-2xx response                                -> TransportError(status, retryable for 429/5xx)
- 2xx with undecodable JSON                       -> TransportError(status, retryable=False)
- 2xx with empty or `null` body                   -> None (the translators handle it)

The client performs exactly one HTTP exchange per method call; retries live
in `yandex_sdk.core.retry`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from yandex_sdk.api.wire import (
    CompletionRequest,
    CompletionResult,
    TextEmbeddingRequest,
    TextEmbeddingResponse,
)
from yandex_sdk.core.errors import BadRequest, TransportError

LOG = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://llm.api.cloud.yandex.net/foundationModels"
DEFAULT_COMPLETION_PATH = "/v1/completion"
DEFAULT_EMBEDDING_PATH = "/v1/textEmbedding"
DEFAULT_TIMEOUT_S = 60.0


def _status_error(response: httpx.Response) -> TransportError:
    status = response.status_code
    return TransportError(
        f"HTTP {status} for {response.request.method} {response.request.url.path}",
        status=status,
        retryable=status >= 500 or status == 429,
        details={"path": response.request.url.path},
    )


class YandexApi:
    """
    Thin async wrapper over the completion and text-embedding endpoints.

    Args:
        base_url:        API root, e.g. https://llm.api.cloud.yandex.net/foundationModels
        api_key:         API key sent as `Authorization: Api-Key <key>`
        headers:         Extra headers attached to every request
        completion_path: Path of the completion endpoint
        embedding_path:  Path of the text-embedding endpoint
        client:          Pre-built AsyncClient (never closed or modified here)
        transport:       Optional httpx transport for a client built here
        timeout_s:       Request timeout for a client built here
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        completion_path: str = DEFAULT_COMPLETION_PATH,
        embedding_path: str = DEFAULT_EMBEDDING_PATH,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        if not base_url or not str(base_url).strip():
            raise BadRequest("base_url must be a non-empty string")
        if not api_key or not str(api_key).strip():
            raise BadRequest("api_key must be a non-empty string")

        self.base_url = base_url
        self.completion_path = completion_path
        self.embedding_path = embedding_path

        default_headers = {
            "Authorization": f"Api-Key {api_key}",
            "Content-Type": "application/json",
        }
        default_headers.update(headers or {})

        self._owns_client = client is None
        if client is None:
            # Owned clients carry the headers; borrowed ones get them per request.
            self._request_headers: Optional[Dict[str, str]] = None
            self._client = httpx.AsyncClient(
                base_url=base_url,
                headers=default_headers,
                timeout=timeout_s,
                transport=transport,
            )
        else:
            self._request_headers = default_headers
            self._client = client

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def close(self) -> None:
        """Close the underlying client when it was created here."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "YandexApi":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ------------------------------------------------------------------ #
    # Endpoints
    # ------------------------------------------------------------------ #

    async def completion(self, request: CompletionRequest) -> Optional[CompletionResult]:
        """POST a completion request; only non-streaming requests are accepted."""
        if request.completion_options.stream is not False:
            raise BadRequest(
                "Streaming completion is not supported",
                details={"stream": request.completion_options.stream},
            )
        body = await self._post_json(self.completion_path, request.to_wire())
        return CompletionResult.from_wire(body)

    async def text_embedding(self, request: TextEmbeddingRequest) -> Optional[TextEmbeddingResponse]:
        """POST one text-embedding request."""
        body = await self._post_json(self.embedding_path, request.to_wire())
        return TextEmbeddingResponse.from_wire(body)

    # ------------------------------------------------------------------ #
    # HTTP
    # ------------------------------------------------------------------ #

    async def _post_json(self, path: str, payload: Mapping[str, Any]) -> Any:
        LOG.debug("POST %s", path)
        try:
            response = await self._client.post(path, json=payload, headers=self._request_headers)
        except httpx.RequestError as exc:
            raise TransportError(
                f"HTTP request failed for POST {path}: {type(exc).__name__}",
                status=None,
                retryable=True,
                details={"path": path},
            ) from exc

        if response.is_error:
            raise _status_error(response)

        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"Invalid JSON response for POST {path}",
                status=response.status_code,
                retryable=False,
                details={"path": path},
            ) from exc


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_COMPLETION_PATH",
    "DEFAULT_EMBEDDING_PATH",
    "DEFAULT_TIMEOUT_S",
    "YandexApi",
]
