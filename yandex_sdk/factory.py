# yandex_sdk/factory.py
# SPDX-License-Identifier: Apache-2.0
"""
Adapter wiring from settings.

    adapter = create_chat_adapter()          # everything from the environment
    if adapter is not None:
        async with adapter:
            result = await adapter.call([{"role": "user", "content": "hi"}])

Each factory resolves the effective connection, builds a `YandexApi` with the
API-key and folder headers, and hands it to the adapter together with the
default options, retry policy and metrics sink. A disabled model kind yields
None.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from yandex_sdk.api.yandex_api import DEFAULT_TIMEOUT_S, YandexApi
from yandex_sdk.config import (
    ChatSettings,
    ConnectionSettings,
    EmbeddingSettings,
    ResolvedConnection,
    resolve_connection,
)
from yandex_sdk.core.errors import BadRequest
from yandex_sdk.core.metrics import MetricsSink
from yandex_sdk.core.retry import RetryPolicy
from yandex_sdk.embedding.yandex_embedding_adapter import YandexEmbeddingAdapter
from yandex_sdk.llm.yandex_chat_adapter import YandexChatAdapter

LOG = logging.getLogger(__name__)


def _require(resolved: ResolvedConnection, kind: str) -> None:
    if not resolved.api_key:
        raise BadRequest(
            f"Yandex API key is not configured for {kind}; set YANDEX_API_KEY",
            details={"kind": kind},
        )
    if not resolved.folder_id:
        raise BadRequest(
            f"Yandex folder id is not configured for {kind}; set YANDEX_FOLDER_ID",
            details={"kind": kind},
        )


def create_chat_adapter(
    connection: Optional[ConnectionSettings] = None,
    settings: Optional[ChatSettings] = None,
    *,
    retry_policy: Optional[RetryPolicy] = None,
    metrics: Optional[MetricsSink] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> Optional[YandexChatAdapter]:
    """Build a chat adapter, reading missing settings from the environment."""
    connection = connection or ConnectionSettings.from_env()
    settings = settings or ChatSettings.from_env()
    if not settings.enabled:
        LOG.debug("Chat adapter disabled by settings")
        return None

    resolved = resolve_connection(connection, settings)
    _require(resolved, "chat")
    api = YandexApi(
        resolved.base_url,
        resolved.api_key,
        headers=resolved.headers,
        completion_path=settings.completion_path,
        transport=transport,
        timeout_s=timeout_s,
    )
    return YandexChatAdapter(
        api,
        resolved.folder_id,
        settings.options,
        retry_policy=retry_policy,
        metrics=metrics,
    )


def create_embedding_adapter(
    connection: Optional[ConnectionSettings] = None,
    settings: Optional[EmbeddingSettings] = None,
    *,
    retry_policy: Optional[RetryPolicy] = None,
    metrics: Optional[MetricsSink] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    max_concurrency: int = 1,
) -> Optional[YandexEmbeddingAdapter]:
    """Build an embedding adapter, reading missing settings from the environment."""
    connection = connection or ConnectionSettings.from_env()
    settings = settings or EmbeddingSettings.from_env()
    if not settings.enabled:
        LOG.debug("Embedding adapter disabled by settings")
        return None

    resolved = resolve_connection(connection, settings)
    _require(resolved, "embedding")
    api = YandexApi(
        resolved.base_url,
        resolved.api_key,
        headers=resolved.headers,
        embedding_path=settings.embedding_path,
        transport=transport,
        timeout_s=timeout_s,
    )
    return YandexEmbeddingAdapter(
        api,
        resolved.folder_id,
        settings.options,
        retry_policy=retry_policy,
        metrics=metrics,
        max_concurrency=max_concurrency,
    )


__all__ = [
    "create_chat_adapter",
    "create_embedding_adapter",
]
