# yandex_sdk/llm/yandex_chat_adapter.py
# SPDX-License-Identifier: Apache-2.0
"""
YandexGPT chat adapter.

Implements `BaseChatAdapter` on top of the Foundation Models completion
endpoint.

Usage
-----
    from yandex_sdk.api.yandex_api import YandexApi
    from yandex_sdk.llm import YandexChatAdapter

    api = YandexApi(api_key="...", headers={"x-folder-id": "b1g..."})
    async with YandexChatAdapter(api, folder_id="b1g...") as adapter:
        result = await adapter.call([{"role": "user", "content": "Hello!"}])
        print(result.text)

Per call:
    1. merge caller options over the adapter defaults
    2. build the completion body (model URI, roles, stream=False)
    3. POST under the retry policy
    4. translate alternatives and usage into a ChatResult

Steps 1-2 raise before any network activity. An empty vendor body is
returned as a ChatResult with zero generations, never retried.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from yandex_sdk._version import __version__
from yandex_sdk.api.models import chat_model_keys
from yandex_sdk.api.yandex_api import YandexApi
from yandex_sdk.core.errors import BadRequest
from yandex_sdk.core.metrics import MetricsSink
from yandex_sdk.core.retry import RetryPolicy, retry_async
from yandex_sdk.llm.chat_translation import build_chat_request, to_chat_result
from yandex_sdk.llm.llm_base import BaseChatAdapter, ChatCapabilities, ChatResult, ChatTurn
from yandex_sdk.options import YandexChatOptions, merge_chat_options

logger = logging.getLogger(__name__)


class YandexChatAdapter(BaseChatAdapter):
    """
    Chat adapter backed by the YandexGPT completion API.

    Parameters
    ----------
    api:
        `YandexApi` used for every call. The adapter closes it on `close()`.
    folder_id:
        Folder (tenant) id placed in every model URI. Must be non-blank.
    default_options:
        Options used when a call does not override them. Defaults to
        model "yandexgpt", temperature 0.3.
    retry_policy:
        Retry policy for the HTTP call. Defaults to `RetryPolicy()`.
    metrics:
        Metrics sink; defaults to NoopMetrics.
    """

    _provider = "yandex"

    def __init__(
        self,
        api: YandexApi,
        folder_id: str,
        default_options: Optional[YandexChatOptions] = None,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        metrics: Optional[MetricsSink] = None,
    ) -> None:
        if api is None:
            raise BadRequest("api must not be None")
        if not folder_id or not str(folder_id).strip():
            raise BadRequest("folder_id must be a non-empty string")

        super().__init__(metrics=metrics)
        self._api = api
        self._folder_id = folder_id
        self._default_options = (default_options or YandexChatOptions()).copy()
        self._retry_policy = retry_policy or RetryPolicy()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def folder_id(self) -> str:
        return self._folder_id

    @property
    def default_options(self) -> YandexChatOptions:
        """A copy of the adapter defaults."""
        return self._default_options.copy()

    # ------------------------------------------------------------------
    # BaseChatAdapter backend hooks
    # ------------------------------------------------------------------

    def _resolve_options(self, options: Optional[Any]) -> YandexChatOptions:
        return merge_chat_options(options, self._default_options)

    async def _do_call(self, turns: List[ChatTurn], effective: YandexChatOptions) -> ChatResult:
        request = build_chat_request(turns, effective, self._folder_id)
        logger.debug(
            "Sending chat completion: model=%s messages=%d",
            effective.model,
            len(request.messages),
        )
        envelope, stats = await retry_async(
            lambda: self._api.completion(request),
            policy=self._retry_policy,
            on_backoff=lambda attempt, delay, exc: self._count("retries_total", op="chat"),
            return_stats=True,
        )
        if stats.attempts > 1:
            logger.debug(
                "Chat completion succeeded after %d attempts (%.3fs backoff)",
                stats.attempts,
                stats.total_delay,
            )
        return to_chat_result(envelope)

    async def _do_capabilities(self) -> ChatCapabilities:
        return ChatCapabilities(
            server=self._provider,
            version=__version__,
            supported_models=chat_model_keys(),
            supports_streaming=False,
            supports_tools=False,
        )

    # ------------------------------------------------------------------
    # Resource cleanup
    # ------------------------------------------------------------------

    async def close(self) -> None:
        await self._api.close()


__all__ = [
    "YandexChatAdapter",
]
