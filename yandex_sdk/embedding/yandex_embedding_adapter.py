# yandex_sdk/embedding/yandex_embedding_adapter.py
# SPDX-License-Identifier: Apache-2.0
"""
Yandex text-embedding adapter.

The text-embedding endpoint embeds exactly one text per request, so a batch
of N texts becomes N HTTP calls. By default they run one after another in
input order; `max_concurrency > 1` runs them through a bounded pool. Either
way each vector is written back by input index:

    texts:    ["a", "b", "c"]
    vendor:   [vec_a, null, vec_c]
    result:   [Embedding(0, vec_a), Embedding(1, []), Embedding(2, vec_c)]

Each request is retried independently; a request that still fails after
retries fails the whole call and cancels the requests still in flight.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from yandex_sdk._version import __version__
from yandex_sdk.api.models import EMBEDDING_MODELS, embedding_model_keys, resolve_embedding_model
from yandex_sdk.api.wire import TextEmbeddingRequest, TextEmbeddingResponse
from yandex_sdk.api.yandex_api import YandexApi
from yandex_sdk.core.errors import BadRequest
from yandex_sdk.core.metrics import MetricsSink
from yandex_sdk.core.retry import RetryPolicy, retry_async
from yandex_sdk.embedding.embedding_base import (
    BaseEmbeddingAdapter,
    Embedding,
    EmbeddingCapabilities,
    EmbeddingResult,
)
from yandex_sdk.embedding.embedding_translation import (
    build_embedding_requests,
    to_embedding_vector,
)
from yandex_sdk.options import YandexEmbeddingOptions, merge_embedding_options

logger = logging.getLogger(__name__)


class YandexEmbeddingAdapter(BaseEmbeddingAdapter):
    """
    Embedding adapter backed by the Foundation Models text-embedding API.

    Parameters
    ----------
    api:
        `YandexApi` used for every call. The adapter closes it on `close()`.
    folder_id:
        Folder (tenant) id placed in every model URI. Must be non-blank.
    default_options:
        Defaults to model "text-search-doc", 256 dimensions.
    retry_policy:
        Retry policy applied to each per-text request.
    metrics:
        Metrics sink; defaults to NoopMetrics.
    max_concurrency:
        Maximum number of in-flight requests per call (1 = sequential).
    """

    _provider = "yandex"

    def __init__(
        self,
        api: YandexApi,
        folder_id: str,
        default_options: Optional[YandexEmbeddingOptions] = None,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        metrics: Optional[MetricsSink] = None,
        max_concurrency: int = 1,
    ) -> None:
        if api is None:
            raise BadRequest("api must not be None")
        if not folder_id or not str(folder_id).strip():
            raise BadRequest("folder_id must be a non-empty string")
        if max_concurrency < 1:
            raise BadRequest("max_concurrency must be >= 1")

        super().__init__(metrics=metrics)
        self._api = api
        self._folder_id = folder_id
        self._default_options = (default_options or YandexEmbeddingOptions()).copy()
        self._retry_policy = retry_policy or RetryPolicy()
        self._max_concurrency = int(max_concurrency)

    @property
    def folder_id(self) -> str:
        return self._folder_id

    @property
    def default_options(self) -> YandexEmbeddingOptions:
        return self._default_options.copy()

    def dimensions(self) -> int:
        """Vector size of the default model."""
        descriptor = EMBEDDING_MODELS.get(self._default_options.model or "")
        if descriptor is not None and descriptor.dimensions:
            return descriptor.dimensions
        return int(self._default_options.dimensions or 0)

    # ------------------------------------------------------------------
    # BaseEmbeddingAdapter backend hooks
    # ------------------------------------------------------------------

    def _resolve_options(self, options: Optional[Any]) -> YandexEmbeddingOptions:
        return merge_embedding_options(options, self._default_options)

    async def _embed_one(self, request: TextEmbeddingRequest) -> Optional[TextEmbeddingResponse]:
        response, stats = await retry_async(
            lambda: self._api.text_embedding(request),
            policy=self._retry_policy,
            on_backoff=lambda attempt, delay, exc: self._count("retries_total", op="embed"),
            return_stats=True,
        )
        if stats.attempts > 1:
            logger.debug(
                "Text embedding succeeded after %d attempts (%.3fs backoff)",
                stats.attempts,
                stats.total_delay,
            )
        return response

    async def _do_call(self, texts: List[str], effective: YandexEmbeddingOptions) -> EmbeddingResult:
        requests = build_embedding_requests(texts, effective, self._folder_id)
        logger.debug(
            "Sending %d text-embedding request(s): model=%s concurrency=%d",
            len(requests),
            effective.model,
            self._max_concurrency,
        )

        responses: List[Optional[TextEmbeddingResponse]] = [None] * len(requests)
        if self._max_concurrency <= 1 or len(requests) <= 1:
            for i, request in enumerate(requests):
                responses[i] = await self._embed_one(request)
        else:
            sem = asyncio.Semaphore(self._max_concurrency)

            async def _worker(i: int, request: TextEmbeddingRequest) -> None:
                async with sem:
                    responses[i] = await self._embed_one(request)

            tasks = [asyncio.ensure_future(_worker(i, r)) for i, r in enumerate(requests)]
            try:
                await asyncio.gather(*tasks)
            except BaseException:
                # No worker may outlive a failed call.
                for task in tasks:
                    if not task.done():
                        task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        embeddings: List[Embedding] = []
        total_tokens = 0
        for i, response in enumerate(responses):
            embeddings.append(Embedding(index=i, vector=to_embedding_vector(response)))
            if response is not None and response.num_tokens:
                total_tokens += response.num_tokens

        return EmbeddingResult(
            embeddings=embeddings,
            model=effective.model,
            total_tokens=total_tokens,
        )

    async def _do_capabilities(self) -> EmbeddingCapabilities:
        default = resolve_embedding_model(self._default_options.model)
        return EmbeddingCapabilities(
            server=self._provider,
            version=__version__,
            supported_models=embedding_model_keys(),
            max_dimensions=default.dimensions,
            supports_batch=True,
        )

    async def close(self) -> None:
        await self._api.close()


__all__ = [
    "YandexEmbeddingAdapter",
]
