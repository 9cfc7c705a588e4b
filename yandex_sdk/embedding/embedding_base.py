# yandex_sdk/embedding/embedding_base.py
# SPDX-License-Identifier: Apache-2.0
"""
Vendor-neutral embedding model interface.

    result = await adapter.call(["first doc", "second doc"])
    result.embeddings[1].vector   # vector for "second doc"

Output index k always corresponds to input index k. A missing vendor vector
shows up as an empty list at its index; the batch itself never shrinks.

`BaseEmbeddingAdapter` validates inputs, resolves effective options and wraps
each call in one observation (component="embedding", op="embed").
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    runtime_checkable,
)

from yandex_sdk.core.errors import BadRequest, YandexAdapterError
from yandex_sdk.core.metrics import MetricsSink, NoopMetrics

LOG = logging.getLogger(__name__)


@dataclass
class Embedding:
    """One output vector and the input index it belongs to."""
    index: int
    vector: List[float]

    @property
    def dimensions(self) -> int:
        return len(self.vector)


@dataclass
class EmbeddingResult:
    """
    Result of one embedding call.

    Attributes:
        embeddings:
            One entry per input, in input order.
        model:
            Logical model key used for the call.
        total_tokens:
            Sum of the token counts reported by the vendor (0 when absent).
    """
    embeddings: List[Embedding] = field(default_factory=list)
    model: Optional[str] = None
    total_tokens: int = 0

    @property
    def vectors(self) -> List[List[float]]:
        return [e.vector for e in self.embeddings]


@dataclass(frozen=True)
class EmbeddingCapabilities:
    """Static description of an embedding adapter."""
    server: str
    version: str
    supported_models: Tuple[str, ...] = ()
    max_dimensions: Optional[int] = None
    supports_batch: bool = True


@runtime_checkable
class EmbeddingModel(Protocol):
    """Minimal interface shared by all embedding adapters."""

    async def call(
        self,
        texts: Sequence[str],
        options: Optional[Any] = None,
    ) -> EmbeddingResult: ...

    async def embed(self, text: str) -> List[float]: ...

    def dimensions(self) -> int: ...

    async def capabilities(self) -> EmbeddingCapabilities: ...


class BaseEmbeddingAdapter:
    """
    Base implementation of EmbeddingModel.

    Subclasses implement `_resolve_options`, `_do_call`, `_do_capabilities`
    and `dimensions`.
    """

    _component = "embedding"
    _provider = "unknown"

    def __init__(self, *, metrics: Optional[MetricsSink] = None) -> None:
        self._metrics: MetricsSink = metrics or NoopMetrics()

    async def __aenter__(self) -> "BaseEmbeddingAdapter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        return None

    # --- validation ------------------------------------------------------------

    @staticmethod
    def _validate_texts(texts: Sequence[str]) -> List[str]:
        if isinstance(texts, (str, bytes)):
            raise BadRequest("texts must be a list of strings, not a single string")
        if not isinstance(texts, Sequence):
            raise BadRequest(
                "texts must be a list of strings",
                details={"type": type(texts).__name__},
            )
        out = list(texts)
        for i, t in enumerate(out):
            if not isinstance(t, str):
                raise BadRequest("texts must contain only strings", details={"index": i})
        return out

    # --- metrics ---------------------------------------------------------------

    def _record(self, op: str, t0: float, ok: bool, *, code: str = "OK", **extra: Any) -> None:
        try:
            self._metrics.observe(
                component=self._component,
                op=op,
                ms=(time.monotonic() - t0) * 1000.0,
                ok=ok,
                code=code,
                extra=dict(extra) or None,
            )
        except Exception:
            pass

    def _count(self, name: str, value: int = 1, **extra: Any) -> None:
        try:
            self._metrics.counter(
                component=self._component,
                name=name,
                value=value,
                extra=dict(extra) or None,
            )
        except Exception:
            pass

    async def _with_observation(
        self,
        *,
        op: str,
        call: Callable[[], Awaitable[Any]],
        metric_extra: Mapping[str, Any],
        after_success: Optional[Callable[[Any], None]] = None,
    ) -> Any:
        metric_extra = dict(metric_extra)
        t0 = time.monotonic()
        try:
            result = await call()
            if after_success is not None:
                try:
                    after_success(result)
                except Exception:
                    pass
            self._record(op, t0, True, **metric_extra)
            return result
        except YandexAdapterError as e:
            code = e.code or type(e).__name__
            self._record(op, t0, False, code=code, **metric_extra)
            self._count("errors_total", code=code)
            raise
        except Exception:
            self._record(op, t0, False, code="UnhandledException", **metric_extra)
            self._count("errors_total", code="UnhandledException")
            raise

    # --- public API --------------------------------------------------------------

    async def capabilities(self) -> EmbeddingCapabilities:
        return await self._do_capabilities()

    async def call(
        self,
        texts: Sequence[str],
        options: Optional[Any] = None,
    ) -> EmbeddingResult:
        """
        Embed a batch of texts.

        Args:
            texts:   Input texts; an empty list yields an empty result.
            options: Optional per-call option patch.

        Returns:
            EmbeddingResult index-aligned with `texts`.
        """
        items = self._validate_texts(texts)
        effective = self._resolve_options(options)

        metric_extra: Dict[str, Any] = {"provider": self._provider, "batch_size": len(items)}
        for k, v in effective.to_dict().items():
            if v is not None:
                metric_extra[k] = v

        def _after_success(result: EmbeddingResult) -> None:
            self._count("requests_total")
            self._count("texts_embedded", len(result.embeddings))
            if result.total_tokens:
                self._count("tokens_processed", result.total_tokens)
            empty = sum(1 for e in result.embeddings if not e.vector)
            if empty:
                self._count("empty_responses", empty, op="embed")

        return await self._with_observation(
            op="embed",
            call=lambda: self._do_call(items, effective),
            metric_extra=metric_extra,
            after_success=_after_success,
        )

    async def embed(self, text: str) -> List[float]:
        """Embed a single text and return its vector."""
        result = await self.call([text])
        return result.embeddings[0].vector

    def dimensions(self) -> int:
        raise NotImplementedError

    # --- backend hooks -------------------------------------------------------------

    def _resolve_options(self, options: Optional[Any]) -> Any:
        raise NotImplementedError

    async def _do_call(self, texts: List[str], effective: Any) -> EmbeddingResult:
        raise NotImplementedError

    async def _do_capabilities(self) -> EmbeddingCapabilities:
        raise NotImplementedError


__all__ = [
    "Embedding",
    "EmbeddingResult",
    "EmbeddingCapabilities",
    "EmbeddingModel",
    "BaseEmbeddingAdapter",
]
