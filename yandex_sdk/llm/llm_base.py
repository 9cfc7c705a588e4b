# yandex_sdk/llm/llm_base.py
# SPDX-License-Identifier: Apache-2.0
"""
Vendor-neutral chat model interface.

This module defines the shapes callers program against:

    turns:   [ChatTurn("system", "..."), ChatTurn("user", "hello")]
             (plain {"role": ..., "content": ...} mappings are accepted too)
    options: ChatOptions(model="yandexgpt-lite", temperature=0.6)
    result:  ChatResult(generations=[Generation(text, finish_reason)],
                        usage=TokenUsage(...), model="...")

and `BaseChatAdapter`, which owns the per-call instrumentation:

    - message normalization and basic validation (before any network call)
    - effective option resolution via `_resolve_options`
    - one observation per call (component="llm", op="chat"), recorded on
      success, on degraded empty results and on failure
    - requests/tokens/empty-response counters

Concrete adapters override only the `_do_*` hooks. Metrics failures never
affect the request path.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
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
    Union,
    runtime_checkable,
)

from yandex_sdk.core.errors import BadRequest, YandexAdapterError
from yandex_sdk.core.metrics import MetricsSink, NoopMetrics

LOG = logging.getLogger(__name__)


# =============================================================================
# Request / result models
# =============================================================================

@dataclass(frozen=True)
class ChatTurn:
    """One message of a chat prompt."""
    role: str
    content: str


MessageLike = Union[ChatTurn, Mapping[str, Any]]


@dataclass
class TokenUsage:
    """
    Token usage accounting for one call.

    All fields are integers; missing vendor counts are reported as 0.
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class Generation:
    """
    One generated candidate.

    Attributes:
        text:
            Generated text ("" when the vendor omitted the message).
        finish_reason:
            Completion-status tag reported by the vendor, e.g.
            "ALTERNATIVE_STATUS_FINAL".
    """
    text: str
    finish_reason: str


@dataclass
class ChatResult:
    """
    Result of one chat call.

    An empty vendor payload yields zero generations and zero usage.
    """
    generations: List[Generation] = field(default_factory=list)
    usage: TokenUsage = field(default_factory=TokenUsage)
    model: Optional[str] = None

    @property
    def text(self) -> str:
        """Text of the first generation, or "" for an empty result."""
        return self.generations[0].text if self.generations else ""

    @property
    def is_empty(self) -> bool:
        return not self.generations


@dataclass(frozen=True)
class ChatCapabilities:
    """Static description of a chat adapter."""
    server: str
    version: str
    supported_models: Tuple[str, ...] = ()
    supports_streaming: bool = False
    supports_tools: bool = False
    supports_system_message: bool = True
    supported_roles: Tuple[str, ...] = ("system", "user", "assistant")


# =============================================================================
# Protocol
# =============================================================================

@runtime_checkable
class ChatModel(Protocol):
    """Minimal interface shared by all chat adapters."""

    async def call(
        self,
        messages: Sequence[MessageLike],
        options: Optional[Any] = None,
    ) -> ChatResult: ...

    async def capabilities(self) -> ChatCapabilities: ...


# =============================================================================
# Base adapter
# =============================================================================

def _role_name(role: Any) -> str:
    if isinstance(role, Enum):
        role = role.value
    return str(role)


class BaseChatAdapter:
    """
    Base implementation of ChatModel.

    Subclasses implement:
        _resolve_options(options) -> effective options with `to_dict()`
        _do_call(turns, effective) -> ChatResult
        _do_capabilities() -> ChatCapabilities
    """

    _component = "llm"
    _provider = "unknown"

    def __init__(self, *, metrics: Optional[MetricsSink] = None) -> None:
        self._metrics: MetricsSink = metrics or NoopMetrics()

    # --- async context management --------------------------------------------

    async def __aenter__(self) -> "BaseChatAdapter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release backend resources. Default is a no-op."""
        return None

    # --- validation ------------------------------------------------------------

    @staticmethod
    def _normalize_messages(messages: Sequence[MessageLike]) -> List[ChatTurn]:
        """
        Convert caller messages to ChatTurn, preserving order.

        Role membership is checked later by the request builder; here we only
        require a non-empty list of {role, content} items.
        """
        if isinstance(messages, (str, bytes)) or not messages:
            raise BadRequest("messages must be a non-empty list of {role, content} items")

        turns: List[ChatTurn] = []
        for i, m in enumerate(messages):
            if isinstance(m, ChatTurn):
                role, content = m.role, m.content
            elif isinstance(m, Mapping) and "role" in m and "content" in m:
                role, content = m["role"], m["content"]
            else:
                raise BadRequest(
                    "messages must be a non-empty list of {role, content} items",
                    details={"index": i},
                )
            if role is None:
                raise BadRequest("message role must not be null", details={"index": i})
            if content is None:
                raise BadRequest("message content must not be null", details={"index": i})
            turns.append(ChatTurn(role=_role_name(role), content=str(content)))
        return turns

    # --- metrics ---------------------------------------------------------------

    def _record(
        self,
        op: str,
        t0: float,
        ok: bool,
        *,
        code: str = "OK",
        **extra: Any,
    ) -> None:
        """Emit a timing observation; failures in the sink are swallowed."""
        try:
            ms = (time.monotonic() - t0) * 1000.0
            self._metrics.observe(
                component=self._component,
                op=op,
                ms=ms,
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
        """Run `call` inside one observation; re-raise errors unchanged."""
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
            self._record(op, t0, False, code=e.code or type(e).__name__, **metric_extra)
            self._count("errors_total", code=e.code or type(e).__name__)
            raise

        except Exception:
            self._record(op, t0, False, code="UnhandledException", **metric_extra)
            self._count("errors_total", code="UnhandledException")
            raise

    # --- public API --------------------------------------------------------------

    async def capabilities(self) -> ChatCapabilities:
        return await self._do_capabilities()

    async def call(
        self,
        messages: Sequence[MessageLike],
        options: Optional[Any] = None,
    ) -> ChatResult:
        """
        Execute one chat completion.

        Args:
            messages: Ordered chat turns (ChatTurn or {role, content} mappings).
            options:  Optional per-call option patch; None fields fall back to
                      the adapter defaults.

        Returns:
            ChatResult; zero generations when the vendor returned nothing.

        Raises:
            BadRequest / UnknownModelError / UnsupportedRoleError before any
            network call; TransportError after retries are exhausted.
        """
        turns = self._normalize_messages(messages)
        effective = self._resolve_options(options)

        metric_extra: Dict[str, Any] = {"provider": self._provider}
        for k, v in effective.to_dict().items():
            if v is not None:
                metric_extra[k] = v

        def _after_success(result: ChatResult) -> None:
            self._count("requests_total")
            if result.usage.total_tokens:
                self._count("tokens_processed", result.usage.total_tokens)
            if result.is_empty:
                self._count("empty_responses", op="chat")

        return await self._with_observation(
            op="chat",
            call=lambda: self._do_call(turns, effective),
            metric_extra=metric_extra,
            after_success=_after_success,
        )

    # --- backend hooks -------------------------------------------------------------

    def _resolve_options(self, options: Optional[Any]) -> Any:
        raise NotImplementedError

    async def _do_call(self, turns: List[ChatTurn], effective: Any) -> ChatResult:
        raise NotImplementedError

    async def _do_capabilities(self) -> ChatCapabilities:
        raise NotImplementedError


__all__ = [
    "ChatTurn",
    "MessageLike",
    "TokenUsage",
    "Generation",
    "ChatResult",
    "ChatCapabilities",
    "ChatModel",
    "BaseChatAdapter",
]
