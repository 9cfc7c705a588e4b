# yandex_sdk/llm/chat_translation.py
# SPDX-License-Identifier: Apache-2.0
"""
Chat request building and response translation.

Both directions are pure functions; the adapter glues them around the HTTP
call. Everything that can be rejected (unknown model, unsupported role, empty
prompt) is rejected here, before any network activity.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from yandex_sdk.api.models import build_uri, resolve_chat_model
from yandex_sdk.api.wire import (
    CompletionMessage,
    CompletionOptions,
    CompletionRequest,
    CompletionResult,
    CompletionStatus,
    Role,
    Usage,
)
from yandex_sdk.core.errors import BadRequest, UnsupportedRoleError
from yandex_sdk.llm.llm_base import ChatResult, ChatTurn, Generation, TokenUsage
from yandex_sdk.options import YandexChatOptions

LOG = logging.getLogger(__name__)

_ROLES = {r.value: r for r in Role}


def to_wire_role(role: str) -> Role:
    """Map a generic role name onto the vendor role; anything else is rejected."""
    try:
        return _ROLES[role]
    except (KeyError, TypeError):
        raise UnsupportedRoleError(
            f"Unsupported message role: {role!r}",
            details={"role": str(role), "supported": sorted(_ROLES)},
        ) from None


def build_chat_request(
    turns: Sequence[ChatTurn],
    options: YandexChatOptions,
    folder_id: str,
) -> CompletionRequest:
    """Build the completion body for `turns` under the effective `options`."""
    if not turns:
        raise BadRequest("chat prompt must contain at least one message")
    if options.model is None:
        raise BadRequest("chat model must be set")

    descriptor = resolve_chat_model(options.model)
    messages = [
        CompletionMessage(role=to_wire_role(t.role).value, text=t.content)
        for t in turns
    ]
    return CompletionRequest(
        model_uri=build_uri(descriptor, folder_id),
        completion_options=CompletionOptions(
            stream=False,
            temperature=options.temperature,
            max_tokens=options.max_tokens,
        ),
        messages=messages,
    )


def to_token_usage(usage: Optional[Usage]) -> TokenUsage:
    if usage is None:
        return TokenUsage()
    prompt = usage.input_text_tokens or 0
    completion = usage.completion_tokens or 0
    total = usage.total_tokens if usage.total_tokens is not None else prompt + completion
    return TokenUsage(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total)


def to_chat_result(envelope: Optional[CompletionResult]) -> ChatResult:
    """
    Translate a completion body into a ChatResult.

    A missing body or missing `result` is a degraded success: zero
    generations, zero usage and a warning.
    """
    if envelope is None or envelope.result is None:
        LOG.warning("No chat completion returned by the Foundation Models API")
        return ChatResult()

    response = envelope.result
    generations: List[Generation] = []
    for alternative in response.alternatives:
        message = alternative.message
        text = message.text if message is not None and message.text is not None else ""
        status = alternative.status or CompletionStatus.ALTERNATIVE_STATUS_UNSPECIFIED.value
        generations.append(Generation(text=text, finish_reason=status))

    return ChatResult(
        generations=generations,
        usage=to_token_usage(response.usage),
        model=response.model_version,
    )


__all__ = [
    "to_wire_role",
    "build_chat_request",
    "to_token_usage",
    "to_chat_result",
]
