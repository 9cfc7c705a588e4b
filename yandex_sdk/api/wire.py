# yandex_sdk/api/wire.py
# SPDX-License-Identifier: Apache-2.0
"""
JSON wire records for the Foundation Models REST API.

Requests serialize to camelCase JSON with None fields omitted. Responses are
parsed leniently: any field may be missing or null, and the translators decide
what absence means.

    POST /v1/completion
        {"modelUri": "gpt://<folder>/yandexgpt/latest",
         "completionOptions": {"stream": false, "temperature": 0.3, "maxTokens": 200},
         "messages": [{"role": "user", "text": "hello"}]}
    ->  {"result": {"alternatives": [{"message": {"role": "assistant", "text": "hi"},
                                      "status": "ALTERNATIVE_STATUS_FINAL"}],
                    "usage": {"inputTextTokens": "1", "completionTokens": "1",
                              "totalTokens": "2"},
                    "modelVersion": "06.12.2023"}}

    POST /v1/textEmbedding
        {"modelUri": "emb://<folder>/text-search-doc/latest", "text": "hello"}
    ->  {"embedding": [0.1, ...], "numTokens": "1", "modelVersion": "..."}

Token counts are int64 in the vendor schema and arrive as JSON strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class CompletionStatus(str, Enum):
    """Generation status of one alternative."""
    # Unspecified generation status.
    ALTERNATIVE_STATUS_UNSPECIFIED = "ALTERNATIVE_STATUS_UNSPECIFIED"
    # Partially generated alternative.
    ALTERNATIVE_STATUS_PARTIAL = "ALTERNATIVE_STATUS_PARTIAL"
    # Incomplete final alternative; the token limit was reached.
    ALTERNATIVE_STATUS_TRUNCATED_FINAL = "ALTERNATIVE_STATUS_TRUNCATED_FINAL"
    # Final alternative generated without running into any limits.
    ALTERNATIVE_STATUS_FINAL = "ALTERNATIVE_STATUS_FINAL"
    # Stopped because of potentially sensitive content in prompt or response.
    ALTERNATIVE_STATUS_CONTENT_FILTER = "ALTERNATIVE_STATUS_CONTENT_FILTER"


def _drop_none(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in payload.items() if v is not None}


def _as_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_mapping(value: Any) -> Optional[Mapping[str, Any]]:
    return value if isinstance(value, Mapping) else None


# =============================================================================
# Completion
# =============================================================================

@dataclass(frozen=True)
class CompletionMessage:
    role: Optional[str]
    text: Optional[str]

    def to_wire(self) -> Dict[str, Any]:
        return _drop_none({"role": self.role, "text": self.text})

    @classmethod
    def from_wire(cls, data: Any) -> Optional["CompletionMessage"]:
        data = _as_mapping(data)
        if data is None:
            return None
        return cls(role=data.get("role"), text=data.get("text"))


@dataclass(frozen=True)
class CompletionOptions:
    stream: bool = False
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

    def to_wire(self) -> Dict[str, Any]:
        return _drop_none({
            "stream": self.stream,
            "temperature": self.temperature,
            "maxTokens": self.max_tokens,
        })


@dataclass(frozen=True)
class CompletionRequest:
    model_uri: str
    completion_options: CompletionOptions
    messages: List[CompletionMessage] = field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        return _drop_none({
            "modelUri": self.model_uri,
            "completionOptions": self.completion_options.to_wire(),
            "messages": [m.to_wire() for m in self.messages],
        })


@dataclass(frozen=True)
class Usage:
    input_text_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    @classmethod
    def from_wire(cls, data: Any) -> Optional["Usage"]:
        data = _as_mapping(data)
        if data is None:
            return None
        return cls(
            input_text_tokens=_as_int(data.get("inputTextTokens")),
            completion_tokens=_as_int(data.get("completionTokens")),
            total_tokens=_as_int(data.get("totalTokens")),
        )


@dataclass(frozen=True)
class Alternative:
    message: Optional[CompletionMessage]
    status: Optional[str]

    @classmethod
    def from_wire(cls, data: Any) -> "Alternative":
        data = _as_mapping(data) or {}
        return cls(
            message=CompletionMessage.from_wire(data.get("message")),
            status=data.get("status"),
        )


@dataclass(frozen=True)
class CompletionResponse:
    alternatives: List[Alternative] = field(default_factory=list)
    usage: Optional[Usage] = None
    model_version: Optional[str] = None

    @classmethod
    def from_wire(cls, data: Any) -> Optional["CompletionResponse"]:
        data = _as_mapping(data)
        if data is None:
            return None
        return cls(
            alternatives=[Alternative.from_wire(a) for a in (data.get("alternatives") or [])],
            usage=Usage.from_wire(data.get("usage")),
            model_version=data.get("modelVersion"),
        )


@dataclass(frozen=True)
class CompletionResult:
    """Top-level completion body; `result` may be absent."""
    result: Optional[CompletionResponse] = None

    @classmethod
    def from_wire(cls, data: Any) -> Optional["CompletionResult"]:
        data = _as_mapping(data)
        if data is None:
            return None
        return cls(result=CompletionResponse.from_wire(data.get("result")))


# =============================================================================
# Text embedding
# =============================================================================

@dataclass(frozen=True)
class TextEmbeddingRequest:
    model_uri: str
    text: str

    def to_wire(self) -> Dict[str, Any]:
        return _drop_none({"modelUri": self.model_uri, "text": self.text})


@dataclass(frozen=True)
class TextEmbeddingResponse:
    embedding: Optional[List[float]] = None
    num_tokens: Optional[int] = None
    model_version: Optional[str] = None

    @classmethod
    def from_wire(cls, data: Any) -> Optional["TextEmbeddingResponse"]:
        data = _as_mapping(data)
        if data is None:
            return None
        embedding = data.get("embedding")
        return cls(
            embedding=list(embedding) if isinstance(embedding, list) else None,
            num_tokens=_as_int(data.get("numTokens")),
            model_version=data.get("modelVersion"),
        )


__all__ = [
    "Role",
    "CompletionStatus",
    "CompletionMessage",
    "CompletionOptions",
    "CompletionRequest",
    "Usage",
    "Alternative",
    "CompletionResponse",
    "CompletionResult",
    "TextEmbeddingRequest",
    "TextEmbeddingResponse",
]
