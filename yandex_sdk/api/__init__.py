# yandex_sdk/api/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""Foundation Models REST API: model catalog, wire records and HTTP client."""

from yandex_sdk.api.models import (
    ModelVersion,
    ModelDescriptor,
    CHAT_MODELS,
    EMBEDDING_MODELS,
    DEFAULT_CHAT_MODEL,
    DEFAULT_EMBEDDING_MODEL,
    resolve_chat_model,
    resolve_embedding_model,
    resolve,
    build_uri,
)
from yandex_sdk.api.wire import (
    Role,
    CompletionStatus,
    CompletionMessage,
    CompletionOptions,
    CompletionRequest,
    Usage,
    Alternative,
    CompletionResponse,
    CompletionResult,
    TextEmbeddingRequest,
    TextEmbeddingResponse,
)
from yandex_sdk.api.yandex_api import (
    DEFAULT_BASE_URL,
    DEFAULT_COMPLETION_PATH,
    DEFAULT_EMBEDDING_PATH,
    YandexApi,
)

__all__ = [
    # Catalog
    "ModelVersion",
    "ModelDescriptor",
    "CHAT_MODELS",
    "EMBEDDING_MODELS",
    "DEFAULT_CHAT_MODEL",
    "DEFAULT_EMBEDDING_MODEL",
    "resolve_chat_model",
    "resolve_embedding_model",
    "resolve",
    "build_uri",

    # Wire records
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

    # HTTP client
    "DEFAULT_BASE_URL",
    "DEFAULT_COMPLETION_PATH",
    "DEFAULT_EMBEDDING_PATH",
    "YandexApi",
]
