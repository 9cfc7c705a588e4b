# yandex_sdk/embedding/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Embedding models - Public API
"""

from yandex_sdk.embedding.embedding_base import (
    Embedding,
    EmbeddingResult,
    EmbeddingCapabilities,
    EmbeddingModel,
    BaseEmbeddingAdapter,
)
from yandex_sdk.embedding.embedding_translation import (
    build_embedding_requests,
    to_embedding_vector,
)
from yandex_sdk.embedding.yandex_embedding_adapter import YandexEmbeddingAdapter

__all__ = [
    "Embedding",
    "EmbeddingResult",
    "EmbeddingCapabilities",
    "EmbeddingModel",
    "BaseEmbeddingAdapter",
    "build_embedding_requests",
    "to_embedding_vector",
    "YandexEmbeddingAdapter",
]
