# yandex_sdk/embedding/embedding_translation.py
# SPDX-License-Identifier: Apache-2.0
"""Text-embedding request building and response translation."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from yandex_sdk.api.models import build_uri, resolve_embedding_model
from yandex_sdk.api.wire import TextEmbeddingRequest, TextEmbeddingResponse
from yandex_sdk.core.errors import BadRequest
from yandex_sdk.options import YandexEmbeddingOptions

LOG = logging.getLogger(__name__)


def build_embedding_requests(
    texts: Sequence[str],
    options: YandexEmbeddingOptions,
    folder_id: str,
) -> List[TextEmbeddingRequest]:
    """One request body per text, all sharing the resolved model URI."""
    if options.model is None:
        raise BadRequest("embedding model must be set")
    model_uri = build_uri(resolve_embedding_model(options.model), folder_id)
    return [TextEmbeddingRequest(model_uri=model_uri, text=text) for text in texts]


def to_embedding_vector(response: Optional[TextEmbeddingResponse]) -> List[float]:
    """
    Convert one vendor response into a vector.

    A missing response or missing `embedding` field yields [] so the caller
    can keep the slot and preserve index alignment.
    """
    if response is None or response.embedding is None:
        LOG.warning("No embedding returned by the Foundation Models API")
        return []
    return [float(x) for x in response.embedding]


__all__ = [
    "build_embedding_requests",
    "to_embedding_vector",
]
