# SPDX-License-Identifier: Apache-2.0
"""
Embedding translation: per-text request bodies and vector conversion.
"""

import logging

import pytest

from yandex_sdk.api.wire import TextEmbeddingResponse
from yandex_sdk.core.errors import BadRequest, UnknownModelError
from yandex_sdk.embedding.embedding_translation import build_embedding_requests, to_embedding_vector
from yandex_sdk.options import YandexEmbeddingOptions


def test_one_request_per_text_sharing_the_uri():
    requests = build_embedding_requests(["a", "b"], YandexEmbeddingOptions(model="text-search-query"), "f1")
    assert [r.to_wire() for r in requests] == [
        {"modelUri": "emb://f1/text-search-query/latest", "text": "a"},
        {"modelUri": "emb://f1/text-search-query/latest", "text": "b"},
    ]


def test_empty_batch_builds_no_requests():
    assert build_embedding_requests([], YandexEmbeddingOptions(), "f1") == []


def test_unknown_or_missing_model_rejected():
    with pytest.raises(UnknownModelError):
        build_embedding_requests(["a"], YandexEmbeddingOptions(model="yandexgpt"), "f1")
    with pytest.raises(BadRequest):
        build_embedding_requests(["a"], YandexEmbeddingOptions(model=None), "f1")


def test_vector_converted_to_float():
    vector = to_embedding_vector(TextEmbeddingResponse(embedding=[1, 0.5, -2]))
    assert vector == [1.0, 0.5, -2.0]
    assert all(type(x) is float for x in vector)


@pytest.mark.parametrize("response", [None, TextEmbeddingResponse(embedding=None, num_tokens=1)])
def test_missing_vector_is_empty_with_warning(response, caplog):
    with caplog.at_level(logging.WARNING, logger="yandex_sdk.embedding.embedding_translation"):
        assert to_embedding_vector(response) == []
    assert len(caplog.records) == 1


def test_empty_vendor_vector_stays_empty():
    assert to_embedding_vector(TextEmbeddingResponse(embedding=[])) == []
