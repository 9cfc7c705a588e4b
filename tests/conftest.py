# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures: a fake Foundation Models backend wired into real adapters.

Adapters are built exactly as callers build them (YandexApi + adapter); only
the httpx transport is replaced by the in-process fake.
"""

from __future__ import annotations

import pytest

from yandex_sdk.api.yandex_api import YandexApi
from yandex_sdk.core.retry import RetryPolicy
from yandex_sdk.embedding.yandex_embedding_adapter import YandexEmbeddingAdapter
from yandex_sdk.llm.yandex_chat_adapter import YandexChatAdapter

from tests.mock.fake_foundation_models import FakeFoundationModels
from tests.mock.recording_metrics import RecordingMetrics

BASE_URL = "https://fake.local/foundationModels"
API_KEY = "test-api-key"
FOLDER_ID = "b1gtestfolder"


@pytest.fixture
def fake() -> FakeFoundationModels:
    return FakeFoundationModels()


@pytest.fixture
def fast_retry() -> RetryPolicy:
    """Three attempts with 1ms fixed backoff."""
    return RetryPolicy(max_attempts=3, base_ms=1, max_ms=1, use_jitter=False)


@pytest.fixture
def metrics() -> RecordingMetrics:
    return RecordingMetrics()


@pytest.fixture
def make_api(fake):
    def _make(**kwargs) -> YandexApi:
        kwargs.setdefault("headers", {"x-folder-id": FOLDER_ID})
        return YandexApi(BASE_URL, API_KEY, transport=fake.transport, **kwargs)
    return _make


@pytest.fixture
async def chat_adapter(make_api, fast_retry, metrics):
    adapter = YandexChatAdapter(
        make_api(),
        FOLDER_ID,
        retry_policy=fast_retry,
        metrics=metrics,
    )
    yield adapter
    await adapter.close()


@pytest.fixture
async def embedding_adapter(make_api, fast_retry, metrics):
    adapter = YandexEmbeddingAdapter(
        make_api(),
        FOLDER_ID,
        retry_policy=fast_retry,
        metrics=metrics,
    )
    yield adapter
    await adapter.close()
