# yandex_sdk/api/models.py
# SPDX-License-Identifier: Apache-2.0
"""
Model catalog for Yandex Foundation Models.

Each supported model is a plain, immutable record keyed by the string callers
put in their options. Lookup is exact-match only: "yandexgpt/rc" selects the
release-candidate track, "YandexGPT" or "yandexgpt/" are unknown.

Model URIs are scoped to a folder (tenant):

    gpt://<folder_id>/yandexgpt/latest
    emb://<folder_id>/text-search-doc/latest

Adding a vendor model means adding one entry to `CHAT_MODELS` or
`EMBEDDING_MODELS`; nothing else changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from yandex_sdk.core.errors import UnknownModelError

CHAT_SCHEME = "gpt"
EMBEDDING_SCHEME = "emb"


class ModelVersion(str, Enum):
    """Version track of a model."""
    DEPRECATED = "deprecated"
    LATEST = "latest"
    RELEASE_CANDIDATE = "rc"


@dataclass(frozen=True)
class ModelDescriptor:
    """
    One supported vendor model.

    Attributes:
        name:
            Vendor model name used in the URI path.
        scheme:
            URI scheme tag, "gpt" for chat or "emb" for embeddings.
        version:
            Version track placed at the end of the URI.
        generation:
            Model generation (chat only).
        dimensions:
            Output vector size (embeddings only).
        description:
            Short human-readable purpose.
    """
    name: str
    scheme: str
    version: ModelVersion = ModelVersion.LATEST
    generation: Optional[str] = None
    dimensions: Optional[int] = None
    description: str = ""

    @property
    def is_chat(self) -> bool:
        return self.scheme == CHAT_SCHEME

    @property
    def is_embedding(self) -> bool:
        return self.scheme == EMBEDDING_SCHEME


def _chat(name: str, version: ModelVersion, generation: str) -> ModelDescriptor:
    return ModelDescriptor(name=name, scheme=CHAT_SCHEME, version=version, generation=generation)


YANDEXGPT_PRO = _chat("yandexgpt", ModelVersion.LATEST, "3")
YANDEXGPT_LITE = _chat("yandexgpt-lite", ModelVersion.LATEST, "3")
YANDEXGPT_PRO_RC = _chat("yandexgpt", ModelVersion.RELEASE_CANDIDATE, "4")
YANDEXGPT_LITE_RC = _chat("yandexgpt-lite", ModelVersion.RELEASE_CANDIDATE, "4")
YANDEXGPT_32K_RC = _chat("yandexgpt-32k", ModelVersion.RELEASE_CANDIDATE, "4")

TEXT_SEARCH_DOC = ModelDescriptor(
    name="text-search-doc",
    scheme=EMBEDDING_SCHEME,
    dimensions=256,
    description="Vectorization of large source texts, e.g., documentation articles",
)
TEXT_SEARCH_QUERY = ModelDescriptor(
    name="text-search-query",
    scheme=EMBEDDING_SCHEME,
    dimensions=256,
    description="Vectorization of short texts, such as search queries, requests, etc.",
)

# The 32k model only ships on the rc track, so both keys select it.
CHAT_MODELS: Mapping[str, ModelDescriptor] = MappingProxyType({
    "yandexgpt": YANDEXGPT_PRO,
    "yandexgpt-lite": YANDEXGPT_LITE,
    "yandexgpt/rc": YANDEXGPT_PRO_RC,
    "yandexgpt-lite/rc": YANDEXGPT_LITE_RC,
    "yandexgpt-32k": YANDEXGPT_32K_RC,
    "yandexgpt-32k/rc": YANDEXGPT_32K_RC,
})

EMBEDDING_MODELS: Mapping[str, ModelDescriptor] = MappingProxyType({
    "text-search-doc": TEXT_SEARCH_DOC,
    "text-search-query": TEXT_SEARCH_QUERY,
})

DEFAULT_CHAT_MODEL = "yandexgpt"
DEFAULT_EMBEDDING_MODEL = "text-search-doc"


def resolve_chat_model(key: str) -> ModelDescriptor:
    """Resolve a chat model key or raise UnknownModelError."""
    try:
        return CHAT_MODELS[key]
    except (KeyError, TypeError):
        raise UnknownModelError(
            f"Unknown chat model: {key!r}",
            details={"model": str(key), "kind": "chat"},
        ) from None


def resolve_embedding_model(key: str) -> ModelDescriptor:
    """Resolve an embedding model key or raise UnknownModelError."""
    try:
        return EMBEDDING_MODELS[key]
    except (KeyError, TypeError):
        raise UnknownModelError(
            f"Unknown embedding model: {key!r}",
            details={"model": str(key), "kind": "embedding"},
        ) from None


def resolve(key: str) -> ModelDescriptor:
    """Resolve any model key, chat table first."""
    if isinstance(key, str):
        if key in CHAT_MODELS:
            return CHAT_MODELS[key]
        if key in EMBEDDING_MODELS:
            return EMBEDDING_MODELS[key]
    raise UnknownModelError(f"Unknown model: {key!r}", details={"model": str(key)})


def build_uri(descriptor: ModelDescriptor, folder_id: str) -> str:
    return f"{descriptor.scheme}://{folder_id}/{descriptor.name}/{descriptor.version.value}"


def chat_model_keys() -> Tuple[str, ...]:
    return tuple(CHAT_MODELS)


def embedding_model_keys() -> Tuple[str, ...]:
    return tuple(EMBEDDING_MODELS)


__all__ = [
    "CHAT_SCHEME",
    "EMBEDDING_SCHEME",
    "ModelVersion",
    "ModelDescriptor",
    "YANDEXGPT_PRO",
    "YANDEXGPT_LITE",
    "YANDEXGPT_PRO_RC",
    "YANDEXGPT_LITE_RC",
    "YANDEXGPT_32K_RC",
    "TEXT_SEARCH_DOC",
    "TEXT_SEARCH_QUERY",
    "CHAT_MODELS",
    "EMBEDDING_MODELS",
    "DEFAULT_CHAT_MODEL",
    "DEFAULT_EMBEDDING_MODEL",
    "resolve_chat_model",
    "resolve_embedding_model",
    "resolve",
    "build_uri",
    "chat_model_keys",
    "embedding_model_keys",
]
