# yandex_sdk/config.py
# SPDX-License-Identifier: Apache-2.0
"""
Settings for building adapters from keyword arguments or the environment.

Shared connection values:

    YANDEX_BASE_URL     (default https://llm.api.cloud.yandex.net/foundationModels)
    YANDEX_API_KEY
    YANDEX_FOLDER_ID

Chat (prefix YANDEX_CHAT_): ENABLED, BASE_URL, API_KEY, FOLDER_ID,
COMPLETION_PATH, MODEL, TEMPERATURE, MAX_TOKENS.

Embedding (prefix YANDEX_EMBEDDING_): ENABLED, BASE_URL, API_KEY, FOLDER_ID,
EMBEDDING_PATH, MODEL.

Per-model base URL, API key and folder id override the shared values when
they are non-blank; see `resolve_connection`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Union

from yandex_sdk.api.yandex_api import (
    DEFAULT_BASE_URL,
    DEFAULT_COMPLETION_PATH,
    DEFAULT_EMBEDDING_PATH,
)
from yandex_sdk.core.errors import BadRequest
from yandex_sdk.options import YandexChatOptions, YandexEmbeddingOptions

FOLDER_ID_HEADER = "x-folder-id"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    value = _env(environ, name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise BadRequest(f"{name} must be a boolean", details={"variable": name})


def _env_number(environ: Mapping[str, str], name: str, kind: type) -> Optional[Union[int, float]]:
    value = _env(environ, name)
    if value is None:
        return None
    try:
        return kind(value)
    except ValueError:
        raise BadRequest(
            f"{name} must be a valid {kind.__name__}",
            details={"variable": name},
        ) from None


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


@dataclass(frozen=True)
class ConnectionSettings:
    """Connection values shared by the chat and embedding adapters."""
    base_url: str = DEFAULT_BASE_URL
    api_key: Optional[str] = None
    folder_id: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ConnectionSettings":
        env = os.environ if environ is None else environ
        return cls(
            base_url=_env(env, "YANDEX_BASE_URL") or DEFAULT_BASE_URL,
            api_key=_env(env, "YANDEX_API_KEY"),
            folder_id=_env(env, "YANDEX_FOLDER_ID"),
        )


@dataclass(frozen=True)
class ChatSettings:
    enabled: bool = True
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    folder_id: Optional[str] = None
    completion_path: str = DEFAULT_COMPLETION_PATH
    options: YandexChatOptions = field(default_factory=YandexChatOptions)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ChatSettings":
        env = os.environ if environ is None else environ
        defaults = YandexChatOptions()
        temperature = _env_number(env, "YANDEX_CHAT_TEMPERATURE", float)
        max_tokens = _env_number(env, "YANDEX_CHAT_MAX_TOKENS", int)
        return cls(
            enabled=_env_flag(env, "YANDEX_CHAT_ENABLED", True),
            base_url=_env(env, "YANDEX_CHAT_BASE_URL"),
            api_key=_env(env, "YANDEX_CHAT_API_KEY"),
            folder_id=_env(env, "YANDEX_CHAT_FOLDER_ID"),
            completion_path=_env(env, "YANDEX_CHAT_COMPLETION_PATH") or DEFAULT_COMPLETION_PATH,
            options=YandexChatOptions(
                model=_env(env, "YANDEX_CHAT_MODEL") or defaults.model,
                temperature=temperature if temperature is not None else defaults.temperature,
                max_tokens=max_tokens,
            ),
        )


@dataclass(frozen=True)
class EmbeddingSettings:
    enabled: bool = True
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    folder_id: Optional[str] = None
    embedding_path: str = DEFAULT_EMBEDDING_PATH
    options: YandexEmbeddingOptions = field(default_factory=YandexEmbeddingOptions)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EmbeddingSettings":
        env = os.environ if environ is None else environ
        defaults = YandexEmbeddingOptions()
        return cls(
            enabled=_env_flag(env, "YANDEX_EMBEDDING_ENABLED", True),
            base_url=_env(env, "YANDEX_EMBEDDING_BASE_URL"),
            api_key=_env(env, "YANDEX_EMBEDDING_API_KEY"),
            folder_id=_env(env, "YANDEX_EMBEDDING_FOLDER_ID"),
            embedding_path=_env(env, "YANDEX_EMBEDDING_EMBEDDING_PATH") or DEFAULT_EMBEDDING_PATH,
            options=YandexEmbeddingOptions(
                model=_env(env, "YANDEX_EMBEDDING_MODEL") or defaults.model,
                dimensions=defaults.dimensions,
            ),
        )


@dataclass(frozen=True)
class ResolvedConnection:
    """Effective connection for one adapter."""
    base_url: str
    api_key: Optional[str]
    folder_id: Optional[str]
    headers: Dict[str, str] = field(default_factory=dict)


def resolve_connection(
    connection: ConnectionSettings,
    model_settings: Union[ChatSettings, EmbeddingSettings],
) -> ResolvedConnection:
    """Overlay non-blank per-model connection values onto the shared ones."""
    base_url = model_settings.base_url if _has_text(model_settings.base_url) else connection.base_url
    folder_id = model_settings.folder_id if _has_text(model_settings.folder_id) else connection.folder_id
    api_key = model_settings.api_key if _has_text(model_settings.api_key) else connection.api_key

    headers: Dict[str, str] = {}
    if _has_text(folder_id):
        headers[FOLDER_ID_HEADER] = folder_id  # type: ignore[assignment]
    return ResolvedConnection(base_url=base_url, api_key=api_key, folder_id=folder_id, headers=headers)


__all__ = [
    "FOLDER_ID_HEADER",
    "ConnectionSettings",
    "ChatSettings",
    "EmbeddingSettings",
    "ResolvedConnection",
    "resolve_connection",
]
