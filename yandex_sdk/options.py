# yandex_sdk/options.py
# SPDX-License-Identifier: Apache-2.0
"""
Request options and the caller-over-defaults merge.

Callers pass vendor-neutral `ChatOptions` / `EmbeddingOptions` patches; the
adapter overlays every non-None field onto its defaults and gets back a new,
frozen `YandexChatOptions` / `YandexEmbeddingOptions`.

The overlay walks an explicit field list. Tuning parameters the completion API
does not accept (penalties, stop sequences, top-k/top-p) are listed separately
and always resolve to None: asking for them is a no-op, not an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

from yandex_sdk.api.models import DEFAULT_CHAT_MODEL, DEFAULT_EMBEDDING_MODEL

LOG = logging.getLogger(__name__)

CHAT_OPTION_FIELDS: Tuple[str, ...] = ("model", "temperature", "max_tokens")
UNSUPPORTED_CHAT_OPTION_FIELDS: Tuple[str, ...] = (
    "frequency_penalty",
    "presence_penalty",
    "stop_sequences",
    "top_k",
    "top_p",
)
EMBEDDING_OPTION_FIELDS: Tuple[str, ...] = ("model", "dimensions")

DEFAULT_TEMPERATURE = 0.3
DEFAULT_DIMENSIONS = 256


# =============================================================================
# Caller-side (vendor-neutral) option patches
# =============================================================================

@dataclass(frozen=True)
class ChatOptions:
    """
    Per-request chat options. Every field is optional; None means "use the
    adapter default".
    """
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stop_sequences: Optional[List[str]] = None


@dataclass(frozen=True)
class EmbeddingOptions:
    """Per-request embedding options."""
    model: Optional[str] = None
    dimensions: Optional[int] = None


# =============================================================================
# Effective (vendor) options
# =============================================================================

@dataclass(frozen=True)
class YandexChatOptions:
    """
    Resolved chat options sent to the completion API.

    Unsupported parameters are exposed for interface parity but are always None.
    """
    model: Optional[str] = DEFAULT_CHAT_MODEL
    temperature: Optional[float] = DEFAULT_TEMPERATURE
    max_tokens: Optional[int] = None

    @property
    def frequency_penalty(self) -> Optional[float]:
        return None

    @property
    def presence_penalty(self) -> Optional[float]:
        return None

    @property
    def stop_sequences(self) -> Optional[List[str]]:
        return None

    @property
    def top_k(self) -> Optional[int]:
        return None

    @property
    def top_p(self) -> Optional[float]:
        return None

    def copy(self) -> "YandexChatOptions":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in CHAT_OPTION_FIELDS}


@dataclass(frozen=True)
class YandexEmbeddingOptions:
    """Resolved embedding options."""
    model: Optional[str] = DEFAULT_EMBEDDING_MODEL
    dimensions: Optional[int] = DEFAULT_DIMENSIONS

    def copy(self) -> "YandexEmbeddingOptions":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in EMBEDDING_OPTION_FIELDS}


# =============================================================================
# Merge
# =============================================================================

def _overlay(caller: Any, defaults: Any, fields: Tuple[str, ...]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for name in fields:
        value = getattr(caller, name, None)
        values[name] = value if value is not None else getattr(defaults, name)
    return values


def merge_chat_options(
    caller: Optional[Any],
    defaults: YandexChatOptions,
) -> YandexChatOptions:
    """
    Overlay caller chat options onto `defaults`.

    `caller` may be a `ChatOptions`, a `YandexChatOptions` or any object with
    the same attribute names. The returned object is always new.
    """
    if caller is None:
        return defaults.copy()

    ignored = [
        name for name in UNSUPPORTED_CHAT_OPTION_FIELDS
        if getattr(caller, name, None) is not None
    ]
    if ignored:
        LOG.debug("Ignoring chat options not supported by the completion API: %s", ignored)

    return YandexChatOptions(**_overlay(caller, defaults, CHAT_OPTION_FIELDS))


def merge_embedding_options(
    caller: Optional[Any],
    defaults: YandexEmbeddingOptions,
) -> YandexEmbeddingOptions:
    """Overlay caller embedding options onto `defaults`; always returns a new object."""
    if caller is None:
        return defaults.copy()
    return YandexEmbeddingOptions(**_overlay(caller, defaults, EMBEDDING_OPTION_FIELDS))


__all__ = [
    "CHAT_OPTION_FIELDS",
    "UNSUPPORTED_CHAT_OPTION_FIELDS",
    "EMBEDDING_OPTION_FIELDS",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_DIMENSIONS",
    "ChatOptions",
    "EmbeddingOptions",
    "YandexChatOptions",
    "YandexEmbeddingOptions",
    "merge_chat_options",
    "merge_embedding_options",
]
