# yandex_sdk/llm/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Chat models - Public API

All public chat types and the YandexGPT adapter are re-exported here.
"""

from yandex_sdk.llm.llm_base import (
    ChatTurn,
    TokenUsage,
    Generation,
    ChatResult,
    ChatCapabilities,
    ChatModel,
    BaseChatAdapter,
)
from yandex_sdk.llm.chat_translation import (
    build_chat_request,
    to_chat_result,
)
from yandex_sdk.llm.yandex_chat_adapter import YandexChatAdapter

__all__ = [
    "ChatTurn",
    "TokenUsage",
    "Generation",
    "ChatResult",
    "ChatCapabilities",
    "ChatModel",
    "BaseChatAdapter",
    "build_chat_request",
    "to_chat_result",
    "YandexChatAdapter",
]
