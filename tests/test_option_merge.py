# SPDX-License-Identifier: Apache-2.0
"""
Option merging: caller wins when set, defaults otherwise, never aliased.
"""

import dataclasses
import logging

import pytest

from yandex_sdk.options import (
    UNSUPPORTED_CHAT_OPTION_FIELDS,
    ChatOptions,
    EmbeddingOptions,
    YandexChatOptions,
    YandexEmbeddingOptions,
    merge_chat_options,
    merge_embedding_options,
)

DEFAULTS = YandexChatOptions(model="yandexgpt", temperature=0.3, max_tokens=None)


def test_absent_caller_returns_equal_copy():
    merged = merge_chat_options(None, DEFAULTS)
    assert merged == DEFAULTS
    assert merged is not DEFAULTS


@pytest.mark.parametrize(
    "caller, expected",
    [
        (ChatOptions(), DEFAULTS),
        (ChatOptions(temperature=0.9), YandexChatOptions("yandexgpt", 0.9, None)),
        (ChatOptions(model="yandexgpt-lite"), YandexChatOptions("yandexgpt-lite", 0.3, None)),
        (ChatOptions(max_tokens=50), YandexChatOptions("yandexgpt", 0.3, 50)),
        (
            ChatOptions(model="yandexgpt/rc", temperature=0.0, max_tokens=1),
            YandexChatOptions("yandexgpt/rc", 0.0, 1),
        ),
    ],
)
def test_non_null_caller_fields_win(caller, expected):
    merged = merge_chat_options(caller, DEFAULTS)
    assert merged == expected
    assert merged is not caller
    assert merged is not DEFAULTS


def test_zero_temperature_is_a_value_not_absence():
    assert merge_chat_options(ChatOptions(temperature=0.0), DEFAULTS).temperature == 0.0


def test_values_pass_through_without_coercion():
    merged = merge_chat_options(ChatOptions(temperature=1, max_tokens=7), DEFAULTS)
    assert merged.temperature == 1 and type(merged.temperature) is int
    assert type(merged.max_tokens) is int


def test_vendor_options_accepted_as_caller():
    caller = YandexChatOptions(model="yandexgpt-lite", temperature=None)
    merged = merge_chat_options(caller, DEFAULTS)
    assert merged == YandexChatOptions("yandexgpt-lite", 0.3, None)


def test_unsupported_fields_are_silent_no_ops(caplog):
    caller = ChatOptions(
        top_p=0.5,
        top_k=10,
        frequency_penalty=1.0,
        presence_penalty=1.0,
        stop_sequences=["\n"],
    )
    with caplog.at_level(logging.DEBUG, logger="yandex_sdk.options"):
        merged = merge_chat_options(caller, DEFAULTS)
    assert merged == DEFAULTS
    for name in UNSUPPORTED_CHAT_OPTION_FIELDS:
        assert getattr(merged, name) is None
    assert all(r.levelno == logging.DEBUG for r in caplog.records)


def test_inputs_are_not_mutated():
    caller = ChatOptions(temperature=0.7)
    defaults = YandexChatOptions()
    merge_chat_options(caller, defaults)
    assert caller == ChatOptions(temperature=0.7)
    assert defaults == YandexChatOptions()


def test_options_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULTS.temperature = 1.0  # type: ignore[misc]


def test_chat_defaults():
    assert YandexChatOptions().to_dict() == {"model": "yandexgpt", "temperature": 0.3, "max_tokens": None}


def test_embedding_merge():
    defaults = YandexEmbeddingOptions()
    assert defaults.model == "text-search-doc" and defaults.dimensions == 256

    copied = merge_embedding_options(None, defaults)
    assert copied == defaults and copied is not defaults

    merged = merge_embedding_options(EmbeddingOptions(model="text-search-query"), defaults)
    assert merged == YandexEmbeddingOptions(model="text-search-query", dimensions=256)
