# SPDX-License-Identifier: Apache-2.0
"""
Chat translation: request building and response translation as pure functions.
"""

import logging

import pytest

from yandex_sdk.api.wire import (
    Alternative,
    CompletionMessage,
    CompletionResponse,
    CompletionResult,
    Usage,
)
from yandex_sdk.core.errors import BadRequest, UnknownModelError, UnsupportedRoleError
from yandex_sdk.llm.chat_translation import build_chat_request, to_chat_result
from yandex_sdk.llm.llm_base import ChatTurn
from yandex_sdk.options import YandexChatOptions

FOLDER = "b1gfolder"


def test_request_has_resolved_uri_and_stream_off():
    request = build_chat_request(
        [ChatTurn("system", "be brief"), ChatTurn("user", "hello")],
        YandexChatOptions(model="yandexgpt-lite/rc", temperature=0.6, max_tokens=100),
        FOLDER,
    )
    assert request.to_wire() == {
        "modelUri": "gpt://b1gfolder/yandexgpt-lite/rc",
        "completionOptions": {"stream": False, "temperature": 0.6, "maxTokens": 100},
        "messages": [
            {"role": "system", "text": "be brief"},
            {"role": "user", "text": "hello"},
        ],
    }


def test_turn_order_is_preserved():
    turns = [ChatTurn("user", "1"), ChatTurn("assistant", "2"), ChatTurn("user", "3")]
    request = build_chat_request(turns, YandexChatOptions(), FOLDER)
    assert [m.text for m in request.messages] == ["1", "2", "3"]
    assert [m.role for m in request.messages] == ["user", "assistant", "user"]


@pytest.mark.parametrize("role", ["tool", "function", "USER", "developer"])
def test_unsupported_roles_rejected(role):
    with pytest.raises(UnsupportedRoleError) as exc_info:
        build_chat_request([ChatTurn(role, "x")], YandexChatOptions(), FOLDER)
    assert exc_info.value.details["role"] == role


def test_unknown_model_rejected():
    with pytest.raises(UnknownModelError):
        build_chat_request([ChatTurn("user", "x")], YandexChatOptions(model="gpt-4"), FOLDER)


def test_missing_model_or_turns_rejected():
    with pytest.raises(BadRequest):
        build_chat_request([ChatTurn("user", "x")], YandexChatOptions(model=None), FOLDER)
    with pytest.raises(BadRequest):
        build_chat_request([], YandexChatOptions(), FOLDER)


def test_alternatives_become_generations():
    envelope = CompletionResult(
        result=CompletionResponse(
            alternatives=[
                Alternative(CompletionMessage("assistant", "one"), "ALTERNATIVE_STATUS_FINAL"),
                Alternative(CompletionMessage("assistant", "two"), "ALTERNATIVE_STATUS_TRUNCATED_FINAL"),
            ],
            usage=Usage(input_text_tokens=5, completion_tokens=7, total_tokens=12),
            model_version="06.12.2023",
        )
    )
    result = to_chat_result(envelope)
    assert [(g.text, g.finish_reason) for g in result.generations] == [
        ("one", "ALTERNATIVE_STATUS_FINAL"),
        ("two", "ALTERNATIVE_STATUS_TRUNCATED_FINAL"),
    ]
    assert (result.usage.prompt_tokens, result.usage.completion_tokens, result.usage.total_tokens) == (5, 7, 12)
    assert result.model == "06.12.2023"
    assert result.text == "one"


@pytest.mark.parametrize("envelope", [None, CompletionResult(result=None)])
def test_missing_result_yields_empty_result_and_warning(envelope, caplog):
    with caplog.at_level(logging.WARNING, logger="yandex_sdk.llm.chat_translation"):
        result = to_chat_result(envelope)
    assert result.generations == []
    assert result.is_empty
    assert (result.usage.prompt_tokens, result.usage.completion_tokens, result.usage.total_tokens) == (0, 0, 0)
    assert len(caplog.records) == 1


def test_missing_token_counts_are_zero():
    envelope = CompletionResult(
        result=CompletionResponse(
            alternatives=[Alternative(CompletionMessage("assistant", "x"), None)],
            usage=Usage(input_text_tokens=None, completion_tokens=4, total_tokens=None),
        )
    )
    result = to_chat_result(envelope)
    assert result.usage.prompt_tokens == 0
    assert result.usage.completion_tokens == 4
    assert result.usage.total_tokens == 4
    assert result.generations[0].finish_reason == "ALTERNATIVE_STATUS_UNSPECIFIED"


def test_missing_message_yields_empty_text():
    envelope = CompletionResult(
        result=CompletionResponse(alternatives=[Alternative(None, "ALTERNATIVE_STATUS_CONTENT_FILTER")])
    )
    result = to_chat_result(envelope)
    assert result.generations[0].text == ""
    assert result.generations[0].finish_reason == "ALTERNATIVE_STATUS_CONTENT_FILTER"
    assert result.usage.total_tokens == 0
