# SPDX-License-Identifier: Apache-2.0
"""
Metrics sinks: LoggingMetrics line format and extra filtering.
"""

import json
import logging

from yandex_sdk.core.metrics import LoggingMetrics, NoopMetrics

LOGGER = "tests.metrics"


def _payload(record, prefix):
    message = record.getMessage()
    assert message.startswith(prefix)
    return json.loads(message[len(prefix):].strip())


def test_observe_writes_one_structured_line(caplog):
    sink = LoggingMetrics(logger=logging.getLogger(LOGGER), name="unit")
    with caplog.at_level(logging.INFO, logger=LOGGER):
        sink.observe(
            component="llm",
            op="chat",
            ms=12.3456,
            ok=True,
            extra={"provider": "yandex", "model": "yandexgpt", "temperature": 0.3},
        )
    assert len(caplog.records) == 1
    payload = _payload(caplog.records[0], "[OBS]")
    assert payload["component"] == "llm"
    assert payload["op"] == "chat"
    assert payload["ms"] == 12.346
    assert payload["ok"] is True
    assert payload["code"] == "OK"
    assert payload["instance"] == "unit"
    assert payload["extra"] == {"model": "yandexgpt", "provider": "yandex", "temperature": 0.3}


def test_failed_observation_logged_at_warning(caplog):
    sink = LoggingMetrics(logger=logging.getLogger(LOGGER))
    with caplog.at_level(logging.INFO, logger=LOGGER):
        sink.observe(component="llm", op="chat", ms=1, ok=False, code="TRANSPORT_ERROR")
    assert caplog.records[0].levelno == logging.WARNING
    assert _payload(caplog.records[0], "[OBS]")["code"] == "TRANSPORT_ERROR"


def test_counter_line(caplog):
    sink = LoggingMetrics(logger=logging.getLogger(LOGGER))
    with caplog.at_level(logging.INFO, logger=LOGGER):
        sink.counter(component="embedding", name="empty_responses", value=2)
    payload = _payload(caplog.records[0], "[CTR]")
    assert payload["name"] == "empty_responses"
    assert payload["value"] == 2
    assert "extra" not in payload


def test_non_scalar_and_excess_extra_dropped(caplog):
    sink = LoggingMetrics(logger=logging.getLogger(LOGGER), max_extra_fields=2)
    with caplog.at_level(logging.INFO, logger=LOGGER):
        sink.observe(
            component="llm",
            op="chat",
            ms=1,
            ok=True,
            extra={"a": 1, "b": [1, 2], "c": "x", "d": "y"},
        )
    assert _payload(caplog.records[0], "[OBS]")["extra"] == {"a": 1}


def test_missing_component_is_ignored(caplog):
    sink = LoggingMetrics(logger=logging.getLogger(LOGGER))
    with caplog.at_level(logging.INFO, logger=LOGGER):
        sink.observe(component="", op="chat", ms=1, ok=True)
        sink.counter(component="llm", name="")
    assert caplog.records == []


def test_noop_accepts_anything():
    sink = NoopMetrics()
    sink.observe(component="llm", op="chat", ms=1, ok=True)
    sink.counter(component="llm", name="x", value=1)
