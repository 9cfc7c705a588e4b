# yandex_sdk/core/metrics.py
# SPDX-License-Identifier: Apache-2.0
"""
Metrics sinks used by the adapter instrumentation hook.

Every adapter call produces one observation:

    observe(component="llm", op="chat", ms=..., ok=True, code="OK",
            extra={"provider": "yandex", "model": "yandexgpt", "temperature": 0.3})

plus a handful of counters (requests_total, tokens_processed, empty_responses,
errors_total). Sinks MUST avoid PII and high-cardinality labels; the adapters
never put prompt text or API keys into `extra`.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Mapping, Optional, Protocol

LOG = logging.getLogger(__name__)

_JSON_ENCODER = json.JSONEncoder(separators=(",", ":"), ensure_ascii=False, check_circular=False)


class MetricsSink(Protocol):
    """Metrics collection protocol."""
    def observe(
        self,
        *,
        component: str,
        op: str,
        ms: float,
        ok: bool,
        code: str = "OK",
        extra: Optional[Mapping[str, Any]] = None,
    ) -> None: ...

    def counter(
        self,
        *,
        component: str,
        name: str,
        value: int = 1,
        extra: Optional[Mapping[str, Any]] = None,
    ) -> None: ...


class NoopMetrics:
    """No-op metrics sink for tests or minimal deployments."""
    def observe(self, **_: Any) -> None: ...
    def counter(self, **_: Any) -> None: ...


class LoggingMetrics:
    """
    Metrics sink that writes one structured line per event to a logger.

    Args:
        logger:           Logger to write to (default: this module's logger).
        level:            Log level for successful observations and counters.
        name:             Optional instance name included in every line.
        max_extra_fields: Maximum number of extra fields to include.
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        level: int = logging.INFO,
        name: Optional[str] = None,
        max_extra_fields: int = 10,
    ) -> None:
        self.logger = logger or LOG
        self.level = level
        self.name = name
        self.max_extra_fields = max_extra_fields

    def observe(
        self,
        *,
        component: str,
        op: str,
        ms: float,
        ok: bool,
        code: str = "OK",
        extra: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if not component or not op:
            return

        payload: Dict[str, Any] = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "component": component,
            "op": op,
            "ms": round(max(0.0, float(ms)), 3),
            "ok": bool(ok),
            "code": str(code or "OK"),
            **({"instance": self.name} if self.name else {}),
        }
        safe_extra = self._safe_extra(extra)
        if safe_extra:
            payload["extra"] = safe_extra

        level = self.level if ok else logging.WARNING
        self.logger.log(level, "[OBS] %s", _JSON_ENCODER.encode(payload))

    def counter(
        self,
        *,
        component: str,
        name: str,
        value: int = 1,
        extra: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if not component or not name:
            return

        payload: Dict[str, Any] = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "component": component,
            "name": name,
            "value": max(0, int(value)),
            **({"instance": self.name} if self.name else {}),
        }
        safe_extra = self._safe_extra(extra)
        if safe_extra:
            payload["extra"] = safe_extra

        self.logger.log(self.level, "[CTR] %s", _JSON_ENCODER.encode(payload))

    def _safe_extra(self, extra: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
        """Keep only short keys with scalar values."""
        if not extra:
            return None

        safe: Dict[str, Any] = {}
        for i, (k, v) in enumerate(sorted(extra.items())):
            if i >= self.max_extra_fields:
                break
            if not isinstance(k, str) or len(k) > 100:
                continue
            if v is None or isinstance(v, (str, int, float, bool)):
                if len(str(v)) <= 1000:
                    safe[k] = v
        return safe or None


__all__ = [
    "MetricsSink",
    "NoopMetrics",
    "LoggingMetrics",
]
