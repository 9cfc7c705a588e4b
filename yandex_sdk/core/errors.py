# yandex_sdk/core/errors.py
# SPDX-License-Identifier: Apache-2.0
"""
Normalized error taxonomy shared by the chat and embedding adapters.

Every failure the SDK raises is a `YandexAdapterError` subclass so callers can
branch on `code` / `retryable` without vendor-specific conditionals.

    YandexAdapterError
    ├── BadRequest             (BAD_REQUEST)       validation, never retried
    │   ├── UnknownModelError  (UNKNOWN_MODEL)
    │   └── UnsupportedRoleError (UNSUPPORTED_ROLE)
    └── TransportError         (TRANSPORT_ERROR)   HTTP / network failure

An empty vendor response is *not* an error; the translators turn it into an
empty result and log a warning.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class YandexAdapterError(Exception):
    """
    Base exception for all adapter errors.

    Attributes:
        message:
            Human-readable description (safe for logs; never contains API keys).
        code:
            Upper-snake-case machine code.
        status:
            HTTP status code when the failure came from the vendor, else None.
        retryable:
            Whether a retry policy may re-attempt the failed call.
        details:
            Additional JSON-safe context.
    """
    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        status: Optional[int] = None,
        retryable: bool = False,
        details: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.retryable = bool(retryable)
        self.details = dict(details or {})

    def asdict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "status": self.status,
            "retryable": self.retryable,
            "details": {k: self.details[k] for k in sorted(self.details)},
        }

    def __str__(self) -> str:
        base = self.message or self.__class__.__name__
        if self.code:
            base += f" [code={self.code}]"
        if self.status is not None:
            base += f" status={self.status}"
        if self.details:
            base += f" details={self.details}"
        return base


class BadRequest(YandexAdapterError):
    """Caller error detected before any network activity."""
    def __init__(self, message: str, **kwargs: Any):
        kwargs.setdefault("code", "BAD_REQUEST")
        kwargs["retryable"] = False
        super().__init__(message, **kwargs)


class UnknownModelError(BadRequest):
    """The model key matches no catalog entry."""
    def __init__(self, message: str, **kwargs: Any):
        kwargs.setdefault("code", "UNKNOWN_MODEL")
        super().__init__(message, **kwargs)


class UnsupportedRoleError(BadRequest):
    """
    A chat turn carries a role outside {system, user, assistant}.

    Tool and function messages are not supported by the completion API.
    """
    def __init__(self, message: str, **kwargs: Any):
        kwargs.setdefault("code", "UNSUPPORTED_ROLE")
        super().__init__(message, **kwargs)


class TransportError(YandexAdapterError):
    """
    HTTP call failed: transport error, non-2xx status or undecodable body.

    `status` is None for failures that never produced a response.
    """
    def __init__(self, message: str, **kwargs: Any):
        kwargs.setdefault("code", "TRANSPORT_ERROR")
        super().__init__(message, **kwargs)


__all__ = [
    "YandexAdapterError",
    "BadRequest",
    "UnknownModelError",
    "UnsupportedRoleError",
    "TransportError",
]
