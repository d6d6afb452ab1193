"""HTTP client for the Anthropic messages endpoint used to write analyst notes."""

from __future__ import annotations

import os
from typing import Any, Callable, Literal, Mapping

from market_regime_engine.exceptions import DependencyError, ReportingServiceError
from market_regime_engine.utils.logging import get_logger

log = get_logger(__name__, component="reporting_client")

_HttpPoster = Callable[..., Any]

DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
DEFAULT_MODEL = "claude-sonnet-4-20250514"
API_VERSION = "2023-06-01"
API_KEY_PREFIX = "sk-ant-"

KeyStatus = Literal["missing", "valid", "invalid"]


def api_key_status(api_key: str | None) -> KeyStatus:
    """Format hint only; the service is the authority on whether a key works."""

    if not api_key or not api_key.strip():
        return "missing"
    return "valid" if api_key.strip().startswith(API_KEY_PREFIX) else "invalid"


class ReportingClient:
    """Text-completion adapter with typed failures.

    Network calls go through an injectable ``http_post`` (``requests.post``
    signature) to keep tests offline. Every failure mode, including a 2xx reply
    without text, raises ReportingServiceError; error payloads are never handed
    back as if they were report text.
    """

    name = "anthropic"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 1000,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        http_post: _HttpPoster | None = None,
    ) -> None:
        self.api_key = (api_key or os.getenv("ANTHROPIC_API_KEY") or "").strip()
        self.model = model
        self.max_tokens = max_tokens
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_post = http_post

    def complete(self, prompt: str) -> str:
        if not self.api_key:
            raise ReportingServiceError(None, "API key required (pass api_key or set ANTHROPIC_API_KEY)")
        body = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        response = self._perform_request("messages", body)
        status_code = getattr(response, "status_code", 500)
        try:
            payload = response.json()
        except Exception as exc:
            raise ReportingServiceError(status_code, "response body is not valid JSON") from exc

        if status_code >= 400:
            raise ReportingServiceError(status_code, self._extract_error(payload))
        text = self._extract_text(payload)
        if not text:
            raise ReportingServiceError(status_code, "No analysis returned")
        log.info("Report text received", extra={"chars": len(text), "model": self.model})
        return text

    def _perform_request(self, path: str, body: Mapping[str, Any]) -> Any:
        client = self._http_post
        transport_errors: tuple[type[BaseException], ...] = (OSError,)
        if client is None:
            try:
                import requests
            except Exception as exc:  # pragma: no cover - optional dependency guard
                raise DependencyError("requests is required for reporting service calls") from exc
            client = requests.post
            transport_errors = (requests.RequestException, OSError)

        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = {
            "content-type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": API_VERSION,
        }
        try:
            return client(url, headers=headers, json=body, timeout=self.timeout)
        except transport_errors as exc:
            log.error(f"Reporting service request failed: {exc}")
            raise ReportingServiceError(None, f"request failed: {exc}") from exc

    @staticmethod
    def _extract_error(payload: Any) -> str:
        error = payload.get("error") if isinstance(payload, Mapping) else None
        if isinstance(error, Mapping) and error.get("message"):
            return str(error["message"])
        return "Unknown error"

    @staticmethod
    def _extract_text(payload: Any) -> str:
        content = payload.get("content") if isinstance(payload, Mapping) else None
        if not isinstance(content, list) or not content:
            return ""
        first = content[0]
        if not isinstance(first, Mapping):
            return ""
        text = first.get("text")
        return text if isinstance(text, str) else ""


__all__ = ["ReportingClient", "api_key_status"]
