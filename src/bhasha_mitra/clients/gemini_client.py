"""Gemini REST wrapper with async support and classified retry logic."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from bhasha_mitra.clients.errors import (
    AuthError,
    ClientError,
    InvalidStructureError,
    ModelError,
    NetworkError,
    ParseError,
    ServerBusyError,
)
from bhasha_mitra.utils.json_parser import extract_json, extract_text_from_response

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"

# Unparseable model text is reported as an empty result instead of retried.
# When enabled it is treated as an invalid structure: retried, then raised.
RETRY_ON_PARSE_FAILURE = False

# A payload must carry at least one of these to count as an analysis.
EXPECTED_KEYS = (
    "_analysis",
    "spellingErrors",
    "languageStyleMixing",
    "punctuationIssues",
    "euphonyImprovements",
    "toneConversions",
    "styleConversions",
    "contentType",
)


@dataclass
class CallRecord:
    """One analyze() call: how many attempts it took and how it ended."""

    model: str
    attempts: int
    outcome: str  # "ok", "empty" or the error class name


class GeminiClient:
    """Async Gemini client with exponential-backoff retries on transient failures."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        max_retries: int = 1,
        backoff_base: float = 1.0,
        retry_on_parse_failure: bool = RETRY_ON_PARSE_FAILURE,
        http_client: httpx.AsyncClient | None = None,
        sleep=asyncio.sleep,
    ):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.retry_on_parse_failure = retry_on_parse_failure
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._sleep = sleep
        self._call_log: list[CallRecord] = []

    async def __aenter__(self) -> GeminiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def analyze(
        self,
        prompt: str,
        *,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float = 0.3,
        max_retries: int | None = None,
    ) -> dict | None:
        """Send one analysis prompt and return the parsed JSON payload.

        Args:
            prompt: Full prompt text.
            api_key: Credential; falls back to the client's key.
            model: Model identifier; falls back to the client's model.
            temperature: Sampling temperature.
            max_retries: Retries after the first attempt; falls back to the
                client's setting.

        Returns:
            The payload dict, or None when the model returned no text or,
            with parse retries off, text without any parseable JSON.

        Raises:
            AuthError, ClientError: immediately, without retry.
            ServerBusyError, NetworkError, InvalidStructureError: once the
                retry budget is exhausted.
        """
        key = api_key or self.api_key
        if not key:
            raise AuthError("Gemini API key required. Set GEMINI_API_KEY or save it in settings.")
        model = model or self.model
        retries = self.max_retries if max_retries is None else max_retries

        retrying = AsyncRetrying(
            stop=stop_after_attempt(retries + 1),
            wait=wait_exponential(multiplier=self.backoff_base, exp_base=2),
            retry=retry_if_exception(self._should_retry),
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

        logger.debug("Model call: model=%s temperature=%s", model, temperature)
        attempts = 0
        payload: dict | None = None
        try:
            async for attempt in retrying:
                with attempt:
                    attempts = attempt.retry_state.attempt_number
                    payload = await self._send(prompt, key, model, temperature)
        except ParseError:
            logger.warning("Model returned unparseable text; treating as empty result")
            self._call_log.append(CallRecord(model, attempts, "empty"))
            return None
        except ModelError as exc:
            logger.error("Model call failed after %d attempt(s)", attempts, exc_info=True)
            self._call_log.append(CallRecord(model, attempts, type(exc).__name__))
            raise

        self._call_log.append(CallRecord(model, attempts, "ok" if payload is not None else "empty"))
        return payload

    @staticmethod
    def _should_retry(exc: BaseException) -> bool:
        return isinstance(exc, ModelError) and exc.retryable

    async def _send(self, prompt: str, api_key: str, model: str, temperature: float) -> dict | None:
        """One HTTP round trip, classified into a payload or a ModelError."""
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "temperature": temperature,
            },
        }
        try:
            response = await self._http.post(
                f"{self.base_url}/models/{model}:generateContent",
                params={"key": api_key},
                json=body,
            )
        except httpx.TransportError as exc:
            raise NetworkError(f"Request to model service failed: {exc}") from exc

        status = response.status_code
        if status in (401, 403):
            raise AuthError(f"API key or permission problem (status {status})")
        if status == 429 or status >= 500:
            raise ServerBusyError(status)
        if not response.is_success:
            raise ClientError(status, response.text)

        try:
            data = response.json()
        except ValueError as exc:
            raise InvalidStructureError("Response body is not JSON") from exc

        raw = extract_text_from_response(data)
        if not raw:
            return None

        parsed = extract_json(raw)
        if parsed is None:
            if self.retry_on_parse_failure:
                raise InvalidStructureError(f"No JSON object in model text: {raw[:200]}")
            raise ParseError(f"No JSON object in model text: {raw[:200]}")
        if not isinstance(parsed, dict) or not any(k in parsed for k in EXPECTED_KEYS):
            raise InvalidStructureError("Invalid JSON structure received from model")
        return parsed

    def get_call_summary(self) -> dict:
        """Return accumulated call statistics and reset the log."""
        summary = {
            "calls": len(self._call_log),
            "attempts": sum(r.attempts for r in self._call_log),
            "failures": sum(1 for r in self._call_log if r.outcome not in ("ok", "empty")),
            "records": list(self._call_log),
        }
        self._call_log.clear()
        return summary
