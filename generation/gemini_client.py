"""
Gemini generateContent client.

One POST per call, no retries. The API key and model name are read from
the environment at call time unless passed explicitly.

Model: gemini-2.0-flash  (override with GEMINI_MODEL env var)
"""

from typing import Optional

import httpx

from models.cancellation import CancelToken, check
from models.errors import ConfigurationError, EmptyResponseError, GenerationAPIError
from config.settings import GEMINI_API_BASE, REQUEST_TIMEOUT, get_api_key, get_model_name
import logging

logger = logging.getLogger(__name__)

UNEXPECTED_RESPONSE = (
    "Gemini API returned an unexpected response. Please verify your API key and model name."
)


def build_request_body(prompt: str) -> dict:
    return {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": prompt}],
            }
        ],
        "generationConfig": {
            "responseMimeType": "application/json",
        },
    }


def extract_generated_text(data: dict) -> str:
    """candidates[0].content.parts[0].text, or "" when any level is missing"""
    try:
        return data["candidates"][0]["content"]["parts"][0].get("text") or ""
    except (KeyError, IndexError, TypeError, AttributeError):
        return ""


class GeminiClient:
    """Synchronous Gemini REST client"""

    def __init__(
        self,
        api_base: str = GEMINI_API_BASE,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def endpoint(self, model_name: str) -> str:
        return f"{self.api_base}/v1beta/models/{model_name}:generateContent"

    def _timeout_for(self, cancel: Optional[CancelToken]) -> float:
        remaining = cancel.remaining() if cancel is not None else None
        if remaining is None:
            return self.timeout
        return max(0.1, min(self.timeout, remaining))

    def generate(
        self,
        prompt: str,
        model_name: Optional[str] = None,
        api_key: Optional[str] = None,
        cancel: Optional[CancelToken] = None,
    ) -> str:
        """
        Send the prompt and return the raw generated text.

        Raises:
            ConfigurationError: no API key (no request is made)
            GenerationAPIError: transport failure or non-2xx status
            EmptyResponseError: 2xx response without generated text
            GenerationCancelled: cancel token fired before or during the call
        """
        api_key = api_key or get_api_key()
        if not api_key:
            raise ConfigurationError.missing_api_key()
        model_name = model_name or get_model_name()

        check(cancel, "the Gemini request")
        logger.info(f"Calling Gemini model {model_name} ({len(prompt):,} prompt chars)")

        try:
            with httpx.Client(timeout=self._timeout_for(cancel), transport=self.transport) as client:
                response = client.post(
                    self.endpoint(model_name),
                    headers={
                        "Content-Type": "application/json",
                        "x-goog-api-key": api_key,
                    },
                    json=build_request_body(prompt),
                )
        except httpx.HTTPError as e:
            logger.error(f"Gemini request failed: {e}")
            check(cancel, "the Gemini request")
            raise GenerationAPIError(0, str(e) or e.__class__.__name__) from e

        check(cancel, "the Gemini request")

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success or not isinstance(data, dict):
            message = UNEXPECTED_RESPONSE
            if isinstance(data, dict) and isinstance(data.get("error"), dict):
                message = data["error"].get("message") or message
            logger.error(f"Gemini API error {response.status_code}: {message}")
            raise GenerationAPIError(response.status_code, message)

        text = extract_generated_text(data)
        if not text:
            raise EmptyResponseError()

        logger.info(f"✓ Gemini returned {len(text):,} chars")
        return text
