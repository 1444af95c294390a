"""HTTP client for the custom generation endpoint.

The endpoint takes the prompt and token budget as query parameters of a POST
request with no body and answers with JSON ``{"response": "..."}``.
"""

import asyncio
import logging
from typing import Any

import httpx

from ..errors import GenerationError, InvalidPayloadError
from .base import GenerationBackend

logger = logging.getLogger(__name__)

DEFAULT_MAX_NEW_TOKENS = 256
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_MAX_RETRIES = 2
RETRY_BASE_DELAY = 0.5
RETRYABLE_STATUS_CODES = frozenset({502, 503, 504})


class GenerationClient(GenerationBackend):
    """Calls the generation endpoint with one POST per attempt.

    Hidden design decisions:
    - Query-parameter request encoding
    - Payload validation (non-empty ``response`` field)
    - Bounded retry with exponential backoff for transport errors,
      timeouts and gateway statuses; every other status fails at once
    """

    def __init__(
        self,
        endpoint: str,
        max_new_tokens: int = DEFAULT_MAX_NEW_TOKENS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = RETRY_BASE_DELAY,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            endpoint: URL of the generation endpoint
            max_new_tokens: Token budget sent with every request
            timeout: Per-request timeout in seconds
            max_retries: Extra attempts after a transient failure
            retry_delay: Base delay for exponential backoff
            http_client: Pre-built httpx client (owned by the caller)
        """
        self._endpoint = endpoint
        self._max_new_tokens = max_new_tokens
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def generate(self, prompt: str) -> str:
        params = {"prompt": prompt, "max_new_tokens": self._max_new_tokens}
        last_error: GenerationError | None = None

        for attempt in range(self._max_retries + 1):
            try:
                response = await self._client.post(self._endpoint, params=params)
            except httpx.TimeoutException as e:
                last_error = GenerationError(f"Generation request timed out: {e}")
                logger.warning(
                    "Generation timeout (attempt %d/%d)", attempt + 1, self._max_retries + 1
                )
            except httpx.HTTPError as e:
                last_error = GenerationError(f"Generation request failed: {e}")
                logger.warning(
                    "Generation transport error (attempt %d/%d): %s",
                    attempt + 1, self._max_retries + 1, e
                )
            else:
                if response.status_code in RETRYABLE_STATUS_CODES:
                    last_error = self._status_error(response)
                    logger.warning(
                        "Generation endpoint returned %d (attempt %d/%d)",
                        response.status_code, attempt + 1, self._max_retries + 1
                    )
                elif not response.is_success:
                    raise self._status_error(response)
                else:
                    return self._parse_payload(response)

            if attempt < self._max_retries:
                await asyncio.sleep(self._retry_delay * (2 ** attempt))

        assert last_error is not None
        raise last_error

    def _status_error(self, response: httpx.Response) -> GenerationError:
        return GenerationError(
            f"Custom LLM error! status: {response.status_code}",
            status_code=response.status_code,
        )

    def _parse_payload(self, response: httpx.Response) -> str:
        try:
            data: Any = response.json()
        except ValueError as e:
            raise InvalidPayloadError(
                "Invalid response from custom LLM: body is not JSON",
                status_code=response.status_code,
            ) from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text:
            raise InvalidPayloadError(
                "Invalid response from custom LLM.",
                status_code=response.status_code,
            )
        return text

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
