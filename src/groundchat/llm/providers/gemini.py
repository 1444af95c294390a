"""Google Gemini LLM provider implementation.

Uses the official Google GenAI SDK for async content generation.
Reference: https://github.com/googleapis/python-genai

Note: A response that only requests function calls has no consolidated text;
callers receive the function calls and raw candidate parts instead.
"""

import asyncio
import logging
from typing import Any

from google import genai
from google.genai import errors, types

from ..base import LLMProvider
from ..models import Candidate, CandidatePart, FunctionCall, LLMResponse, ToolDeclaration

logger = logging.getLogger(__name__)

# Default safety settings - relaxed so factual topics are not blocked outright
DEFAULT_SAFETY_SETTINGS = [
    types.SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_ONLY_HIGH"),
]


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation.

    Hidden design decisions:
    - Google GenAI client initialization
    - Tool declaration conversion
    - Response normalization into LLMResponse
    - Timeout and retry for server-side failures
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout: float = 60.0,
        max_retries: int = 2,
        retry_delay: float = 0.5,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.5-flash, gemini-2.5-pro, ...)
            timeout: Seconds allowed per request
            max_retries: Retries after a server error or timeout (default 2)
            retry_delay: Base delay between retries
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._timeout = timeout
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def _convert_tools(self, tools: list[ToolDeclaration]) -> list[types.Tool]:
        """Convert tool declarations to a single Gemini Tool."""
        declarations = [
            types.FunctionDeclaration(
                name=tool.name,
                description=tool.description,
                parameters_json_schema=tool.parameters,
            )
            for tool in tools
        ]
        return [types.Tool(function_declarations=declarations)]

    def _build_config(
        self,
        tools: list[ToolDeclaration] | None,
        system_instruction: str | None,
        **kwargs: Any
    ) -> types.GenerateContentConfig:
        config_kwargs: dict[str, Any] = {
            "system_instruction": system_instruction,
            "safety_settings": DEFAULT_SAFETY_SETTINGS,
        }
        if tools:
            config_kwargs["tools"] = self._convert_tools(tools)
        config_kwargs.update(kwargs)
        return types.GenerateContentConfig(**config_kwargs)

    def _to_response(self, response: Any, model: str) -> LLMResponse:
        """Normalize a GenerateContentResponse.

        Args:
            response: Gemini GenerateContentResponse
            model: Model that produced it

        Returns:
            LLMResponse with text, function calls and candidate parts
        """
        try:
            text = response.text or None
        except (ValueError, AttributeError):
            text = None

        function_calls = [
            FunctionCall(name=call.name or "", args=dict(call.args or {}))
            for call in (getattr(response, "function_calls", None) or [])
        ]

        candidates = []
        for candidate in getattr(response, "candidates", None) or []:
            content = getattr(candidate, "content", None)
            parts = getattr(content, "parts", None) or []
            candidates.append(Candidate(parts=[
                CandidatePart(text=getattr(part, "text", None)) for part in parts
            ]))

        usage = None
        metadata = getattr(response, "usage_metadata", None)
        if metadata:
            usage = {
                "prompt_tokens": metadata.prompt_token_count or 0,
                "completion_tokens": metadata.candidates_token_count or 0,
                "total_tokens": metadata.total_token_count or 0
            }

        return LLMResponse(
            text=text,
            function_calls=function_calls,
            candidates=candidates,
            model=model,
            usage=usage,
        )

    async def generate_content(
        self,
        prompt: str,
        *,
        model: str | None = None,
        tools: list[ToolDeclaration] | None = None,
        system_instruction: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate content using Google Gemini.

        Server errors and timeouts are retried; client errors (bad key,
        bad request) are raised immediately.

        Args:
            prompt: Prompt text
            model: Model to use (overrides default)
            tools: Function declarations offered to the model
            system_instruction: System-level directive
            **kwargs: Additional GenerateContentConfig fields

        Returns:
            LLMResponse with generated content
        """
        model_to_use = model or self._model
        config = self._build_config(tools, system_instruction, **kwargs)

        attempt = 0
        while True:
            try:
                response = await asyncio.wait_for(
                    self._client.aio.models.generate_content(
                        model=model_to_use,
                        contents=prompt,
                        config=config
                    ),
                    timeout=self._timeout,
                )
                return self._to_response(response, model_to_use)
            except (errors.ServerError, asyncio.TimeoutError) as e:
                if attempt >= self._max_retries:
                    raise
                logger.warning(
                    "Gemini request failed (attempt %d/%d): %r",
                    attempt + 1, self._max_retries + 1, e
                )
                await asyncio.sleep(self._retry_delay * (attempt + 1))
                attempt += 1

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
