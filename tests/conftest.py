"""Pytest configuration and shared fixtures."""
import asyncio
import os
from unittest.mock import AsyncMock, Mock

import pytest

from groundchat.conversation import Conversation
from groundchat.fact_check import Classification, VerificationOutcome
from groundchat.generation import GenerationBackend
from groundchat.llm import LLMResponse
from groundchat.pipeline import ResponsePipeline, Toggles
from groundchat.prompts import clear_cache

GREETING = "Hello! Ask me anything. My responses can be fact-checked in real-time."


class ScriptedGenerator(GenerationBackend):
    """Generation backend returning canned replies and recording prompts."""

    def __init__(self, *replies: str | Exception):
        self.replies = list(replies)
        self.prompts: list[str] = []
        self.closed = False

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self) -> None:
        self.closed = True


class BlockingGenerator(GenerationBackend):
    """Generation backend that waits until released."""

    def __init__(self, reply: str = "Done."):
        self.reply = reply
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.calls = 0

    async def generate(self, prompt: str) -> str:
        self.calls += 1
        self.started.set()
        await self.release.wait()
        return self.reply

    async def close(self) -> None:
        pass


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture
def fake_llm():
    """LLM provider mock; set ``generate_content`` return values per test."""
    llm = Mock()
    llm.generate_content = AsyncMock(return_value=LLMResponse(text="OPINION"))
    llm.close = AsyncMock()
    return llm


@pytest.fixture
def classifier():
    mock = Mock()
    mock.classify = AsyncMock(return_value=Classification.FACT)
    return mock


@pytest.fixture
def verifier():
    mock = Mock()
    mock.verify = AsyncMock(return_value=VerificationOutcome.confirmed())
    return mock


@pytest.fixture
def make_pipeline(classifier, verifier):
    """Build a pipeline around a generator, with mocked fact checkers."""
    def _make(generator: GenerationBackend, **kwargs) -> ResponsePipeline:
        kwargs.setdefault("conversation", Conversation(greeting=GREETING))
        kwargs.setdefault("toggles", Toggles())
        return ResponsePipeline(
            generator=generator,
            classifier=kwargs.pop("classifier", classifier),
            verifier=kwargs.pop("verifier", verifier),
            **kwargs,
        )
    return _make


@pytest.fixture
def prompt_dir(tmp_path, monkeypatch):
    """Working directory whose ./prompts/ overrides the packaged prompts."""
    prompts = tmp_path / "prompts"
    prompts.mkdir()
    monkeypatch.chdir(tmp_path)
    clear_cache()
    yield prompts
    clear_cache()
