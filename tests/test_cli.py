"""Tests for the Typer CLI wiring."""
import pytest
from typer.testing import CliRunner

from groundchat.cli import app as cli_app
from groundchat.cli.providers import build_pipeline
from groundchat.pipeline import APOLOGY_TEXT
from groundchat.settings import Settings

from .conftest import ScriptedGenerator

runner = CliRunner()


@pytest.fixture
def scripted(monkeypatch):
    """Replace the HTTP generation client with a scripted one."""
    def _install(*replies):
        generator = ScriptedGenerator(*replies)
        monkeypatch.setattr(cli_app, "get_generation_client", lambda settings: generator)
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        return generator
    return _install


class TestBuildPipeline:
    """Tests for pipeline wiring from settings."""

    def test_fact_check_off_without_llm(self):
        pipeline = build_pipeline(Settings(), ScriptedGenerator(), llm=None)

        assert pipeline.toggles.fact_check_enabled is False
        assert pipeline.toggles.context_enabled is True
        assert pipeline.conversation[0].text == Settings().greeting

    def test_toggles_follow_settings(self, fake_llm):
        settings = Settings(context_enabled=False, fact_check_enabled=True)

        pipeline = build_pipeline(settings, ScriptedGenerator(), llm=fake_llm)

        assert pipeline.toggles.context_enabled is False
        assert pipeline.toggles.fact_check_enabled is True


class TestAskCommand:
    """Tests for the one-shot ask command."""

    def test_prints_reply(self, scripted):
        generator = scripted("Paris is the capital of France.")

        result = runner.invoke(cli_app.app, ["ask", "capital of France", "--no-fact-check"])

        assert result.exit_code == 0
        assert "Paris is the capital of France." in result.output
        assert generator.prompts[0].endswith("Current question: capital of France?")
        assert generator.closed

    def test_no_context(self, scripted):
        generator = scripted("ok")

        runner.invoke(cli_app.app, ["ask", "hello", "--no-context", "--no-fact-check"])

        assert generator.prompts == ["hello?"]

    def test_generation_failure_exits_nonzero(self, scripted):
        from groundchat.errors import GenerationError

        scripted(GenerationError("down", 500))

        result = runner.invoke(cli_app.app, ["ask", "hello", "--no-fact-check"])

        assert result.exit_code == 1
        assert APOLOGY_TEXT in result.output
