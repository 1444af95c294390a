"""Provider factory functions for CLI.

Centralizes creation of the generation client, the fact-check LLM and the
pipeline from Settings. Hides configuration details from command implementations.
"""

from rich.console import Console

from ..conversation import ContextWindowBuilder, Conversation
from ..fact_check import GroundedVerifier, StatementClassifier
from ..generation import GenerationClient
from ..llm import LLMProvider, create_llm_provider
from ..pipeline import PipelineCallback, ResponsePipeline, Toggles
from ..settings import Settings

# Default console for output
_console = Console()


def get_settings(console: Console | None = None) -> Settings:
    """Load settings from the environment, exiting on invalid values."""
    import typer

    con = console or _console
    try:
        return Settings.from_env()
    except ValueError as e:
        con.print(f"[red]Error: invalid configuration: {e}[/red]")
        raise typer.Exit(code=1)


def get_generation_client(settings: Settings) -> GenerationClient:
    """Create the client for the primary generation endpoint."""
    return GenerationClient(
        endpoint=settings.generation_endpoint,
        max_new_tokens=settings.max_new_tokens,
        timeout=settings.generation_timeout,
        max_retries=settings.generation_max_retries,
    )


def get_llm(settings: Settings, console: Console | None = None) -> LLMProvider | None:
    """Create the fact-check LLM provider.

    Returns:
        LLM provider instance, or None if not configured
    """
    con = console or _console
    provider = settings.llm_provider.lower()

    if provider == "gemini":
        if not settings.gemini_api_key:
            con.print("[yellow]Warning: GEMINI_API_KEY not set, fact-checking disabled[/yellow]")
            return None
        return create_llm_provider(
            "gemini",
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            timeout=settings.fact_check_timeout,
            max_retries=settings.fact_check_max_retries,
        )

    con.print(f"[red]Error: Unknown LLM provider: {settings.llm_provider}[/red]")
    return None


def require_llm(settings: Settings, console: Console | None = None) -> LLMProvider:
    """Get LLM provider, raising error if not configured.

    Raises:
        SystemExit: If LLM provider is not configured
    """
    import typer

    con = console or _console
    llm = get_llm(settings, con)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm


class _UnconfiguredLLM(LLMProvider):
    """Stand-in used when no fact-check provider is configured.

    Every call fails, so classification falls back to OPINION.
    """

    async def generate_content(self, prompt, *, model=None, tools=None, system_instruction=None, **kwargs):
        raise RuntimeError("no fact-check provider configured")

    async def close(self) -> None:
        pass


def build_pipeline(
    settings: Settings,
    generator: GenerationClient,
    llm: LLMProvider | None,
    callback: PipelineCallback | None = None,
) -> ResponsePipeline:
    """Wire a ResponsePipeline from settings and already-built clients.

    Without an LLM the fact-check toggle starts off.
    """
    backend = llm or _UnconfiguredLLM()
    toggles = Toggles(
        context_enabled=settings.context_enabled,
        fact_check_enabled=settings.fact_check_enabled and llm is not None,
    )
    return ResponsePipeline(
        generator=generator,
        classifier=StatementClassifier(backend),
        verifier=GroundedVerifier(backend),
        conversation=Conversation(greeting=settings.greeting),
        toggles=toggles,
        context_builder=ContextWindowBuilder(settings.context_window),
        callback=callback,
    )
