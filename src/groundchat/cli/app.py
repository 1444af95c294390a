"""Main CLI application using Typer."""
import asyncio
import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..conversation import Message, Sender
from ..fact_check import Classification, GroundedVerifier, StatementClassifier, Verdict
from ..pipeline import PipelineCallback, ResponsePipeline
from ..ui.audio import WelcomeAudioPlayer
from .providers import build_pipeline, get_generation_client, get_llm, get_settings, require_llm

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="groundchat",
    help="Chat with a custom LLM whose replies are fact-checked in real time",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_COMMANDS = ("exit", "quit", "q")
VERDICT_STYLES = {
    Verdict.CORRECTED: "yellow",
    Verdict.INCONCLUSIVE: "dim",
    Verdict.UNAVAILABLE: "red",
    Verdict.SKIPPED: "dim",
}


def configure_logging(level: str) -> None:
    """Route library logging through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def on_off(enabled: bool) -> str:
    return "[green]ON[/green]" if enabled else "[red]OFF[/red]"


def print_message(message: Message) -> None:
    """Render one conversation message."""
    if message.sender is Sender.USER:
        console.print(f"[bold yellow]You:[/bold yellow] {message.text}")
        return

    style = "red" if message.is_error else "green"
    console.print(f"[bold {style}]Bot:[/bold {style}] {message.text}")

    if message.correction and message.verification is not None:
        border = VERDICT_STYLES.get(message.verification.verdict, "yellow")
        console.print(Panel(
            message.correction,
            title="Verified Correction",
            border_style=border,
            expand=False,
        ))
    console.print()


class ConsoleCallback(PipelineCallback):
    """Prints bot replies as the pipeline commits them."""

    def on_message(self, message: Message) -> None:
        if message.sender is Sender.BOT:
            print_message(message)


def print_toggles(pipeline: ResponsePipeline) -> None:
    toggles = pipeline.toggles
    console.print(
        f"[dim]Conversation Context:[/dim] {on_off(toggles.context_enabled)}  "
        f"[dim]Real-time Verification:[/dim] {on_off(toggles.fact_check_enabled)}"
    )
    if toggles.fact_check_enabled:
        console.print("[dim]Model can hallucinate, so real-time verification is enabled.[/dim]")


def print_history(pipeline: ResponsePipeline) -> None:
    table = Table(title="Conversation")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Sender")
    table.add_column("Text")
    table.add_column("Correction")

    for message in pipeline.conversation:
        table.add_row(
            str(message.id),
            message.sender.value,
            message.text,
            message.correction or "",
        )
    console.print(table)


@app.command()
def chat(
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Logging level (debug, info, warning, error)"
    ),
):
    """Interactive chat with real-time fact verification.

    Slash commands: /context toggles conversation context, /factcheck toggles
    verification, /history shows the conversation, /play plays the welcome audio.
    """
    configure_logging(log_level)

    async def _chat():
        settings = get_settings(console)
        generator = get_generation_client(settings)
        llm = get_llm(settings, console)
        pipeline = build_pipeline(settings, generator, llm, callback=ConsoleCallback())
        player = WelcomeAudioPlayer(settings.welcome_audio)

        try:
            console.print("[bold cyan]Groundchat[/bold cyan]")
            console.print("[dim]Type 'exit', 'quit', or 'q' to leave. "
                          "Commands: /context /factcheck /history /play[/dim]\n")
            for message in pipeline.conversation:
                print_message(message)
            print_toggles(pipeline)

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                command = user_input.strip().lower()
                if not command:
                    continue
                if command in EXIT_COMMANDS:
                    console.print("[dim]Goodbye![/dim]")
                    break
                if command == "/context":
                    pipeline.toggles.toggle_context()
                    print_toggles(pipeline)
                    continue
                if command == "/factcheck":
                    if llm is None:
                        console.print("[yellow]Fact-checking needs GEMINI_API_KEY[/yellow]")
                        continue
                    pipeline.toggles.toggle_fact_check()
                    print_toggles(pipeline)
                    continue
                if command == "/history":
                    print_history(pipeline)
                    continue
                if command == "/play":
                    await player.play()
                    continue

                with console.status("[dim]Thinking...[/dim]"):
                    await pipeline.submit(user_input)
        finally:
            await generator.close()
            if llm is not None:
                await llm.close()

    asyncio.run(_chat())


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question to send"),
    no_context: bool = typer.Option(False, "--no-context", help="Do not send conversation context"),
    no_fact_check: bool = typer.Option(False, "--no-fact-check", help="Skip real-time verification"),
    log_level: str = typer.Option("warning", "--log-level", "-l", help="Logging level"),
):
    """Ask a single question and print the verified reply."""
    configure_logging(log_level)

    async def _ask() -> bool:
        settings = get_settings(console)
        generator = get_generation_client(settings)
        llm = None if no_fact_check else get_llm(settings, console)
        pipeline = build_pipeline(settings, generator, llm)
        if no_context:
            pipeline.toggles.context_enabled = False
        if no_fact_check:
            pipeline.toggles.fact_check_enabled = False

        try:
            with console.status("[dim]Thinking...[/dim]"):
                reply = await pipeline.submit(question)
        finally:
            await generator.close()
            if llm is not None:
                await llm.close()

        if reply is None:
            console.print("[red]Error: question is empty[/red]")
            return False
        print_message(reply)
        return not reply.is_error

    if not asyncio.run(_ask()):
        raise typer.Exit(code=1)


@app.command()
def check(
    statement: str = typer.Argument(..., help="Statement to fact-check"),
    log_level: str = typer.Option("warning", "--log-level", "-l", help="Logging level"),
):
    """Classify a statement and, if it is a fact, verify it with search grounding."""
    configure_logging(log_level)

    async def _check():
        settings = get_settings(console)
        llm = require_llm(settings, console)
        try:
            with console.status("[dim]Classifying...[/dim]"):
                classification = await StatementClassifier(llm).classify(statement)
            console.print(f"[bold]Classification:[/bold] {classification.value}")

            if classification is Classification.OPINION:
                console.print("[dim]Statement is an opinion. Skipping fact-check.[/dim]")
                return

            with console.status("[dim]Verifying...[/dim]"):
                outcome = await GroundedVerifier(llm).verify(statement)
        finally:
            await llm.close()

        console.print(f"[bold]Verdict:[/bold] {outcome.verdict.value}")
        if outcome.correction:
            console.print(Panel(outcome.correction, title="Verified Correction", expand=False))

    asyncio.run(_check())


@app.command(name="tui")
def tui_command(
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Logging level for the log file"
    ),
    log_file: str | None = typer.Option(
        None,
        "--log-file",
        help="Write logs to this file (the TUI owns the terminal)"
    ),
):
    """Launch interactive TUI chat interface."""
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            force=True,
        )

    from ..ui import run_textual_tui

    settings = get_settings(console)
    llm = get_llm(settings, console)
    generator = get_generation_client(settings)
    pipeline = build_pipeline(settings, generator, llm)

    run_textual_tui(
        pipeline,
        audio=WelcomeAudioPlayer(settings.welcome_audio),
        fact_check_available=llm is not None,
        resources=[generator, llm] if llm is not None else [generator],
    )


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
