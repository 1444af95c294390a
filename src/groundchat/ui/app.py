"""Main Textual TUI application.

Renders the conversation owned by ResponsePipeline and flips its toggles.
Holds no pipeline logic of its own.
"""

import logging
from typing import Any

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Button, Footer, Header, LoadingIndicator, Switch

from ..conversation import Message
from ..pipeline import PipelineCallback, PipelineStatus, ResponsePipeline
from .audio import WelcomeAudioPlayer
from .styles import APP_CSS
from .themes import GROUNDCHAT_MOCHA
from .widgets import ChatHistoryWidget, ChatInputBar, ToggleBar

logger = logging.getLogger(__name__)


class TUICallback(PipelineCallback):
    """Forwards pipeline updates to the widgets.

    The pipeline runs in an async worker on the app's event loop, so widgets
    can be updated directly.
    """

    def __init__(self, app: "GroundchatApp") -> None:
        self._app = app

    def on_message(self, message: Message) -> None:
        self._app.query_one("#chat-history", ChatHistoryWidget).add_message(message)

    def on_status_change(self, status: PipelineStatus) -> None:
        sending = status is PipelineStatus.SENDING
        self._app.query_one("#loading", LoadingIndicator).display = sending
        self._app.query_one("#chat-input-bar", ChatInputBar).set_sending(sending)


class GroundchatApp(App):
    """Textual TUI for fact-checked chat."""

    CSS = APP_CSS
    TITLE = "Groundchat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("escape", "cancel_turn", "Cancel"),
        Binding("ctrl+t", "toggle_context", "Context"),
        Binding("ctrl+f", "toggle_fact_check", "Verify"),
    ]

    def __init__(
        self,
        pipeline: ResponsePipeline,
        audio: WelcomeAudioPlayer | None = None,
        fact_check_available: bool = True,
        resources: list[Any] | None = None,
    ) -> None:
        super().__init__()
        self._pipeline = pipeline
        self._audio = audio
        self._fact_check_available = fact_check_available
        self._resources = resources or []

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        loading = LoadingIndicator(id="loading")
        loading.display = False
        yield loading
        with Vertical(id="bottom-bar"):
            yield ToggleBar(
                context_enabled=self._pipeline.toggles.context_enabled,
                fact_check_enabled=self._pipeline.toggles.fact_check_enabled,
                fact_check_available=self._fact_check_available,
                id="toggle-bar",
            )
            yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(GROUNDCHAT_MOCHA)
        self.theme = "groundchat-mocha"

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        for index, message in enumerate(self._pipeline.conversation):
            chat.add_message(message, show_play_button=index == 0 and self._audio is not None)

        self._pipeline.set_callback(TUICallback(self))
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    async def on_unmount(self) -> None:
        """Clean up resources when app exits."""
        self._pipeline.set_callback(None)
        for resource in self._resources:
            try:
                await resource.close()
            except Exception:
                logger.exception("Failed to close %r", resource)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._pipeline.is_sending:
            return
        self._run_turn(event.value)

    @work(exclusive=False, group="turns")
    async def _run_turn(self, user_input: str) -> None:
        await self._pipeline.submit(user_input)

    def on_switch_changed(self, event: Switch.Changed) -> None:
        toggles = self._pipeline.toggles
        if event.switch.id == "context-switch":
            toggles.context_enabled = event.value
        elif event.switch.id == "fact-check-switch":
            toggles.fact_check_enabled = event.value
            self.query_one("#toggle-bar", ToggleBar).show_fact_check_state(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "play-audio":
            self._play_welcome()

    @work(exclusive=True, group="audio")
    async def _play_welcome(self) -> None:
        if self._audio is not None and not await self._audio.play():
            self.notify("Could not play welcome audio", severity="warning", timeout=3)

    def action_cancel_turn(self) -> None:
        if self._pipeline.cancel():
            self.notify("Request cancelled", timeout=2)

    def action_toggle_context(self) -> None:
        switch = self.query_one("#context-switch", Switch)
        switch.value = not switch.value

    def action_toggle_fact_check(self) -> None:
        switch = self.query_one("#fact-check-switch", Switch)
        if not switch.disabled:
            switch.value = not switch.value


def run_textual_tui(
    pipeline: ResponsePipeline,
    audio: WelcomeAudioPlayer | None = None,
    fact_check_available: bool = True,
    resources: list[Any] | None = None,
) -> None:
    """Run the Textual TUI until the user quits."""
    app = GroundchatApp(
        pipeline,
        audio=audio,
        fact_check_available=fact_check_available,
        resources=resources,
    )
    app.run()
