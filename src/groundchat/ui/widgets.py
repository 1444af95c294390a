"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat message and correction rendering
- Toggle switch layout
- Input handling and disabled state while a turn is running
"""

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, Label, Static, Switch

from ..conversation import Message, Sender

DISCLAIMER_TEXT = "Model can hallucinate, so real-time verification is enabled."


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history with correction boxes under bot replies."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._message_count = 0

    def add_message(self, message: Message, show_play_button: bool = False) -> None:
        """Render a message and scroll to it."""
        self._message_count += 1
        self.border_subtitle = f"{self._message_count} messages"

        if message.sender is Sender.USER:
            classes = "chat-message user-message"
            header = f"> You [{message.timestamp:%H:%M:%S}]"
        elif message.is_error:
            classes = "chat-message error-message"
            header = f"< Bot [{message.timestamp:%H:%M:%S}]"
        else:
            classes = "chat-message bot-message"
            header = f"< Bot [{message.timestamp:%H:%M:%S}]"

        container = Vertical(classes=classes)
        container.compose_add_child(Static(header, classes="message-header"))
        container.compose_add_child(Static(message.text, classes="message-content", markup=False))

        if show_play_button:
            container.compose_add_child(
                Button("▶ Play Welcome", id="play-audio", classes="play-audio-button")
            )

        if message.correction and message.verification is not None:
            verdict = message.verification.verdict.value
            container.compose_add_child(Static(
                f"Verified Correction: {message.correction}",
                classes=f"correction-box {verdict}",
                markup=False,
            ))

        self.mount(container)
        self.scroll_end(animate=False)


class ToggleBar(Vertical):
    """Conversation Context and Real-time Verification switches."""

    def __init__(
        self,
        context_enabled: bool,
        fact_check_enabled: bool,
        fact_check_available: bool = True,
        *args,
        **kwargs
    ) -> None:
        super().__init__(*args, **kwargs)
        self._context_enabled = context_enabled
        self._fact_check_enabled = fact_check_enabled
        self._fact_check_available = fact_check_available

    def compose(self):
        with Horizontal():
            with Horizontal(classes="toggle-wrapper"):
                yield Label("Conversation Context")
                yield Switch(value=self._context_enabled, id="context-switch")
            with Horizontal(classes="toggle-wrapper"):
                yield Label("Real-time Verification")
                yield Switch(
                    value=self._fact_check_enabled,
                    id="fact-check-switch",
                    disabled=not self._fact_check_available,
                )
        yield Static(self._disclaimer(self._fact_check_enabled), id="disclaimer")

    @staticmethod
    def _disclaimer(fact_check_enabled: bool) -> str:
        return DISCLAIMER_TEXT if fact_check_enabled else ""

    def show_fact_check_state(self, enabled: bool) -> None:
        self.query_one("#disclaimer", Static).update(self._disclaimer(enabled))


class ChatInputBar(Horizontal):
    """Single-line input with a Send button."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield Input(placeholder="Type your message...", id="chat-input")
        yield Button("Send", id="send-btn", variant="success", disabled=True)

    def on_input_changed(self, event: Input.Changed) -> None:
        self.query_one("#send-btn", Button).disabled = self.disabled or not event.value.strip()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def _submit(self) -> None:
        text_input = self.query_one("#chat-input", Input)
        value = text_input.value
        if value.strip() and not self.disabled:
            text_input.value = ""
            self.post_message(self.Submitted(value))

    def set_sending(self, sending: bool) -> None:
        """Disable input while a turn is in flight."""
        self.disabled = sending
        text_input = self.query_one("#chat-input", Input)
        self.query_one("#send-btn", Button).disabled = sending or not text_input.value.strip()
        if not sending:
            text_input.focus()

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", Input).focus()
