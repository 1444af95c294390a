"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* Chat history */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-left: thick $secondary;
}

.bot-message {
    border-left: thick $primary;
}

.error-message {
    border-left: thick $error;
    color: $error;
}

.message-header {
    color: $text-muted;
    text-style: italic;
}

.message-content {
    height: auto;
}

.correction-box {
    height: auto;
    margin: 1 0 0 2;
    padding: 0 1;
    border: round $accent 70%;
    color: $accent;
}

.correction-box.inconclusive, .correction-box.skipped {
    border: round $text-muted;
    color: $text-muted;
}

.correction-box.unavailable {
    border: round $error 70%;
    color: $error;
}

.play-audio-button {
    margin: 1 0 0 0;
    min-width: 16;
}

#loading {
    height: 3;
}

/* Toggles + input */
#bottom-bar {
    height: auto;
    padding: 0 1;
    background: $panel;
    border-top: solid $border;
}

ToggleBar {
    height: auto;
}

.toggle-wrapper {
    width: auto;
    height: auto;
    margin-right: 4;
}

.toggle-wrapper Label {
    padding: 1 1 0 0;
}

#disclaimer {
    height: 1;
    color: $text-muted;
    text-style: italic;
}

ChatInputBar {
    height: auto;
}

#chat-input {
    width: 1fr;
}

#send-btn {
    min-width: 10;
}
"""
