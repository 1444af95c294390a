"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Dark/light mode configuration

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Catppuccin Mocha palette; corrections use the accent color
GROUNDCHAT_MOCHA = Theme(
    name="groundchat-mocha",
    primary="#89b4fa",      # Blue - bot messages, focus
    secondary="#cba6f7",    # Mauve - user messages
    accent="#f9e2af",       # Yellow - correction boxes
    foreground="#cdd6f4",
    background="#11111b",
    success="#a6e3a1",      # Switch ON
    warning="#fab387",
    error="#f38ba8",        # Error replies
    surface="#1e1e2e",
    panel="#181825",
    dark=True,
    variables={
        "border": "#45475a",
        "border-blurred": "#313244",
        "text-muted": "#6c7086",
        "input-cursor-background": "#cdd6f4",
        "input-cursor-foreground": "#11111b",
        "footer-key-foreground": "#f9e2af",
    },
)
