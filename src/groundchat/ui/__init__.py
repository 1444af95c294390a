"""Terminal UI module for groundchat.

Provides a Textual-based TUI over ResponsePipeline.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (message rendering, toggles, input)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- audio.py: Welcome audio playback
- app.py: Application orchestration (user interaction flow)
"""

from .app import GroundchatApp, TUICallback, run_textual_tui
from .audio import WelcomeAudioPlayer
from .widgets import ChatHistoryWidget, ChatInputBar, ToggleBar

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "GroundchatApp",
    "TUICallback",
    "ToggleBar",
    "WelcomeAudioPlayer",
    "run_textual_tui",
]
