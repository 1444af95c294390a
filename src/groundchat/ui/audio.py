"""Welcome audio playback.

Plays a fixed local asset through whichever command-line player is
installed. Playback problems are logged and never reach the conversation.
"""

import asyncio
import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

# Tried in order; the first one found on PATH wins
PLAYER_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("afplay",),
    ("paplay",),
    ("aplay", "-q"),
    ("ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"),
)


class WelcomeAudioPlayer:
    """Plays the welcome clip on demand."""

    def __init__(self, path: Path | str = "welcome.wav"):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _find_player(self) -> tuple[str, ...] | None:
        for command in PLAYER_COMMANDS:
            if shutil.which(command[0]):
                return command
        return None

    async def play(self) -> bool:
        """Play the clip once.

        Returns:
            True if the player exited cleanly
        """
        if not self._path.is_file():
            logger.error("Failed to play welcome audio: %s not found", self._path)
            return False

        command = self._find_player()
        if command is None:
            logger.error("Failed to play welcome audio: no audio player available")
            return False

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                str(self._path),
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            return_code = await process.wait()
        except OSError as e:
            logger.error("Failed to play welcome audio: %s", e)
            return False

        if return_code != 0:
            logger.error("Failed to play welcome audio: %s exited with %d", command[0], return_code)
            return False
        return True
