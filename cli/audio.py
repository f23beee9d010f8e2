"""Local audio playback through an external command-line player."""

import shutil
import subprocess

from core.interfaces import AudioPlayer

PLAYER_CANDIDATES = ("afplay", "mpg123", "mpg321", "ffplay", "play", "mpv", "aplay")


def find_player() -> list[str] | None:
    """Command prefix for the first available player, or None."""
    for candidate in PLAYER_CANDIDATES:
        resolved = shutil.which(candidate)
        if resolved:
            if candidate == "ffplay":
                return [resolved, "-nodisp", "-autoexit", "-loglevel", "quiet"]
            if candidate == "mpv":
                return [resolved, "--no-video", "--really-quiet"]
            return [resolved]
    return None


class SubprocessAudioPlayer(AudioPlayer):
    """Plays one file at a time; starting a new clip stops the previous one."""

    def __init__(self, command: list[str] | None = None):
        self.command = command
        self._process = None

    def play(self, source: str) -> bool:
        self.stop()
        command = self.command or find_player()
        if not command:
            print("No supported audio player found (tried: " + ", ".join(PLAYER_CANDIDATES) + ").")
            return False
        try:
            self._process = subprocess.Popen(
                command + [source],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL
            )
        except OSError as e:
            print(f"Audio konnte nicht gestartet werden: {e}")
            self._process = None
            return False
        return True

    def stop(self) -> None:
        process, self._process = self._process, None
        if process is None or process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=2)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()

    @property
    def is_playing(self) -> bool:
        return self._process is not None and self._process.poll() is None
