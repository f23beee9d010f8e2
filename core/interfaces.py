"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class ContentStore(ABC):
    """Abstract source of the static learning content."""

    @abstractmethod
    def load_texts(self) -> list[dict]:
        """Load reference texts. Returns [] if unavailable."""
        pass

    @abstractmethod
    def load_vocab(self) -> list[dict]:
        """Load raw vocabulary items. Returns [] if unavailable."""
        pass

    @abstractmethod
    def load_exercises(self) -> list[dict]:
        """Load optional exercise sets. Returns [] if unavailable."""
        pass

    @abstractmethod
    def resolve_audio(self, audio_ref: str) -> str | None:
        """Resolve an audio reference to a local file path, or None if missing."""
        pass


class AudioPlayer(ABC):
    """Abstract audio output. At most one clip plays at a time."""

    @abstractmethod
    def play(self, source: str) -> bool:
        """Stop whatever is playing, then start source. Returns True on success."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop and release the current clip, if any."""
        pass
