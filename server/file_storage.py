"""File-based content store."""

import json
import logging
import os

from core.config import TEXTS_FILE, VOCAB_FILE, EXERCISES_FILE
from core.interfaces import ContentStore

logger = logging.getLogger(__name__)


class FileContentStore(ContentStore):
    """Reads texts, vocabulary and exercise sets from JSON files in one directory."""

    def __init__(self, data_dir: str = None):
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.data_dir = data_dir or project_root

    def _path(self, filename: str) -> str:
        return os.path.join(self.data_dir, filename)

    def _load_list(self, filename: str, required: bool = True) -> list[dict]:
        """Load a JSON list. Missing or broken files give an empty list."""
        path = self._path(filename)
        if not os.path.exists(path):
            if required:
                logger.warning(f"Content file not found: {path}")
            return []
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not load {path}: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Expected a list in {path}, got {type(data).__name__}")
            return []
        logger.info(f"Loaded {len(data)} entries from {filename}")
        return data

    def load_texts(self) -> list[dict]:
        return self._load_list(TEXTS_FILE)

    def load_vocab(self) -> list[dict]:
        return self._load_list(VOCAB_FILE)

    def load_exercises(self) -> list[dict]:
        return self._load_list(EXERCISES_FILE, required=False)

    def resolve_audio(self, audio_ref: str) -> str | None:
        if not audio_ref:
            return None
        path = audio_ref if os.path.isabs(audio_ref) else self._path(audio_ref)
        if os.path.isfile(path):
            return path
        logger.warning(f"Audio file not found: {path}")
        return None
