"""REST API client for the Seefunk trainer server."""

import mimetypes
import os
import tempfile

import requests


class SeefunkAPIClient:
    """Client for communicating with the Seefunk trainer REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()
        self._audio_cache = {}  # text index -> local file

    def _get(self, endpoint: str, params: dict = None, with_user: bool = False):
        """Make a GET request."""
        if params is None:
            params = {}
        if with_user:
            params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict, with_user: bool = False) -> dict:
        """Make a POST request."""
        if with_user:
            data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        return self._get("/")

    def list_texts(self) -> list[dict]:
        return self._get("/api/texts")

    def get_text(self, index: int) -> dict:
        return self._get(f"/api/texts/{index}")

    def grade(self, index: int, answer: str, mode: str) -> dict:
        """Grade an answer against text `index` ('de' dictation, 'en' translation)."""
        return self._post("/api/grade", {'index': index, 'answer': answer, 'mode': mode})

    def download_audio(self, index: int) -> str | None:
        """Fetch a text's recording to a temp file. Returns the path or None if there is none."""
        if index in self._audio_cache and os.path.exists(self._audio_cache[index]):
            return self._audio_cache[index]
        response = self.session.get(f"{self.base_url}/api/texts/{index}/audio")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        content_type = response.headers.get('content-type', '').split(';')[0].strip()
        suffix = mimetypes.guess_extension(content_type) or '.mp3'
        fd, path = tempfile.mkstemp(prefix=f"seefunk_{index}_", suffix=suffix)
        with os.fdopen(fd, 'wb') as f:
            f.write(response.content)
        self._audio_cache[index] = path
        return path

    def close(self) -> None:
        """Remove downloaded audio files and close the HTTP session."""
        for path in self._audio_cache.values():
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
        self._audio_cache.clear()
        self.session.close()

    def get_chapters(self) -> list[str]:
        return self._get("/api/chapters")['chapters']

    def start_drill(self, settings: dict) -> dict:
        """Start a fresh drill session with the given settings."""
        return self._post("/api/drill/start", dict(settings), with_user=True)

    def next_card(self) -> dict:
        return self._get("/api/drill/next", with_user=True)

    def answer(self, answer: str) -> dict:
        return self._post("/api/drill/answer", {'answer': answer}, with_user=True)

    def get_drill_status(self) -> dict:
        return self._get("/api/drill/status", with_user=True)

    def get_errors(self) -> dict:
        return self._get("/api/drill/errors", with_user=True)
