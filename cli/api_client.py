"""REST API client for the word game server."""

import requests


class WordGameAPIClient:
    """Client for communicating with the word game REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        if data is None:
            data = {}
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_status(self) -> dict:
        """Get level, lock flag and session stats."""
        return self._get("/api/status")

    def get_next_question(self) -> dict:
        """Get the next question (or exhausted=True)."""
        return self._get("/api/next")

    def submit_answer(self, card_id: str, selected: str) -> dict:
        """Submit the selected option for a card."""
        return self._post("/api/answer", {
            'card_id': card_id,
            'selected': selected
        })

    def set_level(self, level: str) -> dict:
        """Jump to a level (resets the session)."""
        return self._post("/api/level", {'level': level})

    def toggle_lock(self) -> dict:
        """Toggle the level lock."""
        return self._post("/api/lock")

    def reset(self) -> dict:
        """Start the session over."""
        return self._post("/api/reset")
