"""
Clash Royale API client.

Authenticated GET requests against the official API. Only the player
battle log endpoint is used; it returns the ~25 most recent battles.
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from .config import Settings, get_settings
from .exceptions import InvalidAPIKeyError, PlayerNotFoundError, RoyaleAPIError
from .models import Battle

logger = logging.getLogger(__name__)


class RoyaleClient:
    """Minimal client for the Clash Royale REST API."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> RoyaleClient:
        settings = settings or get_settings()
        return cls(
            settings.api_base_url,
            settings.require_api_key(),
            timeout=settings.request_timeout,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def get(self, path: str) -> Any:
        """
        GET `path` and return the decoded JSON body.

        Raises:
            InvalidAPIKeyError: 403, the key is rejected
            PlayerNotFoundError: 404, the requested tag does not exist
            RoyaleAPIError: any other failure (status, timeout, connection, bad JSON)
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url}")

        try:
            response = requests.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            raise RoyaleAPIError("Request timed out. Clash Royale API took too long to respond.") from exc
        except requests.exceptions.ConnectionError as exc:
            raise RoyaleAPIError("Connection error. Unable to reach the Clash Royale API.") from exc

        if response.status_code == 403:
            raise InvalidAPIKeyError(
                "Invalid API key. Check APIKEY and the IP allow-list of the key.",
                status_code=403,
                body=response.text,
            )
        if response.status_code == 404:
            raise PlayerNotFoundError(
                "Player tag not found. Please check the tag.",
                status_code=404,
                body=response.text,
            )
        if response.status_code != 200:
            raise RoyaleAPIError(
                f"API request failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise RoyaleAPIError("Clash Royale API returned invalid JSON.") from exc

    def fetch_battle_log(self, player_tag: str) -> list[Battle]:
        """Fetch the recent battle log for `player_tag` (e.g. '#ABC123')."""
        path = f"/v1/players/{quote(player_tag, safe='')}/battlelog"
        payload = self.get(path)

        if not isinstance(payload, list):
            raise RoyaleAPIError("Unexpected battle log payload: expected a JSON list.")

        battles = [Battle.from_dict(item) for item in payload if isinstance(item, dict)]
        logger.info(f"Fetched {len(battles)} battles for {player_tag}")
        return battles
