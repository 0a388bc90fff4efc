"""HTTPSolverEngine - JSON over HTTP transport to a remote solving engine."""

import logging
from typing import Any, List

import aiohttp

from .errors import EngineError
from .models import GuessPayload, HTTPEngineConfig, Suggestion

logger = logging.getLogger(__name__)


class HTTPSolverEngine:
    """Client for a solving engine exposed over HTTP.

    query: POST {base_url}{play_path} with {"history": [...]}, answered by a
    JSON array of {word, score} (or an object holding a "suggestions" array).
    reset: POST {base_url}{reset_path}.
    """

    def __init__(self, config: HTTPEngineConfig) -> None:
        self._config = config

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}{path}"

    def _timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self._config.timeout)

    @staticmethod
    def _parse_suggestions(data: Any) -> List[Suggestion]:
        if isinstance(data, dict):
            data = data.get("suggestions")
        if not isinstance(data, list):
            raise EngineError(f"Unexpected engine response: {type(data).__name__}")
        return [Suggestion.model_validate(item) for item in data]

    async def query(self, history: List[GuessPayload]) -> List[Suggestion]:
        """Send the full history and return the engine's ranking."""
        url = self._url(self._config.play_path)
        payload = {"history": [entry.model_dump() for entry in history]}
        logger.info("Querying engine at %s with %d guesses", url, len(history))

        async with aiohttp.ClientSession(timeout=self._timeout()) as session:
            async with session.post(url, json=payload) as resp:
                if resp.status >= 300:
                    body = await resp.text()
                    logger.error("Engine query failed: %d %s", resp.status, body)
                    raise EngineError(f"HTTP {resp.status}: {body}")
                data = await resp.json(content_type=None)

        return self._parse_suggestions(data)

    async def reset(self) -> None:
        """Ask the engine to drop its session state."""
        url = self._url(self._config.reset_path)
        logger.info("Resetting engine at %s", url)

        async with aiohttp.ClientSession(timeout=self._timeout()) as session:
            async with session.post(url) as resp:
                if resp.status >= 300:
                    body = await resp.text()
                    logger.error("Engine reset failed: %d %s", resp.status, body)
                    raise EngineError(f"HTTP {resp.status}: {body}")
