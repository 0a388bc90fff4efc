import asyncio
from typing import Any, List, Optional

import pytest

from src.assistant import GuessPayload, Suggestion


class FakeEngine:
    """
    In-memory engine. Queued responses are returned in call order; a queued
    exception is raised, a queued future is awaited.
    """

    def __init__(self) -> None:
        self.calls: List[str] = []
        self.queries: List[List[GuessPayload]] = []
        self.responses: List[Any] = []
        self.reset_error: Optional[Exception] = None
        self.default = [Suggestion(word="crane", score=5.0), Suggestion(word="slate", score=4.5)]

    async def query(self, history: List[GuessPayload]) -> List[Suggestion]:
        self.calls.append("query")
        self.queries.append(list(history))
        response = self.responses.pop(0) if self.responses else self.default
        if isinstance(response, Exception):
            raise response
        if isinstance(response, asyncio.Future):
            return await response
        return response

    async def reset(self) -> None:
        self.calls.append("reset")
        if self.reset_error is not None:
            raise self.reset_error


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()
