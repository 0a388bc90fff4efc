"""Interface of the external solving engine."""

from typing import List, Protocol

from .models import EngineConfig, GuessPayload, HTTPEngineConfig, LLMEngineConfig, Suggestion


class SolverEngine(Protocol):
    """Interface for the external engine that ranks candidate words.

    The engine is stateless per query from the caller's side (the full
    history is sent every time) but may hold its own session state, which
    `reset` discards.

    Implementations:
    - HTTPSolverEngine: a remote engine service over HTTP
    - LLMSolverEngine: a chat model reached through LiteLLM
    """

    async def query(self, history: List[GuessPayload]) -> List[Suggestion]:
        """Rank candidates for the given history, best first.

        An empty history is valid (initial query). Raises on any failure.
        """
        ...

    async def reset(self) -> None:
        """Discard the engine's session state. Raises on failure."""
        ...


def create_engine(config: EngineConfig) -> SolverEngine:
    """
    Factory for the engine described by a configuration.

    Args:
        config: HTTP or LLM engine configuration

    Returns:
        A ready-to-use engine instance
    """
    if isinstance(config, HTTPEngineConfig):
        from .http_engine import HTTPSolverEngine
        return HTTPSolverEngine(config)

    if isinstance(config, LLMEngineConfig):
        from .llm_engine import LLMSolverEngine
        return LLMSolverEngine.create(config)

    raise ValueError(f"Unsupported engine configuration: {type(config).__name__}")
