"""
Pydantic models for the assistant layer.

This module contains the wire shapes exchanged with the solving engine,
the results the gateway hands back to the session, and the configuration
models loaded from YAML. The logic classes (SolverGateway, engines,
PuzzleAssistant) remain in their respective files.
"""

from typing import List, Optional, Literal, Union
from pydantic import BaseModel, ConfigDict, Field

from ..grid.models import WORD_LENGTH, AssistantError


# Type aliases
WireColor = Literal["correct", "misplaced", "wrong"]


class GuessPayload(BaseModel):
    """One committed guess as the engine expects it."""
    word: str = Field(..., pattern=r'^[a-z]{5}$')
    mask: List[WireColor] = Field(..., min_length=WORD_LENGTH, max_length=WORD_LENGTH)


class Suggestion(BaseModel):
    """A candidate word and its desirability score, as ranked by the engine."""
    word: str
    score: float


class GatewayResult(BaseModel):
    """Outcome of one gateway operation (query or reset handshake)."""
    applied: bool = False  # False when the response was stale and discarded
    suggestions: List[Suggestion] = Field(default_factory=list)
    errors: List[AssistantError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class HTTPEngineConfig(BaseModel):
    """Configuration for a solving engine reachable over HTTP."""
    kind: Literal["http"] = "http"
    base_url: str = "http://127.0.0.1:8080"
    play_path: str = "/play"
    reset_path: str = "/reset"
    timeout: float = Field(default=10.0, gt=0)


class LLMEngineConfig(BaseModel):
    """Configuration for a chat-model-backed solving engine."""
    model_config = ConfigDict(extra='allow')

    kind: Literal["llm"] = "llm"
    model: str
    temperature: float = 1.0
    max_tokens: Optional[int] = None
    max_suggestions: int = Field(default=10, ge=1)
    # Additional kwargs are allowed and passed to LiteLLM


EngineConfig = Union[HTTPEngineConfig, LLMEngineConfig]


class AssistantConfig(BaseModel):
    """Configuration for an assistant session."""
    max_rows: int = Field(default=6, ge=1)  # display only
    max_suggestions: int = Field(default=10, ge=1)
    engine: EngineConfig = Field(default_factory=HTTPEngineConfig, discriminator="kind")


class SessionRecord(BaseModel):
    """A saved session: committed history plus the last suggestions."""
    history: List[GuessPayload] = Field(default_factory=list)
    suggestions: List[Suggestion] = Field(default_factory=list)
    saved_at: str = ""
