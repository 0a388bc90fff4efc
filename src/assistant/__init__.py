"""Solver gateway, engines and the player-facing session."""

from .errors import EngineError, InternalInvariantViolation
from .models import (
    WireColor,
    GuessPayload,
    Suggestion,
    GatewayResult,
    HTTPEngineConfig,
    LLMEngineConfig,
    EngineConfig,
    AssistantConfig,
    SessionRecord,
)
from .encoding import WIRE_COLORS, encode_row, encode_history, decode_mask, decode_payload
from .engine import SolverEngine, create_engine
from .http_engine import HTTPSolverEngine
from .llm_client import LLMClient, Message, Role
from .llm_engine import LLMSolverEngine
from .gateway import SolverGateway
from .session import PuzzleAssistant

__all__ = [
    "EngineError",
    "InternalInvariantViolation",
    "WireColor",
    "GuessPayload",
    "Suggestion",
    "GatewayResult",
    "HTTPEngineConfig",
    "LLMEngineConfig",
    "EngineConfig",
    "AssistantConfig",
    "SessionRecord",
    "WIRE_COLORS",
    "encode_row",
    "encode_history",
    "decode_mask",
    "decode_payload",
    "SolverEngine",
    "create_engine",
    "HTTPSolverEngine",
    "LLMClient",
    "Message",
    "Role",
    "LLMSolverEngine",
    "SolverGateway",
    "PuzzleAssistant",
]
