"""Prompt templates for the chat-model engine."""

from .system_prompt import SYSTEM_PROMPT, get_system_prompt
from .ranking_prompt import build_ranking_prompt, format_guess, format_letter_summary

__all__ = [
    "SYSTEM_PROMPT",
    "get_system_prompt",
    "build_ranking_prompt",
    "format_guess",
    "format_letter_summary",
]
