"""
Solving engine backed by a chat model.

The model receives the whole guess history on every query and answers
with a ranked <suggestions> block. Its conversation is the engine's session
state, which reset() discards.
"""

import logging
import re
from typing import Dict, List, Optional, Any
from pydantic import BaseModel, ConfigDict, Field

from .errors import EngineError
from .llm_client import LLMClient
from .models import GuessPayload, LLMEngineConfig, Suggestion
from .prompts import SYSTEM_PROMPT, build_ranking_prompt


logger = logging.getLogger(__name__)

_LINE = re.compile(r'^\s*\d*[.)]?\s*([A-Za-z]{5})\s+(-?\d+(?:\.\d+)?)\s*$')


class LLMSolverEngine(BaseModel):
    """
    Engine that asks a chat model to rank the next guesses.

    Attributes:
        client: Chat client holding the engine's conversation
        max_suggestions: Upper bound on the suggestions returned per query
        generation: Number of resets so far
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    client: LLMClient
    max_suggestions: int = Field(default=10, ge=1)
    generation: int = 0

    @classmethod
    def create(cls, config: LLMEngineConfig) -> "LLMSolverEngine":
        """
        Factory method to build the engine and its chat client from config.

        Args:
            config: LLM engine configuration; extra keys go to LiteLLM

        Returns:
            A new LLMSolverEngine with an empty conversation
        """
        llm_kwargs: Dict[str, Any] = dict(config.__pydantic_extra__ or {})
        client = LLMClient(
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            **llm_kwargs
        )
        return cls(client=client, max_suggestions=config.max_suggestions)

    @staticmethod
    def parse_suggestions(response: str, limit: int) -> Optional[List[Suggestion]]:
        """
        Parse a model response for its ranked suggestions.

        Expected format:
        <suggestions>
        CRANE 0.92
        SLATE 0.90
        </suggestions>

        Lines that are not a 5-letter word followed by a number are skipped,
        as are repeated words. Order is kept as given.

        Args:
            response: Raw model response text
            limit: Maximum number of suggestions to keep

        Returns:
            Suggestions best first, or None if there is no <suggestions> block
        """
        match = re.search(r'<suggestions>(.*?)</suggestions>', response, re.DOTALL | re.IGNORECASE)
        if not match:
            return None

        suggestions: List[Suggestion] = []
        seen = set()
        for line in match.group(1).strip().split('\n'):
            line_match = _LINE.match(line)
            if not line_match:
                continue
            word = line_match.group(1).lower()
            if word in seen:
                continue
            seen.add(word)
            suggestions.append(Suggestion(word=word, score=float(line_match.group(2))))
            if len(suggestions) >= limit:
                break

        return suggestions

    async def query(self, history: List[GuessPayload]) -> List[Suggestion]:
        """
        Ask the model for the next guesses given the full history.

        A reply to a query issued before the latest reset() is not added to
        the new conversation.
        """
        generation = self.generation
        if not self.client.messages:
            self.client.add_message("system", SYSTEM_PROMPT)

        self.client.add_message("user", build_ranking_prompt(history, self.max_suggestions))
        user_message = self.client.messages[-1]
        logger.info("Querying %s with %d guesses", self.client.model, len(history))

        try:
            response = await self.client.acompletion()
        except Exception:
            # Keep the conversation in user/assistant pairs
            self._discard(user_message)
            raise

        raw_response = response.choices[0].message.content or ""
        if generation == self.generation:
            self.client.add_message("assistant", raw_response)
        else:
            logger.warning("Dropping reply to a query issued before the last reset")

        suggestions = self.parse_suggestions(raw_response, self.max_suggestions)
        if suggestions is None:
            raise EngineError("Model response has no <suggestions> block")
        return suggestions

    def _discard(self, message: Dict[str, str]) -> None:
        self.client.messages = [m for m in self.client.messages if m is not message]

    async def reset(self) -> None:
        """Forget the conversation so far."""
        self.generation += 1
        self.client.clear_messages()
