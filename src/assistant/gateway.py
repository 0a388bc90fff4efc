import logging
from typing import List, Optional

from ..grid.models import AssistantError, CommittedRow
from .encoding import encode_history
from .engine import SolverEngine
from .models import GatewayResult, GuessPayload, Suggestion


logger = logging.getLogger(__name__)


class SolverGateway:
    """
    Translates grid history into engine requests and owns the suggestion list.

    Every request gets a sequence number. A response (or failure) is applied
    only if it belongs to the most recently issued request; anything older is
    discarded, so out-of-order completions never overwrite newer data.

    Attributes:
        engine: The external solving engine
    """

    def __init__(self, engine: SolverEngine) -> None:
        self.engine = engine
        self._suggestions: List[Suggestion] = []
        self._issued = 0
        self._settled = 0

    @property
    def suggestions(self) -> List[Suggestion]:
        """Current suggestions, best first (a copy)."""
        return self._suggestions.copy()

    @property
    def pending(self) -> bool:
        """Whether the most recently issued request is still in flight."""
        return self._settled < self._issued

    def restore(self, suggestions: List[Suggestion]) -> None:
        """Show previously saved suggestions until the next response arrives."""
        self._suggestions = list(suggestions)

    def is_latest(self, seq: int) -> bool:
        return seq == self._issued

    def _next_seq(self) -> int:
        self._issued += 1
        return self._issued

    async def query(self, history: List[CommittedRow]) -> GatewayResult:
        """
        Send the full committed history to the engine.

        Encoding happens before anything is sent; a malformed committed row
        raises InternalInvariantViolation and no request is made.

        Args:
            history: Every committed row, in guess order

        Returns:
            GatewayResult; on failure the previous suggestions are kept
        """
        payload = encode_history(history)
        seq = self._next_seq()
        return await self._run_query(seq, payload, clear_on_failure=False)

    async def reset(self) -> GatewayResult:
        """
        Reset handshake: drop the engine's session, then query with no history.

        The fresh query is attempted even if the engine reset fails; both
        errors are reported together. If the fresh query fails, the previous
        session's suggestions are cleared rather than kept.

        Returns:
            GatewayResult carrying the reset error (if any) and the query outcome
        """
        seq = self._next_seq()
        errors: List[AssistantError] = []

        try:
            await self.engine.reset()
        except Exception as e:
            logger.warning("Engine reset failed: %s", e)
            errors.append(AssistantError(
                code="engine_reset_failed",
                message=f"Engine reset failed: {e}",
            ))

        result = await self._run_query(seq, [], clear_on_failure=True)
        if result.applied:
            result.errors = errors + result.errors
        return result

    async def _run_query(
        self,
        seq: int,
        payload: List[GuessPayload],
        clear_on_failure: bool,
    ) -> GatewayResult:
        error: Optional[AssistantError] = None
        suggestions: List[Suggestion] = []

        try:
            suggestions = list(await self.engine.query(payload))
        except Exception as e:
            error = AssistantError(
                code="engine_query_failed",
                message=f"Engine query failed: {e}",
            )

        if not self.is_latest(seq):
            logger.warning(
                "Discarding stale engine response #%d (latest is #%d)", seq, self._issued
            )
            return GatewayResult(applied=False)

        self._settled = seq
        if error is not None:
            logger.warning("%s", error.message)
            if clear_on_failure:
                self._suggestions = []
            return GatewayResult(applied=True, suggestions=self.suggestions, errors=[error])

        # Engine order is authoritative
        self._suggestions = suggestions
        logger.info("Applied %d suggestions from response #%d", len(suggestions), seq)
        return GatewayResult(applied=True, suggestions=self.suggestions)
