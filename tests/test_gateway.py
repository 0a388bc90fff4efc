"""
Test suite for the solver gateway.

Covers:
- Request encoding and the full-history-every-call contract
- Response handling (engine order kept, wholesale replacement)
- Failure handling (stale-but-present suggestions)
- The sequence guard for out-of-order completions
- The reset handshake
"""

import asyncio

import pytest

from src.grid import CellColor, Cell, CommittedRow
from src.assistant import (
    EngineError,
    InternalInvariantViolation,
    SolverGateway,
    Suggestion,
)


def row(word: str, color: CellColor = CellColor.WRONG) -> CommittedRow:
    return CommittedRow.from_word(word, [color] * 5)


class TestQuery:
    """Test the query path."""

    @pytest.mark.asyncio
    async def test_initial_query_with_empty_history(self, engine):
        gateway = SolverGateway(engine)
        result = await gateway.query([])

        assert engine.queries == [[]]
        assert result.applied
        assert result.ok
        assert [s.word for s in gateway.suggestions] == ["crane", "slate"]

    @pytest.mark.asyncio
    async def test_request_contains_full_history(self, engine):
        gateway = SolverGateway(engine)
        history = [row("CRANE"), row("SLOTH", CellColor.MISPLACED)]

        await gateway.query(history[:1])
        await gateway.query(history)

        last = [p.model_dump() for p in engine.queries[-1]]
        assert last == [
            {"word": "crane", "mask": ["wrong"] * 5},
            {"word": "sloth", "mask": ["misplaced"] * 5},
        ]

    @pytest.mark.asyncio
    async def test_engine_order_is_kept(self, engine):
        """No re-sorting: a lower score listed first stays first."""
        engine.responses = [[
            Suggestion(word="zzzzz", score=-3.0),
            Suggestion(word="aaaaa", score=10.0),
        ]]
        gateway = SolverGateway(engine)
        await gateway.query([])
        assert [s.word for s in gateway.suggestions] == ["zzzzz", "aaaaa"]

    @pytest.mark.asyncio
    async def test_suggestions_replaced_wholesale(self, engine):
        engine.responses = [
            [Suggestion(word="crane", score=1.0), Suggestion(word="slate", score=0.5)],
            [Suggestion(word="pilot", score=2.0)],
        ]
        gateway = SolverGateway(engine)
        await gateway.query([])
        await gateway.query([row("CRANE")])
        assert [s.word for s in gateway.suggestions] == ["pilot"]

    @pytest.mark.asyncio
    async def test_suggestions_property_returns_copy(self, engine):
        gateway = SolverGateway(engine)
        await gateway.query([])
        gateway.suggestions.clear()
        assert len(gateway.suggestions) == 2

    @pytest.mark.asyncio
    async def test_invariant_violation_is_not_caught(self, engine):
        """Malformed committed rows fail loudly and nothing is sent."""
        gateway = SolverGateway(engine)
        broken = CommittedRow.model_construct(cells=[Cell() for _ in range(5)])

        with pytest.raises(InternalInvariantViolation):
            await gateway.query([broken])
        assert engine.queries == []
        assert not gateway.pending


class TestQueryFailure:
    """Test engine failures on the query path."""

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_suggestions(self, engine):
        gateway = SolverGateway(engine)
        await gateway.query([])
        before = gateway.suggestions

        engine.responses = [EngineError("Word not in dictionary: xxxxx")]
        result = await gateway.query([row("XXXXX")])

        assert result.applied
        assert not result.ok
        assert result.errors[0].code == "engine_query_failed"
        assert "Word not in dictionary" in result.errors[0].message
        assert gateway.suggestions == before
        assert result.suggestions == before

    @pytest.mark.asyncio
    async def test_first_query_failure_leaves_empty(self, engine):
        engine.responses = [ConnectionError("refused")]
        gateway = SolverGateway(engine)
        result = await gateway.query([])

        assert result.errors[0].code == "engine_query_failed"
        assert gateway.suggestions == []

    @pytest.mark.asyncio
    async def test_any_exception_is_recoverable(self, engine):
        engine.responses = [RuntimeError("boom")]
        gateway = SolverGateway(engine)
        result = await gateway.query([])
        assert not result.ok
        assert not gateway.pending


class TestOrdering:
    """Test that stale responses are discarded."""

    @pytest.mark.asyncio
    async def test_out_of_order_completion(self, engine):
        loop = asyncio.get_running_loop()
        older, newer = loop.create_future(), loop.create_future()
        engine.responses = [older, newer]
        gateway = SolverGateway(engine)

        first = asyncio.create_task(gateway.query([row("CRANE")]))
        await asyncio.sleep(0)
        second = asyncio.create_task(gateway.query([row("CRANE"), row("SLOTH")]))
        await asyncio.sleep(0)
        assert gateway.pending

        newer.set_result([Suggestion(word="newer", score=1.0)])
        second_result = await second
        older.set_result([Suggestion(word="older", score=1.0)])
        first_result = await first

        assert second_result.applied
        assert not first_result.applied
        assert [s.word for s in gateway.suggestions] == ["newer"]
        assert not gateway.pending

    @pytest.mark.asyncio
    async def test_stale_failure_is_discarded(self, engine):
        loop = asyncio.get_running_loop()
        older = loop.create_future()
        engine.responses = [older]
        gateway = SolverGateway(engine)

        first = asyncio.create_task(gateway.query([]))
        await asyncio.sleep(0)
        await gateway.query([row("CRANE")])

        older.set_exception(EngineError("late failure"))
        first_result = await first

        assert not first_result.applied
        assert first_result.errors == []
        assert [s.word for s in gateway.suggestions] == ["crane", "slate"]

    @pytest.mark.asyncio
    async def test_reset_discards_pending_query(self, engine):
        """A reset does not cancel an in-flight query; its response is dropped."""
        loop = asyncio.get_running_loop()
        pending = loop.create_future()
        engine.responses = [pending, [Suggestion(word="fresh", score=1.0)]]
        gateway = SolverGateway(engine)

        in_flight = asyncio.create_task(gateway.query([row("CRANE")]))
        await asyncio.sleep(0)
        await gateway.reset()

        pending.set_result([Suggestion(word="stale", score=1.0)])
        stale_result = await in_flight

        assert not stale_result.applied
        assert [s.word for s in gateway.suggestions] == ["fresh"]


class TestResetHandshake:
    """Test the reset handshake."""

    @pytest.mark.asyncio
    async def test_reset_then_empty_query(self, engine):
        gateway = SolverGateway(engine)
        result = await gateway.reset()

        assert engine.calls == ["reset", "query"]
        assert engine.queries == [[]]
        assert result.ok
        assert result.applied

    @pytest.mark.asyncio
    async def test_reset_failure_still_queries(self, engine):
        engine.reset_error = EngineError("engine busy")
        gateway = SolverGateway(engine)

        result = await gateway.reset()

        assert engine.calls == ["reset", "query"]
        assert [e.code for e in result.errors] == ["engine_reset_failed"]
        assert [s.word for s in gateway.suggestions] == ["crane", "slate"]

    @pytest.mark.asyncio
    async def test_both_failures_reported_together(self, engine):
        engine.reset_error = EngineError("reset down")
        engine.responses = [EngineError("query down")]
        gateway = SolverGateway(engine)

        result = await gateway.reset()

        assert [e.code for e in result.errors] == ["engine_reset_failed", "engine_query_failed"]

    @pytest.mark.asyncio
    async def test_failed_fresh_query_clears_old_suggestions(self, engine):
        """After a reset the previous session's suggestions are not kept."""
        gateway = SolverGateway(engine)
        await gateway.query([])
        assert gateway.suggestions

        engine.responses = [EngineError("down")]
        await gateway.reset()

        assert gateway.suggestions == []

    @pytest.mark.asyncio
    async def test_restore(self, engine):
        gateway = SolverGateway(engine)
        gateway.restore([Suggestion(word="saved", score=0.1)])
        assert [s.word for s in gateway.suggestions] == ["saved"]
