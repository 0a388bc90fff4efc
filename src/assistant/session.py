import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Optional, Any, Callable
from pydantic import BaseModel, Field, ConfigDict

from ..grid import AssistantError, CommittedRow, GridStateMachine, GuessRow
from .encoding import decode_payload, encode_history
from .engine import SolverEngine, create_engine
from .gateway import SolverGateway
from .models import AssistantConfig, GatewayResult, SessionRecord, Suggestion


logger = logging.getLogger(__name__)


class PuzzleAssistant(BaseModel):
    """
    Player-facing surface of the assistant.

    Wires the grid state machine to the solver gateway and keeps the single
    current message shown to the player. Each operation replaces `errors`
    wholesale; nothing accumulates across operations.

    Attributes:
        grid: Owner of the committed history and the in-progress row
        gateway: Owner of the suggestion list
        config: Session configuration
        errors: Errors produced by the most recent operation
        on_update: Optional callback run after every applied engine response
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    grid: GridStateMachine = Field(default_factory=GridStateMachine)
    gateway: SolverGateway
    config: AssistantConfig = Field(default_factory=AssistantConfig)
    errors: List[AssistantError] = Field(default_factory=list)
    on_update: Optional[Callable[..., None]] = None
    started_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        config: Optional[AssistantConfig] = None,
        engine: Optional[SolverEngine] = None,
        on_update: Optional[Callable[["PuzzleAssistant"], None]] = None,
        **config_kwargs: Any
    ) -> "PuzzleAssistant":
        """
        Factory method to create a session with its gateway and engine.

        Args:
            config: Optional AssistantConfig instance
            engine: Engine to use instead of the one described by config
            on_update: Callback run after every applied engine response
            **config_kwargs: Config parameters if config not provided

        Returns:
            A new PuzzleAssistant with an empty grid and no suggestions
        """
        if config is None:
            config = AssistantConfig(**config_kwargs)

        if engine is None:
            engine = create_engine(config.engine)

        return cls(gateway=SolverGateway(engine), config=config, on_update=on_update)

    @classmethod
    def resume(
        cls,
        session_path: str | Path,
        config: Optional[AssistantConfig] = None,
        engine: Optional[SolverEngine] = None,
        on_update: Optional[Callable[["PuzzleAssistant"], None]] = None,
    ) -> "PuzzleAssistant":
        """
        Restore a session from a saved record.

        The saved suggestions are shown until start() re-queries the engine
        with the restored history.

        Args:
            session_path: Path to a JSON file written by save_session()

        Returns:
            PuzzleAssistant with the saved history committed
        """
        with open(Path(session_path)) as f:
            record = SessionRecord(**json.load(f))

        assistant = cls.create(config=config, engine=engine, on_update=on_update)
        assistant.grid.load_history([decode_payload(entry) for entry in record.history])
        assistant.gateway.restore(record.suggestions)
        return assistant

    # --- Read-only views -------------------------------------------------

    @property
    def history(self) -> List[CommittedRow]:
        return self.grid.get_history()

    @property
    def current(self) -> GuessRow:
        """A copy of the in-progress row; edits go through the methods below."""
        return self.grid.current.model_copy(deep=True)

    @property
    def suggestions(self) -> List[Suggestion]:
        return self.gateway.suggestions

    @property
    def pending(self) -> bool:
        return self.gateway.pending

    @property
    def message(self) -> Optional[str]:
        """The current user-visible message, if any."""
        if not self.errors:
            return None
        return "; ".join(e.message for e in self.errors)

    # --- In-progress row edits -------------------------------------------

    def set_letter(self, index: int, char: Optional[str]) -> None:
        self.grid.set_letter(index, char)
        self.errors = []

    def cycle_color(self, index: int) -> None:
        self.grid.cycle_color(index)
        self.errors = []

    def type_letter(self, char: str) -> None:
        self.grid.type_letter(char)
        self.errors = []

    def backspace(self) -> None:
        self.grid.backspace()
        self.errors = []

    def enter_text(self, text: str) -> None:
        self.grid.enter_text(text)
        self.errors = []

    # --- Engine-backed operations ----------------------------------------

    def _apply(self, result: GatewayResult) -> GatewayResult:
        """Apply a gateway result unless it was stale."""
        if not result.applied:
            return result

        self.errors = list(result.errors)
        self.grid.settle()
        if self.on_update:
            self.on_update(self)
        return result

    async def start(self) -> GatewayResult:
        """Issue the initial query with whatever history is committed (usually none)."""
        if self.started_at is None:
            self.started_at = datetime.now()
        return self._apply(await self.gateway.query(self.grid.get_history()))

    async def submit(self) -> bool:
        """
        Commit the in-progress row and query the engine with the new history.

        The commit happens before the first suspension point, so edits made
        while the engine call is in flight land on the next row.

        Returns:
            True if the row was committed (even if the engine call then failed)
        """
        error = self.grid.submit()
        if error is not None:
            self.errors = [error]
            return False

        self.errors = []
        self._apply(await self.gateway.query(self.grid.get_history()))
        return True

    async def reset(self) -> GatewayResult:
        """
        Clear the local session, then run the engine reset handshake.

        The local reset is unconditional and does not wait for the engine.
        """
        self.grid.reset()
        self.errors = []
        return self._apply(await self.gateway.reset())

    # --- Snapshots -------------------------------------------------------

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Returns:
            Dictionary containing grid, suggestions and message
        """
        return {
            **self.grid.get_state(),
            "suggestions": [s.model_dump() for s in self.suggestions],
            "pending": self.pending,
            "message": self.message,
        }

    def get_record(self) -> SessionRecord:
        """Build the persistable record of this session."""
        return SessionRecord(
            history=encode_history(self.grid.get_history()),
            suggestions=self.suggestions,
            saved_at=datetime.now().isoformat(),
        )

    def save_session(self, path: str | Path) -> None:
        """
        Save the committed history and current suggestions to a JSON file.

        Args:
            path: Path to save the session file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(self.get_record().model_dump(), f, indent=2)
        logger.info("Session saved to %s", path)
