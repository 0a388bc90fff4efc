from typing import List, Dict, Any, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field
import litellm


Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
    """A single chat message."""
    role: Role
    content: str


class LLMClient(BaseModel):
    """
    Async chat client for the model behind the LLM engine, via LiteLLM.

    The conversation it keeps is the engine's session state: every query
    adds a user/assistant pair, and an engine reset clears it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra='allow')

    model: str
    temperature: float = 1.0
    max_tokens: Optional[int] = None
    max_pairs: int = 4
    messages: List[Dict[str, str]] = Field(default_factory=list)

    @property
    def additional_params(self) -> Dict[str, Any]:
        """Get additional parameters passed during initialization."""
        return self.__pydantic_extra__ if self.__pydantic_extra__ else {}

    def add_message(self, role: Role, content: str) -> None:
        """
        Add a message to the conversation.

        Args:
            role: The role of the message sender ("system", "user", or "assistant")
            content: The message content
        """
        message = Message(role=role, content=content)
        self.messages.append(message.model_dump())

    def clear_messages(self) -> None:
        """Clear all messages from the conversation."""
        self.messages = []

    def get_messages(self) -> List[Dict[str, str]]:
        """Get a copy of the conversation."""
        return self.messages.copy()

    def _get_trimmed_messages(self) -> List[Dict[str, str]]:
        """System prompt plus the last `max_pairs` user/assistant pairs."""
        system = [m for m in self.messages if m["role"] == "system"][:1]
        conversation = [m for m in self.messages if m["role"] != "system"]
        return system + conversation[-(self.max_pairs * 2):]

    async def acompletion(self, **kwargs: Any) -> Any:
        """
        Generate a completion over the trimmed conversation.

        Args:
            **kwargs: Additional arguments to pass to litellm.acompletion()

        Returns:
            The completion response from LiteLLM
        """
        params = {
            "model": self.model,
            "messages": self._get_trimmed_messages(),
            "temperature": self.temperature,
            **self.additional_params,
            **kwargs
        }

        if self.max_tokens is not None:
            params["max_tokens"] = self.max_tokens

        return await litellm.acompletion(**params)
