"""
Backend boundary types and contracts.

Defines the message and response shapes exchanged with completion clients.
"""

import json
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Literal, Union

from pydantic import BaseModel, Field

PromptResponseStatus = Literal[
    "success",
    "error",
    "rate_limited",
    "invalid_response",
    "too_long",
    "cancelled",
]
MessageRole = Literal["system", "user", "assistant", "function"]
CompletionType = Literal["text", "chat"]


@dataclass
class Message:
    """A single role-tagged turn."""

    role: str
    content: Any = None
    name: Optional[str] = None     # Function name for role == "function"

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict form stored inside history slots."""
        data: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        return cls(
            role=data.get("role", "assistant"),
            content=data.get("content"),
            name=data.get("name"),
        )


@dataclass
class PromptResponse:
    """Result of one backend call."""

    status: PromptResponseStatus
    message: Union[Message, str, None] = None
    error: Optional[str] = None                  # Diagnostic text when status != "success"
    metadata: Optional[Dict[str, Any]] = None    # finish_reason, usage, duration_ms, backend
    prompt: Any = None                           # Echo of the rendered prompt
    value: Any = None                            # Validator replacement value (native form)

    @property
    def text(self) -> str:
        """Message content as text, whatever shape the message has."""
        return message_text(self.message)


def message_text(message: Union[Message, str, None]) -> str:
    """
    Extract text from a message of any supported shape.

    Strings are returned as-is, Message content is returned when it is a
    string, None becomes "" and any other content is rendered with render_value().
    """
    if message is None:
        return ""
    if isinstance(message, str):
        return message
    return render_value(message.content)


def render_value(value: Any) -> str:
    """Render a replacement value to text (strings pass through, the rest is JSON, with str() for unknown types)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def normalize_response(response: PromptResponse) -> PromptResponse:
    """
    Ensure a successful response carries a Message.

    Bare strings (or a missing message) are wrapped as an assistant message.
    Non-success responses are returned untouched.
    """
    if response.status == "success" and not isinstance(response.message, Message):
        response.message = Message(role="assistant", content=response.message or "")
    return response


class CompletionOptions(BaseModel):
    """Options forwarded verbatim to the completion client."""

    completion_type: CompletionType = "chat"
    model: str = "stub"
    max_input_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    stop: Optional[Union[List[str], str]] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None


@dataclass
class ClientCall:
    """Record of a single call made to a recording client."""

    memory: Any
    prompt: Any
    options: Optional[CompletionOptions]
    input: Optional[str] = None
    history: List[Dict[str, Any]] = field(default_factory=list)
