"""Debug event models for the agent event stream.

Every message pushed by the agent's debug endpoint is one DebugEvent: a
timestamp plus a payload whose ``kind`` key selects one of a closed set
of variants. Pydantic models (frozen) because events arrive as JSON and
must never change once decoded.

Nested content blocks are more forgiving than the top level. Unknown
user content types and unrecognized assistant content blocks degrade to
``Unsupported*`` models carrying the original block as pretty JSON text.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, TypeVar, Union

from pydantic import BaseModel, BeforeValidator, Field, ValidationError, field_validator

from agentlens.json_text import to_pretty_json

# Any parsed JSON value, kept only as indented text for display.
RawJson = Annotated[str, BeforeValidator(to_pretty_json)]


# -- Tool and reasoning blocks --


class ToolFunction(BaseModel):
    """Name and arguments of a tool invocation."""

    model_config = {"frozen": True}

    name: str
    arguments: RawJson


class ToolCall(BaseModel):
    """A tool call issued by the assistant."""

    model_config = {"frozen": True}

    id: str
    call_id: str | None = None
    function: ToolFunction
    signature: str | None = None


class Reasoning(BaseModel):
    """A reasoning trace emitted by the assistant."""

    model_config = {"frozen": True}

    id: str | None = None
    reasoning: tuple[str, ...]
    signature: str | None = None


# Same shapes are used for the standalone tool_call / reasoning events.
ToolCallData = ToolCall
ReasoningData = Reasoning


# -- User content --


class UserText(BaseModel):
    model_config = {"frozen": True}

    type: Literal["text"] = "text"
    text: str


class UserToolResult(BaseModel):
    """Result of a tool call, sent back to the model as user content."""

    model_config = {"frozen": True}

    type: Literal["toolresult"] = "toolresult"
    id: str
    call_id: str | None = None
    content: RawJson


class UnsupportedUserContent(BaseModel):
    """User content block with an unrecognized ``type``."""

    model_config = {"frozen": True}

    type: Literal["unsupported"] = "unsupported"
    raw: str


KNOWN_USER_CONTENT_TYPES: frozenset[str] = frozenset({"text", "toolresult"})

UserContent = Annotated[
    Union[UserText, UserToolResult, UnsupportedUserContent],
    Field(discriminator="type"),
]


def _absorb_unknown_user_content(item: Any) -> Any:
    """Rewrite a block with an unknown string ``type`` as unsupported.

    Blocks without a string ``type`` are left alone so that validation
    rejects them.
    """
    if isinstance(item, dict):
        tag = item.get("type")
        if isinstance(tag, str) and tag not in KNOWN_USER_CONTENT_TYPES:
            return {"type": "unsupported", "raw": to_pretty_json(item)}
    return item


# -- Assistant content --


class AssistantText(BaseModel):
    model_config = {"frozen": True}

    text: str


class UnsupportedAssistantContent(BaseModel):
    """Assistant content block matching none of the known shapes."""

    model_config = {"frozen": True}

    raw: str


AssistantContent = Union[AssistantText, ToolCall, Reasoning, UnsupportedAssistantContent]

# Assistant blocks carry no discriminator; the first shape that validates wins.
ASSISTANT_CONTENT_TRIAL_ORDER: tuple[type[BaseModel], ...] = (
    AssistantText,
    ToolCall,
    Reasoning,
)

_M = TypeVar("_M", bound=BaseModel)


def attempt(shape: type[_M], value: Any) -> _M | None:
    """Validate ``value`` as ``shape``, returning None instead of raising."""
    try:
        return shape.model_validate(value)
    except ValidationError:
        return None


def decode_assistant_content(value: Any) -> AssistantContent:
    """Decode one assistant content block by ordered trial.

    Tries each shape in ASSISTANT_CONTENT_TRIAL_ORDER and returns the
    first that validates. Never fails: anything else becomes
    UnsupportedAssistantContent holding the block as pretty JSON.
    """
    for shape in ASSISTANT_CONTENT_TRIAL_ORDER:
        decoded = attempt(shape, value)
        if decoded is not None:
            return decoded  # type: ignore[return-value]
    return UnsupportedAssistantContent(raw=to_pretty_json(value))


# -- Messages --


class UserMessage(BaseModel):
    model_config = {"frozen": True}

    role: Literal["user"] = "user"
    content: tuple[UserContent, ...]

    @field_validator("content", mode="before")
    @classmethod
    def _absorb_unknown_blocks(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_absorb_unknown_user_content(item) for item in value]
        return value


class AssistantMessage(BaseModel):
    model_config = {"frozen": True}

    role: Literal["assistant"] = "assistant"
    id: str | None = None
    content: tuple[AssistantContent, ...]

    @field_validator("content", mode="before")
    @classmethod
    def _decode_blocks(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [decode_assistant_content(item) for item in value]
        return value


Message = Annotated[Union[UserMessage, AssistantMessage], Field(discriminator="role")]


# -- Event payloads --


class LlmRequest(BaseModel):
    """Outbound model request: the new prompt plus prior history."""

    model_config = {"frozen": True}

    kind: Literal["llm_request"] = "llm_request"
    prompt: Message
    history: RawJson


class AssistantTextEvent(BaseModel):
    """Streamed chunk of assistant text."""

    model_config = {"frozen": True}

    kind: Literal["assistant_text"] = "assistant_text"
    text: str


class ToolCallEvent(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["tool_call"] = "tool_call"
    tool_call: ToolCallData


class ReasoningEvent(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["reasoning"] = "reasoning"
    reasoning: ReasoningData


class ToolResultEvent(BaseModel):
    """Result of executing a tool, as reported by the agent."""

    model_config = {"frozen": True}

    kind: Literal["tool_result"] = "tool_result"
    id: str
    call_id: str | None = None
    content: RawJson


class StreamComplete(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["stream_complete"] = "stream_complete"


class TurnComplete(BaseModel):
    """One agent turn finished; carries the full history."""

    model_config = {"frozen": True}

    kind: Literal["turn_complete"] = "turn_complete"
    history: RawJson


class Interrupted(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["interrupted"] = "interrupted"


class NewSession(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["new_session"] = "new_session"


PAYLOAD_CLASSES: tuple[type[BaseModel], ...] = (
    LlmRequest,
    AssistantTextEvent,
    ToolCallEvent,
    ReasoningEvent,
    ToolResultEvent,
    StreamComplete,
    TurnComplete,
    Interrupted,
    NewSession,
)

PAYLOAD_KINDS: tuple[str, ...] = tuple(
    cls.model_fields["kind"].default for cls in PAYLOAD_CLASSES
)

DebugEventPayload = Annotated[
    Union[
        LlmRequest,
        AssistantTextEvent,
        ToolCallEvent,
        ReasoningEvent,
        ToolResultEvent,
        StreamComplete,
        TurnComplete,
        Interrupted,
        NewSession,
    ],
    Field(discriminator="kind"),
]


class DebugEvent(BaseModel):
    """One event received from the agent's debug stream."""

    model_config = {"frozen": True}

    timestamp: str
    payload: DebugEventPayload

    @property
    def kind(self) -> str:
        return self.payload.kind
