"""agentlens data models - re-exports all public model classes."""

from agentlens.models.config import (
    DashboardConfig,
    LoggingConfig,
    StreamConfig,
    ViewConfig,
)
from agentlens.models.events import (
    PAYLOAD_CLASSES,
    PAYLOAD_KINDS,
    AssistantContent,
    AssistantMessage,
    AssistantText,
    AssistantTextEvent,
    DebugEvent,
    DebugEventPayload,
    Interrupted,
    LlmRequest,
    Message,
    NewSession,
    Reasoning,
    ReasoningData,
    ReasoningEvent,
    StreamComplete,
    ToolCall,
    ToolCallData,
    ToolCallEvent,
    ToolFunction,
    ToolResultEvent,
    TurnComplete,
    UnsupportedAssistantContent,
    UnsupportedUserContent,
    UserContent,
    UserMessage,
    UserText,
    UserToolResult,
)

__all__ = [
    "PAYLOAD_CLASSES",
    "PAYLOAD_KINDS",
    "AssistantContent",
    "AssistantMessage",
    "AssistantText",
    "AssistantTextEvent",
    "DashboardConfig",
    "DebugEvent",
    "DebugEventPayload",
    "Interrupted",
    "LlmRequest",
    "LoggingConfig",
    "Message",
    "NewSession",
    "Reasoning",
    "ReasoningData",
    "ReasoningEvent",
    "StreamComplete",
    "StreamConfig",
    "ToolCall",
    "ToolCallData",
    "ToolCallEvent",
    "ToolFunction",
    "ToolResultEvent",
    "TurnComplete",
    "UnsupportedAssistantContent",
    "UnsupportedUserContent",
    "UserContent",
    "UserMessage",
    "UserText",
    "UserToolResult",
    "ViewConfig",
]
