"""Pydantic models for the chat relay."""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict


class ChatMessage(BaseModel):
    """One OpenAI-style turn; unknown keys (name, tool_calls, ...) are forwarded as-is."""
    model_config = ConfigDict(extra="allow")

    role: str
    content: Optional[Any] = None


class ChatRequest(BaseModel):
    """Prior conversation turns, oldest first."""
    messages: Optional[List[ChatMessage]] = None


class ChatResponse(BaseModel):
    reply: str
