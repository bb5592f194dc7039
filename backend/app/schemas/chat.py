"""Contracts for the campus food assistant (POST /api/chat)."""

from typing import List, Literal

from pydantic import Field

from app.schemas.common import CamelModel


class ChatMessage(CamelModel):
    role: Literal["user", "assistant"]
    content: str = Field(min_length=1, max_length=4000)


class ChatRequest(CamelModel):
    message: str = Field(min_length=1, max_length=2000)
    # Earlier turns, oldest first
    history: List[ChatMessage] = Field(default_factory=list, max_length=20)


class ChatReply(CamelModel):
    reply: str
