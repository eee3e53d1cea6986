"""Transcript message models."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class MessageRole(str, Enum):
    """Author of a transcript turn."""

    user = "user"
    assistant = "assistant"


class Message(BaseModel):
    """Single transcript turn. Never mutated after append."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: MessageRole
    content: str
    timestamp: datetime


class MessageOut(BaseModel):
    """Wire shape of a message.

    The UI predates the user/assistant naming and expects "ai" for model turns.
    """

    id: str
    role: Literal["user", "ai"]
    content: str
    timestamp: datetime

    @classmethod
    def from_message(cls, message: Message) -> "MessageOut":
        role: Literal["user", "ai"] = "user" if message.role is MessageRole.user else "ai"
        return cls(
            id=message.id,
            role=role,
            content=message.content,
            timestamp=message.timestamp,
        )
