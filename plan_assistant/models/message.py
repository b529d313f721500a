"""Conversation transcript entries."""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from enum import Enum

from .ids import random_id


class Role(str, Enum):
    """Author of a message."""
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single message in the conversation. Never edited once created."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=random_id)
    role: Role
    content: str
    created_at: datetime = Field(default_factory=datetime.now)
