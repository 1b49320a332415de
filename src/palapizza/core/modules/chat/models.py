from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """One bubble of the chat widget."""

    role: Literal["user", "assistant"]
    content: str = Field(..., max_length=4000)
