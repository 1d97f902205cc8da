"""
botkeeper/models/user.py

Purpose: User record model

- Account identity (username, email, password)
- Per-user state, kept as an opaque JSON value
- Unknown fields from the users file are preserved
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """
    One persisted account. ``email`` is the primary key.
    """
    model_config = ConfigDict(extra="allow")

    username: str
    email: str
    password: str
    state: Any = Field(default_factory=dict)

    def to_document(self) -> dict:
        """Serialize to the stored JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
