"""
Comment request models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    p_id: int
    type: str = Field(..., min_length=1, max_length=50)
    comment: str = Field(..., min_length=1)


class CommentUpdate(BaseModel):
    comment: str | None = Field(default=None, min_length=1)
    # Only honoured for administrators.
    reply: str | None = Field(default=None, min_length=1)
    status: int | None = Field(default=None, ge=0, le=1)
