"""
Agency request models.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

AgencyStatus = Literal["Active", "Inactive"]


class AgencyCreate(BaseModel):
    cuid: str | None = Field(default=None, min_length=1, max_length=64)
    owner_name: str = Field(..., min_length=1, max_length=255)
    office_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320)
    phone: str | None = Field(default=None, max_length=50)
    orn: str | None = Field(default=None, max_length=100)
    status: AgencyStatus | None = None


class AgencyUpdate(BaseModel):
    cuid: str | None = Field(default=None, min_length=1, max_length=64)
    owner_name: str | None = Field(default=None, min_length=1, max_length=255)
    office_name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=3, max_length=320)
    phone: str | None = Field(default=None, max_length=50)
    orn: str | None = Field(default=None, max_length=100)
    status: AgencyStatus | None = None
