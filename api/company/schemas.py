"""
Company request models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CompanyCreate(BaseModel):
    cuid: str | None = Field(default=None, min_length=1, max_length=64)
    company_field: str | None = Field(default=None, max_length=255)
    company_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320)
    trade_licence: str | None = Field(default=None, max_length=255)
    referral: str | None = Field(default=None, max_length=255)
    owner_name: str | None = Field(default=None, max_length=255)
    mobile: str | None = Field(default=None, max_length=50)


class CompanyUpdate(BaseModel):
    cuid: str | None = Field(default=None, min_length=1, max_length=64)
    company_field: str | None = Field(default=None, max_length=255)
    company_name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=3, max_length=320)
    trade_licence: str | None = Field(default=None, max_length=255)
    referral: str | None = Field(default=None, max_length=255)
    owner_name: str | None = Field(default=None, max_length=255)
    mobile: str | None = Field(default=None, max_length=50)
