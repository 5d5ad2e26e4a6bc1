"""Schemas for the signed-in account endpoints."""
from __future__ import annotations

from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    email: str = Field(min_length=3)
    display_name: str | None = None


class AccountUpdateRequest(BaseModel):
    display_name: str | None = Field(default=None, max_length=120)


class AccountResponse(BaseModel):
    uid: str
    email: str
    role: str
    status: str
    display_name: str | None = None
    favorites: list[str] = Field(default_factory=list)
