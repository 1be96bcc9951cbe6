"""User profile as returned by the identity layer."""

from __future__ import annotations

from pydantic import Field

from subdash.models.base import SubDashModel


class User(SubDashModel):
    id: str = Field(alias="_id")
    name: str = ""
    email: str = ""
