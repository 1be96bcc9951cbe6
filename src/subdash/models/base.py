"""Base model for SubDash value objects."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class SubDashModel(BaseModel):
    """Base for all SubDash Pydantic models.

    Models are frozen: a fetched snapshot is never mutated by the analytics
    or filtering code. Wire field names (``_id``, ``renewalDate``) are
    accepted as aliases alongside the Python names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        """Dump to a JSON-safe dict using wire (alias) field names."""
        return self.model_dump(mode="json", by_alias=True)
