"""Persistence reports returned by store mutations."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UpdateResult(BaseModel):
    """How many records a mutation matched, changed, or deleted."""

    matched_count: int = Field(default=0, ge=0)
    modified_count: int = Field(default=0, ge=0)
    deleted_count: int = Field(default=0, ge=0)

    @property
    def changed(self) -> bool:
        return self.modified_count > 0 or self.deleted_count > 0
