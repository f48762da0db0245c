"""Pydantic schemas for stored catalog items."""

from pydantic import BaseModel, Field


class ItemRecord(BaseModel):
    """Persisted shape of a catalog item."""

    title: str
    author: str
    available: bool = True
    waitlist: list[int] = Field(default_factory=list)  # Member IDs, head first
