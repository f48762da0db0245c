"""Pydantic schemas for stored members."""

from pydantic import BaseModel


class MemberRecord(BaseModel):
    """Persisted shape of a member."""

    id: int
    name: str
