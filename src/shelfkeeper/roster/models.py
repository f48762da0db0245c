"""Roster member model."""

from dataclasses import dataclass

from .schemas import MemberRecord


@dataclass
class Member:
    """A library member. IDs are assigned by the caller."""

    id: int
    name: str

    def __str__(self) -> str:
        return f"Member ID: {self.id}, Name: {self.name}"

    def to_record(self) -> MemberRecord:
        return MemberRecord(id=self.id, name=self.name)

    @classmethod
    def from_record(cls, record: MemberRecord) -> "Member":
        return cls(id=record.id, name=record.name)
