"""Roster manager for member operations."""

import logging
from typing import Optional

from ..storage import RecordStore
from ..utils import ReadOnlyList
from .models import Member
from .schemas import MemberRecord

logger = logging.getLogger(__name__)


class Roster:
    """Owns the library members and keeps their store up to date.

    Member IDs are not checked for uniqueness; lookups return the first
    member with a given ID and removal drops all of them.
    """

    def __init__(self, store: RecordStore, collection: str = "members"):
        """Initialize roster and load stored members.

        Args:
            store: Record store for the members collection
            collection: Collection name within the store
        """
        self.store = store
        self.collection = collection
        self._members: list[Member] = [
            Member.from_record(record) for record in store.load(collection, MemberRecord)
        ]
        logger.debug("Roster loaded with %d member(s)", len(self._members))

    def add_member(self, member_id: int, name: str) -> Member:
        """Add a member.

        Args:
            member_id: Caller-assigned member ID
            name: Member name

        Returns:
            Created member
        """
        member = Member(id=member_id, name=name)
        self._members.append(member)
        self._save()
        return member

    def remove_member(self, member_id: int) -> int:
        """Remove every member with the given ID.

        Returns:
            Number of members removed
        """
        kept = [member for member in self._members if member.id != member_id]
        removed = len(self._members) - len(kept)
        self._members[:] = kept
        self._save()
        return removed

    def search_member_by_id(self, member_id: int) -> Optional[Member]:
        """Get the first member with the given ID, or None."""
        for member in self._members:
            if member.id == member_id:
                return member
        return None

    def list_members(self) -> ReadOnlyList[Member]:
        """Live read-only view of members in insertion order."""
        return ReadOnlyList(self._members)

    def _save(self) -> bool:
        return self.store.save(self.collection, [member.to_record() for member in self._members])

    def __len__(self) -> int:
        return len(self._members)
