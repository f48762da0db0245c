"""Catalog item model.

An item is either on the shelf (available) or on loan. While on loan,
members who ask for it join a FIFO waitlist; returning the item hands it
straight to the head of that waitlist.
"""

from collections import deque
from dataclasses import dataclass, field

from ..notifications import Notification, NotificationKind
from .schemas import ItemRecord


@dataclass
class Item:
    """A lendable catalog entry."""

    title: str
    author: str
    available: bool = True
    waitlist: deque[int] = field(default_factory=deque)

    def __str__(self) -> str:
        return (
            f"Title: {self.title}, Author: {self.author}, "
            f"Available: {'Yes' if self.available else 'No'}"
        )

    @property
    def sort_key(self) -> str:
        """Key ordering items by title, ignoring case."""
        return self.title.casefold()

    @property
    def on_loan(self) -> bool:
        """Whether the item is currently lent out."""
        return not self.available

    def lend(self, member_id: int) -> Notification:
        """Lend the item, or waitlist the member if it is already out.

        Args:
            member_id: Member asking for the item

        Returns:
            LENT notification if the member got the item, WAITLISTED otherwise
        """
        if self.available:
            self.available = False
            return Notification(
                kind=NotificationKind.LENT,
                message=f"Book lent to Member ID: {member_id}",
                title=self.title,
                member_id=member_id,
            )

        self.waitlist.append(member_id)
        return Notification(
            kind=NotificationKind.WAITLISTED,
            message=f"Book not available. Member ID {member_id} added to waitlist.",
            title=self.title,
            member_id=member_id,
        )

    def return_item(self) -> Notification:
        """Take the item back.

        If members are waiting, the item goes to the first of them and stays
        unavailable. Otherwise it returns to the shelf.

        Returns:
            LENT notification naming the next holder, or RETURNED
        """
        if self.waitlist:
            next_member = self.waitlist.popleft()
            return Notification(
                kind=NotificationKind.LENT,
                message=f"Book lent to Member ID: {next_member}",
                title=self.title,
                member_id=next_member,
            )

        self.available = True
        return Notification(
            kind=NotificationKind.RETURNED,
            message="Book returned and is now available.",
            title=self.title,
        )

    def to_record(self) -> ItemRecord:
        """Convert to the persisted record."""
        return ItemRecord(
            title=self.title,
            author=self.author,
            available=self.available,
            waitlist=list(self.waitlist),
        )

    @classmethod
    def from_record(cls, record: ItemRecord) -> "Item":
        """Create from a persisted record."""
        return cls(
            title=record.title,
            author=record.author,
            available=record.available,
            waitlist=deque(record.waitlist),
        )
