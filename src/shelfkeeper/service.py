"""Library service.

Single entry point for front ends. Combines the catalog and the roster
and reports a status notification for every operation, whether or not it
changed anything. Return values carry the actual outcome.
"""

import logging
from typing import Optional

from .catalog import Catalog, Item
from .config import Config, get_config
from .notifications import Notification, NotificationChannel, NotificationKind
from .roster import Member, Roster
from .storage import RecordStore, open_store
from .utils import ReadOnlyList

logger = logging.getLogger(__name__)


class LibraryService:
    """Facade over the catalog and roster."""

    def __init__(
        self,
        store: RecordStore,
        members_store: Optional[RecordStore] = None,
        books_collection: str = "books",
        members_collection: str = "members",
        channel: Optional[NotificationChannel] = None,
    ):
        """Initialize service and load both collections.

        Args:
            store: Record store for items (and members, unless given separately)
            members_store: Record store for members
            books_collection: Collection name for items
            members_collection: Collection name for members
            channel: Notification channel, created if not given
        """
        self.store = store
        self.members_store = members_store or store
        self.catalog = Catalog(store, books_collection)
        self.roster = Roster(self.members_store, members_collection)
        self.notifications = channel or NotificationChannel()

    @classmethod
    def from_config(cls, config: Config) -> "LibraryService":
        """Create a service using configured storage."""
        store = open_store(config.storage_backend, config.data_dir)
        logger.info(
            "Using %s storage in %s", config.storage_backend, config.data_dir
        )
        return cls(
            store,
            books_collection=config.books_collection,
            members_collection=config.members_collection,
        )

    def close(self) -> None:
        """Release storage resources."""
        self.store.close()
        if self.members_store is not self.store:
            self.members_store.close()

    def _notify(
        self,
        kind: NotificationKind,
        message: str,
        title: Optional[str] = None,
        member_id: Optional[int] = None,
    ) -> None:
        self.notifications.publish(
            Notification(kind=kind, message=message, title=title, member_id=member_id)
        )

    # ========================================================================
    # Books
    # ========================================================================

    def add_book(self, title: str, author: str) -> Item:
        item = self.catalog.add_book(title, author)
        self._notify(NotificationKind.BOOK_ADDED, "Book added successfully.", title=title)
        return item

    def remove_book(self, title: str) -> int:
        removed = self.catalog.remove_book(title)
        logger.debug("Removed %d item(s) titled %r", removed, title)
        self._notify(NotificationKind.BOOK_REMOVED, "Book removed successfully.", title=title)
        return removed

    def search_book(self, title: str) -> Optional[Item]:
        item = self.catalog.search_book(title)
        if item is None:
            self._notify(NotificationKind.BOOK_NOT_FOUND, "Book not found.", title=title)
        else:
            self._notify(NotificationKind.BOOK_FOUND, f"Book Found: \n{item}", title=item.title)
        return item

    def list_books(self, sort: bool = False) -> ReadOnlyList[Item]:
        return self.catalog.list_books(sort=sort)

    # ========================================================================
    # Loans
    # ========================================================================

    def lend_book(self, title: str, member_id: int) -> Optional[Notification]:
        """Lend an item or waitlist the member.

        Returns:
            LENT or WAITLISTED notification, or None if the title is unknown
        """
        outcome = self.catalog.lend_book(title, member_id)
        if outcome is not None:
            self.notifications.publish(outcome)
        self._notify(
            NotificationKind.LEND_COMPLETED,
            "Lend operation completed.",
            title=title,
            member_id=member_id,
        )
        return outcome

    def return_book(self, title: str) -> Optional[Notification]:
        """Return an item, handing it to the next waiting member if any.

        Returns:
            LENT (to the next member) or RETURNED notification, or None if
            the title is unknown
        """
        outcome = self.catalog.return_book(title)
        if outcome is not None:
            self.notifications.publish(outcome)
        self._notify(NotificationKind.RETURN_COMPLETED, "Return operation completed.", title=title)
        return outcome

    # ========================================================================
    # Members
    # ========================================================================

    def add_member(self, member_id: int, name: str) -> Member:
        member = self.roster.add_member(member_id, name)
        self._notify(
            NotificationKind.MEMBER_ADDED, "Member added successfully.", member_id=member_id
        )
        return member

    def remove_member(self, member_id: int) -> int:
        removed = self.roster.remove_member(member_id)
        self._notify(
            NotificationKind.MEMBER_REMOVED, "Member removed successfully.", member_id=member_id
        )
        return removed

    def search_member_by_id(self, member_id: int) -> Optional[Member]:
        member = self.roster.search_member_by_id(member_id)
        if member is None:
            self._notify(
                NotificationKind.MEMBER_NOT_FOUND, "Member not found.", member_id=member_id
            )
        else:
            self._notify(
                NotificationKind.MEMBER_FOUND, f"Member Found: \n{member}", member_id=member_id
            )
        return member

    def list_members(self) -> ReadOnlyList[Member]:
        return self.roster.list_members()


# Global service instance
_service: Optional[LibraryService] = None


def get_service(config: Optional[Config] = None) -> LibraryService:
    """Get or create the global service instance."""
    global _service
    if _service is None:
        _service = LibraryService.from_config(config or get_config())
    return _service


def reset_service() -> None:
    """Close and reset the global service instance. Used for testing."""
    global _service
    if _service is not None:
        _service.close()
    _service = None
