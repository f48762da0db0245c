"""Catalog manager for lending operations."""

import logging
from typing import Optional

from ..notifications import Notification
from ..storage import RecordStore
from ..utils import ReadOnlyList, same_title
from .models import Item
from .schemas import ItemRecord

logger = logging.getLogger(__name__)


class Catalog:
    """Owns the catalog items and keeps their store up to date.

    Every mutation is followed by a full save of the collection. Lookups
    by title ignore case. Searching returns the first match while removal
    drops every match.
    """

    def __init__(self, store: RecordStore, collection: str = "books"):
        """Initialize catalog and load stored items.

        Args:
            store: Record store for the items collection
            collection: Collection name within the store
        """
        self.store = store
        self.collection = collection
        self._items: list[Item] = [
            Item.from_record(record) for record in store.load(collection, ItemRecord)
        ]
        logger.debug("Catalog loaded with %d item(s)", len(self._items))

    # -------------------------------------------------------------------------
    # Item Management
    # -------------------------------------------------------------------------

    def add_book(self, title: str, author: str) -> Item:
        """Add a new available item.

        Args:
            title: Item title
            author: Item author

        Returns:
            Created item
        """
        item = Item(title=title, author=author)
        self._items.append(item)
        self._save()
        return item

    def remove_book(self, title: str) -> int:
        """Remove every item whose title matches.

        Args:
            title: Title to match, ignoring case

        Returns:
            Number of items removed
        """
        kept = [item for item in self._items if not same_title(item.title, title)]
        removed = len(self._items) - len(kept)
        self._items[:] = kept
        self._save()
        return removed

    def search_book(self, title: str) -> Optional[Item]:
        """Find the first item whose title matches.

        Args:
            title: Title to match, ignoring case

        Returns:
            Item or None
        """
        for item in self._items:
            if same_title(item.title, title):
                return item
        return None

    def list_books(self, sort: bool = False) -> ReadOnlyList[Item]:
        """List items.

        Args:
            sort: Return a snapshot ordered by title instead of the live view

        Returns:
            Read-only live view in insertion order, or a read-only sorted snapshot
        """
        if sort:
            return ReadOnlyList(sorted(self._items, key=lambda item: item.sort_key))
        return ReadOnlyList(self._items)

    # -------------------------------------------------------------------------
    # Loan Management
    # -------------------------------------------------------------------------

    def lend_book(self, title: str, member_id: int) -> Optional[Notification]:
        """Lend an item to a member, or waitlist the member.

        Args:
            title: Item title
            member_id: Borrowing member

        Returns:
            Lend outcome, or None if no item matches
        """
        item = self.search_book(title)
        if item is None:
            return None

        outcome = item.lend(member_id)
        self._save()
        return outcome

    def return_book(self, title: str) -> Optional[Notification]:
        """Return an item, passing it on to the next waiting member if any.

        Args:
            title: Item title

        Returns:
            Return outcome, or None if no item matches
        """
        item = self.search_book(title)
        if item is None:
            return None

        outcome = item.return_item()
        self._save()
        return outcome

    def _save(self) -> bool:
        return self.store.save(self.collection, [item.to_record() for item in self._items])

    def __len__(self) -> int:
        return len(self._items)
