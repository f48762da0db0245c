"""Tests for Catalog."""

import pytest

from shelfkeeper.catalog.manager import Catalog
from shelfkeeper.catalog.schemas import ItemRecord
from shelfkeeper.notifications import NotificationKind
from shelfkeeper.storage import MemoryRecordStore
from shelfkeeper.utils import ReadOnlyList


class CountingStore(MemoryRecordStore):
    """Memory store that counts saves."""

    def __init__(self):
        super().__init__()
        self.saves = 0

    def save(self, collection, records):
        self.saves += 1
        return super().save(collection, records)


@pytest.fixture
def counting_store():
    """Create a store that counts saves."""
    return CountingStore()


class TestCatalogLoading:
    """Tests for loading stored items."""

    def test_empty_store(self, memory_store):
        """Test a catalog over an empty store starts empty."""
        catalog = Catalog(memory_store)
        assert len(catalog) == 0
        assert list(catalog.list_books()) == []

    def test_loads_existing_items(self, memory_store, sample_item_records):
        """Test stored items are loaded in order with their loan state."""
        memory_store.save("books", sample_item_records)

        catalog = Catalog(memory_store)

        books = catalog.list_books()
        assert [b.title for b in books] == ["Dune", "Neuromancer", "Solaris"]
        assert books[1].available is False
        assert list(books[2].waitlist) == [3, 1, 2]

    def test_custom_collection_name(self, memory_store):
        """Test catalogs only read their own collection."""
        memory_store.save("books", [ItemRecord(title="Dune", author="Herbert")])

        assert len(Catalog(memory_store, collection="archive")) == 0


class TestAddAndSearch:
    """Tests for adding and searching items."""

    def test_add_book(self, catalog):
        """Test adding an item."""
        item = catalog.add_book("Dune", "Herbert")

        assert item.title == "Dune"
        assert item.author == "Herbert"
        assert item.available is True
        assert list(item.waitlist) == []
        assert len(catalog) == 1

    def test_add_keeps_insertion_order(self, catalog):
        """Test items are listed in the order they were added."""
        for title in ("Zebra", "apple", "Mango"):
            catalog.add_book(title, "Author")

        assert [b.title for b in catalog.list_books()] == ["Zebra", "apple", "Mango"]

    def test_add_persists(self, counting_store):
        """Test adding writes the collection."""
        catalog = Catalog(counting_store)
        catalog.add_book("Dune", "Herbert")

        assert counting_store.saves == 1
        assert [b.title for b in Catalog(counting_store).list_books()] == ["Dune"]

    def test_search_ignores_case(self, catalog):
        """Test searching matches titles case-insensitively."""
        catalog.add_book("Dune", "Herbert")

        assert catalog.search_book("dUNE").author == "Herbert"

    def test_search_first_match_wins(self, catalog):
        """Test searching returns the first of several matches."""
        catalog.add_book("Go", "A")
        catalog.add_book("GO", "B")

        assert catalog.search_book("go").author == "A"

    def test_search_not_found(self, catalog):
        """Test searching an unknown title returns None."""
        catalog.add_book("Dune", "Herbert")

        assert catalog.search_book("Dune Messiah") is None


class TestRemove:
    """Tests for removing items."""

    def test_remove_all_matches(self, catalog):
        """Test removal drops every case-insensitive match."""
        catalog.add_book("Go", "A")
        catalog.add_book("GO", "B")

        removed = catalog.remove_book("go")

        assert removed == 2
        assert list(catalog.list_books()) == []

    def test_remove_keeps_other_items(self, catalog):
        """Test removal leaves non-matching items in order."""
        catalog.add_book("Dune", "Herbert")
        catalog.add_book("Go", "A")
        catalog.add_book("Emma", "Austen")

        catalog.remove_book("GO")

        assert [b.title for b in catalog.list_books()] == ["Dune", "Emma"]

    def test_remove_not_found(self, counting_store):
        """Test removing an unknown title is a silent no-op that still saves."""
        catalog = Catalog(counting_store)
        catalog.add_book("Dune", "Herbert")

        removed = catalog.remove_book("Emma")

        assert removed == 0
        assert len(catalog) == 1
        assert counting_store.saves == 2

    def test_remove_persists(self, memory_store):
        """Test removal is written through."""
        catalog = Catalog(memory_store)
        catalog.add_book("Dune", "Herbert")
        catalog.remove_book("dune")

        assert len(Catalog(memory_store)) == 0


class TestLendAndReturn:
    """Tests for lending and returning through the catalog."""

    def test_lend_book(self, catalog):
        """Test lending an available item."""
        catalog.add_book("Dune", "Herbert")

        outcome = catalog.lend_book("dune", 1)

        assert outcome.kind == NotificationKind.LENT
        assert catalog.search_book("Dune").available is False

    def test_lend_unknown_title(self, counting_store):
        """Test lending an unknown title returns None without saving."""
        catalog = Catalog(counting_store)

        assert catalog.lend_book("Nothing", 1) is None
        assert counting_store.saves == 0

    def test_return_unknown_title(self, counting_store):
        """Test returning an unknown title returns None without saving."""
        catalog = Catalog(counting_store)

        assert catalog.return_book("Nothing") is None
        assert counting_store.saves == 0

    def test_lend_targets_first_match(self, catalog):
        """Test lending acts on the first item with a matching title."""
        catalog.add_book("Go", "A")
        catalog.add_book("GO", "B")

        catalog.lend_book("go", 1)

        first, second = catalog.list_books()
        assert first.available is False
        assert second.available is True

    def test_dune_scenario_persists_each_step(self, memory_store):
        """Test each loan step survives reloading the catalog."""
        catalog = Catalog(memory_store)
        catalog.add_book("Dune", "Herbert")

        catalog.lend_book("Dune", 1)
        item = Catalog(memory_store).search_book("Dune")
        assert (item.available, list(item.waitlist)) == (False, [])

        catalog.lend_book("Dune", 2)
        item = Catalog(memory_store).search_book("Dune")
        assert list(item.waitlist) == [2]

        outcome = catalog.return_book("Dune")
        assert outcome.kind == NotificationKind.LENT
        assert outcome.member_id == 2
        item = Catalog(memory_store).search_book("Dune")
        assert (item.available, list(item.waitlist)) == (False, [])

        outcome = catalog.return_book("Dune")
        assert outcome.kind == NotificationKind.RETURNED
        assert Catalog(memory_store).search_book("Dune").available is True


class TestListBooks:
    """Tests for listing items."""

    def test_list_is_live(self, catalog):
        """Test the listing reflects later additions."""
        books = catalog.list_books()
        catalog.add_book("Dune", "Herbert")

        assert len(books) == 1

    def test_list_is_read_only(self, catalog):
        """Test the listing cannot be modified."""
        books = catalog.list_books()

        assert not hasattr(books, "append")
        with pytest.raises(TypeError):
            books[0] = None  # type: ignore[index]

    def test_sorted_listing(self, catalog):
        """Test sorted listing orders by title without touching storage order."""
        for title in ("zebra", "Apple", "mango"):
            catalog.add_book(title, "Author")

        assert [b.title for b in catalog.list_books(sort=True)] == ["Apple", "mango", "zebra"]
        assert [b.title for b in catalog.list_books()] == ["zebra", "Apple", "mango"]

    def test_sorted_listing_is_read_only_snapshot(self, catalog):
        """Test the sorted listing cannot be modified and does not follow later additions."""
        catalog.add_book("Emma", "Austen")
        books = catalog.list_books(sort=True)
        catalog.add_book("Dune", "Herbert")

        assert isinstance(books, ReadOnlyList)
        assert not hasattr(books, "append")
        with pytest.raises(TypeError):
            books[0] = None  # type: ignore[index]
        assert [b.title for b in books] == ["Emma"]
