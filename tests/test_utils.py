"""Tests for the utils module."""

import pytest

from shelfkeeper.utils import ReadOnlyList, same_title


class TestSameTitle:
    """Tests for the same_title function."""

    def test_same_case(self):
        """Test identical titles match."""
        assert same_title("Dune", "Dune") is True

    def test_different_case(self):
        """Test titles differing only in case match."""
        assert same_title("the hobbit", "The HOBBIT") is True

    def test_different_titles(self):
        """Test different titles do not match."""
        assert same_title("Dune", "Dune Messiah") is False

    def test_empty(self):
        """Test empty titles match each other."""
        assert same_title("", "") is True


class TestReadOnlyList:
    """Tests for the ReadOnlyList view."""

    def test_reflects_owner_changes(self):
        """Test the view follows the underlying list."""
        owner = [1, 2]
        view = ReadOnlyList(owner)
        owner.append(3)

        assert list(view) == [1, 2, 3]
        assert len(view) == 3
        assert view[-1] == 3
        assert view[:2] == [1, 2]

    def test_no_mutation(self):
        """Test the view cannot be modified."""
        view = ReadOnlyList([1, 2])

        with pytest.raises(TypeError):
            view[0] = 5  # type: ignore[index]
        with pytest.raises(TypeError):
            del view[0]  # type: ignore[attr-defined]
        assert not hasattr(view, "append")

    def test_equality(self):
        """Test views compare equal to sequences with the same items."""
        assert ReadOnlyList([1, 2]) == [1, 2]
        assert ReadOnlyList([1, 2]) == ReadOnlyList([1, 2])
        assert ReadOnlyList([1, 2]) != [2, 1]

    def test_sequence_methods(self):
        """Test inherited sequence helpers."""
        view = ReadOnlyList(["a", "b", "a"])

        assert "b" in view
        assert view.index("b") == 1
        assert view.count("a") == 2
