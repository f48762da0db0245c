"""Utility functions for shelfkeeper."""

from collections.abc import Iterator, Sequence
from typing import Generic, TypeVar, Union, overload

T = TypeVar("T")


def same_title(a: str, b: str) -> bool:
    """
    Compare two titles, ignoring case.

    Args:
        a: First title
        b: Second title

    Returns:
        True if the titles match case-insensitively

    Example:
        >>> same_title("Dune", "DUNE")
        True
        >>> same_title("Dune", "Dune Messiah")
        False
    """
    return a.casefold() == b.casefold()


class ReadOnlyList(Sequence, Generic[T]):
    """
    A live, read-only view over a list owned by someone else.

    Changes made by the owner show through the view; the view itself
    offers no way to add, remove or reorder elements.

    Example:
        >>> owner = [1, 2]
        >>> view = ReadOnlyList(owner)
        >>> owner.append(3)
        >>> list(view)
        [1, 2, 3]
    """

    __slots__ = ("_data",)

    def __init__(self, data: list[T]):
        self._data = data

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[T, list[T]]:
        return self._data[index]

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[T]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ReadOnlyList):
            return self._data == other._data
        if isinstance(other, Sequence):
            return list(self._data) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"ReadOnlyList({self._data!r})"
