"""Item catalog module.

Provides functionality for:
- Adding, removing and searching items by title
- Lending items and waitlisting members
- Handing returned items to the next waiting member
"""

from .manager import Catalog
from .models import Item
from .schemas import ItemRecord

__all__ = [
    "Catalog",
    "Item",
    "ItemRecord",
]
