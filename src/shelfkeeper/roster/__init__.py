"""Member roster module."""

from .manager import Roster
from .models import Member
from .schemas import MemberRecord

__all__ = [
    "Roster",
    "Member",
    "MemberRecord",
]
