"""Shared schema exports."""

from .account import AccountView
from .catalog import Assignment
from .identity import User

__all__ = [
    "AccountView",
    "Assignment",
    "User",
]
