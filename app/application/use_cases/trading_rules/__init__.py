"""Use cases for managing a user's trading rules."""

from .delete_rule import delete_rule
from .list_rules import list_rules
from .upsert_rule import upsert_rule

__all__ = [
    "delete_rule",
    "list_rules",
    "upsert_rule",
]
