"""Credential store and quote dataset adapters.

The API depends on ``AbstractUserStore`` so the SQL store can be replaced by
the in-memory one in tests, or by another relational backend later.
"""

from quotes_api.adapters.store.base import AbstractUserStore, UserProfile
from quotes_api.adapters.store.in_memory import InMemoryUserStore
from quotes_api.adapters.store.quotes import Quote, QuoteRepository
from quotes_api.adapters.store.sql import SqlUserStore

__all__ = [
    "AbstractUserStore",
    "InMemoryUserStore",
    "Quote",
    "QuoteRepository",
    "SqlUserStore",
    "UserProfile",
]
