"""Persistence collaborators for orders and reservations"""

from burger_house.store.base import BaseStore
from burger_house.store.memory import InMemoryStore

__all__ = [
    "BaseStore",
    "InMemoryStore",
]
