"""Entity stores: the REST backend and an in-memory stand-in."""

from warehouse.store.base import EntityStore
from warehouse.store.memory import InMemoryEntityStore
from warehouse.store.rest import RestEntityStore

__all__ = ["EntityStore", "InMemoryEntityStore", "RestEntityStore"]
