from cinema.stores.interfaces import CinemaStore, StoreConflictError
from cinema.stores.memory_store import InMemoryCinemaStore

__all__ = ["CinemaStore", "StoreConflictError", "InMemoryCinemaStore"]
