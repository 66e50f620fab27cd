"""Repository protocol definitions for domain layer."""

from .identity import IdentityProvider
from .store import (
    COLLECTIONS,
    Filter,
    Ordering,
    RecordNotFound,
    RecordStore,
    StoreError,
    UnknownCollectionError,
)

__all__ = [
    "COLLECTIONS",
    "Filter",
    "IdentityProvider",
    "Ordering",
    "RecordNotFound",
    "RecordStore",
    "StoreError",
    "UnknownCollectionError",
]
