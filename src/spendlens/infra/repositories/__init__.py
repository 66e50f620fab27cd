"""Concrete repository implementations using SQLModel."""

from .identity import FlaskSessionIdentity
from .store import SQLModelRecordStore

__all__ = ["FlaskSessionIdentity", "SQLModelRecordStore"]
