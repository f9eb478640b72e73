"""Application ports package."""

from .database import DatabaseEnginePort
from .record_store import RecordNotFoundError, RecordStoreError, RecordStorePort

__all__ = [
    "DatabaseEnginePort",
    "RecordNotFoundError",
    "RecordStoreError",
    "RecordStorePort",
]
