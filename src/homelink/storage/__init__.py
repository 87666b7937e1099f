from __future__ import annotations

from .base import DocumentStore
from .directory import DeviceDirectory
from .memory import JsonFileStore, MemoryStore
from .rest import RestDocumentStore

__all__ = [
    "DeviceDirectory",
    "DocumentStore",
    "JsonFileStore",
    "MemoryStore",
    "RestDocumentStore",
]
