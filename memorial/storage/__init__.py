"""
Storage abstractions.

- MetadataStorage → in-memory (development, tests) or a JSON file
"""

from memorial.storage.base import (
    MetadataStorage,
    StorageProvider,
)
from memorial.storage.local import (
    InMemoryMetadataStorage,
    JsonFileMetadataStorage,
    create_local_storage,
)

__all__ = [
    "MetadataStorage",
    "StorageProvider",
    "InMemoryMetadataStorage",
    "JsonFileMetadataStorage",
    "create_local_storage",
]
