# src/refrag/configuration/storage/__init__.py
"""Storage configurations for refrag."""

from refrag.configuration.storage.local import LocalStorage
from refrag.configuration.storage.remote import RemoteStorage

__all__ = ["LocalStorage", "RemoteStorage"]
