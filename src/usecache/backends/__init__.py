"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Store backends normalizing Redis-compatible clients into one command set.
"""

from .base import StoreBackend
from .factory import create_backend_from_env, resolve_backend
from .inmemory import InMemoryStoreBackend
from .redis import RedisStoreBackend
from .upstash import UpstashStoreBackend

__all__ = [
    "StoreBackend",
    "RedisStoreBackend",
    "UpstashStoreBackend",
    "InMemoryStoreBackend",
    "resolve_backend",
    "create_backend_from_env",
]
