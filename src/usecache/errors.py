"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error types raised by the cache helpers.
"""

from __future__ import annotations


class UseCacheError(RuntimeError):
    """Base class for all cache helper failures."""


class ConfigurationError(UseCacheError):
    """Raised when no backing store client has been configured."""


class UsageError(UseCacheError, ValueError):
    """Raised on invalid caller input such as empty ids or negative scores."""


class ParseError(UseCacheError):
    """Raised when a stored payload cannot be decoded as JSON."""
