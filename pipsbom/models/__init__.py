"""
Unified data model exports for pipsbom.

Example:
    >>> from pipsbom.models import ChecksumRecord, EnvironmentReference
"""

from __future__ import annotations

from pipsbom.models.checksum import ChecksumRecord
from pipsbom.models.environment import EnvironmentReference

__all__ = [
    "ChecksumRecord",
    "EnvironmentReference",
]
