"""
Checksum data model for pipsbom.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from pipsbom.constants import CHECKSUM_ALGORITHM


@dataclass(frozen=True)
class ChecksumRecord:
    """
    Checksum of one package distribution as reported by the package index.

    Attributes:
        algorithm: Digest algorithm label (``SHA256`` for PyPI digests).
        value: Hex digest, or an empty string when the index had none.
    """

    algorithm: str = CHECKSUM_ALGORITHM
    value: str = ""

    @property
    def is_empty(self) -> bool:
        """True when no digest was resolved."""
        return not self.value

    def to_dict(self) -> Dict[str, str]:
        return {"algorithm": self.algorithm, "value": self.value}

    def __str__(self) -> str:
        return f"{self.algorithm}: {self.value}" if self.value else f"{self.algorithm}: <none>"
