"""
Virtual environment data model for pipsbom.

An :class:`EnvironmentReference` is the answer to "which virtual
environment belongs to this project?". It is built fresh by every locate
call and never mutated afterwards.
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class EnvironmentReference:
    """
    At most one discovered virtual environment for a project root.

    Attributes:
        found: Whether an environment was located.
        name: Display name (the environment directory's basename).
        path: Absolute path of the environment directory.

    ``found`` is True exactly when both ``name`` and ``path`` are set;
    any other combination is rejected at construction.
    """

    found: bool
    name: str = ""
    path: str = ""

    def __post_init__(self) -> None:
        complete = bool(self.name) and bool(self.path)
        if self.found != complete:
            raise ValueError(
                "EnvironmentReference requires name and path exactly when found "
                f"(found={self.found!r}, name={self.name!r}, path={self.path!r})"
            )

    @classmethod
    def not_found(cls) -> "EnvironmentReference":
        """Return the empty reference."""
        return cls(found=False)

    @classmethod
    def located(cls, name: str, path: str) -> "EnvironmentReference":
        """Return a reference to an environment found at ``path``."""
        return cls(found=True, name=name, path=path)

    def __bool__(self) -> bool:
        return self.found

    def site_packages(self) -> List[Path]:
        """
        List the environment's ``site-packages`` directories.

        Covers POSIX layouts (``lib/pythonX.Y/site-packages``, also under
        ``lib64``) and the Windows layout (``Lib/site-packages``). Returns an
        empty list for a reference that was not found.
        """
        if not self.found:
            return []

        root = Path(self.path)
        candidates: List[Path] = []
        for pattern in (
            "lib/python*/site-packages",
            "lib64/python*/site-packages",
            "Lib/site-packages",
        ):
            candidates.extend(p for p in root.glob(pattern) if p.is_dir())

        # lib64 is often a symlink to lib
        unique: List[Path] = []
        seen = set()
        for candidate in sorted(candidates):
            key = candidate.resolve()
            if key not in seen:
                seen.add(key)
                unique.append(candidate)
        return unique

    def to_dict(self) -> dict:
        """Serialize for JSON output."""
        return {"found": self.found, "name": self.name, "path": self.path}
