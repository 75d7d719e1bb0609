"""Manifest loader for pip-style requirement listings.

Turns raw manifest text into the ordered list of declared module names that
the requirement sufficiency check counts. Only names are extracted; version
specifiers, markers and extras are ignored.

Typical usage::

    from pipsbom.core.manifest import load_modules

    load_modules("requests>=2.0\\nclick  # cli\\n-r base.txt\\n")
    # ['requests', 'click']
"""

from __future__ import annotations

import re
from typing import List, Optional, Set

from packaging.utils import canonicalize_name
from packaging.requirements import InvalidRequirement, Requirement

from pipsbom.utils.logger import get_logger

logger = get_logger("core.manifest")

# ``#`` starts a comment only at line start or after whitespace (pip rule)
_COMMENT_RE = re.compile(r"(^|\s+)#.*$")

# Per-requirement options such as ``--hash`` trail the specifier
_OPTION_RE = re.compile(r"\s+--?[A-Za-z].*$")


def load_modules(data: str) -> List[str]:
    """Return the module names declared in ``data``, in declaration order.

    Blank lines, comments and option lines (``-r``, ``--hash`` ...) are
    skipped. A name declared twice (modulo PEP 503 normalization) is kept
    once, at its first position. Lines that are not valid PEP 508
    requirements are skipped.

    Args:
        data: Raw manifest text.

    Returns:
        Declared module names as written in the manifest.
    """
    modules: List[str] = []
    seen: Set[str] = set()

    for line_number, raw_line in enumerate(_logical_lines(data), start=1):
        name = _module_name(raw_line)
        if name is None:
            continue

        key = canonicalize_name(name)
        if key in seen:
            logger.debug("Duplicate module %s on line %d", name, line_number)
            continue

        seen.add(key)
        modules.append(name)

    return modules


def _logical_lines(data: str) -> List[str]:
    """Join backslash continuations into single lines."""
    lines: List[str] = []
    pending = ""

    for line in data.splitlines():
        if line.endswith("\\"):
            pending += line[:-1]
            continue
        lines.append(pending + line)
        pending = ""

    if pending:
        lines.append(pending)
    return lines


def _module_name(line: str) -> Optional[str]:
    stripped = _COMMENT_RE.sub("", line).strip()
    stripped = _OPTION_RE.sub("", stripped)
    if not stripped or stripped.startswith("-"):
        return None

    try:
        return Requirement(stripped).name
    except InvalidRequirement as exc:
        logger.debug("Skipping unparseable manifest line %r: %s", stripped, exc)
        return None
