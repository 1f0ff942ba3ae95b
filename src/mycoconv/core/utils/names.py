"""Hypha name canonicalization"""

import re
from pathlib import Path


def canonical_name(name: str) -> str:
    """Return the canonical form of a hypha name: trimmed, lowercase, spaces as underscores."""
    return re.sub(r'\s+', '_', name.strip()).lower()


def hypha_name_from_path(path: Path, root: Path | None = None) -> str:
    """Derive a hypha name from a text file path; nested hyphae keep their directories."""
    if root is None or path == root:
        return canonical_name(path.stem)
    return canonical_name(path.relative_to(root).with_suffix('').as_posix())
