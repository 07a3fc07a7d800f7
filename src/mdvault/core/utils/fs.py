"""Vault file discovery and atomic write-back"""

import os
import tempfile
from pathlib import Path
from typing import Iterable


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts)


def discover_files(path: Path, extensions: Iterable[str] = (".md",)) -> list[Path]:
    """Return sorted files with a matching extension under path, or [path] for a single file.

    Hidden files and anything inside hidden directories (e.g. '.obsidian',
    '.trash') are skipped.
    """
    suffixes = {e.lower() for e in extensions}
    if path.is_file():
        return [path] if path.suffix.lower() in suffixes else []
    return sorted(
        p for p in path.rglob("*")
        if p.is_file() and p.suffix.lower() in suffixes and not _is_hidden(p, path)
    )


def atomic_write(path: Path, content: str) -> None:
    """Write content next to path in a temp file, then rename it over path."""
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
