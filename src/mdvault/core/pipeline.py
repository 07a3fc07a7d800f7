"""Pipeline step functions: format and archive text, files and whole vaults"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from mdvault.config import Settings
from mdvault.core.archive import ARCHIVE_HEADING, archive_document
from mdvault.core.format import format_document
from mdvault.core.parse import DEFAULT_PRESET, parse
from mdvault.core.render import render
from mdvault.core.utils.diff import diff_summary, unified_diff
from mdvault.core.utils.fs import atomic_write, discover_files
from mdvault.core.utils.tags import has_tag


logger = logging.getLogger(__name__)


@dataclass
class FileChange:
    """Outcome for one file a run touched (or would touch, in a dry run)."""
    path:  Path
    old:   str
    new:   str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def diff(self) -> str:
        return unified_diff(self.old, self.new, f"a/{self.path}", f"b/{self.path}")

    def summary(self) -> dict[str, int]:
        return diff_summary(self.old, self.new)


def format_text(text: str, preset: str = DEFAULT_PRESET) -> str:
    """Parse, pretty-print and render one document."""
    return render(format_document(parse(text, preset)))


def archive_text(text: str, preset: str = DEFAULT_PRESET, heading: str = ARCHIVE_HEADING) -> str:
    """Archive completed checklist items, then pretty-print; text comes back as-is if nothing moved."""
    doc = parse(text, preset)
    archived = archive_document(doc, heading)
    if archived is doc:
        return text
    return render(format_document(archived))


def _run(
    root: Path,
    settings: Settings,
    transform: Callable[[str], str],
    verb: str,
    dry_run: bool,
    select: Optional[Callable[[str], bool]] = None,
    ) -> list[FileChange]:
    """Apply transform to every vault file; returns changed (or failed) files only.

    A failing file is reported in its FileChange and does not stop the run.
    """
    results: list[FileChange] = []
    for path in discover_files(root, settings.extensions):
        try:
            old = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", path, e)
            results.append(FileChange(path, "", "", error=f"Failed to read {path}: {e}"))
            continue
        if select is not None and not select(old):
            logger.debug("Skipping %s: not selected", path)
            continue
        new = transform(old)
        if new == old:
            continue
        change = FileChange(path, old, new)
        if not dry_run:
            try:
                atomic_write(path, new)
            except OSError as e:
                change.error = f"Failed to {verb} {path}: {e}"
        logger.info("%s %s%s", verb, path, " (dry run)" if dry_run else "")
        results.append(change)
    return results


def run_format(root: Path, settings: Settings, dry_run: bool = False) -> list[FileChange]:
    """Pretty-print every markdown file under root."""
    return _run(
        root, settings,
        lambda text: format_text(text, settings.parser_config),
        "format", dry_run,
    )


def run_archive(
    root: Path,
    settings: Settings,
    dry_run: bool = False,
    tag: Optional[str] = None,
    ) -> list[FileChange]:
    """Archive completed checklist items in files tagged #<tag> (settings.archive_tag by default)."""
    tag = settings.archive_tag if tag is None else tag
    return _run(
        root, settings,
        lambda text: archive_text(text, settings.parser_config, settings.archive_heading),
        "archive", dry_run,
        select=(lambda text: has_tag(text, tag)) if tag else None,
    )
