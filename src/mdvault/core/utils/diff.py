"""Unified diffs and change counts between the old and new text of a file"""

import difflib


def diff_summary(old: str, new: str) -> dict[str, int]:
    """Return added/deleted line counts for a compact dry-run report."""
    matcher = difflib.SequenceMatcher(None, old.splitlines(), new.splitlines(), autojunk=False)
    added = deleted = 0
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag != "equal":
            deleted += i2 - i1
            added += j2 - j1
    return {"added": added, "deleted": deleted}


def unified_diff(
    old: str,
    new: str,
    from_label: str = "original",
    to_label: str = "updated",
    context: int = 3,
    ) -> str:
    """Return a unified diff of old against new; empty string if identical."""
    old_lines = old.splitlines(keepends=True)
    new_lines = new.splitlines(keepends=True)
    return "".join(
        difflib.unified_diff(old_lines, new_lines, fromfile=from_label, tofile=to_label, n=context)
    )
