"""Detection of note-level tags such as '#todo' at the top of a document"""

import re


def tag_pattern(tag: str) -> re.Pattern:
    """Regex matching documents whose leading tag lines include `tag` (or a `tag/sub` child).

    Tags must come first in the body: after optional frontmatter and blank
    lines, a run of '#tag' words separated by whitespace. A tag mentioned later
    in the text, or inside the frontmatter, does not count.
    """
    return re.compile(
        r"""\A
        (?:\n*---[^\n]*\n(?:.*?\n)?---[^\n]*\n)?     # optional frontmatter
        \s*
        (?:\#[\w\-/]+\s+)*                       # other tags
        \#""" + re.escape(tag) + r"""(?:/[\w\-/]*)?(?![\w\-])""",
        re.DOTALL | re.VERBOSE,
    )


def has_tag(text: str, tag: str) -> bool:
    """True if text is tagged with `tag` in its leading tag lines."""
    return tag_pattern(tag).match(text.replace("\r\n", "\n")) is not None
