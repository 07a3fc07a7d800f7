"""Frontmatter extraction and markdown-it block tokens to Document tree"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from markdown_it import MarkdownIt

from mdvault.core.models import (
    Align,
    Blank,
    Block,
    Checkbox,
    CodeFence,
    Document,
    Heading,
    ListBlock,
    ItemBlock,
    ListItem,
    ListStyle,
    Paragraph,
    Raw,
    Table,
    ThematicBreak,
)


logger = logging.getLogger(__name__)

DEFAULT_PRESET = "gfm-like"
LIST_OPEN = {"bullet_list_open", "ordered_list_open"}
CHECKBOX_RE = re.compile(r"^\[([ xX])\](?=\s|$)")
ITEM_MARKER_RE = re.compile(r"^( *)([-*+]|\d{1,9}[.)])( *)")
DELIMITER_CHARS = set("|:- \t")


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def split_lines(text: str) -> list[str]:
    """Split text into lines the way markdown-it counts them (CR and CRLF normalized)."""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def split_frontmatter(lines: list[str]) -> tuple[Optional[str], list[str]]:
    """Return (frontmatter_text, body_lines); frontmatter is None without a closing '---'."""
    if not lines or lines[0].strip() != "---":
        return None, lines
    for end in range(1, len(lines)):
        if lines[end].strip() == "---":
            return "".join(f"{line}\n" for line in lines[1:end]), lines[end + 1:]
    return None, lines


def _content_end(lines: list[str], start: int, end: int) -> int:
    """Move end back over trailing blank lines, never before start."""
    while end > start and not lines[end - 1].strip():
        end -= 1
    return end


def _source_lines(token, lines: list[str]) -> tuple[str, ...]:
    start, end = token.map
    return tuple(lines[start:_content_end(lines, start, end)])


def _close_index(tokens: list, i: int) -> int:
    """Index of the token closing tokens[i]; i itself for self-contained tokens."""
    tok = tokens[i]
    if tok.nesting != 1:
        return i
    j = i + 1
    while not (tokens[j].nesting == -1 and tokens[j].level == tok.level):
        j += 1
    return j


def _gap_blocks(lines: list[str], lo: int, hi: int) -> list[Block]:
    """Lines no token claimed: blank runs become Blank, anything else (e.g. link definitions) Raw."""
    blocks: list[Block] = []
    i = lo
    while i < hi:
        blank = not lines[i].strip()
        j = i
        while j < hi and (not lines[j].strip()) == blank:
            j += 1
        blocks.append(Blank(count=j - i) if blank else Raw(lines=tuple(lines[i:j])))
        i = j
    return blocks


# --- list items ---

@dataclass
class _ItemDraft:
    """Mutable list item under construction, frozen on its list_item_close token."""
    level: int
    line: int
    column: int
    checkbox: Optional[Checkbox] = None
    text: Optional[str] = None
    body: list[ItemBlock] = field(default_factory=list)
    children: list[ListItem] = field(default_factory=list)
    child_style: Optional[ListStyle] = None

    def freeze(self) -> ListItem:
        return ListItem(
            checkbox=self.checkbox,
            text=self.text or "",
            body=tuple(self.body),
            children=tuple(self.children),
            child_style=self.child_style or ListStyle(),
        )


def _content_column(line: str) -> int:
    """Column where the text of the list item starting on line begins."""
    expanded = line.expandtabs(4)
    m = ITEM_MARKER_RE.match(expanded)
    if not m:
        return len(expanded) - len(expanded.lstrip()) + 2
    indent, marker, spaces = m.groups()
    if not expanded[m.end():].strip() or not 1 <= len(spaces) <= 4:
        return len(indent) + len(marker) + 1
    return len(indent) + len(marker) + len(spaces)


def _dedent(lines: tuple[str, ...], column: int) -> tuple[str, ...]:
    """Strip up to column leading spaces from every line."""
    out = []
    for line in lines:
        expanded = line.expandtabs(4)
        indent = len(expanded) - len(expanded.lstrip(" "))
        out.append(expanded[min(indent, column):])
    return tuple(out)


def split_checkbox(content: str) -> tuple[Optional[Checkbox], str]:
    """Split a leading '[ ]' / '[x]' / '[X]' token off item text."""
    m = CHECKBOX_RE.match(content)
    if not m:
        return None, content
    state = Checkbox.unchecked if m.group(1) == " " else Checkbox.checked
    return state, content[m.end():].lstrip()


def _list_style(token) -> ListStyle:
    if token.type == "ordered_list_open":
        start = token.attrGet("start")
        return ListStyle(ordered=True, marker=token.markup or ".", start=int(start) if start is not None else 1)
    return ListStyle(marker=token.markup or "-")


def _attach(draft: _ItemDraft, tokens: list, k: int, lines: list[str]) -> None:
    """Attach the block opened at tokens[k] to the item being built."""
    tok = tokens[k]
    first = draft.text is None and not draft.body and not draft.children
    if tok.type == "paragraph_open" and first:
        checkbox, text = split_checkbox(tokens[k + 1].content)
        draft.checkbox = checkbox
        draft.text = "\n".join(line.lstrip() for line in text.split("\n"))
        return
    src = _source_lines(tok, lines)
    if tok.map[0] == draft.line:
        # block starts on the marker line: cut the marker off instead of dedenting
        src = (src[0].expandtabs(4)[draft.column:], *_dedent(src[1:], draft.column))
    else:
        src = _dedent(src, draft.column)
    draft.body.append(ItemBlock(lines=src, after=len(draft.children)))


def _read_list(tokens: list, lo: int, hi: int, lines: list[str]) -> ListBlock:
    """Rebuild item nesting with an explicit stack of open items (no recursion)."""
    items: list[ListItem] = []
    stack: list[_ItemDraft] = []
    k = lo + 1
    while k < hi:
        tok = tokens[k]
        if tok.type == "list_item_open":
            stack.append(_ItemDraft(level=tok.level, line=tok.map[0], column=_content_column(lines[tok.map[0]])))
        elif tok.type == "list_item_close":
            item = stack.pop().freeze()
            (stack[-1].children if stack else items).append(item)
        elif tok.type in LIST_OPEN:
            if stack and stack[-1].child_style is None:
                stack[-1].child_style = _list_style(tok)
        elif stack and tok.nesting != -1 and tok.level == stack[-1].level + 1:
            _attach(stack[-1], tokens, k, lines)
            k = _close_index(tokens, k)
        k += 1
    return ListBlock(style=_list_style(tokens[lo]), items=tuple(items))


# --- other blocks ---

def _read_heading(tokens: list, lo: int, hi: int, lines: list[str]) -> Heading:
    tok = tokens[lo]
    return Heading(level=int(tok.tag[1:]), text=tokens[lo + 1].content, setext=tok.markup in ("=", "-"))


def _looks_like_table(src: tuple[str, ...]) -> bool:
    """A pipe row followed by a delimiter-like row that markdown-it did not accept as a table."""
    if len(src) < 2 or "|" not in src[0] or "|" not in src[1]:
        return False
    return "-" in src[1] and set(src[1]) <= DELIMITER_CHARS


def _read_paragraph(tokens: list, lo: int, hi: int, lines: list[str]) -> Block:
    src = _source_lines(tokens[lo], lines)
    if _looks_like_table(src):
        logger.debug("Malformed table at line %d kept as raw text", tokens[lo].map[0] + 1)
        return Raw(lines=src)
    return Paragraph(text="\n".join(src))


def _cell_align(token) -> Align:
    style = token.attrGet("style") or ""
    if style.startswith("text-align:"):
        return Align(style.split(":", 1)[1])
    return Align.none


def _read_table(tokens: list, lo: int, hi: int, lines: list[str]) -> Table:
    header: list[str] = []
    rows: list[tuple[str, ...]] = []
    align: list[Align] = []
    row: list[str] = []
    for tok in tokens[lo:hi]:
        if tok.type == "tr_open":
            row = []
        elif tok.type == "th_open":
            align.append(_cell_align(tok))
        elif tok.type == "inline":
            row.append(tok.content)
        elif tok.type == "tr_close":
            if header:
                rows.append(tuple((row + [""] * len(header))[:len(header)]))
            else:
                header = row
    return Table(align=tuple(align), header=tuple(header), rows=tuple(rows))


def _read_fence(tokens: list, lo: int, hi: int, lines: list[str]) -> CodeFence:
    tok = tokens[lo]
    body = tok.content.split("\n")
    if body[-1] == "":
        body.pop()
    return CodeFence(fence=tok.markup, info=tok.info, lines=tuple(body))


def _read_hr(tokens: list, lo: int, hi: int, lines: list[str]) -> ThematicBreak:
    marker = (tokens[lo].markup or "-")[0]
    return ThematicBreak(markup=marker * 3)


def _read_raw(tokens: list, lo: int, hi: int, lines: list[str]) -> Raw:
    return Raw(lines=_source_lines(tokens[lo], lines))


BLOCK_READERS = {
    "heading_open":      _read_heading,
    "paragraph_open":    _read_paragraph,
    "bullet_list_open":  _read_list,
    "ordered_list_open": _read_list,
    "table_open":        _read_table,
    "fence":             _read_fence,
    "hr":                _read_hr,
}


def parse_lines(lines: list[str], preset: str = DEFAULT_PRESET) -> list[Block]:
    """Parse body lines into top-level blocks; constructs without a reader become Raw."""
    if not lines:
        return []
    tokens = _make_parser(preset).parse("\n".join(lines) + "\n")
    blocks: list[Block] = []
    cursor = 0
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        close = _close_index(tokens, i)
        if tok.map:
            start, end = tok.map
            blocks.extend(_gap_blocks(lines, cursor, start))
            blocks.append(BLOCK_READERS.get(tok.type, _read_raw)(tokens, i, close, lines))
            cursor = max(cursor, _content_end(lines, start, end))
        i = close + 1
    blocks.extend(_gap_blocks(lines, cursor, _content_end(lines, cursor, len(lines))))
    return blocks


def parse(text: str, preset: str = DEFAULT_PRESET) -> Document:
    """Parse markdown text into a Document. Never raises on malformed markdown."""
    frontmatter, lines = split_frontmatter(split_lines(text))
    return Document(frontmatter=frontmatter, blocks=tuple(parse_lines(lines, preset)))
