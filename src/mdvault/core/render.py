"""Serialize a Document tree back to markdown text"""

import re

from mdvault.core.models import (
    Align,
    Blank,
    Block,
    CodeFence,
    Document,
    Heading,
    ListBlock,
    ListItem,
    ListStyle,
    Paragraph,
    Raw,
    Table,
    ThematicBreak,
)
from mdvault.core.utils.width import display_width


LIST_INDENT = 4
MIN_COLUMN_WIDTH = 3
UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")

DELIMITERS = {
    Align.none:   lambda w: "-" * w,
    Align.left:   lambda w: ":" + "-" * (w - 1),
    Align.center: lambda w: ":" + "-" * (w - 2) + ":",
    Align.right:  lambda w: "-" * (w - 1) + ":",
}


def _render_heading(block: Heading) -> list[str]:
    if block.setext and block.level <= 2:
        lines = block.text.split("\n")
        underline = "=" if block.level == 1 else "-"
        return [*lines, underline * max(MIN_COLUMN_WIDTH, display_width(lines[-1]))]
    hashes = "#" * block.level
    text = " ".join(block.text.split("\n"))
    return [f"{hashes} {text}" if text else hashes]


def _render_paragraph(block: Paragraph) -> list[str]:
    return block.text.split("\n")


def item_marker(style: ListStyle, index: int) -> str:
    """Marker for the index-th item of a list, e.g. '-' or '3.'."""
    return f"{style.start + index}{style.marker}" if style.ordered else style.marker


def _indented(lines, prefix: str) -> list[str]:
    return [f"{prefix}{line}" if line else "" for line in lines]


def child_indent(indent: int, marker: str) -> int:
    """Column of nested items: the parent's content column rounded up to a multiple of LIST_INDENT."""
    column = indent + len(marker) + 1
    return -(-column // LIST_INDENT) * LIST_INDENT


def _render_children(item: ListItem, lo: int, hi: int, indent: int) -> list[str]:
    lines: list[str] = []
    for i in range(lo, hi):
        lines.extend(render_item(item.children[i], item_marker(item.child_style, i), indent))
    return lines


def render_item(item: ListItem, marker: str, indent: int = 0) -> list[str]:
    """Render one item and its subtree, body blocks and children in source order."""
    cont = " " * (indent + len(marker) + 1)
    head = " " * indent + marker
    if item.checkbox is not None:
        head += f" [{item.checkbox.value}]"

    text = item.text.split("\n") if item.text else []
    body = list(item.body)
    # a separating blank keeps children from reading as part of the preceding block
    spaced = bool(text) and item.child_style.ordered and item.child_style.start != 1
    if not text and body and body[0].after == 0 and item.checkbox is None:
        text = list(body.pop(0).lines)
        spaced = True

    lines = [f"{head} {text[0]}" if text and text[0] else head]
    lines.extend(_indented(text[1:], cont))
    nested = child_indent(indent, marker)
    done = 0
    for block in [*body, None]:
        upto = len(item.children) if block is None else block.after
        children = _render_children(item, done, upto, nested)
        if children and spaced:
            lines.append("")
        lines.extend(children)
        done = upto
        if block is not None:
            lines.append("")
            lines.extend(_indented(block.lines, cont))
            spaced = True
    return lines


def _render_list(block: ListBlock) -> list[str]:
    lines: list[str] = []
    for i, item in enumerate(block.items):
        lines.extend(render_item(item, item_marker(block.style, i)))
    return lines


def escape_cell(text: str) -> str:
    """Escape pipes that would otherwise split the cell."""
    return UNESCAPED_PIPE_RE.sub(r"\\|", text)


def pad_cell(text: str, width: int, align: Align) -> str:
    """Pad text to width display columns according to align (odd center space goes right)."""
    gap = width - display_width(text)
    if align is Align.right:
        return " " * gap + text
    if align is Align.center:
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return text + " " * gap


def column_widths(table: Table) -> list[int]:
    """Display width of each column over header and body cells, at least MIN_COLUMN_WIDTH."""
    rows = [table.header, *table.rows]
    return [
        max([MIN_COLUMN_WIDTH] + [display_width(escape_cell(row[i])) for row in rows if i < len(row)])
        for i in range(len(table.header))
    ]


def _render_table(block: Table) -> list[str]:
    widths = column_widths(block)

    def row_line(cells) -> str:
        padded = (pad_cell(escape_cell(c), w, a) for c, w, a in zip(cells, widths, block.align))
        return "| " + " | ".join(padded) + " |"

    delimiter = "| " + " | ".join(DELIMITERS[a](w) for a, w in zip(block.align, widths)) + " |"
    return [row_line(block.header), delimiter, *(row_line(row) for row in block.rows)]


def _render_code(block: CodeFence) -> list[str]:
    return [f"{block.fence}{block.info}", *block.lines, block.fence]


def _render_hr(block: ThematicBreak) -> list[str]:
    return [block.markup]


def _render_blank(block: Blank) -> list[str]:
    return [""] * block.count


def _render_raw(block: Raw) -> list[str]:
    return list(block.lines)


BLOCK_RENDERERS = {
    "heading":   _render_heading,
    "paragraph": _render_paragraph,
    "list":      _render_list,
    "table":     _render_table,
    "code":      _render_code,
    "hr":        _render_hr,
    "blank":     _render_blank,
    "raw":       _render_raw,
}


def render_block(block: Block) -> list[str]:
    """Render a single block to its output lines."""
    return BLOCK_RENDERERS[block.kind](block)


def render(doc: Document) -> str:
    """Serialize doc to text ending in a single newline ('' for an empty document)."""
    out = f"---\n{doc.frontmatter}---\n" if doc.frontmatter is not None else ""
    lines = [line for block in doc.blocks for line in render_block(block)]
    if lines:
        out += "\n".join(lines) + "\n"
    return out
