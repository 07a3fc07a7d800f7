"""Pretty-print transform: canonical headings, code spans, table cells and spacing"""

import re

from mdvault.core.models import (
    Blank,
    Block,
    CodeFence,
    Document,
    Heading,
    ListBlock,
    ListItem,
    Paragraph,
    Raw,
    Table,
    ThematicBreak,
)


BACKTICK_RUN_RE = re.compile(r"`+")


def normalize_code_spans(text: str) -> str:
    """Rewrite ``code`` spans as `code` when the content has no backtick.

    A span opens on a backtick run and closes on the next run of the same
    length; runs without a closing partner are literal text.
    """
    out: list[str] = []
    pos = 0
    while True:
        opening = BACKTICK_RUN_RE.search(text, pos)
        if opening is None:
            break
        size = len(opening.group())
        closing = BACKTICK_RUN_RE.search(text, opening.end())
        while closing is not None and len(closing.group()) != size:
            closing = BACKTICK_RUN_RE.search(text, closing.end())
        if closing is None:
            out.append(text[pos:opening.end()])
            pos = opening.end()
            continue
        content = text[opening.end():closing.start()]
        out.append(text[pos:opening.start()])
        if size > 1 and content.strip(" ") and "`" not in content:
            out.append(f"`{content}`")
        else:
            out.append(text[opening.start():closing.end()])
        pos = closing.end()
    out.append(text[pos:])
    return "".join(out)


def _strip_lines(lines) -> tuple[str, ...]:
    return tuple(line.rstrip() for line in lines)


def _inline(text: str) -> str:
    """Normalize code spans and drop trailing whitespace on every line of inline text."""
    return "\n".join(_strip_lines(normalize_code_spans(text).split("\n")))


def _format_heading(block: Heading) -> Heading:
    text = " ".join(line.strip() for line in block.text.split("\n"))
    return block.model_copy(update={"text": _inline(text).strip(), "setext": False})


def _format_paragraph(block: Paragraph) -> Paragraph:
    return block.model_copy(update={"text": _inline(block.text)})


def format_item(item: ListItem) -> ListItem:
    """Format an item's text and body and, recursively, its children."""
    return item.model_copy(update={
        "text": _inline(item.text).strip(),
        "body": tuple(b.model_copy(update={"lines": _strip_lines(b.lines)}) for b in item.body),
        "children": tuple(format_item(child) for child in item.children),
    })


def _format_list(block: ListBlock) -> ListBlock:
    return block.model_copy(update={"items": tuple(format_item(item) for item in block.items)})


def _format_cell(text: str) -> str:
    return normalize_code_spans(text.strip())


def _format_table(block: Table) -> Table:
    return block.model_copy(update={
        "header": tuple(_format_cell(c) for c in block.header),
        "rows": tuple(tuple(_format_cell(c) for c in row) for row in block.rows),
    })


def _format_code(block: CodeFence) -> CodeFence:
    return block.model_copy(update={"info": block.info.strip(), "lines": _strip_lines(block.lines)})


def _format_hr(block: ThematicBreak) -> ThematicBreak:
    return block


def _format_blank(block: Blank) -> Blank:
    return block


def _format_raw(block: Raw) -> Raw:
    return block.model_copy(update={"lines": _strip_lines(block.lines)})


BLOCK_FORMATTERS = {
    "heading":   _format_heading,
    "paragraph": _format_paragraph,
    "list":      _format_list,
    "table":     _format_table,
    "code":      _format_code,
    "hr":        _format_hr,
    "blank":     _format_blank,
    "raw":       _format_raw,
}


def format_block(block: Block) -> Block:
    """Return the canonical form of a single block."""
    return BLOCK_FORMATTERS[block.kind](block)


def format_document(doc: Document) -> Document:
    """Return a canonical copy of doc with exactly one blank line between top-level blocks.

    Lists of the same style left adjacent (e.g. once archiving removed the list
    between them) are merged, as markdown would read them back as one list.
    The frontmatter text is kept byte for byte; doc itself is left untouched.
    """
    blocks: list[Block] = []
    for block in doc.blocks:
        if isinstance(block, Blank):
            continue
        block = format_block(block)
        prev = blocks[-1] if blocks else None
        if isinstance(block, ListBlock) and isinstance(prev, ListBlock) and _same_style(prev, block):
            blocks[-1] = prev.model_copy(update={"items": prev.items + block.items})
            continue
        if blocks or doc.frontmatter is not None:
            blocks.append(Blank())
        blocks.append(block)
    return doc.model_copy(update={"blocks": tuple(blocks)})


def _same_style(a: ListBlock, b: ListBlock) -> bool:
    return (a.style.ordered, a.style.marker) == (b.style.ordered, b.style.marker)
