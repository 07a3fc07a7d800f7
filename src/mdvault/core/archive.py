"""Checklist archiving: move fully completed list subtrees under an 'Archived' heading"""

from typing import Optional

from mdvault.core.models import Blank, Block, Document, Heading, ListBlock, ListItem, ListStyle


ARCHIVE_HEADING = "Archived"
ARCHIVE_LEVEL = 2


def is_complete(item: ListItem) -> bool:
    """True iff the item is checked and so is every descendant, at all depths."""
    return item.checked and all(is_complete(child) for child in item.children)


def find_archive_section(blocks: tuple[Block, ...], heading: str = ARCHIVE_HEADING) -> Optional[tuple[int, int]]:
    """Return (start, end) block indexes of the archive section, or None.

    The section runs from the first heading whose text is exactly `heading`
    up to the next heading of the same or a higher level.
    """
    for start, block in enumerate(blocks):
        if isinstance(block, Heading) and block.text.strip() == heading:
            end = start + 1
            while end < len(blocks):
                nxt = blocks[end]
                if isinstance(nxt, Heading) and nxt.level <= block.level:
                    break
                end += 1
            return start, end
    return None


def _split_list(block: ListBlock) -> tuple[tuple[ListItem, ...], tuple[ListItem, ...]]:
    """Partition top-level items into (kept, archived), each in original order."""
    kept = tuple(item for item in block.items if not is_complete(item))
    moved = tuple(item for item in block.items if is_complete(item))
    return kept, moved


def _merge(blocks: list[Block], moved: tuple[ListItem, ...], style: ListStyle, heading: str) -> list[Block]:
    """Prepend moved items to the archive list, creating the section or list as needed."""
    section = find_archive_section(tuple(blocks), heading)
    if section is None:
        trailer: list[Block] = [Blank()] if blocks else []
        trailer += [Heading(level=ARCHIVE_LEVEL, text=heading), Blank(), ListBlock(style=style, items=moved)]
        return blocks + trailer

    start, end = section
    for i in range(start + 1, end):
        target = blocks[i]
        if isinstance(target, ListBlock):
            blocks[i] = target.model_copy(update={"items": moved + target.items})
            return blocks
    return blocks[:start + 1] + [Blank(), ListBlock(style=style, items=moved)] + blocks[start + 1:]


def archive_document(doc: Document, heading: str = ARCHIVE_HEADING) -> Document:
    """Return a copy of doc with fully completed top-level items moved to the archive list.

    Lists inside the archive section are left alone, and a source list left
    without items is dropped. When nothing qualifies, doc itself is returned.
    """
    section = find_archive_section(doc.blocks, heading)
    blocks: list[Block] = []
    moved: list[ListItem] = []
    style: Optional[ListStyle] = None

    for i, block in enumerate(doc.blocks):
        in_section = section is not None and section[0] <= i < section[1]
        if not isinstance(block, ListBlock) or in_section:
            blocks.append(block)
            continue
        kept, archived = _split_list(block)
        if not archived:
            blocks.append(block)
            continue
        moved.extend(archived)
        if style is None:
            style = ListStyle(ordered=block.style.ordered, marker=block.style.marker)
        if kept:
            blocks.append(block.model_copy(update={"items": kept}))

    if not moved:
        return doc
    blocks = _merge(blocks, tuple(moved), style, heading)
    return doc.model_copy(update={"blocks": tuple(blocks)})
