"""Document tree: frontmatter plus a closed set of typed, immutable blocks"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Checkbox(str, Enum):
    """Task state of a list item; items without a checkbox carry None"""
    unchecked = " "
    checked = "x"


class Align(str, Enum):
    """Column alignment taken from the table delimiter row"""
    none = "none"
    left = "left"
    center = "center"
    right = "right"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ListStyle(_Frozen):
    """Marker style shared by the items of one list."""
    ordered: bool = False
    marker: str = "-"               # bullet char, or '.' / ')' for ordered lists
    start: int = 1


class ItemBlock(_Frozen):
    """A non-list block nested in a list item, kept as dedented source lines."""
    lines: tuple[str, ...]
    after: int = 0                  # number of child items that come before this block


class ListItem(_Frozen):
    """A list item and the subtree it owns."""
    checkbox: Optional[Checkbox] = None
    text: str = ""
    body: tuple[ItemBlock, ...] = ()
    children: tuple["ListItem", ...] = ()
    child_style: ListStyle = ListStyle()

    @property
    def checked(self) -> bool:
        return self.checkbox is Checkbox.checked


class Heading(_Frozen):
    kind: Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=6)
    text: str
    setext: bool = False


class Paragraph(_Frozen):
    kind: Literal["paragraph"] = "paragraph"
    text: str


class ListBlock(_Frozen):
    kind: Literal["list"] = "list"
    style: ListStyle = ListStyle()
    items: tuple[ListItem, ...] = ()

    @property
    def ordered(self) -> bool:
        return self.style.ordered


class Table(_Frozen):
    kind: Literal["table"] = "table"
    align: tuple[Align, ...]
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()


class CodeFence(_Frozen):
    kind: Literal["code"] = "code"
    fence: str = "```"
    info: str = ""
    lines: tuple[str, ...] = ()


class ThematicBreak(_Frozen):
    kind: Literal["hr"] = "hr"
    markup: str = "---"


class Blank(_Frozen):
    kind: Literal["blank"] = "blank"
    count: int = Field(default=1, ge=1)


class Raw(_Frozen):
    """Unrecognized source passed through verbatim."""
    kind: Literal["raw"] = "raw"
    lines: tuple[str, ...]


Block = Annotated[
    Union[Heading, Paragraph, ListBlock, Table, CodeFence, ThematicBreak, Blank, Raw],
    Field(discriminator="kind"),
]

BLOCK_KINDS: tuple[str, ...] = ("heading", "paragraph", "list", "table", "code", "hr", "blank", "raw")


class Document(_Frozen):
    """One parsed markdown file."""
    frontmatter: Optional[str] = None   # opaque text between the '---' lines, each line '\n'-terminated
    blocks: tuple[Block, ...] = ()


ListItem.model_rebuild()
