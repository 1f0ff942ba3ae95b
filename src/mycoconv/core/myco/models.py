"""Mycomarkup document tree: block nodes and inline spans"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class SpanKind(str, Enum):
    """Inline styles toggled by paired markers"""
    bold = "bold"
    italic = "italic"
    strike = "strike"
    mono = "mono"
    super = "super"
    sub = "sub"
    underline = "underline"
    mark = "mark"


# --- inline spans ---

@dataclass
class Text:
    content: str


@dataclass
class StyleToggle:
    kind: SpanKind


@dataclass
class Link:
    """[[target]] or [[target | display]]; also bare URLs, which have no display."""
    target: str
    display: Optional[str] = None

    @property
    def displayed_text(self) -> str:
        return self.display if self.display else self.target

    def href(self, context) -> str:
        return context.link_href(self.target)


Span = Union[Text, StyleToggle, Link]


@dataclass
class Formatted:
    """Inline content; one span list per source line."""
    lines: list[list[Span]] = field(default_factory=list)


# --- blocks ---

@dataclass
class Heading:
    level: int
    contents: Formatted


@dataclass
class Paragraph:
    formatted: Formatted


@dataclass
class CodeBlock:
    language: str
    contents: str           # raw lines, no trailing newline


class ListMarker(str, Enum):
    unordered = "unordered"
    ordered = "ordered"
    todo = "todo"


@dataclass
class ListItem:
    contents: list = field(default_factory=list)
    checked: Optional[bool] = None      # only set for todo items


@dataclass
class List:
    marker: ListMarker
    items: list[ListItem] = field(default_factory=list)


@dataclass
class ThematicBreak:
    pass


@dataclass
class Quote:
    contents: list = field(default_factory=list)


@dataclass
class TableCell:
    contents: list = field(default_factory=list)
    colspan: int = 1
    is_header: bool = False


@dataclass
class TableRow:
    cells: list[TableCell] = field(default_factory=list)

    @property
    def looks_like_thead(self) -> bool:
        return bool(self.cells) and all(c.is_header for c in self.cells)


@dataclass
class Table:
    caption: str = ""
    rows: list[TableRow] = field(default_factory=list)


@dataclass
class ImgEntry:
    target: str
    width: str = ""
    height: str = ""
    description: list = field(default_factory=list)


@dataclass
class Img:
    entries: list[ImgEntry] = field(default_factory=list)
    layout: str = ""

    @property
    def has_one_image(self) -> bool:
        return len(self.entries) == 1


@dataclass
class Rocket:
    target: str
    display: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.target

    @property
    def displayed_text(self) -> str:
        return self.display or self.target

    def href(self, context) -> str:
        return context.link_href(self.target)


@dataclass
class LaunchPad:
    rockets: list[Rocket] = field(default_factory=list)


@dataclass
class Transclusion:
    target: str
    selector: str = ""

