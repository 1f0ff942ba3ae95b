"""markdown-it parser construction and syntax tree building"""

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode


def make_parser(preset: str = 'gfm-like', linkify: bool = True) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name.

    Linkify only picks up URLs with an explicit scheme; bare domains such as
    file.py stay text. Raises ValueError for an unknown preset name.
    """
    try:
        parser = MarkdownIt(preset, options_update={"linkify": linkify})
    except KeyError:
        raise ValueError(f"unknown parser preset: {preset}") from None
    if linkify and parser.linkify is not None:
        parser.linkify.set({"fuzzy_link": False, "fuzzy_email": False})
    return parser


def parse_tree(content: str, preset: str = 'gfm-like', linkify: bool = True) -> SyntaxTreeNode:
    """Parse Markdown into a SyntaxTreeNode rooted at a 'root' node."""
    return SyntaxTreeNode(make_parser(preset, linkify).parse(content))
