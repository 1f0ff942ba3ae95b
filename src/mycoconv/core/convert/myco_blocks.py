"""Mycomarkup block tree -> Markdown text.

Conversion is lossy: tables, image galleries and launch pads become raw
HTML, transclusions become a comment and a warning. Block types without a
handler degrade to a comment so that their siblings are unaffected.
"""

import logging
from html import escape

from mycoconv.core.context import ConvertContext
from mycoconv.core.convert.myco_inline import formatted_to_markdown
from mycoconv.core.convert.warnings import WarningLog
from mycoconv.core.myco.models import (
    CodeBlock,
    Heading,
    Img,
    LaunchPad,
    List,
    ListItem,
    ListMarker,
    Paragraph,
    Quote,
    Table,
    ThematicBreak,
    Transclusion,
)
from mycoconv.core.myco.parse import parse_blocks


logger = logging.getLogger(__name__)

TRANSCLUSION_COMMENT = "<!-- Transclusion: transclusion not supported in Markdown -->\n"


def _attr(value: str) -> str:
    return escape(value, quote=True)


def _heading(block: Heading, context, warnings) -> str:
    return '#' * block.level + ' ' + formatted_to_markdown(block.contents, context) + '\n'


def _paragraph(block: Paragraph, context, warnings) -> str:
    return formatted_to_markdown(block.formatted, context) + '\n'


def _code(block: CodeBlock, context, warnings) -> str:
    lang = block.language if block.language and block.language != context.default_language else ''
    body = block.contents if block.contents.endswith('\n') else block.contents + '\n'
    return f"```{lang}\n{body}```\n"


def _list_marker(marker: ListMarker, item: ListItem) -> str:
    if marker == ListMarker.ordered:
        return '1. '
    if marker == ListMarker.todo:
        return '- [x] ' if item.checked else '- [ ] '
    return '- '


def _item_body(item: ListItem, context, warnings) -> str:
    """Item contents; a paragraph stays on the marker line, nested lists follow without a gap."""
    parts = []
    for i, block in enumerate(item.contents):
        if i > 0 and not isinstance(block, List):
            parts.append('\n')
        parts.append(convert_block(block, context, warnings))
    return ''.join(parts) or '\n'


def _list(block: List, context, warnings) -> str:
    out = []
    for item in block.items:
        marker = _list_marker(block.marker, item)
        indent = ' ' * len(marker)
        lines = _item_body(item, context, warnings).split('\n')
        out.append(marker + lines[0] + '\n')
        out.extend((indent + line if line else line) + '\n' for line in lines[1:-1])
    return ''.join(out)


def _thematic_break(block: ThematicBreak, context, warnings) -> str:
    return '---\n'


def _quote(block: Quote, context, warnings) -> str:
    # Only the first line of a multi-line child gets the prefix.
    out = []
    for child in block.contents:
        out.append('> ' + convert_block(child, context, warnings).removesuffix('\n') + '\n')
    return ''.join(out)


def _cell_content(blocks: list, context, warnings) -> str:
    return ''.join(convert_block(b, context, warnings).removesuffix('\n') for b in blocks)


def _table(block: Table, context, warnings) -> str:
    out = ['<table>\n']
    if block.caption:
        out.append(f"<caption>{block.caption}</caption>\n")

    has_thead = bool(block.rows) and block.rows[0].looks_like_thead
    for i, row in enumerate(block.rows):
        is_header = i == 0 and has_thead
        if is_header:
            out.append('<thead>\n')
        out.append('<tr>')
        for cell in row.cells:
            tag = 'th' if cell.is_header or is_header else 'td'
            colspan = f' colspan="{cell.colspan}"' if cell.colspan > 1 else ''
            out.append(f"<{tag}{colspan}>{_cell_content(cell.contents, context, warnings)}</{tag}>")
        out.append('</tr>\n')
        if is_header:
            out.append('</thead>\n<tbody>\n')

    if has_thead:
        out.append('</tbody>\n')
    out.append('</table>\n')
    return ''.join(out)


def _description(blocks: list, context, warnings) -> str:
    return ''.join(convert_block(b, context, warnings) for b in blocks).strip()


def _img(block: Img, context, warnings) -> str:
    if block.has_one_image:
        entry = block.entries[0]
        alt = _description(entry.description, context, warnings)
        return f"![{alt}]({context.image_src(entry.target)})\n"

    out = ['<div class="img-gallery">\n']
    for entry in block.entries:
        attrs = f' src="{_attr(context.image_src(entry.target))}"'
        if entry.width:
            attrs += f' width="{_attr(entry.width)}"'
        if entry.height:
            attrs += f' height="{_attr(entry.height)}"'
        if entry.description:
            attrs += f' alt="{_attr(_description(entry.description, context, warnings))}"'
        out.append(f"<img{attrs}>\n")
    out.append('</div>\n')
    return ''.join(out)


def _launchpad(block: LaunchPad, context, warnings) -> str:
    out = ['<div class="launchpad">\n']
    for rocket in block.rockets:
        if rocket.is_empty:
            continue
        out.append(f'<a href="{_attr(rocket.href(context))}">{rocket.displayed_text}</a><br>\n')
    out.append('</div>\n')
    return ''.join(out)


def _transclusion(block: Transclusion, context, warnings) -> str:
    warnings.add(f"Transclusion of '{block.target}' has no Markdown equivalent; replaced with a comment")
    return TRANSCLUSION_COMMENT


BLOCK_HANDLERS = {
    Heading:       _heading,
    Paragraph:     _paragraph,
    CodeBlock:     _code,
    List:          _list,
    ThematicBreak: _thematic_break,
    Quote:         _quote,
    Table:         _table,
    Img:           _img,
    LaunchPad:     _launchpad,
    Transclusion:  _transclusion,
}


def convert_block(block, context: ConvertContext, warnings: WarningLog) -> str:
    """Convert one block; unknown block types become an inert HTML comment."""
    handler = BLOCK_HANDLERS.get(type(block))
    if handler is None:
        logger.debug("No Markdown handler for block type %s", type(block).__name__)
        return f"<!-- Unknown block type: {type(block).__name__} -->\n"
    return handler(block, context, warnings)


def blocks_to_markdown(blocks: list, context: ConvertContext, warnings: WarningLog) -> str:
    """Convert top-level blocks, separated by one blank line."""
    return '\n'.join(convert_block(b, context, warnings) for b in blocks)


def myco_to_markdown(content: str, context: ConvertContext | None = None) -> tuple[str, list[str]]:
    """Parse Mycomarkup and convert it to Markdown. Returns (text, warnings)."""
    context = context or ConvertContext()
    warnings = WarningLog()
    blocks = parse_blocks(content)
    text = blocks_to_markdown(blocks, context, warnings)
    logger.debug("Converted %d Mycomarkup block(s) with %d warning(s)", len(blocks), len(warnings))
    return text, warnings.as_list()
