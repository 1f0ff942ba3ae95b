"""Markdown syntax tree -> Mycomarkup text.

Walks the children of the markdown-it root. Each block node is visited once:
container handlers (lists, quotes, tables) consume their own subtree, and
inline nodes are only ever converted by their block parent.
"""

import logging

from mycoconv.core.context import ConvertContext
from mycoconv.core.convert.md_inline import children_to_myco
from mycoconv.core.convert.warnings import WarningLog
from mycoconv.core.md.parse import parse_tree
from mycoconv.core.utils.tokens import LIST_TYPES, heading_level, is_aligned, list_depth


logger = logging.getLogger(__name__)

TASK_PREFIXES = {'[ ] ': False, '[x] ': True, '[X] ': True}


def _heading(node, warnings) -> str:
    return '=' * (heading_level(node) or 1) + ' ' + children_to_myco(node) + '\n'


def _paragraph(node, warnings) -> str:
    # List items and quotes convert their own paragraphs.
    if node.parent is None or node.parent.type != 'root':
        return ''
    return children_to_myco(node) + '\n'


def _code(node, warnings) -> str:
    info = node.info.strip().split(maxsplit=1) if node.type == 'fence' else []
    lang = info[0] if info else ''
    body = node.content
    if body and not body.endswith('\n'):
        body += '\n'
    return f"```{lang}\n{body}```\n"


def _thematic_break(node, warnings) -> str:
    return '----\n'


def _list(node, warnings) -> str:
    return ''.join(_list_item(item, warnings) for item in node.children if item.type == 'list_item')


def _list_item(node, warnings) -> str:
    stars = '*' * (list_depth(node) + 1)
    marker = stars + '.' if node.parent.type == 'ordered_list' else stars

    inline_parts: list[str] = []
    tail: list[str] = []
    for child in node.children:
        if child.type == 'paragraph':
            inline_parts.append(children_to_myco(child))
        elif child.type in LIST_TYPES:
            tail.append(_list(child, warnings))
        else:
            tail.append(convert_node(child, warnings))

    text = ' '.join(inline_parts)
    for prefix, checked in TASK_PREFIXES.items():
        if text.startswith(prefix):
            marker = stars + ('v' if checked else 'x')
            text = text[len(prefix):]
            break
    line = f"{marker} {text}" if text else marker
    return line + '\n' + ''.join(tail)


def _blockquote(node, warnings) -> str:
    # Only the first line of a multi-line child gets the prefix.
    out = []
    for child in node.children:
        if child.type == 'paragraph':
            content = children_to_myco(child)
        else:
            content = convert_node(child, warnings).removesuffix('\n')
        out.append('> ' + content + '\n')
    return ''.join(out)


def _table_rows(node):
    for section in node.children:
        if section.type == 'tr':
            yield section
        else:
            yield from (row for row in section.children if row.type == 'tr')


def _escape_cell(text: str) -> str:
    """Backslash-escape | and leading ! outside [[links]] and `monospace` so they stay cell text."""
    out = []
    in_link = in_mono = False
    for i, ch in enumerate(text):
        if not in_mono and text.startswith('[[', i):
            in_link = True
        elif in_link and text.startswith(']]', i):
            in_link = False
        elif ch == '`' and not in_link:
            in_mono = not in_mono
        elif not (in_link or in_mono) and (ch == '|' or (ch == '!' and (i == 0 or text[i - 1].isspace()))):
            out.append('\\')
        out.append(ch)
    return ''.join(out)


def _table(node, warnings) -> str:
    # Column alignment stands in for header marking: aligned columns become ! cells.
    out = ['table {\n']
    for row in _table_rows(node):
        cells = []
        for cell in row.children:
            delimiter = '!' if is_aligned(cell) else '|'
            cells.append(f"{delimiter} {_escape_cell(children_to_myco(cell).strip())}")
        out.append(' '.join(cells) + '\n')
    out.append('}\n')
    return ''.join(out)


def _html_block(node, warnings) -> str:
    content = node.content
    return content if content.endswith('\n') else content + '\n'


BLOCK_HANDLERS = {
    'heading':      _heading,
    'paragraph':    _paragraph,
    'fence':        _code,
    'code_block':   _code,
    'hr':           _thematic_break,
    'bullet_list':  _list,
    'ordered_list': _list,
    'blockquote':   _blockquote,
    'table':        _table,
    'html_block':   _html_block,
}


def convert_node(node, warnings: WarningLog) -> str:
    """Convert one block node; containers without a handler convert their block children."""
    handler = BLOCK_HANDLERS.get(node.type)
    if handler is not None:
        return handler(node, warnings)
    if node.type == 'inline':
        return ''
    logger.debug("No Mycomarkup handler for node type %s", node.type)
    return ''.join(convert_node(child, warnings) for child in node.children)


def tree_to_myco(root, warnings: WarningLog) -> str:
    """Convert the root's children, with one blank line between emitting blocks."""
    out = []
    first_block = True
    for node in root.children:
        text = convert_node(node, warnings)
        if not text:
            continue
        if not first_block:
            out.append('\n')
        first_block = False
        out.append(text)
    return ''.join(out)


def markdown_to_myco(content: str, context: ConvertContext | None = None) -> tuple[str, list[str]]:
    """Parse Markdown and convert it to Mycomarkup. Returns (text, warnings)."""
    context = context or ConvertContext()
    warnings = WarningLog()
    root = parse_tree(content, context.parser_config, context.linkify)
    text = tree_to_myco(root, warnings)
    logger.debug("Converted %d Markdown block(s) with %d warning(s)", len(root.children), len(warnings))
    return text, warnings.as_list()
