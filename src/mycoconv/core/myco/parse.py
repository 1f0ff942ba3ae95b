"""Line-oriented Mycomarkup block parser.

Builds the block tree consumed by the Mycomarkup -> Markdown converter. The
parser is total: any input yields some tree, with unrecognised lines ending
up in paragraphs and unclosed constructs running to the end of the input.
"""

import re
from dataclasses import dataclass

from mycoconv.core.myco.inline import parse_formatted
from mycoconv.core.myco.models import (
    CodeBlock,
    Heading,
    Img,
    ImgEntry,
    LaunchPad,
    List,
    ListItem,
    ListMarker,
    Paragraph,
    Quote,
    Rocket,
    Table,
    TableCell,
    TableRow,
    ThematicBreak,
    Transclusion,
)


DEFAULT_LANGUAGE = 'plain'
FENCE = '```'

HEADING_RE = re.compile(r'^(={1,6})\s+(.*?)\s*$')
HR_RE      = re.compile(r'^-{4,}$')
LIST_RE    = re.compile(r'^(\*+)([.vx]?)(?:[ \t]+(.*))?$')
TABLE_RE   = re.compile(r'^table\b(.*?)\{(.*)$')
IMG_RE     = re.compile(r'^img\b(.*?)\{(.*)$')
DIMS_RE    = re.compile(r'^(\d*)\s*\*\s*(\d*)$')

LIST_MARKERS: dict[str, ListMarker] = {
    '':  ListMarker.unordered,
    '.': ListMarker.ordered,
    'v': ListMarker.todo,
    'x': ListMarker.todo,
}


def _kind(s: str) -> str | None:
    """Classify a stripped line as the start of a block kind; None means paragraph text."""
    if s.startswith(FENCE):
        return 'code'
    if HEADING_RE.match(s):
        return 'heading'
    if HR_RE.match(s):
        return 'hr'
    if s.startswith('=>'):
        return 'launchpad'
    if s.startswith('<='):
        return 'transclusion'
    if s.startswith('>'):
        return 'quote'
    if LIST_RE.match(s):
        return 'list'
    if TABLE_RE.match(s):
        return 'table'
    if IMG_RE.match(s):
        return 'img'
    return None


@dataclass
class _RawCell:
    is_header: bool
    colspan: int
    text: str = ''


def _split_cells(row: str) -> list[_RawCell]:
    """Split a table row on | and ! delimiters; a run of n delimiters spans n columns.

    Delimiters inside [[links]] and `monospace` are text, as is a delimiter
    escaped with a backslash. ! only delimits at the start of the row or
    after whitespace.
    """
    cells: list[_RawCell] = []
    in_link = in_mono = False
    i, n = 0, len(row)
    while i < n:
        ch = row[i]
        if ch == '\\' and i + 1 < n and not (in_link or in_mono):
            # The escape stays in the cell text for the inline parser.
            if not cells:
                cells.append(_RawCell(is_header=False, colspan=1))
            cells[-1].text += row[i:i + 2]
            i += 2
            continue
        if not in_mono and row.startswith('[[', i):
            in_link = True
        elif in_link and row.startswith(']]', i):
            in_link = False
        elif ch == '`' and not in_link:
            in_mono = not in_mono

        delimits = ch == '|' or (ch == '!' and (i == 0 or row[i - 1].isspace()))
        if delimits and not (in_link or in_mono):
            run = 1
            while i + run < n and row[i + run] == ch:
                run += 1
            cells.append(_RawCell(is_header=ch == '!', colspan=run))
            i += run
            continue

        if not cells:
            cells.append(_RawCell(is_header=False, colspan=1))
        cells[-1].text += ch
        i += 1
    return cells


def _table_rows(lines: list[str]) -> list[TableRow]:
    rows: list[list[_RawCell]] = []
    for line in lines:
        s = line.strip()
        if not s:
            continue
        if s[0] in '|!':
            rows.append(_split_cells(s))
        elif rows and rows[-1]:
            rows[-1][-1].text += '\n' + s
        else:
            rows.append([_RawCell(is_header=False, colspan=1, text=s)])

    return [
        TableRow([
            TableCell(parse_blocks(c.text.strip()), colspan=c.colspan, is_header=c.is_header)
            for c in row
        ])
        for row in rows
    ]


def _split_entries(text: str) -> list[str]:
    """Split image block content on newlines that are not inside { } descriptions."""
    chunks, depth, start = [], 0, 0
    for idx, ch in enumerate(text):
        if ch == '{':
            depth += 1
        elif ch == '}':
            depth = max(depth - 1, 0)
        elif ch == '\n' and depth == 0:
            chunks.append(text[start:idx])
            start = idx + 1
    chunks.append(text[start:])
    return chunks


def _img_entry(chunk: str) -> ImgEntry | None:
    """Parse `target | W*H { description }`; text after | that is not a size is a description."""
    head, brace, rest = chunk.partition('{')
    description = rest.rsplit('}', 1)[0].strip() if brace else ''
    target, _, extra = head.partition('|')
    target, extra = target.strip(), extra.strip()
    if not target:
        return None

    width = height = ''
    if m := DIMS_RE.match(extra):
        width, height = m.groups()
    elif extra.isdigit():
        width = extra
    elif extra and not description:
        description = extra

    return ImgEntry(
        target=target,
        width=width,
        height=height,
        description=parse_blocks(description) if description else [],
    )


class _BlockParser:
    def __init__(self, lines: list[str]):
        self.lines = lines
        self.pos = 0

    def _line(self) -> str:
        return self.lines[self.pos].strip()

    def _more(self) -> bool:
        return self.pos < len(self.lines)

    def parse(self) -> list:
        blocks = []
        while self._more():
            s = self._line()
            if not s:
                self.pos += 1
                continue
            blocks.append(self._block(s))
        return blocks

    def _block(self, s: str):
        kind = _kind(s)
        if kind == 'code':
            return self._code(s)
        if kind == 'heading':
            m = HEADING_RE.match(s)
            self.pos += 1
            return Heading(level=len(m.group(1)), contents=parse_formatted([m.group(2)]))
        if kind == 'hr':
            self.pos += 1
            return ThematicBreak()
        if kind == 'launchpad':
            return self._launchpad()
        if kind == 'transclusion':
            target, _, selector = s[2:].partition('|')
            self.pos += 1
            return Transclusion(target=target.strip(), selector=selector.strip())
        if kind == 'quote':
            return self._quote()
        if kind == 'list':
            return self._list(len(LIST_RE.match(s).group(1)))
        if kind == 'table':
            m = TABLE_RE.match(s)
            inner = self._collect_braced(m.group(2))
            return Table(caption=m.group(1).strip(), rows=_table_rows(inner.split('\n')))
        if kind == 'img':
            m = IMG_RE.match(s)
            inner = self._collect_braced(m.group(2))
            entries = [e for e in map(_img_entry, _split_entries(inner)) if e is not None]
            return Img(entries=entries, layout=m.group(1).strip())
        return self._paragraph()

    def _collect_braced(self, rest: str) -> str:
        """Return the text between an opening { (ending at rest) and its matching }.

        Advances past the line holding the closing brace; text after it on
        that line is dropped. Unbalanced input runs to the end.
        """
        depth = 1
        parts: list[str] = []
        text = rest
        while True:
            for idx, ch in enumerate(text):
                if ch == '{':
                    depth += 1
                elif ch == '}':
                    depth -= 1
                    if depth == 0:
                        parts.append(text[:idx])
                        self.pos += 1
                        return '\n'.join(parts)
            parts.append(text)
            self.pos += 1
            if not self._more():
                return '\n'.join(parts)
            text = self.lines[self.pos]

    def _code(self, s: str) -> CodeBlock:
        language = s[len(FENCE):].strip() or DEFAULT_LANGUAGE
        self.pos += 1
        body = []
        while self._more():
            line = self.lines[self.pos]
            self.pos += 1
            if line.strip().startswith(FENCE):
                break
            body.append(line)
        return CodeBlock(language=language, contents='\n'.join(body))

    def _launchpad(self) -> LaunchPad:
        rockets = []
        while self._more() and self._line().startswith('=>'):
            target, _, display = self._line()[2:].partition('|')
            rockets.append(Rocket(target=target.strip(), display=display.strip()))
            self.pos += 1
        return LaunchPad(rockets=rockets)

    def _quote(self) -> Quote:
        inner = []
        while self._more() and self._line().startswith('>'):
            text = self._line()[1:]
            inner.append(text[1:] if text.startswith(' ') else text)
            self.pos += 1
        return Quote(contents=parse_blocks('\n'.join(inner)))

    def _list(self, level: int) -> List:
        marker = None
        items: list[ListItem] = []
        while self._more():
            m = LIST_RE.match(self._line())
            if not m:
                break
            stars, suffix, rest = m.groups()
            if len(stars) < level:
                break
            if len(stars) > level:
                nested = self._list(len(stars))
                if items:
                    items[-1].contents.append(nested)
                else:
                    items.append(ListItem(contents=[nested]))
                continue

            item_marker = LIST_MARKERS[suffix]
            if marker is None:
                marker = item_marker
            elif item_marker != marker:
                break
            items.append(self._item(rest or '', suffix))
        return List(marker=marker or ListMarker.unordered, items=items)

    def _item(self, rest: str, suffix: str) -> ListItem:
        checked = {'v': True, 'x': False}.get(suffix)
        if rest.strip() == '{':
            contents = parse_blocks(self._collect_braced(''))
        else:
            self.pos += 1
            contents = [Paragraph(parse_formatted([rest.strip()]))] if rest.strip() else []
        return ListItem(contents=contents, checked=checked)

    def _paragraph(self) -> Paragraph:
        lines = [self._line()]
        self.pos += 1
        while self._more() and self._line() and _kind(self._line()) is None:
            lines.append(self._line())
            self.pos += 1
        return Paragraph(parse_formatted(lines))


def parse_blocks(text: str) -> list:
    """Parse Mycomarkup text into a list of top-level blocks."""
    return _BlockParser(text.replace('\r\n', '\n').split('\n')).parse()
