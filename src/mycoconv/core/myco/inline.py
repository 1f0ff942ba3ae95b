"""Mycomarkup inline tokenizer: text, style toggles, and links"""

import re

from mycoconv.core.myco.models import Formatted, Link, SpanKind, StyleToggle, Text


TOGGLES: dict[str, SpanKind] = {
    '**': SpanKind.bold,
    '//': SpanKind.italic,
    '~~': SpanKind.strike,
    '^^': SpanKind.super,
    ',,': SpanKind.sub,
    '__': SpanKind.underline,
    '++': SpanKind.mark,
}
MONO = '`'
URL_RE = re.compile(r'(?:https?|ftp|gemini|gopher)://[^\s\]]+')


def _split_link(inner: str) -> Link:
    """Build a Link from the text between [[ and ]]."""
    target, sep, display = inner.partition('|')
    return Link(target=target.strip(), display=display.strip() if sep else None)


def parse_line(line: str) -> list:
    """Tokenize one line into Text, StyleToggle and Link spans.

    Inside monospace only the closing backtick is significant. A backslash
    makes the next character literal. Unclosed [[ is kept as text.
    """
    spans: list = []
    buf: list[str] = []
    mono = False
    i, n = 0, len(line)

    def flush():
        if buf:
            spans.append(Text(''.join(buf)))
            buf.clear()

    while i < n:
        ch = line[i]
        if mono:
            if ch == MONO:
                flush()
                spans.append(StyleToggle(SpanKind.mono))
                mono = False
            else:
                buf.append(ch)
            i += 1
            continue

        if ch == '\\' and i + 1 < n:
            buf.append(line[i + 1])
            i += 2
            continue

        if line.startswith('[[', i):
            end = line.find(']]', i + 2)
            if end != -1:
                flush()
                spans.append(_split_link(line[i + 2:end]))
                i = end + 2
                continue

        if ch.isalpha() and (i == 0 or not line[i - 1].isalnum()):
            m = URL_RE.match(line, i)
            if m:
                flush()
                spans.append(Link(target=m.group(0)))
                i = m.end()
                continue

        if ch == MONO:
            flush()
            spans.append(StyleToggle(SpanKind.mono))
            mono = True
            i += 1
            continue

        kind = TOGGLES.get(line[i:i + 2])
        if kind is not None:
            flush()
            spans.append(StyleToggle(kind))
            i += 2
            continue

        buf.append(ch)
        i += 1

    flush()
    return spans


def parse_formatted(lines: list[str]) -> Formatted:
    return Formatted(lines=[parse_line(line) for line in lines])
