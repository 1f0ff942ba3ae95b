"""Mycomarkup inline spans -> Markdown, with per-line style tracking"""

from mycoconv.core.context import ConvertContext
from mycoconv.core.myco.models import Formatted, Link, SpanKind, StyleToggle, Text


# Canonical nesting, outermost first. The first four have no Markdown syntax
# and fall back to HTML tags.
STYLE_ORDER: list[tuple[SpanKind, str, str]] = [
    (SpanKind.super,     '<sup>',  '</sup>'),
    (SpanKind.sub,       '<sub>',  '</sub>'),
    (SpanKind.underline, '<u>',    '</u>'),
    (SpanKind.mark,      '<mark>', '</mark>'),
    (SpanKind.bold,      '**',     '**'),
    (SpanKind.italic,    '*',      '*'),
    (SpanKind.strike,    '~~',     '~~'),
    (SpanKind.mono,      '`',      '`'),
]


def clean_style_state() -> dict[SpanKind, bool]:
    return dict.fromkeys(SpanKind, False)


def text_to_markdown(text: Text, state: dict[SpanKind, bool]) -> str:
    """Wrap raw text in the markers of every active style, in canonical order."""
    active = [(opening, closing) for kind, opening, closing in STYLE_ORDER if state[kind]]
    return (
        ''.join(opening for opening, _ in active)
        + text.content
        + ''.join(closing for _, closing in reversed(active))
    )


def link_to_markdown(link: Link, context: ConvertContext) -> str:
    """Render [display](href) with the internal hypha prefix stripped from href."""
    display = link.displayed_text
    href = link.href(context).removeprefix(context.resolver.hypha_prefix)
    if href.casefold() == display.casefold():
        href = display
    return f"[{display}]({href})"


def line_to_markdown(spans: list, context: ConvertContext) -> str:
    state = clean_style_state()
    parts = []
    for span in spans:
        if isinstance(span, StyleToggle):
            state[span.kind] = not state[span.kind]
        elif isinstance(span, Text):
            parts.append(text_to_markdown(span, state))
        elif isinstance(span, Link):
            parts.append(link_to_markdown(span, context))
    return ''.join(parts)


def formatted_to_markdown(formatted: Formatted, context: ConvertContext) -> str:
    """Convert every line with its own style state; lines are joined with newlines."""
    return '\n'.join(line_to_markdown(line, context) for line in formatted.lines)
