"""Format conversion entry point"""

import logging
from typing import Callable

from mycoconv.core.context import ConvertContext
from mycoconv.core.convert.md_blocks import markdown_to_myco
from mycoconv.core.convert.myco_blocks import myco_to_markdown
from mycoconv.core.formats import TextFormat, format_name, parse_format


logger = logging.getLogger(__name__)

NO_CONVERSION_NEEDED = "No conversion needed - already in target format"

Converter = Callable[[str, ConvertContext | None], tuple[str, list[str]]]

CONVERTERS: dict[tuple[TextFormat, TextFormat], Converter] = {
    (TextFormat.MYCOMARKUP, TextFormat.MARKDOWN): myco_to_markdown,
    (TextFormat.MARKDOWN, TextFormat.MYCOMARKUP): markdown_to_myco,
}


class ConversionError(Exception):
    """Base class for hard conversion failures."""


class UnsupportedFormatPair(ConversionError, ValueError):
    """No converter exists for the requested (source, destination) formats."""

    def __init__(self, source, dest):
        self.source = source
        self.dest = dest
        super().__init__(f"no conversion from {source} to {dest}")


def _as_format(value, source, dest) -> TextFormat:
    try:
        return parse_format(value)
    except (ValueError, AttributeError):
        raise UnsupportedFormatPair(source, dest) from None


def convert(
    content: str | bytes,
    source: TextFormat | str,
    dest: TextFormat | str,
    context: ConvertContext | None = None,
    ) -> tuple[str, list[str]]:
    """Convert content between markup formats. Returns (text, warnings).

    Raises UnsupportedFormatPair only when no converter exists for the pair;
    problems in the content itself are reported as warnings.
    """
    src = _as_format(source, source, dest)
    dst = _as_format(dest, source, dest)
    if isinstance(content, bytes):
        content = content.decode('utf-8', errors='replace')

    if src == dst:
        return content, [NO_CONVERSION_NEEDED]

    converter = CONVERTERS.get((src, dst))
    if converter is None:
        raise UnsupportedFormatPair(src, dst)

    logger.debug("Converting %s -> %s", format_name(src), format_name(dst))
    return converter(content, context)
