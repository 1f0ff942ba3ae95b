"""Text formats of hypha files: detection, naming, and file discovery"""

from enum import Enum
from pathlib import Path


class TextFormat(str, Enum):
    """Markup format of a hypha's text content"""
    MYCOMARKUP = "mycomarkup"
    MARKDOWN = "markdown"


FORMAT_EXTENSIONS: dict[TextFormat, str] = {
    TextFormat.MYCOMARKUP: '.myco',
    TextFormat.MARKDOWN:   '.md',
}

FORMAT_NAMES: dict[TextFormat, str] = {
    TextFormat.MYCOMARKUP: 'Mycomarkup',
    TextFormat.MARKDOWN:   'Markdown',
}

FORMAT_ALIASES: dict[str, TextFormat] = {
    'mycomarkup': TextFormat.MYCOMARKUP,
    'myco':       TextFormat.MYCOMARKUP,
    'markdown':   TextFormat.MARKDOWN,
    'md':         TextFormat.MARKDOWN,
}

TEXT_EXTENSIONS = set(FORMAT_EXTENSIONS.values())


def detect_text_format(path: Path) -> TextFormat:
    """Return the format implied by the file extension; anything but .md is Mycomarkup."""
    if Path(path).suffix == '.md':
        return TextFormat.MARKDOWN
    return TextFormat.MYCOMARKUP


def format_extension(fmt: TextFormat) -> str:
    return FORMAT_EXTENSIONS[fmt]


def format_name(fmt: TextFormat) -> str:
    return FORMAT_NAMES[fmt]


def parse_format(name: str) -> TextFormat:
    """Resolve a user-supplied format name; raises ValueError for unknown names."""
    if isinstance(name, TextFormat):
        return name
    try:
        return FORMAT_ALIASES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown format: {name} (use 'markdown' or 'mycomarkup')") from None


def discover_files(path: Path) -> list[Path]:
    """Return sorted .myco/.md files under path, or [path] if a single text file."""
    if path.is_file():
        return [path] if path.suffix in TEXT_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in TEXT_EXTENSIONS and p.is_file())
