"""Per-call conversion context and the link resolution capability"""

import posixpath
import re
from dataclasses import dataclass, field

from mycoconv.core.utils.names import canonical_name


EXTERNAL_RE = re.compile(r'^(?:[a-zA-Z][a-zA-Z0-9+.-]*://|(?:mailto|tel|xmpp|data):)')


def _is_external(target: str) -> bool:
    """URLs with a scheme, absolute paths and bare anchors are never rewritten."""
    return bool(EXTERNAL_RE.match(target)) or target.startswith(('/', '#'))


@dataclass(frozen=True)
class LinkResolver:
    """Resolves link and image targets to hrefs the way the wiki serves them."""
    hypha_prefix: str = "/hypha/"
    binary_prefix: str = "/binary/"

    def _hypha_path(self, target: str, hypha_name: str) -> tuple[str, str]:
        """Split target into (canonical hypha path, anchor), resolving ./ and ../ against hypha_name."""
        name, _, anchor = target.partition('#')
        if name.startswith(('./', '../')):
            name = posixpath.normpath(posixpath.join(canonical_name(hypha_name) or '.', name))
            name = name.lstrip('./') if name.startswith('..') else name
        return canonical_name(name), anchor

    def resolve(self, target: str, hypha_name: str = "") -> str:
        target = target.strip()
        if not target or _is_external(target):
            return target
        name, anchor = self._hypha_path(target, hypha_name)
        return self.hypha_prefix + name + (f"#{anchor}" if anchor else "")

    def image_src(self, target: str, hypha_name: str = "") -> str:
        target = target.strip()
        if not target or _is_external(target):
            return target
        name, _ = self._hypha_path(target, hypha_name)
        return self.binary_prefix + name


@dataclass(frozen=True)
class ConvertContext:
    """Read-only collaborators for one conversion call."""
    hypha_name: str = ""
    resolver: LinkResolver = field(default_factory=LinkResolver)
    default_language: str = "plain"     # code block language meaning "unspecified"
    parser_config: str = "gfm-like"     # MarkdownIt preset for Markdown input
    linkify: bool = True

    def link_href(self, target: str) -> str:
        return self.resolver.resolve(target, self.hypha_name)

    def image_src(self, target: str) -> str:
        return self.resolver.image_src(target, self.hypha_name)


def context_from_settings(settings, hypha_name: str = "") -> ConvertContext:
    """Build a ConvertContext from application Settings."""
    return ConvertContext(
        hypha_name=hypha_name,
        resolver=LinkResolver(settings.hypha_prefix, settings.binary_prefix),
        default_language=settings.default_language,
        parser_config=settings.parser_config,
        linkify=settings.linkify,
    )
