"""Unit tests for core/context.py and core/utils/names.py"""

from pathlib import Path

import pytest

from mycoconv.config import Settings
from mycoconv.core.context import ConvertContext, LinkResolver, context_from_settings
from mycoconv.core.utils.names import canonical_name, hypha_name_from_path


def test_canonical_name():
    assert canonical_name("  My Page ") == "my_page"
    assert canonical_name("Already_canonical") == "already_canonical"


def test_hypha_name_from_path(tmp_path):
    """Nested hyphae keep their directory; a single file uses its stem."""
    f = tmp_path / "Plants" / "Apple Tree.myco"
    assert hypha_name_from_path(f, tmp_path) == "plants/apple_tree"
    assert hypha_name_from_path(Path("Apple Tree.md")) == "apple_tree"


@pytest.mark.parametrize("target,expected", [
    ("Page",                  "/hypha/page"),
    ("My Page",               "/hypha/my_page"),
    ("Page#Section",          "/hypha/page#Section"),
    ("https://example.org/a", "https://example.org/a"),
    ("mailto:me@example.org", "mailto:me@example.org"),
    ("/static/file.css",      "/static/file.css"),
    ("#top",                  "#top"),
])
def test_resolve(target, expected):
    assert LinkResolver().resolve(target) == expected


def test_resolve_relative_to_current_hypha():
    resolver = LinkResolver()
    assert resolver.resolve("./child", "Docs/Intro") == "/hypha/docs/intro/child"
    assert resolver.resolve("../sibling", "Docs/Intro") == "/hypha/docs/sibling"


def test_image_src():
    resolver = LinkResolver()
    assert resolver.image_src("Cat Photo") == "/binary/cat_photo"
    assert resolver.image_src("https://example.org/cat.png") == "https://example.org/cat.png"


def test_custom_prefixes():
    resolver = LinkResolver(hypha_prefix="/page/", binary_prefix="/media/")
    assert resolver.resolve("Page") == "/page/page"
    assert resolver.image_src("pic") == "/media/pic"


def test_context_from_settings():
    settings = Settings(hypha_prefix="/page/", default_language="text", linkify=False)
    ctx = context_from_settings(settings, "home")
    assert isinstance(ctx, ConvertContext)
    assert ctx.hypha_name == "home"
    assert ctx.link_href("Page") == "/page/page"
    assert ctx.default_language == "text"
    assert ctx.linkify is False
