"""Root test configuration: shared conversion fixtures"""

import pytest

from mycoconv.core.context import ConvertContext, LinkResolver
from mycoconv.core.convert.warnings import WarningLog


@pytest.fixture(name="context")
def context_fixture():
    return ConvertContext(hypha_name="test", resolver=LinkResolver())


@pytest.fixture(name="warnings")
def warnings_fixture():
    return WarningLog()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep a developer's config.yaml and MYCOCONV_* variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in ("HYPHA_PREFIX", "BINARY_PREFIX", "DEFAULT_LANGUAGE", "PARSER_CONFIG",
                 "LINKIFY", "OUTPUT_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(f"MYCOCONV_{name}", raising=False)
