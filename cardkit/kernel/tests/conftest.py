"""
CardKit kernel test configuration.

Kernel tests are synchronous and pure; every test builds its own
IdentityRegistry / HtmlHost so no identity state leaks between tests.
"""

import pytest

from cardkit.kernel.identity import IdentityRegistry
from cardkit.kernel.renderer import HtmlHost


@pytest.fixture
def registry():
    return IdentityRegistry(prefix="t")


@pytest.fixture
def host(registry):
    return HtmlHost(registry)


@pytest.fixture
def full_record():
    """A complete article as it comes out of the content query."""
    return {
        "title": "  Test Article Title  ",
        "description": "  A short description of the article.  ",
        "date": " 2024-01-15 ",
        "slug": "  test-article  ",
        "image": " /images/cover.png ",
        "tags": [" python ", "", "  ", "web"],
    }
