"""Shared fixtures: canned mirror listings served by a MockHttpClient."""

from pathlib import Path

import pytest

from sb.manifest.http import MockHttpClient

FIXTURES = Path(__file__).parent / "fixtures"
MIRROR = "https://mirror.test/blender/release"


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def mirror_http() -> MockHttpClient:
    """A mirror publishing 3.0, 3.3, 3.6 and 4.0 (3.0 and 3.6 unlisted)."""
    http = MockHttpClient()
    http.set_text(MIRROR, read_fixture("manifest.html"))
    http.set_text(f"{MIRROR}/Blender3.3", read_fixture("blender3.3.html"))
    http.set_text(f"{MIRROR}/Blender4.0", read_fixture("blender4.0.html"))
    return http
