"""Tests for dynamic version management.

Verifies that ``rso_translator.__version__`` is resolved from the installed
package metadata (``pyproject.toml``) and that the places the version is
surfaced (the package attribute, the OpenAPI schema, and the root ``/``
endpoint) all agree.
"""

from __future__ import annotations

import re

import pytest

import rso_translator
from rso_translator.api.server import create_app
from rso_translator.config import ServerConfig

# Matches semver-ish strings: major.minor.patch with optional pre-release
# suffix (e.g. "1.0.0", "1.0.0-rc.1", "0.0.0-dev").
_SEMVER_RE = re.compile(
    r"^\d+\.\d+\.\d+"  # major.minor.patch
    r"(-[A-Za-z0-9]+(\.[A-Za-z0-9]+)*)?$"  # optional pre-release
)


@pytest.mark.unit
class TestVersionAttribute:
    """Verify the ``rso_translator.__version__`` package attribute."""

    def test_version_is_a_string(self) -> None:
        assert isinstance(rso_translator.__version__, str)
        assert rso_translator.__version__

    def test_version_matches_semver(self) -> None:
        assert _SEMVER_RE.match(rso_translator.__version__), (
            f"__version__ {rso_translator.__version__!r} does not match "
            f"expected semver pattern (major.minor.patch[-prerelease])"
        )


@pytest.mark.unit
class TestVersionInApp:
    """Verify version consistency across the FastAPI app surfaces."""

    def test_openapi_version_matches_package(self, fake_backend) -> None:
        app = create_app(ServerConfig(), backend=fake_backend)

        assert app.version == rso_translator.__version__

    def test_root_endpoint_version_matches_package(self, test_client) -> None:
        data = test_client.get("/").json()

        assert data["version"] == rso_translator.__version__
