"""Shared test fixtures for swintegrity.

``web_project`` lays out a throwaway web client in a temp directory: a
service worker with an embedded RESOURCE_INTEGRITY block, two build
artifacts, a package.json and an index.html carrying the version
placeholder.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from swintegrity.config import Settings, load_integrity_config
from swintegrity.models.config import IntegrityConfig
from tests._data import INDEX_HTML, PROJECT_TOML, SERVICE_WORKER


@pytest.fixture
def web_project(tmp_path: Path) -> Path:
    """Provide a project root with a service worker, artifacts and config."""
    root = tmp_path / "webapp"
    (root / "dist").mkdir(parents=True)
    (root / "css").mkdir()
    (root / "dist" / "bundle.js").write_bytes(b"x")
    (root / "css" / "main.min.css").write_bytes(b"body{margin:0}")
    (root / "service-worker.js").write_text(SERVICE_WORKER, encoding="utf-8")
    (root / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (root / "package.json").write_text(
        json.dumps({"name": "webapp", "version": "1.2.3"}, indent=2), encoding="utf-8"
    )
    (root / "swintegrity.toml").write_text(PROJECT_TOML, encoding="utf-8")
    return root


@pytest.fixture
def config(web_project: Path) -> IntegrityConfig:
    """Provide the IntegrityConfig loaded from the test project."""
    return load_integrity_config(Settings(root=web_project))


@pytest.fixture
def host_path(web_project: Path) -> Path:
    return web_project / "service-worker.js"
