"""Project configuration models — tracked resources, version targets, release.

Loaded from swintegrity.toml or pyproject.toml [tool.swintegrity] by
``swintegrity.config.load_integrity_config``. A single ``IntegrityConfig``
is shared by update-hashes and verify-hashes so the two commands can never
disagree about which cache keys exist.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_MANIFEST_NAME = "RESOURCE_INTEGRITY"
DEFAULT_PLACEHOLDER = "__APP_VERSION__"

# Characters that would break the manifest fence, or that json.dumps escapes
# (so the written key would no longer match the configured one).
_FORBIDDEN_KEY_CHARS = ('"', "}", "\\")


class ResourceEntry(BaseModel):
    """Maps one cache key to the artifact file it names."""

    model_config = ConfigDict(frozen=True)

    cache_key: str
    path: Path

    @field_validator("cache_key")
    @classmethod
    def _check_cache_key(cls, value: str) -> str:
        if not value:
            raise ValueError("cache_key must not be empty")
        bad = [c for c in _FORBIDDEN_KEY_CHARS if c in value]
        bad += sorted({c for c in value if ord(c) < 0x20})
        if bad:
            raise ValueError(f"cache_key {value!r} contains forbidden characters {bad!r}")
        return value


class VersionTarget(BaseModel):
    """A file that receives the package version.

    Exactly one of ``placeholder`` (literal token, every occurrence replaced)
    or ``pattern`` (regular expression, each match replaced by
    ``replacement`` with ``{version}`` substituted) must be set.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    placeholder: str | None = None
    pattern: str | None = None
    replacement: str | None = None

    @model_validator(mode="after")
    def _check_mode(self) -> "VersionTarget":
        if (self.placeholder is None) == (self.pattern is None):
            raise ValueError(
                f"version target {self.path}: set exactly one of 'placeholder' or 'pattern'"
            )
        if self.placeholder == "":
            raise ValueError(f"version target {self.path}: placeholder must not be empty")
        if self.pattern is not None and self.replacement is None:
            raise ValueError(
                f"version target {self.path}: 'pattern' requires a 'replacement' template"
            )
        if self.pattern is not None:
            try:
                re.compile(self.pattern)
            except re.error as exc:
                raise ValueError(
                    f"version target {self.path}: invalid pattern {self.pattern!r}: {exc}"
                ) from exc
        return self


class ReleaseConfig(BaseModel):
    """What the release sequencer stages, commits and pushes."""

    model_config = ConfigDict(frozen=True)

    stage_files: list[Path] = Field(
        default_factory=lambda: [
            Path("package.json"),
            Path("index.html"),
            Path("service-worker.js"),
        ]
    )
    commit_message: str = "Version bump to {version}"
    remote: str = "origin"
    branch: str = "main"


def _default_resources() -> list[ResourceEntry]:
    return [
        ResourceEntry(cache_key="/dist/bundle.js?v=2.5.4", path=Path("dist/bundle.js")),
        ResourceEntry(cache_key="/css/main.min.css?v=2.3.6", path=Path("css/main.min.css")),
    ]


def _default_version_targets() -> list[VersionTarget]:
    return [
        VersionTarget(path=Path("index.html"), placeholder=DEFAULT_PLACEHOLDER),
        VersionTarget(
            path=Path("index.html"),
            pattern=r'<span[^>]*class="[^"]*version-text[^"]*"[^>]*>[^<]*</span>',
            replacement='<span class="version-text" hidden>{version}</span>',
        ),
        VersionTarget(
            path=Path("service-worker.js"),
            pattern=r"const VERSION = [\"'][^\"']*[\"']",
            replacement='const VERSION = "{version}"',
        ),
    ]


class IntegrityConfig(BaseModel):
    """Everything the four commands operate on.

    Relative paths are resolved against ``root`` by ``resolve``.

    The default version targets fill the ``__APP_VERSION__`` placeholder and
    the ``version-text`` span in index.html and the ``const VERSION``
    assignment in the service worker. Asset query suffixes such as
    ``href="/css/main.min.css?v=2.3.6"`` carry per-asset versions, not the
    package version, so they are not rewritten by default; add a pattern
    target for each one that should follow the package version.
    """

    model_config = ConfigDict(frozen=True)

    root: Path = Path(".")
    host_artifact: Path = Path("service-worker.js")
    manifest_name: str = DEFAULT_MANIFEST_NAME
    package_manifest: Path = Path("package.json")
    resources: list[ResourceEntry] = Field(default_factory=_default_resources)
    version_targets: list[VersionTarget] = Field(default_factory=_default_version_targets)
    release: ReleaseConfig = ReleaseConfig()

    @field_validator("resources")
    @classmethod
    def _check_unique_keys(cls, value: list[ResourceEntry]) -> list[ResourceEntry]:
        seen: set[str] = set()
        duplicates: list[str] = []
        for entry in value:
            if entry.cache_key in seen and entry.cache_key not in duplicates:
                duplicates.append(entry.cache_key)
            seen.add(entry.cache_key)
        if duplicates:
            raise ValueError(f"duplicate cache keys: {', '.join(duplicates)}")
        return value

    @field_validator("manifest_name")
    @classmethod
    def _check_manifest_name(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"manifest_name {value!r} is not a valid identifier")
        return value

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the project root."""
        return path if path.is_absolute() else self.root / path

    @property
    def host_path(self) -> Path:
        return self.resolve(self.host_artifact)

    @property
    def package_manifest_path(self) -> Path:
        return self.resolve(self.package_manifest)
