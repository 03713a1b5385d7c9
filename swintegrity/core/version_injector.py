"""Version Injector — propagate the package version into generated files.

The package manifest's ``version`` field is the single source of truth.
Each target either carries a literal placeholder token (every occurrence
is replaced) or a pattern whose matches are rewritten from a template.
A target without the placeholder is left untouched with a warning; a
read or write error stops the run, since a half-injected release would
show one version in the UI and ship another.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from swintegrity.core.fileio import atomic_write_text
from swintegrity.models.config import IntegrityConfig, VersionTarget
from swintegrity.models.reports import InjectionResult

logger = logging.getLogger(__name__)


class VersionNotFoundError(RuntimeError):
    """Raised when the package manifest has no usable version string."""


class InjectionError(RuntimeError):
    """Raised when a target file cannot be read or written."""


def read_version(package_manifest: Path) -> str:
    """Return the non-empty ``version`` field of a JSON package manifest."""
    try:
        data = json.loads(package_manifest.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise VersionNotFoundError(f"Package manifest not found: {package_manifest}") from exc
    except json.JSONDecodeError as exc:
        raise VersionNotFoundError(
            f"Package manifest {package_manifest} is not valid JSON: {exc}"
        ) from exc

    version = data.get("version") if isinstance(data, dict) else None
    if not isinstance(version, str) or not version.strip():
        raise VersionNotFoundError(f"No version found in {package_manifest}")
    return version.strip()


def apply_version(content: str, target: VersionTarget, version: str) -> tuple[str, int]:
    """Substitute ``version`` into ``content`` according to ``target``.

    Returns the new content and the number of replacements made.
    """
    if target.placeholder is not None:
        count = content.count(target.placeholder)
        return content.replace(target.placeholder, version), count
    replacement = target.replacement.replace("{version}", version)
    # lambda so backslashes in the version are never read as group refs
    return re.subn(target.pattern, lambda _m: replacement, content)


class VersionInjector:
    """Writes the package version into every configured target file."""

    def __init__(self, config: IntegrityConfig) -> None:
        self._config = config

    def read_version(self) -> str:
        return read_version(self._config.package_manifest_path)

    def _read_target(self, path: Path) -> str:
        try:
            with path.open(encoding="utf-8", newline="") as fh:
                return fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise InjectionError(f"Cannot read {path}: {exc}") from exc

    def inject(self, version: str | None = None) -> InjectionResult:
        """Inject ``version`` (read from the package manifest if omitted).

        Every target is read and rewritten in memory before anything is
        written, so a read failure leaves all files untouched. Several
        targets may name the same file; they are applied in order.

        Raises ``InjectionError`` on the first read or write failure.
        """
        version = version or self.read_version()
        logger.info("Injecting version %s", version)

        contents: dict[Path, str] = {}
        skipped: list[Path] = []
        replacements: dict[str, int] = {}

        for target in self._config.version_targets:
            path = self._config.resolve(target.path)
            if path not in contents:
                contents[path] = self._read_target(path)

            contents[path], count = apply_version(contents[path], target, version)
            if count == 0:
                logger.warning(
                    "Version marker %r not found in %s, leaving it unchanged",
                    target.placeholder or target.pattern,
                    path,
                )
                if path not in skipped:
                    skipped.append(path)
                continue
            replacements[str(path)] = replacements.get(str(path), 0) + count

        updated: list[Path] = []
        for path, content in contents.items():
            if str(path) not in replacements:
                continue
            try:
                atomic_write_text(path, content)
            except OSError as exc:
                raise InjectionError(f"Cannot write {path}: {exc}") from exc
            logger.info(
                "Updated version in %s (%d replacement(s))", path, replacements[str(path)]
            )
            updated.append(path)

        return InjectionResult(
            version=version,
            updated_files=updated,
            skipped_files=[p for p in skipped if str(p) not in replacements],
            replacements=replacements,
        )
