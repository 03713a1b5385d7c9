"""Hash Updater — recompute digests and rewrite the embedded manifest.

Steps:
1. Skip (with a warning) any tracked artifact that is missing.
2. Digest every present artifact.
3. Patch the new manifest into the host artifact text.
4. Persist the patched text.
5. Re-read the host artifact from disk and check every written digest.

Text patching is fragile, so the write is never trusted: step 5 re-derives
each digest from what actually landed on disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

from swintegrity.core.comparator import compare_digests
from swintegrity.core.fileio import atomic_write_text
from swintegrity.core.hasher import file_digest
from swintegrity.core.manifest_patcher import extract_digest, patch_manifest
from swintegrity.models.artifacts import ArtifactRecord
from swintegrity.models.config import IntegrityConfig
from swintegrity.models.reports import DigestComparison, UpdateResult

logger = logging.getLogger(__name__)


class HostArtifactNotFoundError(FileNotFoundError):
    """Raised when the file carrying the embedded manifest does not exist."""


class HostArtifactDecodeError(RuntimeError):
    """Raised when the host artifact is not valid UTF-8 text."""


class WriteVerificationError(RuntimeError):
    """Raised when the re-read host artifact disagrees with what was computed."""

    def __init__(self, host_path: Path, failures: list[DigestComparison]) -> None:
        self.host_path = host_path
        self.failures = failures
        lines = []
        for f in failures:
            if f.expected is None:
                lines.append(f"{f.cache_key}: key missing after write")
            else:
                lines.append(
                    f"{f.cache_key}: wrote {f.actual} but read back {f.expected}"
                )
        super().__init__(
            f"Self-verification of {host_path} failed for "
            f"{len(failures)} key(s): " + "; ".join(lines)
        )


def read_host_artifact(path: Path) -> str:
    """Read the host artifact as UTF-8 text, line endings untranslated."""
    if not path.exists():
        raise HostArtifactNotFoundError(f"Host artifact not found: {path}")
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except UnicodeDecodeError as exc:
        raise HostArtifactDecodeError(f"Host artifact {path} is not valid UTF-8: {exc}") from exc


class HashUpdater:
    """Recomputes resource digests and embeds them in the host artifact.

    Parameters
    ----------
    config:
        Project configuration; the same instance the verifier uses.
    """

    def __init__(self, config: IntegrityConfig) -> None:
        self._config = config

    def compute_records(self) -> tuple[list[ArtifactRecord], list[str]]:
        """Digest every present artifact.

        Returns ``(records, skipped_keys)``. A missing artifact is not an
        integrity failure here; it is logged and left out of the manifest.
        """
        records: list[ArtifactRecord] = []
        skipped: list[str] = []
        for entry in self._config.resources:
            path = self._config.resolve(entry.path)
            if not path.exists():
                logger.warning(
                    "Artifact not found, omitting %s from manifest: %s",
                    entry.cache_key,
                    path,
                )
                skipped.append(entry.cache_key)
                continue
            record = ArtifactRecord(
                cache_key=entry.cache_key,
                file_path=str(path),
                digest=file_digest(path),
            )
            logger.info("Computed %s: %s", record.cache_key, record.digest)
            records.append(record)
        return records, skipped

    def update(self) -> UpdateResult:
        """Run the full update and self-verification.

        Raises ``HostArtifactNotFoundError``, ``HostArtifactDecodeError``,
        ``ManifestNotFoundError`` or ``WriteVerificationError``; I/O errors propagate unchanged.
        """
        host_path = self._config.host_path
        original = read_host_artifact(host_path)

        records, skipped = self.compute_records()
        mapping = {r.cache_key: r.digest for r in records}

        patched = patch_manifest(original, mapping, self._config.manifest_name)
        atomic_write_text(host_path, patched)
        logger.info("Wrote %d digest(s) to %s", len(records), host_path)

        self._self_verify(host_path, records)

        return UpdateResult(
            host_artifact=host_path,
            records=records,
            skipped_keys=skipped,
            changed=patched != original,
        )

    def _self_verify(self, host_path: Path, records: list[ArtifactRecord]) -> None:
        """Re-read the written artifact and compare every digest."""
        written = read_host_artifact(host_path)
        failures: list[DigestComparison] = []
        for record in records:
            embedded = extract_digest(written, record.cache_key, self._config.manifest_name)
            comparison = compare_digests(record.cache_key, embedded, record.digest)
            if not comparison.matches:
                failures.append(comparison)
        if failures:
            raise WriteVerificationError(host_path, failures)
        logger.debug("Self-verification passed for %s", host_path)
