"""Hash Verifier — read-only pre-deploy gate.

Recomputes the digest of every tracked artifact and compares it with the
digest embedded in the host artifact. Unlike the updater, a missing
artifact is a finding here: a supposedly complete deployment is being
checked. All findings are collected before returning so one run shows
the whole picture.

Never writes anything; safe to run repeatedly.
"""

from __future__ import annotations

import logging

from swintegrity.core.comparator import compare_digests
from swintegrity.core.hash_updater import read_host_artifact
from swintegrity.core.hasher import file_digest
from swintegrity.core.manifest_patcher import parse_manifest
from swintegrity.models.config import IntegrityConfig
from swintegrity.models.reports import (
    FindingKind,
    VerificationFinding,
    VerificationReport,
)

logger = logging.getLogger(__name__)


class HashVerifier:
    """Cross-checks on-disk artifacts against the embedded manifest.

    Parameters
    ----------
    config:
        Project configuration; the same instance the updater uses.
    """

    def __init__(self, config: IntegrityConfig) -> None:
        self._config = config

    def verify(self) -> VerificationReport:
        """Check every tracked resource and return the aggregated report.

        Raises ``HostArtifactNotFoundError`` or ``ManifestNotFoundError``
        when there is no manifest to check against at all.
        """
        host_path = self._config.host_path
        embedded = parse_manifest(read_host_artifact(host_path), self._config.manifest_name)

        passed: list[str] = []
        findings: list[VerificationFinding] = []

        for entry in self._config.resources:
            path = self._config.resolve(entry.path)
            if not path.exists():
                logger.error("Artifact not found: %s (%s)", path, entry.cache_key)
                findings.append(
                    VerificationFinding(
                        kind=FindingKind.MISSING_FILE,
                        cache_key=entry.cache_key,
                        file_path=str(path),
                        expected=embedded.get(entry.cache_key),
                    )
                )
                continue

            comparison = compare_digests(
                entry.cache_key, embedded.get(entry.cache_key), file_digest(path)
            )
            if comparison.matches:
                logger.info("Digest OK for %s", entry.cache_key)
                passed.append(entry.cache_key)
            elif not comparison.key_present:
                logger.error("No digest embedded for %s", entry.cache_key)
                findings.append(
                    VerificationFinding(
                        kind=FindingKind.MISSING_KEY,
                        cache_key=entry.cache_key,
                        file_path=str(path),
                        actual=comparison.actual,
                    )
                )
            else:
                logger.error(
                    "Digest mismatch for %s: manifest=%s file=%s",
                    entry.cache_key,
                    comparison.expected,
                    comparison.actual,
                )
                findings.append(
                    VerificationFinding(
                        kind=FindingKind.DIGEST_MISMATCH,
                        cache_key=entry.cache_key,
                        file_path=str(path),
                        expected=comparison.expected,
                        actual=comparison.actual,
                    )
                )

        tracked = {entry.cache_key for entry in self._config.resources}
        untracked = [key for key in embedded if key not in tracked]
        for key in untracked:
            logger.warning("Manifest entry %s is not tracked by the configuration", key)

        return VerificationReport(
            host_artifact=host_path,
            passed_keys=passed,
            findings=findings,
            untracked_keys=untracked,
        )
