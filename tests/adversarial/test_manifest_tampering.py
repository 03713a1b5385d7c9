"""Adversarial tests — hand-edited or corrupted manifests must not pass."""

from __future__ import annotations

from pathlib import Path

import pytest

from swintegrity.core.hash_updater import HashUpdater
from swintegrity.core.hash_verifier import HashVerifier
from swintegrity.core.manifest_patcher import ManifestAmbiguousError
from swintegrity.models.config import IntegrityConfig
from swintegrity.models.reports import FindingKind
from tests._data import BUNDLE_KEY, CSS_KEY, X_DIGEST

WRONG = "f" * 96


class TestManifestTampering:
    def test_single_tampered_digest(self, config: IntegrityConfig, host_path: Path):
        HashUpdater(config).update()
        text = host_path.read_text(encoding="utf-8")
        host_path.write_text(text.replace(X_DIGEST, WRONG), encoding="utf-8")

        report = HashVerifier(config).verify()
        assert report.passed is False
        assert len(report.findings) == 1
        finding = report.findings[0]
        assert finding.kind == FindingKind.DIGEST_MISMATCH
        assert finding.cache_key == BUNDLE_KEY
        assert finding.expected == WRONG
        assert finding.actual == X_DIGEST
        assert report.passed_keys == [CSS_KEY]

    def test_truncated_digest_reads_as_missing_key(self, config: IntegrityConfig, host_path: Path):
        HashUpdater(config).update()
        text = host_path.read_text(encoding="utf-8")
        host_path.write_text(text.replace(X_DIGEST, X_DIGEST[:-1]), encoding="utf-8")

        report = HashVerifier(config).verify()
        assert [(f.kind, f.cache_key) for f in report.findings] == [
            (FindingKind.MISSING_KEY, BUNDLE_KEY)
        ]

    def test_uppercase_digest_rejected(self, config: IntegrityConfig, host_path: Path):
        HashUpdater(config).update()
        text = host_path.read_text(encoding="utf-8")
        host_path.write_text(text.replace(X_DIGEST, X_DIGEST.upper()), encoding="utf-8")

        assert HashVerifier(config).verify().passed is False

    def test_duplicated_manifest_block_refused(self, config: IntegrityConfig, host_path: Path):
        text = host_path.read_text(encoding="utf-8")
        host_path.write_text(text + "\nvar RESOURCE_INTEGRITY = {};\n", encoding="utf-8")

        with pytest.raises(ManifestAmbiguousError):
            HashUpdater(config).update()
        with pytest.raises(ManifestAmbiguousError):
            HashVerifier(config).verify()

    def test_update_repairs_tampering(self, config: IntegrityConfig, host_path: Path):
        HashUpdater(config).update()
        text = host_path.read_text(encoding="utf-8")
        host_path.write_text(text.replace(X_DIGEST, WRONG), encoding="utf-8")

        HashUpdater(config).update()
        assert HashVerifier(config).verify().passed is True
