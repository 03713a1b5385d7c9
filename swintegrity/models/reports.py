"""Result and report models for update, verify and inject runs."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from swintegrity.models.artifacts import ArtifactRecord


class FindingKind(str, Enum):
    """Why a tracked resource failed verification."""

    MISSING_FILE = "missing_file"
    MISSING_KEY = "missing_key"
    DIGEST_MISMATCH = "digest_mismatch"


class DigestComparison(BaseModel):
    """Outcome of comparing one embedded digest against a computed one.

    ``expected`` is what the manifest says (None when the key is absent),
    ``actual`` is what was just computed from the artifact bytes.
    """

    model_config = ConfigDict(frozen=True)

    cache_key: str
    expected: str | None
    actual: str
    matches: bool = False

    @property
    def key_present(self) -> bool:
        return self.expected is not None


class VerificationFinding(BaseModel):
    """A single fatal problem found by the verifier."""

    model_config = ConfigDict(frozen=True)

    kind: FindingKind
    cache_key: str
    file_path: str
    expected: str | None = None  # digest embedded in the manifest
    actual: str | None = None  # digest computed from disk

    def describe(self) -> str:
        """One-line human readable description."""
        if self.kind == FindingKind.MISSING_FILE:
            return f"{self.cache_key}: artifact not found at {self.file_path}"
        if self.kind == FindingKind.MISSING_KEY:
            return f"{self.cache_key}: no digest embedded in the manifest"
        return (
            f"{self.cache_key}: digest mismatch "
            f"(manifest={self.expected}, file={self.actual})"
        )


class VerificationReport(BaseModel):
    """Aggregated verifier outcome — every resource, pass or fail."""

    model_config = ConfigDict(frozen=True)

    host_artifact: Path
    passed_keys: list[str] = Field(default_factory=list)
    findings: list[VerificationFinding] = Field(default_factory=list)
    untracked_keys: list[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.findings

    @property
    def checked(self) -> int:
        return len(self.passed_keys) + len(self.findings)


class UpdateResult(BaseModel):
    """What the updater wrote into the host artifact."""

    model_config = ConfigDict(frozen=True)

    host_artifact: Path
    records: list[ArtifactRecord] = Field(default_factory=list)
    skipped_keys: list[str] = Field(default_factory=list)
    changed: bool = False


class InjectionResult(BaseModel):
    """What the version injector changed."""

    model_config = ConfigDict(frozen=True)

    version: str
    updated_files: list[Path] = Field(default_factory=list)
    skipped_files: list[Path] = Field(default_factory=list)
    replacements: dict[str, int] = Field(default_factory=dict)
