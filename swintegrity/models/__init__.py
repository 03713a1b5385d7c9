"""swintegrity data models — all Pydantic v2, all frozen (immutable)."""

from swintegrity.models.artifacts import ArtifactRecord
from swintegrity.models.config import IntegrityConfig, ReleaseConfig, ResourceEntry, VersionTarget
from swintegrity.models.release import (
    VALID_TRANSITIONS,
    ReleaseResult,
    ReleaseStep,
    ReleaseTransition,
)
from swintegrity.models.reports import (
    DigestComparison,
    FindingKind,
    InjectionResult,
    UpdateResult,
    VerificationFinding,
    VerificationReport,
)

__all__ = [
    # artifacts
    "ArtifactRecord",
    # config
    "IntegrityConfig",
    "ReleaseConfig",
    "ResourceEntry",
    "VersionTarget",
    # release
    "ReleaseStep",
    "ReleaseTransition",
    "ReleaseResult",
    "VALID_TRANSITIONS",
    # reports
    "DigestComparison",
    "FindingKind",
    "VerificationFinding",
    "VerificationReport",
    "UpdateResult",
    "InjectionResult",
]
