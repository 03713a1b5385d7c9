"""Artifact digest records — one per tracked cache resource."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator

from swintegrity.core.hasher import DIGEST_HEX_LENGTH

_DIGEST_RE = re.compile(rf"^[0-9a-f]{{{DIGEST_HEX_LENGTH}}}$")


class ArtifactRecord(BaseModel):
    """A freshly computed digest for one tracked resource.

    ``cache_key`` is the exact string the service worker looks the resource
    up by (path plus version-tagged query suffix). Records are recomputed on
    every invocation; nothing persists between runs except the manifest text
    embedded in the host artifact.
    """

    model_config = ConfigDict(frozen=True)

    cache_key: str
    file_path: str
    digest: str  # 96 lowercase hex chars (SHA-384)

    @field_validator("digest")
    @classmethod
    def _check_digest(cls, value: str) -> str:
        if not _DIGEST_RE.match(value):
            raise ValueError(
                f"digest must be {DIGEST_HEX_LENGTH} lowercase hex characters, "
                f"got {len(value)} characters"
            )
        return value
