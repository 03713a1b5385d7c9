"""SHA-384 digest helpers shared by the updater and the verifier.

Both directions (authoring the manifest and auditing it) must hash with
the same algorithm, so this module is the only place a digest is computed.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

DIGEST_ALGORITHM = "sha384"
DIGEST_HEX_LENGTH = 96


def sha384_hex(data: bytes) -> str:
    """Return the SHA-384 hex digest of raw bytes."""
    return hashlib.sha384(data).hexdigest()


def file_digest(path: Path | str) -> str:
    """Digest a file's full byte content, read as one buffer.

    Raises ``FileNotFoundError`` if the path is absent; any other ``OSError``
    propagates unchanged.
    """
    return sha384_hex(Path(path).read_bytes())
