"""The one definition of "digest matches" used by update and verify.

The updater's self-check ("what I wrote matches what I just computed") and
the verifier ("what is on disk still matches the manifest") both go through
``compare_digests`` so the two can never disagree about a match.
"""

from __future__ import annotations

import hmac

from swintegrity.models.reports import DigestComparison


def compare_digests(cache_key: str, expected: str | None, actual: str) -> DigestComparison:
    """Compare an embedded digest against a freshly computed one.

    ``expected`` is None when the manifest has no entry for ``cache_key``;
    that never matches.
    """
    matches = expected is not None and hmac.compare_digest(expected, actual)
    return DigestComparison(
        cache_key=cache_key,
        expected=expected,
        actual=actual,
        matches=matches,
    )
