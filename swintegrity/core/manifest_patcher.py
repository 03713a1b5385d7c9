"""Locate, parse and rewrite the manifest embedded in the host artifact.

The manifest lives inside the service worker source as::

    const RESOURCE_INTEGRITY = {
      "/dist/bundle.js?v=2.5.4": "<96 hex>",
      "/css/main.min.css?v=2.3.6": "<96 hex>"
    };

The fence runs from ``RESOURCE_INTEGRITY = {`` to the next ``}``. Cache keys
are validated to never contain ``}`` or ``"``, so the first closing brace is
always the manifest's own. Everything outside the fence (the ``const``
keyword, the trailing ``;``, the rest of the worker) is left byte-identical.

A fence that does not match is always a hard stop, never a silent no-op.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass

from swintegrity.core.hasher import DIGEST_HEX_LENGTH
from swintegrity.models.config import DEFAULT_MANIFEST_NAME


class ManifestError(RuntimeError):
    """Base class for embedded-manifest problems."""


class ManifestNotFoundError(ManifestError):
    """Raised when the manifest fence does not match the host artifact."""


class ManifestAmbiguousError(ManifestError):
    """Raised when the manifest fence matches more than once."""


@dataclass(frozen=True)
class ManifestSpan:
    """Where the manifest object literal sits inside the host text."""

    start: int
    end: int
    body: str  # the object literal itself, braces included


def _fence_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(name)}(\s*=\s*)(\{{[^}}]*\}})")


def _pair_pattern(key: str | None = None) -> re.Pattern[str]:
    key_re = re.escape(key) if key is not None else r"[^\"]+"
    return re.compile(rf"\"({key_re})\"\s*:\s*\"([0-9a-f]{{{DIGEST_HEX_LENGTH}}})\"")


def locate_manifest(text: str, name: str = DEFAULT_MANIFEST_NAME) -> ManifestSpan:
    """Find the manifest object literal assigned to ``name``.

    Raises ``ManifestNotFoundError`` if there is no match and
    ``ManifestAmbiguousError`` if there is more than one.
    """
    matches = list(_fence_pattern(name).finditer(text))
    if not matches:
        raise ManifestNotFoundError(
            f"Manifest '{name} = {{...}}' not found in host artifact; "
            "the file may have been reshaped incompatibly"
        )
    if len(matches) > 1:
        raise ManifestAmbiguousError(
            f"Manifest '{name} = {{...}}' matched {len(matches)} times; "
            "refusing to guess which one to patch"
        )
    match = matches[0]
    return ManifestSpan(start=match.start(2), end=match.end(2), body=match.group(2))


def serialize_manifest(mapping: Mapping[str, str]) -> str:
    """Render the manifest as a stable, diffable object literal.

    One ``"key": "digest"`` pair per line in insertion order. The output is
    valid JSON as well as a valid JavaScript object literal.
    """
    return json.dumps(dict(mapping), indent=2, ensure_ascii=False)


def patch_manifest(
    text: str,
    mapping: Mapping[str, str],
    name: str = DEFAULT_MANIFEST_NAME,
) -> str:
    """Replace the whole manifest span in ``text`` with ``mapping``."""
    span = locate_manifest(text, name)
    return text[: span.start] + serialize_manifest(mapping) + text[span.end :]


def parse_manifest(text: str, name: str = DEFAULT_MANIFEST_NAME) -> dict[str, str]:
    """Extract every ``"key": "<digest>"`` pair from the embedded manifest.

    Tolerates trailing commas and hand-wrapped layouts (key and digest on
    separate lines). Entries whose value is not a well-formed digest are
    ignored, so they surface later as a missing key.
    """
    span = locate_manifest(text, name)
    return {m.group(1): m.group(2) for m in _pair_pattern().finditer(span.body)}


def extract_digest(text: str, cache_key: str, name: str = DEFAULT_MANIFEST_NAME) -> str | None:
    """Look up one key's digest inside the embedded manifest by pattern match."""
    span = locate_manifest(text, name)
    match = _pair_pattern(cache_key).search(span.body)
    return match.group(2) if match else None
