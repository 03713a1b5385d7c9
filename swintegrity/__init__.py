"""swintegrity: build-time integrity pipeline for service-worker cached clients.

Keeps the ``RESOURCE_INTEGRITY`` manifest embedded in a service worker in
sync with the real build artifacts, verifies it before deploy, and
propagates the package version into generated files:
  - SHA-384 digests for every tracked resource
  - Self-verifying manifest updates (re-read from disk after every write)
  - Read-only verification gate with aggregated findings
  - Version placeholder injection and a fail-fast release sequencer
"""

__version__ = "0.1.0"
__description__ = (
    "Hash integrity synchronization and verification for service-worker caches"
)

from swintegrity.core.hash_updater import HashUpdater
from swintegrity.core.hash_verifier import HashVerifier
from swintegrity.cli.app import app as cli

__all__ = ["HashUpdater", "HashVerifier", "cli", "__version__"]
