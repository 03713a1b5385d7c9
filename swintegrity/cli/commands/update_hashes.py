"""``swintegrity update-hashes`` — recompute digests and patch the manifest."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from swintegrity.cli.commands._context import fail, load_config
from swintegrity.core.hash_updater import (
    HashUpdater,
    HostArtifactDecodeError,
    HostArtifactNotFoundError,
    WriteVerificationError,
)
from swintegrity.core.manifest_patcher import ManifestError

console = Console()


def update_hashes_cmd() -> None:
    """Rewrite the embedded integrity manifest from the current artifacts.

    Missing artifacts are skipped with a warning. The host artifact is
    re-read after writing; any digest that did not land exits with code 1.
    """
    config = load_config(console)
    console.print(
        f"[bold cyan]Updating integrity hashes in {config.host_path}...[/bold cyan]",
        highlight=False,
        soft_wrap=True,
    )

    try:
        result = HashUpdater(config).update()
    except HostArtifactNotFoundError as exc:
        fail(console, "Host artifact missing:", exc)
    except HostArtifactDecodeError as exc:
        fail(console, "Host artifact unreadable:", exc)
    except ManifestError as exc:
        fail(console, "Manifest not patched:", exc)
    except WriteVerificationError as exc:
        fail(console, "Self-verification failed:", exc)
    except OSError as exc:
        fail(console, "I/O error:", exc)

    for record in result.records:
        console.print(f"  [green]OK[/green]   {escape(record.cache_key)}: {record.digest}", highlight=False, soft_wrap=True)
    for key in result.skipped_keys:
        console.print(f"  [yellow]SKIP[/yellow] {escape(key)}: artifact not found", highlight=False, soft_wrap=True)

    state = "updated" if result.changed else "already up to date"
    console.print(
        f"[bold green]{len(result.records)} hash(es) {state} in {result.host_artifact}[/bold green]",
        highlight=False,
        soft_wrap=True,
    )
