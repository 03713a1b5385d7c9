"""``swintegrity verify-hashes`` — pre-deploy gate over the embedded manifest.

Prints a PASS/FAIL line per tracked artifact and a summary panel; exits 1
if any artifact is missing, unlisted, or has a stale digest.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from swintegrity.cli.commands._context import fail, load_config
from swintegrity.core.hash_updater import HostArtifactDecodeError, HostArtifactNotFoundError
from swintegrity.core.hash_verifier import HashVerifier
from swintegrity.core.manifest_patcher import ManifestError
from swintegrity.models.reports import FindingKind

console = Console()


def verify_hashes_cmd() -> None:
    """Verify that every tracked artifact matches the embedded manifest."""
    config = load_config(console)

    try:
        report = HashVerifier(config).verify()
    except HostArtifactNotFoundError as exc:
        fail(console, "Host artifact missing:", exc)
    except HostArtifactDecodeError as exc:
        fail(console, "Host artifact unreadable:", exc)
    except ManifestError as exc:
        fail(console, "Manifest unreadable:", exc)
    except OSError as exc:
        fail(console, "I/O error:", exc)

    findings = {f.cache_key: f for f in report.findings}
    for entry in config.resources:
        finding = findings.get(entry.cache_key)
        if finding is None:
            console.print(f"[green]PASS[/green] {escape(entry.cache_key)}", highlight=False, soft_wrap=True)
            continue
        console.print(f"[bold red]FAIL[/bold red] {escape(finding.describe())}", highlight=False, soft_wrap=True)
        if finding.kind == FindingKind.DIGEST_MISMATCH:
            console.print(f"       file:     {finding.file_path}", highlight=False, soft_wrap=True)
            console.print(f"       manifest: {finding.expected}", highlight=False, soft_wrap=True)
            console.print(f"       actual:   {finding.actual}", highlight=False, soft_wrap=True)
    for key in report.untracked_keys:
        console.print(f"[yellow]WARN[/yellow] {escape(key)}: embedded but not tracked", highlight=False, soft_wrap=True)

    console.print()
    if report.passed:
        console.print(
            Panel(
                f"[bold green]All {report.checked} hash(es) valid.[/bold green]\n"
                f"{report.host_artifact} is in sync with its artifacts.",
                title="[bold]Integrity Verification[/bold]",
                border_style="green",
            )
        )
        return

    console.print(
        Panel(
            "\n".join([
                f"[bold red]{len(report.findings)} of {report.checked} hash(es) invalid.[/bold red]",
                "",
                *[f"- {escape(f.describe())}" for f in report.findings],
                "",
                "[dim]Run 'swintegrity update-hashes' to refresh the manifest.[/dim]",
            ]),
            title="[bold]Integrity Verification[/bold]",
            border_style="red",
        )
    )
    raise typer.Exit(code=1)
