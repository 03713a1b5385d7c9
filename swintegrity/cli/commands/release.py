"""``swintegrity release`` — inject the version, then stage, commit and push.

Any failing step aborts the release with exit code 1. Steps already applied
(for example files staged before a failed commit) are not rolled back.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel

from swintegrity.cli.commands._context import fail, load_config
from swintegrity.core.release import ReleaseSequencer
from swintegrity.models.release import ReleaseStep

console = Console()


def release_cmd() -> None:
    """Run the release sequence: inject-version, git add, git commit, git push."""
    config = load_config(console)
    console.print("[bold cyan]Starting release...[/bold cyan]")

    result = ReleaseSequencer(config).run()

    for transition in result.transitions:
        style = "red" if transition.to_step == ReleaseStep.ABORTED else "dim"
        console.print(
            f"  [{style}]{transition.from_step.value} -> {transition.to_step.value}[/{style}]"
        )

    if not result.succeeded:
        step = result.failed_step.value if result.failed_step else "unknown"
        fail(console, f"Release aborted during {step}:", result.error)

    console.print()
    console.print(
        Panel(
            "\n".join([
                f"[bold green]Release {result.version} complete![/bold green]",
                "",
                f"[bold]Commit:[/bold] {config.release.commit_message.replace('{version}', result.version or '')}",
                f"[bold]Pushed:[/bold] {config.release.remote}/{config.release.branch}",
            ]),
            title="[bold]Release[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
