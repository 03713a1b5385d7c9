"""Main Typer application — imports and registers all CLI commands.

Entry point: ``swintegrity`` (configured via pyproject.toml project.scripts).

Commands: inject-version, update-hashes, verify-hashes, release. None take
flags; where the project lives comes from SWINTEGRITY_* settings.
"""

from __future__ import annotations

import typer

from swintegrity.cli.commands.inject_version import inject_version_cmd
from swintegrity.cli.commands.release import release_cmd
from swintegrity.cli.commands.update_hashes import update_hashes_cmd
from swintegrity.cli.commands.verify_hashes import verify_hashes_cmd
from swintegrity.config import Settings
from swintegrity.log_setup import configure_logging

app = typer.Typer(
    name="swintegrity",
    help="swintegrity: keep a service worker's integrity manifest in sync with its build.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _setup() -> None:
    """Configure logging from the environment before any command runs."""
    settings = Settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)


# Register subcommands
app.command(name="inject-version", help="Inject the package version into target files.")(inject_version_cmd)
app.command(name="update-hashes", help="Recompute digests and patch the embedded manifest.")(update_hashes_cmd)
app.command(name="verify-hashes", help="Verify artifacts against the embedded manifest.")(verify_hashes_cmd)
app.command(name="release", help="Inject the version, then git add, commit and push.")(release_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
