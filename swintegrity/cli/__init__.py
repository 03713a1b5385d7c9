"""swintegrity CLI — Typer-based command-line interface.

Provides the ``swintegrity`` command with subcommands for injecting the
package version, updating and verifying the embedded integrity manifest,
and running a release.

All output uses Rich for formatted terminal display.
"""
