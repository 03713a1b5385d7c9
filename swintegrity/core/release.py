"""Release Sequencer — inject the version, then stage, commit and push.

Start -> InjectVersion -> StageFiles -> Commit -> Push -> Done, with any
failing step going straight to Aborted. Later steps are skipped and
nothing already applied is rolled back: a failed commit leaves the files
staged for the operator to deal with.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from swintegrity.core.version_injector import VersionInjector
from swintegrity.models.config import IntegrityConfig
from swintegrity.models.release import (
    VALID_TRANSITIONS,
    ReleaseResult,
    ReleaseStep,
    ReleaseTransition,
)

logger = logging.getLogger(__name__)


class InvalidTransitionError(RuntimeError):
    """Raised when the sequencer is asked to make a transition it does not allow."""


class ExternalStepError(RuntimeError):
    """Raised when a version-control command exits non-zero."""

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(
            f"'{' '.join(command)}' exited with code {returncode}{detail}"
        )


@runtime_checkable
class VersionControl(Protocol):
    """The staging/commit/push capability; each call succeeds or raises."""

    def stage(self, files: list[Path]) -> None: ...

    def commit(self, message: str) -> None: ...

    def push(self, remote: str, branch: str) -> None: ...


class GitVersionControl:
    """``VersionControl`` backed by literal ``git`` invocations.

    Parameters
    ----------
    cwd:
        Working tree to run git in.
    """

    def __init__(self, cwd: Path) -> None:
        self._cwd = Path(cwd)

    def _run(self, command: list[str]) -> None:
        logger.info("Running: %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=self._cwd,
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            raise ExternalStepError(command, -1, str(exc)) from exc
        if result.stdout.strip():
            logger.debug("%s", result.stdout.strip())
        if result.returncode != 0:
            raise ExternalStepError(command, result.returncode, result.stderr)

    def stage(self, files: list[Path]) -> None:
        self._run(["git", "add", *[str(f) for f in files]])

    def commit(self, message: str) -> None:
        self._run(["git", "commit", "-m", message])

    def push(self, remote: str, branch: str) -> None:
        self._run(["git", "push", remote, branch])


class ReleaseSequencer:
    """Runs the release as a linear, fail-fast state machine.

    Parameters
    ----------
    config:
        Project configuration (version targets and release settings).
    vcs:
        Version-control collaborator. Defaults to git in ``config.root``.
    injector:
        Version injector. Defaults to one built from ``config``.
    """

    def __init__(
        self,
        config: IntegrityConfig,
        vcs: VersionControl | None = None,
        injector: VersionInjector | None = None,
    ) -> None:
        self._config = config
        self._vcs = vcs or GitVersionControl(config.root)
        self._injector = injector or VersionInjector(config)
        self._step = ReleaseStep.START
        self._transitions: list[ReleaseTransition] = []

    @property
    def step(self) -> ReleaseStep:
        return self._step

    def _advance(self, target: ReleaseStep, detail: str | None = None) -> None:
        allowed = VALID_TRANSITIONS.get(self._step, set())
        if target not in allowed:
            raise InvalidTransitionError(
                f"Cannot move release from {self._step.value} to {target.value}. "
                f"Allowed: {sorted(s.value for s in allowed)}"
            )
        self._transitions.append(
            ReleaseTransition(from_step=self._step, to_step=target, detail=detail)
        )
        logger.debug("Release %s -> %s", self._step.value, target.value)
        self._step = target

    def run(self) -> ReleaseResult:
        """Execute every step in order, stopping at the first failure."""
        if self._step != ReleaseStep.START:
            raise InvalidTransitionError("A release sequencer can only run once")

        release = self._config.release
        version: str | None = None
        failed_step = ReleaseStep.INJECT_VERSION

        try:
            self._advance(ReleaseStep.INJECT_VERSION)
            self._injector.inject()
            # Re-read so the commit names what the package manifest says now.
            version = self._injector.read_version()
            logger.info("New version: %s", version)

            failed_step = ReleaseStep.STAGE_FILES
            self._advance(ReleaseStep.STAGE_FILES)
            self._vcs.stage(list(release.stage_files))

            failed_step = ReleaseStep.COMMIT
            self._advance(ReleaseStep.COMMIT)
            self._vcs.commit(release.commit_message.replace("{version}", version))

            failed_step = ReleaseStep.PUSH
            self._advance(ReleaseStep.PUSH)
            self._vcs.push(release.remote, release.branch)

            self._advance(ReleaseStep.DONE)
        except InvalidTransitionError:
            raise
        except Exception as exc:
            logger.error("Release failed during %s: %s", failed_step.value, exc)
            self._advance(ReleaseStep.ABORTED, detail=str(exc))
            return ReleaseResult(
                final_step=self._step,
                version=version,
                transitions=list(self._transitions),
                failed_step=failed_step,
                error=str(exc),
            )

        logger.info("Release %s completed", version)
        return ReleaseResult(
            final_step=self._step,
            version=version,
            transitions=list(self._transitions),
        )
