"""Release sequencer state model — linear, fail-fast transitions."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ReleaseStep(str, Enum):
    """States of a release run."""

    START = "start"
    INJECT_VERSION = "inject_version"
    STAGE_FILES = "stage_files"
    COMMIT = "commit"
    PUSH = "push"
    DONE = "done"
    ABORTED = "aborted"


# Linear happy path; every working step may abort.
# Terminal states (DONE, ABORTED) have no outgoing transitions.
VALID_TRANSITIONS: dict[ReleaseStep, set[ReleaseStep]] = {
    ReleaseStep.START: {ReleaseStep.INJECT_VERSION},
    ReleaseStep.INJECT_VERSION: {ReleaseStep.STAGE_FILES, ReleaseStep.ABORTED},
    ReleaseStep.STAGE_FILES: {ReleaseStep.COMMIT, ReleaseStep.ABORTED},
    ReleaseStep.COMMIT: {ReleaseStep.PUSH, ReleaseStep.ABORTED},
    ReleaseStep.PUSH: {ReleaseStep.DONE, ReleaseStep.ABORTED},
    ReleaseStep.DONE: set(),  # terminal
    ReleaseStep.ABORTED: set(),  # terminal
}


class ReleaseTransition(BaseModel):
    """Records a single state transition of the sequencer."""

    model_config = ConfigDict(frozen=True)

    from_step: ReleaseStep
    to_step: ReleaseStep
    detail: str | None = None  # error text when entering ABORTED


class ReleaseResult(BaseModel):
    """Final outcome of a release run."""

    model_config = ConfigDict(frozen=True)

    final_step: ReleaseStep
    version: str | None = None
    transitions: list[ReleaseTransition] = Field(default_factory=list)
    failed_step: ReleaseStep | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.final_step == ReleaseStep.DONE
