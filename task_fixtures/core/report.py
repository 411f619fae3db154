"""Structured outcome reporting for setup and teardown."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from task_fixtures.core.logging import log_fixture_step


class FixtureStatus(str, Enum):
    """Outcome of a fixture step, or of a whole setup/teardown run."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StepResult:
    step: str
    status: FixtureStatus
    reason: Optional[str] = None


@dataclass
class FixtureReport:
    """Ordered step results of one setup or teardown run.

    Attributes:
        stage: "setup" or "teardown".
        steps: The results, in the order the steps ran.
    """

    stage: str
    steps: List[StepResult] = field(default_factory=list)

    def record(self, step: str, status: FixtureStatus, reason: Optional[str] = None) -> StepResult:
        result = StepResult(step=step, status=status, reason=reason)
        self.steps.append(result)
        log_fixture_step(self.stage, step, status.value, reason)
        return result

    @property
    def status(self) -> FixtureStatus:
        """Aggregate status.

        SKIPPED when nothing ran, SUCCESS when every step that ran succeeded,
        FAILED when none did, PARTIAL otherwise.
        """
        ran = [s for s in self.steps if s.status != FixtureStatus.SKIPPED]
        if not ran:
            return FixtureStatus.SKIPPED
        succeeded = [s for s in ran if s.status == FixtureStatus.SUCCESS]
        if not succeeded:
            return FixtureStatus.FAILED
        if len(succeeded) == len(ran):
            return FixtureStatus.SUCCESS
        return FixtureStatus.PARTIAL

    def get(self, step: str) -> Optional[StepResult]:
        for result in self.steps:
            if result.step == step:
                return result
        return None

    def summary(self) -> str:
        parts = [f"{s.step}={s.status.value}" for s in self.steps]
        return f"{self.stage} {self.status.value}: {', '.join(parts) or 'no steps'}"
