"""
Job status transitions.

A job's status never changes on its own: check-in moves it to IN_PROGRESS and
completion moves it to COMPLETED, both inside the service record's
transaction. The rules live here so they can be checked and tested apart from
the service record code path.
"""

from dataclasses import dataclass
from enum import Enum

from app.exceptions import InvalidStateError
from app.models.job import Job, JobStatus


class JobTransition(str, Enum):
    TO_IN_PROGRESS = "TO_IN_PROGRESS"
    TO_COMPLETED = "TO_COMPLETED"


@dataclass(frozen=True)
class TransitionRule:
    source: JobStatus
    target: JobStatus
    action: str  # verb used in the rejection message


TRANSITION_RULES: dict[JobTransition, TransitionRule] = {
    JobTransition.TO_IN_PROGRESS: TransitionRule(JobStatus.ASSIGNED, JobStatus.IN_PROGRESS, "check in to"),
    JobTransition.TO_COMPLETED: TransitionRule(JobStatus.IN_PROGRESS, JobStatus.COMPLETED, "complete"),
}


def check_transition(job: Job, transition: JobTransition) -> TransitionRule:
    """Raise InvalidStateError unless the job is in the transition's source status."""
    rule = TRANSITION_RULES[transition]
    current = JobStatus(job.status)
    if current != rule.source:
        raise InvalidStateError(
            f"Cannot {rule.action} job with status {current.value}. Job must be {rule.source.value}."
        )
    return rule


def apply_transition(job: Job, transition: JobTransition) -> JobStatus:
    """Move the job to the transition's target status. Caller commits."""
    rule = check_transition(job, transition)
    job.status = rule.target.value
    return rule.target
