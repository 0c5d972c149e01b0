"""Story domain entity and job states."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class JobStatus(StrEnum):
    """Observable state of a story's summarization job."""

    NOT_FOUND = "not_found"
    PENDING = "pending"
    COMPLETE = "complete"


@dataclass
class StoryRecord:
    """A submitted story and its eventually-computed summary."""

    id: str
    original_text: str
    summary: str = ""
    created_at: datetime | None = None

    @property
    def status(self) -> JobStatus:
        """Pending until the background job has stored a summary."""
        return JobStatus.COMPLETE if self.summary else JobStatus.PENDING


@dataclass(frozen=True)
class PollResult:
    """Result of polling a story for its summary."""

    status: JobStatus
    summary: str | None = None

    @classmethod
    def not_found(cls) -> "PollResult":
        return cls(status=JobStatus.NOT_FOUND)

    @classmethod
    def from_record(cls, record: StoryRecord) -> "PollResult":
        if record.status is JobStatus.COMPLETE:
            return cls(status=JobStatus.COMPLETE, summary=record.summary)
        return cls(status=JobStatus.PENDING)
