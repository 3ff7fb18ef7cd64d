"""Journal records for one ``wpssl setup`` run and its numbered steps."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class Outcome(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class StepRecord(BaseModel):
    """One ``[n/N]`` pipeline step."""

    number: int
    title: str
    status: Outcome = Outcome.RUNNING
    error: str | None = None
    duration_ms: int | None = None


class SetupRun(BaseModel):
    """A provisioning attempt for one domain, from the first step to the last one reached."""

    run_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    host_id: str = "localhost"
    operator: str = ""
    domain: str
    site_dir: str
    distro: str
    steps: list[StepRecord] = Field(default_factory=list)
    status: Outcome = Outcome.RUNNING
    error: str | None = None
    duration_ms: int | None = None

    @property
    def failed_step(self) -> StepRecord | None:
        return next((s for s in self.steps if s.status is Outcome.FAILED), None)

    def to_jsonl(self) -> str:
        return self.model_dump_json()
