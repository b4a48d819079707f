"""Models describing workflow progress and restart outcomes."""
from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class WorkflowState(str, Enum):
    """States visited by a single workflow run."""

    IDLE = "idle"
    EVALUATE = "evaluate"
    NO_ACTION_NEEDED = "no_action_needed"
    OFFER_CHOICE = "offer_choice"
    FORCE_COUNTDOWN = "force_countdown"
    SAVE_PROMPT = "save_prompt"
    RESTARTING = "restarting"
    DONE = "done"


class RestartStatus(str, Enum):
    RESTARTED = "restarted"
    SIMULATED = "simulated"
    FAILED = "failed"


class RunOutcome(str, Enum):
    """How a run ended."""

    NO_ACTION = "no_action"
    DEFERRED = "deferred"
    DISMISSED = "dismissed"
    RESTARTED = "restarted"
    SIMULATED = "simulated"
    RESTART_FAILED = "restart_failed"


class RestartOutcome(BaseModel):
    """Result of a restart attempt."""

    status: RestartStatus
    detail: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is not RestartStatus.FAILED


class WorkflowResult(BaseModel):
    """Summary of one workflow run."""

    outcome: RunOutcome
    uptime_days: int = Field(..., ge=0)
    defer_count: int | None = Field(default=None, description="Defer count read at the start of the run")
    defer_count_after: int | None = Field(default=None, description="Defer count at the end of the run")
    states: List[WorkflowState] = Field(default_factory=list)
    countdown_ticks: List[int] = Field(default_factory=list, description="Remaining seconds shown per countdown tick")
    restart: RestartOutcome | None = None


__all__ = ["WorkflowState", "RestartStatus", "RunOutcome", "RestartOutcome", "WorkflowResult"]
