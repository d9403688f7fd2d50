from typing import Literal

from pydantic import BaseModel, Field

from .candidate import CandidateSummary

EventType = Literal[
    "pointerdown",
    "pointermove",
    "pointerup",
    "pointerleave",
    "touchstart",
    "touchmove",
    "touchend",
    "keydown",
    "click",
]


class CardEvent(BaseModel):
    """One raw input event aimed at the active card."""

    type: EventType
    x: float = 0.0
    y: float = 0.0
    # Element the event originated on; drags never start on links or buttons.
    target: Literal["card", "link", "button"] = "card"
    key: str | None = None
    action: Literal["accept", "reject"] | None = None


class GestureFeedback(BaseModel):
    dx: float = 0.0
    dy: float = 0.0
    dragging: bool = False
    rotation: float = 0.0
    opacity: float = 1.0
    hint: Literal["shortlist", "reject"] | None = None


class ScreeningStats(BaseModel):
    shortlisted: int = 0
    rejected: int = 0


class ScreeningStateOut(BaseModel):
    session_id: str
    job_id: int
    total: int
    remaining: int
    processed: int
    progress_percent: float
    complete: bool
    stats: ScreeningStats
    current: CandidateSummary | None = None
    stack: list[CandidateSummary] = Field(default_factory=list)
    gesture: GestureFeedback = Field(default_factory=GestureFeedback)
