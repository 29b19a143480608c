# models.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from catalog import Task, TASK_LOOKUP, mental_weight
from time_adjustment import effective_minutes

ASSIGNMENTS = ["me", "shared", "partner"]
ASSESSMENT_MODES = ["solo", "together"]
HOUSEHOLD_TYPES = ["single", "single_parent", "couple", "couple_with_children", "other"]
INSIGHT_KINDS = ["breakthrough", "disagreement", "surprise"]

NEUTRAL_RATING = 3
DEFAULT_SHARE = {"me": 100.0, "partner": 0.0, "shared": 50.0}


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class LikertRating:
    burden: float = NEUTRAL_RATING
    fairness: float = NEUTRAL_RATING


@dataclass(frozen=True)
class TaskResponse:
    task_id: str
    assignment: str
    my_share_percentage: Optional[float] = None
    time_adjustment: Optional[str] = None
    estimated_minutes: Optional[float] = None
    not_applicable: bool = False
    likert_rating: Optional[LikertRating] = None


@dataclass(frozen=True)
class HouseholdSetup:
    household_type: str = "single"
    adults: int = 1
    children: int = 0
    has_pets: bool = False
    has_garden: bool = False
    is_employed: bool = False
    partner_employed: bool = False
    assessment_mode: str = "solo"

    def __post_init__(self):
        if self.adults not in (1, 2):
            raise ValueError(f"adults must be 1 or 2, got {self.adults}")
        if self.children < 0:
            raise ValueError("children cannot be negative")
        if self.assessment_mode not in ASSESSMENT_MODES:
            raise ValueError(f"Unknown assessment mode: {self.assessment_mode}")
        if self.household_type not in HOUSEHOLD_TYPES:
            raise ValueError(f"Unknown household type: {self.household_type}")
        if self.adults == 1 and self.assessment_mode == "together":
            raise ValueError("A single-adult household cannot be assessed together")

    @property
    def has_partner(self) -> bool:
        return self.adults == 2

    @property
    def is_together(self) -> bool:
        return self.assessment_mode == "together"

    @staticmethod
    def for_type(household_type: str, adults: int = 2, **kwargs) -> "HouseholdSetup":
        """Derive the adult count (and solo mode) from the household type."""
        if household_type in ("single", "single_parent"):
            adults = 1
            kwargs["assessment_mode"] = "solo"
        elif household_type in ("couple", "couple_with_children"):
            adults = 2
        return HouseholdSetup(household_type=household_type, adults=adults, **kwargs)


@dataclass(frozen=True)
class InsightEntry:
    id: str
    kind: str
    description: str
    task_id: Optional[str] = None
    task_name: Optional[str] = None
    created_at: str = field(default_factory=utc_now_iso)

    @staticmethod
    def new(kind: str, description: str, task_id: Optional[str] = None,
            task_name: Optional[str] = None) -> "InsightEntry":
        if kind not in INSIGHT_KINDS:
            kind = "breakthrough"
        return InsightEntry(
            id=str(uuid.uuid4()),
            kind=kind,
            description=description.strip(),
            task_id=task_id,
            task_name=task_name,
        )


# -------------------- NORMALIZATION --------------------
def split_share(assignment: str, my_share_percentage: Optional[float] = None) -> Tuple[float, float]:
    """Return (my_fraction, partner_fraction) for an assignment.

    Shares default to 100 for 'me', 0 for 'partner' and 50 for 'shared'.
    An explicit percentage overrides the default for any assignment.
    """
    if assignment not in DEFAULT_SHARE:
        return 0.0, 0.0
    pct = DEFAULT_SHARE[assignment] if my_share_percentage is None else float(my_share_percentage)
    mine = _clamp(pct, 0.0, 100.0) / 100.0
    return mine, 1.0 - mine


@dataclass(frozen=True)
class NormalizedResponse:
    task: Task
    assignment: str
    my_share: float
    partner_share: float
    minutes: float
    weight: float
    burden: float
    fairness: float
    time_adjustment: Optional[str] = None

    @property
    def task_id(self) -> str:
        return self.task.id


def normalize_response(response: TaskResponse,
                       lookup: Optional[Dict[str, Task]] = None) -> Optional[NormalizedResponse]:
    """Apply every default once. Returns None for N/A or unknown tasks."""
    if response.not_applicable:
        return None
    task = (TASK_LOOKUP if lookup is None else lookup).get(response.task_id)
    if task is None or response.assignment not in DEFAULT_SHARE:
        return None

    mine, theirs = split_share(response.assignment, response.my_share_percentage)
    rating = response.likert_rating or LikertRating()
    return NormalizedResponse(
        task=task,
        assignment=response.assignment,
        my_share=mine,
        partner_share=theirs,
        minutes=effective_minutes(response, task.baseline_minutes_per_week),
        weight=mental_weight(task),
        burden=_clamp(float(rating.burden), 1.0, 5.0),
        fairness=_clamp(float(rating.fairness), 1.0, 5.0),
        time_adjustment=response.time_adjustment,
    )
