from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from catalog import (
    COGNITIVE_TASK_LOOKUP, PHYSICAL_TASK_LOOKUP, Task, is_cognitive,
)
from models import HouseholdSetup, NormalizedResponse, TaskResponse, normalize_response

logger = logging.getLogger(__name__)

# Mental-load multipliers used by the visible/mental aggregation.
# The WMLI engine uses the catalog-declared weights instead.
AGGREGATOR_WEIGHTS = {"time": 1.0, "likert": 2.0}

HIGH_UNFAIRNESS_PCT = 20


def round_half_up(x: float) -> int:
    return int(x + 0.5) if x >= 0 else -int(-x + 0.5)


def percentage(part: float, total: float) -> int:
    # Empty households report 0, never NaN.
    if total <= 0:
        return 0
    return round_half_up(part / total * 100)


# -------------------- PER-TASK SCORER --------------------
def likert_score(burden: float, fairness: float) -> float:
    """NASA-TLX inspired load: burden amplified by unfairness, normalized by 10."""
    unfairness = (5 - fairness) / 5
    weighted = burden * (1 + unfairness)
    return weighted / 10


def time_score(minutes: float, baseline_minutes: float) -> float:
    if baseline_minutes <= 0:
        return 0.0
    return minutes / baseline_minutes


def task_score(nr: NormalizedResponse) -> float:
    if is_cognitive(nr.task):
        return likert_score(nr.burden, nr.fairness)
    return time_score(nr.minutes, nr.task.baseline_minutes_per_week)


def aggregator_weight(task: Task) -> float:
    return AGGREGATOR_WEIGHTS.get(task.measurement_type, 1.0)


@dataclass(frozen=True)
class Contribution:
    my_visible: float = 0.0
    my_mental: float = 0.0
    partner_visible: float = 0.0
    partner_mental: float = 0.0


def contribution(nr: NormalizedResponse, weight: float, has_partner: bool = True) -> Contribution:
    """Split a task's minutes (visible) and minutes x weight (mental) between the two adults."""
    m = nr.minutes
    if not has_partner:
        return Contribution(my_visible=m * nr.my_share, my_mental=m * weight * nr.my_share)
    return Contribution(
        my_visible=m * nr.my_share,
        my_mental=m * weight * nr.my_share,
        partner_visible=m * nr.partner_share,
        partner_mental=m * weight * nr.partner_share,
    )


def normalize_all(responses: Sequence[TaskResponse],
                  lookup: Optional[Dict[str, Task]] = None) -> List[NormalizedResponse]:
    out: List[NormalizedResponse] = []
    for r in responses:
        nr = normalize_response(r, lookup)
        if nr is None:
            if not r.not_applicable:
                logger.debug("Skipping response for unknown task %r (assignment=%r)", r.task_id, r.assignment)
            continue
        out.append(nr)
    return out


# -------------------- AGGREGATOR --------------------
@dataclass(frozen=True)
class LoadTotals:
    my_visible_time: float = 0.0
    my_mental_load: float = 0.0
    partner_visible_time: Optional[float] = None
    partner_mental_load: Optional[float] = None

    @property
    def total_visible_time(self) -> float:
        return self.my_visible_time + (self.partner_visible_time or 0.0)

    @property
    def total_mental_load(self) -> float:
        return self.my_mental_load + (self.partner_mental_load or 0.0)


@dataclass(frozen=True)
class LoadPercentages:
    my_visible: int = 0
    my_mental: int = 0
    partner_visible: Optional[int] = None
    partner_mental: Optional[int] = None


@dataclass(frozen=True)
class PersonLoad:
    totals: LoadTotals
    percentages: LoadPercentages
    category_scores: Dict[str, float] = field(default_factory=dict)
    time_score_mean: float = 0.0
    likert_score_mean: float = 0.0
    combined_score: float = 0.0
    applicable_tasks: int = 0

    @property
    def display_score(self) -> int:
        return round_half_up(self.combined_score * 100)


def calculate_person_load(
    responses: Sequence[TaskResponse],
    physical_lookup: Dict[str, Task] = PHYSICAL_TASK_LOOKUP,
    cognitive_lookup: Dict[str, Task] = COGNITIVE_TASK_LOOKUP,
    has_partner: bool = True,
) -> PersonLoad:
    lookup = {**physical_lookup, **cognitive_lookup}

    my_visible = my_mental = partner_visible = partner_mental = 0.0
    time_scores: List[float] = []
    likert_scores: List[float] = []
    category_scores: Dict[str, float] = {}

    normalized = normalize_all(responses, lookup)
    for nr in normalized:
        score = task_score(nr)
        if is_cognitive(nr.task):
            likert_scores.append(score)
        else:
            time_scores.append(score)

        c = contribution(nr, aggregator_weight(nr.task), has_partner)
        my_visible += c.my_visible
        my_mental += c.my_mental
        partner_visible += c.partner_visible
        partner_mental += c.partner_mental

        category = nr.task.category
        category_scores[category] = category_scores.get(category, 0.0) + score * nr.my_share

    # Each measurement type's mean counts once, however many tasks it has.
    time_mean = sum(time_scores) / len(time_scores) if time_scores else 0.0
    likert_mean = sum(likert_scores) / len(likert_scores) if likert_scores else 0.0
    means = ([time_mean] if time_scores else []) + ([likert_mean] if likert_scores else [])
    combined = sum(means) / len(means) if means else 0.0

    total_visible = my_visible + partner_visible
    total_mental = my_mental + partner_mental

    if has_partner:
        totals = LoadTotals(my_visible, my_mental, partner_visible, partner_mental)
        pcts = LoadPercentages(
            my_visible=percentage(my_visible, total_visible),
            my_mental=percentage(my_mental, total_mental),
            partner_visible=percentage(partner_visible, total_visible),
            partner_mental=percentage(partner_mental, total_mental),
        )
    else:
        totals = LoadTotals(my_visible, my_mental)
        pcts = LoadPercentages(
            my_visible=percentage(my_visible, total_visible),
            my_mental=percentage(my_mental, total_mental),
        )

    return PersonLoad(
        totals=totals,
        percentages=pcts,
        category_scores=category_scores,
        time_score_mean=time_mean,
        likert_score_mean=likert_mean,
        combined_score=combined,
        applicable_tasks=len(normalized),
    )


@dataclass(frozen=True)
class CategoryShare:
    category: str
    my_mental_load: int
    partner_mental_load: int
    my_percentage: int
    task_count: int


def category_breakdown(responses: Sequence[TaskResponse],
                       lookup: Optional[Dict[str, Task]] = None,
                       has_partner: bool = True) -> Dict[str, CategoryShare]:
    """Mental load per category, split with the same share policy as the totals."""
    acc: Dict[str, List[float]] = {}
    for nr in normalize_all(responses, lookup):
        c = contribution(nr, aggregator_weight(nr.task), has_partner)
        row = acc.setdefault(nr.task.category, [0.0, 0.0, 0])
        row[0] += c.my_mental
        row[1] += c.partner_mental
        row[2] += 1

    return {
        cat: CategoryShare(
            category=cat,
            my_mental_load=round_half_up(mine),
            partner_mental_load=round_half_up(theirs),
            my_percentage=percentage(mine, mine + theirs),
            task_count=int(count),
        )
        for cat, (mine, theirs, count) in acc.items()
    }


@dataclass(frozen=True)
class PerceptionGaps:
    """How my partner sees each load minus how I see it."""
    my_visible_time_gap: int
    my_mental_load_gap: int
    partner_visible_time_gap: int
    partner_mental_load_gap: int


@dataclass(frozen=True)
class CalculatedResults:
    my_visible_time: int
    my_mental_load: int
    total_visible_time: int
    total_mental_load: int
    my_visible_percentage: int
    my_mental_percentage: int
    partner_visible_time: Optional[int] = None
    partner_mental_load: Optional[int] = None
    partner_visible_percentage: Optional[int] = None
    partner_mental_percentage: Optional[int] = None
    combined_score: float = 0.0
    display_score: int = 0
    applicable_tasks: int = 0
    category_scores: Dict[str, float] = field(default_factory=dict)
    categories: Dict[str, CategoryShare] = field(default_factory=dict)
    partner_perspective: Optional[LoadTotals] = None
    perception_gaps: Optional[PerceptionGaps] = None

    @property
    def has_partner(self) -> bool:
        return self.partner_mental_load is not None


def _opt_round(x: Optional[float]) -> Optional[int]:
    return None if x is None else round_half_up(x)


def calculate_results(
    setup: HouseholdSetup,
    responses: Sequence[TaskResponse],
    partner_responses: Optional[Sequence[TaskResponse]] = None,
) -> CalculatedResults:
    load = calculate_person_load(responses, has_partner=setup.has_partner)
    t, p = load.totals, load.percentages

    partner_view: Optional[LoadTotals] = None
    gaps: Optional[PerceptionGaps] = None
    if setup.is_together and setup.has_partner and partner_responses:
        theirs = calculate_person_load(partner_responses, has_partner=True).totals
        # The partner answered from their own point of view: their "me" is my partner.
        partner_view = LoadTotals(
            my_visible_time=theirs.partner_visible_time or 0.0,
            my_mental_load=theirs.partner_mental_load or 0.0,
            partner_visible_time=theirs.my_visible_time,
            partner_mental_load=theirs.my_mental_load,
        )
        gaps = PerceptionGaps(
            my_visible_time_gap=round_half_up(partner_view.my_visible_time - t.my_visible_time),
            my_mental_load_gap=round_half_up(partner_view.my_mental_load - t.my_mental_load),
            partner_visible_time_gap=round_half_up(partner_view.partner_visible_time - (t.partner_visible_time or 0.0)),
            partner_mental_load_gap=round_half_up(partner_view.partner_mental_load - (t.partner_mental_load or 0.0)),
        )

    return CalculatedResults(
        my_visible_time=round_half_up(t.my_visible_time),
        my_mental_load=round_half_up(t.my_mental_load),
        total_visible_time=round_half_up(t.total_visible_time),
        total_mental_load=round_half_up(t.total_mental_load),
        my_visible_percentage=p.my_visible,
        my_mental_percentage=p.my_mental,
        partner_visible_time=_opt_round(t.partner_visible_time),
        partner_mental_load=_opt_round(t.partner_mental_load),
        partner_visible_percentage=p.partner_visible,
        partner_mental_percentage=p.partner_mental,
        combined_score=load.combined_score,
        display_score=load.display_score,
        applicable_tasks=load.applicable_tasks,
        category_scores=load.category_scores,
        categories=category_breakdown(responses, has_partner=setup.has_partner),
        partner_perspective=partner_view,
        perception_gaps=gaps,
    )


# -------------------- INDICATORS --------------------
def fairness_indicators(responses: Sequence[TaskResponse]) -> Dict[str, float]:
    rated = [r for r in responses if not r.not_applicable and r.likert_rating]
    if not rated:
        return {"unfairness_percentage": 0.0, "has_high_unfairness": False}

    total = 0.0
    for r in rated:
        fairness = max(1.0, min(5.0, float(r.likert_rating.fairness)))
        total += (5 - fairness) / 4
    pct = total / len(rated) * 100
    return {"unfairness_percentage": pct, "has_high_unfairness": pct > HIGH_UNFAIRNESS_PCT}


def time_discrepancies(responses: Sequence[TaskResponse]) -> List[str]:
    """Names of tasks the household marked as taking much more or much less time."""
    return [
        nr.task.name
        for nr in normalize_all(responses)
        if nr.time_adjustment in ("much_more", "much_less")
    ]
