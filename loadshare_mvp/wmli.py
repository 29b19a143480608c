"""Weighted Mental Load Index.

A 0-100 index per person built from burden ratings weighted by how much of
each task that person owns, plus strain/fairness flags. Kept separate from
the visible/mental totals in scoring.py: the two answer different questions
(how heavy does it feel vs. how much time does it take).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from operator import attrgetter
from typing import List, Optional, Sequence

from models import HouseholdSetup, NormalizedResponse, TaskResponse
from scoring import normalize_all, percentage, round_half_up

logger = logging.getLogger(__name__)

MAX_BURDEN = 5
STRAIN_BURDEN = 4
RISK_FAIRNESS = 2
MAJORITY_SHARE = 0.5
EQUITY_GAP_THRESHOLD = 20
BALANCED_GAP = 10

INTERPRETATION_BANDS = [
    (25, "low", "Your mental load feels light. Most tasks you own sit at a manageable burden."),
    (50, "moderate", "Your mental load is moderate. Some tasks you own are noticeably taxing."),
    (75, "high", "Your mental load is high. Several tasks you own feel heavy; worth talking about."),
    (101, "very-high", "Your mental load is very high. You own many heavy tasks; time for a household conversation."),
]


@dataclass(frozen=True)
class WMLIFlags:
    high_subjective_strain: bool = False
    fairness_risk: bool = False
    equity_priority: bool = False
    strain_tasks: List[str] = field(default_factory=list)
    unfairness_tasks: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Disparity:
    mental_load_gap: float
    mental_load_ratio: float
    overburdened: str           # me|partner|none
    high_equity_risk: bool


@dataclass(frozen=True)
class WMLIResults:
    my_wmli: int
    my_unfairness: int
    my_flags: WMLIFlags
    interpretation_level: str
    interpretation_context: str
    my_wmli_share: Optional[int] = None
    partner_wmli: Optional[int] = None
    partner_wmli_share: Optional[int] = None
    partner_unfairness: Optional[int] = None
    partner_flags: Optional[WMLIFlags] = None
    disparity: Optional[Disparity] = None


def _flags(items: Sequence[NormalizedResponse], share_of) -> WMLIFlags:
    strain, unfair = [], []
    for nr in items:
        if share_of(nr) <= MAJORITY_SHARE:
            continue
        if nr.burden >= STRAIN_BURDEN:
            strain.append(nr.task_id)
        if nr.fairness <= RISK_FAIRNESS:
            unfair.append(nr.task_id)
    return WMLIFlags(
        high_subjective_strain=bool(strain),
        fairness_risk=bool(unfair),
        equity_priority=bool(strain) and bool(unfair),
        strain_tasks=strain,
        unfairness_tasks=unfair,
    )


def _raw_load(items: Sequence[NormalizedResponse], share_of) -> float:
    return sum(nr.burden * share_of(nr) * nr.weight for nr in items)


def _unfairness(items: Sequence[NormalizedResponse], share_of) -> int:
    owned = sum(share_of(nr) * nr.weight for nr in items)
    if owned <= 0:
        return 0
    weighted = sum((5 - nr.fairness) / 4 * share_of(nr) * nr.weight for nr in items)
    return round_half_up(weighted / owned * 100)


def interpret(index: int):
    for upper, level, text in INTERPRETATION_BANDS:
        if index < upper:
            return level, text
    return INTERPRETATION_BANDS[-1][1], INTERPRETATION_BANDS[-1][2]


def _disparity(my_share: int, partner_share: int) -> Disparity:
    gap = float(abs(my_share - partner_share))
    heavier, lighter = max(my_share, partner_share), min(my_share, partner_share)
    ratio = heavier / lighter if lighter > 0 else 0.0
    if gap <= BALANCED_GAP:
        overburdened = "none"
    else:
        overburdened = "me" if my_share > partner_share else "partner"
    return Disparity(
        mental_load_gap=gap,
        mental_load_ratio=ratio,
        overburdened=overburdened,
        high_equity_risk=gap > EQUITY_GAP_THRESHOLD,
    )


def calculate_wmli(responses: Sequence[TaskResponse], setup: Optional[HouseholdSetup] = None) -> WMLIResults:
    """Compute the index, flags and (for couples) disparity from one respondent's answers."""
    has_partner = setup.has_partner if setup is not None else False
    items = normalize_all(responses)

    mine = attrgetter("my_share")
    theirs = attrgetter("partner_share")

    ceiling = sum(MAX_BURDEN * nr.weight for nr in items)
    my_raw = _raw_load(items, mine)
    my_wmli = percentage(my_raw, ceiling)
    level, context = interpret(my_wmli)

    if not has_partner:
        return WMLIResults(
            my_wmli=my_wmli,
            my_unfairness=_unfairness(items, mine),
            my_flags=_flags(items, mine),
            interpretation_level=level,
            interpretation_context=context,
        )

    partner_raw = _raw_load(items, theirs)
    my_share = percentage(my_raw, my_raw + partner_raw)
    partner_share = percentage(partner_raw, my_raw + partner_raw)
    disparity = _disparity(my_share, partner_share)
    if disparity.high_equity_risk:
        logger.info("WMLI gap of %.0f points exceeds equity threshold", disparity.mental_load_gap)

    return WMLIResults(
        my_wmli=my_wmli,
        my_unfairness=_unfairness(items, mine),
        my_flags=_flags(items, mine),
        interpretation_level=level,
        interpretation_context=context,
        my_wmli_share=my_share,
        partner_wmli=percentage(partner_raw, ceiling),
        partner_wmli_share=partner_share,
        partner_unfairness=_unfairness(items, theirs),
        partner_flags=_flags(items, theirs),
        disparity=disparity,
    )
