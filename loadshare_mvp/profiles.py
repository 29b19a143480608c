# Demo households for trying the app without answering every question.
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Tuple

from catalog import Task, is_cognitive, relevant_tasks
from models import HouseholdSetup, LikertRating, TaskResponse

MIRROR = {"me": "partner", "partner": "me", "shared": "shared"}


def mirror_response(r: TaskResponse) -> TaskResponse:
    """The same answer written from the other adult's point of view."""
    pct = None if r.my_share_percentage is None else 100 - r.my_share_percentage
    return replace(r, assignment=MIRROR.get(r.assignment, r.assignment), my_share_percentage=pct)


def _balanced(i: int, task: Task) -> TaskResponse:
    return TaskResponse(
        task.id,
        ["shared", "me", "partner"][i % 3],
        my_share_percentage=50 if i % 3 == 0 else None,
        time_adjustment="about_right",
        likert_rating=LikertRating(burden=2 + i % 2, fairness=4 + i % 2),
    )


def _overloaded(i: int, task: Task) -> TaskResponse:
    if i % 4 == 3:
        return TaskResponse(task.id, "shared", my_share_percentage=70, time_adjustment="more",
                            likert_rating=LikertRating(burden=4, fairness=2))
    return TaskResponse(task.id, "me", time_adjustment="much_more" if i % 5 == 0 else "more",
                        likert_rating=LikertRating(burden=4 + i % 2, fairness=1 + i % 2))


def _invisible(i: int, task: Task) -> TaskResponse:
    # Visible chores look shared; the planning sits with one person.
    if is_cognitive(task):
        return TaskResponse(task.id, "me", time_adjustment="about_right",
                            likert_rating=LikertRating(burden=4, fairness=2))
    return TaskResponse(task.id, "shared", my_share_percentage=40, time_adjustment="about_right",
                        likert_rating=LikertRating(burden=2, fairness=4))


def _solo(i: int, task: Task) -> TaskResponse:
    return TaskResponse(task.id, "me", time_adjustment="about_right" if i % 3 else "more",
                        not_applicable=(i % 7 == 6),
                        likert_rating=LikertRating(burden=3 + i % 3, fairness=3))


@dataclass(frozen=True)
class DemoProfile:
    id: str
    name: str
    description: str
    setup: HouseholdSetup
    build: Callable[[int, Task], TaskResponse]

    def generate(self) -> Tuple[List[TaskResponse], List[TaskResponse]]:
        tasks = relevant_tasks(self.setup)
        mine = [self.build(i, t) for i, t in enumerate(tasks)]
        theirs = [mirror_response(r) for r in mine] if self.setup.is_together else []
        return mine, theirs


DEMO_PROFILES: List[DemoProfile] = [
    DemoProfile(
        "balanced", "Balanced Partnership",
        "Equal distribution, both partners feel appreciated",
        HouseholdSetup.for_type("couple", is_employed=True, partner_employed=True, assessment_mode="together"),
        _balanced,
    ),
    DemoProfile(
        "overloaded", "One Partner Overloaded",
        "One partner carries most of the load and feels unrecognized",
        HouseholdSetup.for_type("couple_with_children", children=2, has_pets=True, is_employed=True),
        _overloaded,
    ),
    DemoProfile(
        "invisible_load", "Invisible Load",
        "Chores look shared but the planning falls on one person",
        HouseholdSetup.for_type("couple_with_children", children=1, has_garden=True,
                                is_employed=True, partner_employed=True),
        _invisible,
    ),
    DemoProfile(
        "solo_parent", "Solo Parent",
        "One adult running the household alone",
        HouseholdSetup.for_type("single_parent", children=2, is_employed=True),
        _solo,
    ),
]

PROFILE_BY_ID: Dict[str, DemoProfile] = {p.id: p for p in DEMO_PROFILES}


def get_profile(profile_id: str) -> Optional[DemoProfile]:
    return PROFILE_BY_ID.get(profile_id)
