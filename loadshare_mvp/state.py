from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from catalog import Task
from models import HouseholdSetup, InsightEntry, LikertRating, TaskResponse

logger = logging.getLogger(__name__)

RESPONDERS = ["me", "partner"]
DEFAULT_SHARE_PCT = 50


def share_slider_value(prev: Optional[TaskResponse]) -> int:
    # 0 is a real answer, only a missing share falls back to the default.
    if prev is None or prev.my_share_percentage is None:
        return DEFAULT_SHARE_PCT
    return int(prev.my_share_percentage)


def blank_form_response(task_id: str) -> TaskResponse:
    """What the task form submits for a task nobody touched."""
    return TaskResponse(task_id=task_id, assignment="me", time_adjustment="about_right",
                        likert_rating=LikertRating())


def _upsert(responses: Sequence[TaskResponse], response: TaskResponse) -> List[TaskResponse]:
    out = list(responses)
    for i, r in enumerate(out):
        if r.task_id == response.task_id:
            out[i] = response
            return out
    out.append(response)
    return out


@dataclass
class AssessmentState:
    """Everything the session knows. Response lists are replaced, never edited in place,
    so earlier snapshots handed to the engine stay valid for change detection."""
    household_setup: HouseholdSetup = field(default_factory=HouseholdSetup)
    task_responses: List[TaskResponse] = field(default_factory=list)
    partner_task_responses: List[TaskResponse] = field(default_factory=list)
    current_responder: str = "me"
    insights: List[InsightEntry] = field(default_factory=list)
    discussion_notes: Dict[str, str] = field(default_factory=dict)

    def set_household_setup(self, setup: HouseholdSetup) -> None:
        self.household_setup = setup
        if not setup.is_together:
            self.current_responder = "me"

    def set_task_response(self, response: TaskResponse) -> None:
        self.task_responses = _upsert(self.task_responses, response)

    def set_partner_task_response(self, response: TaskResponse) -> None:
        self.partner_task_responses = _upsert(self.partner_task_responses, response)

    def set_response_for(self, responder: str, response: TaskResponse) -> None:
        if responder == "partner":
            self.set_partner_task_response(response)
        else:
            self.set_task_response(response)

    def save_answers(self, responder: str, drafts: Sequence[TaskResponse]) -> int:
        """Store submitted form answers, skipping unanswered tasks left at the form defaults."""
        saved = 0
        for r in drafts:
            if self.response_for(responder, r.task_id) is None and r == blank_form_response(r.task_id):
                continue
            self.set_response_for(responder, r)
            saved += 1
        logger.debug("Saved %d of %d answers for %s", saved, len(drafts), responder)
        return saved

    def responses_for(self, responder: str) -> List[TaskResponse]:
        return self.partner_task_responses if responder == "partner" else self.task_responses

    def response_for(self, responder: str, task_id: str) -> Optional[TaskResponse]:
        for r in self.responses_for(responder):
            if r.task_id == task_id:
                return r
        return None

    def set_current_responder(self, responder: str) -> None:
        if responder not in RESPONDERS:
            raise ValueError(f"Unknown responder: {responder}")
        self.current_responder = responder

    def add_insight(self, insight: InsightEntry) -> None:
        self.insights = [*self.insights, insight]

    def remove_insight(self, insight_id: str) -> None:
        self.insights = [i for i in self.insights if i.id != insight_id]

    def add_discussion_note(self, key: str, note: str) -> None:
        self.discussion_notes = {**self.discussion_notes, key: note}

    def completion(self, tasks: Sequence[Task], responder: str = "me") -> float:
        """Fraction of the given tasks that have an answer (including N/A)."""
        if not tasks:
            return 0.0
        answered = {r.task_id for r in self.responses_for(responder)}
        return sum(1 for t in tasks if t.id in answered) / len(tasks)

    def load_profile(self, setup: HouseholdSetup, mine: Sequence[TaskResponse],
                     theirs: Sequence[TaskResponse] = ()) -> None:
        self.household_setup = setup
        self.task_responses = list(mine)
        self.partner_task_responses = list(theirs)
        logger.info("Loaded profile with %d/%d responses", len(self.task_responses),
                    len(self.partner_task_responses))

    def reset(self) -> None:
        fresh = AssessmentState()
        for name in ("household_setup", "task_responses", "partner_task_responses",
                     "current_responder", "insights", "discussion_notes"):
            setattr(self, name, getattr(fresh, name))

