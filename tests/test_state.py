import pytest

from catalog import TASK_LOOKUP
from models import HouseholdSetup, InsightEntry, LikertRating, TaskResponse
from state import AssessmentState, blank_form_response, share_slider_value


def test_upsert_replaces_list_and_keeps_snapshot():
    state = AssessmentState()
    state.set_task_response(TaskResponse("daily_cooking", "me"))
    snapshot = state.task_responses

    state.set_task_response(TaskResponse("daily_cooking", "shared", my_share_percentage=40))
    state.set_task_response(TaskResponse("ironing", "partner"))

    assert snapshot == [TaskResponse("daily_cooking", "me")]
    assert [r.task_id for r in state.task_responses] == ["daily_cooking", "ironing"]
    assert state.response_for("me", "daily_cooking").assignment == "shared"


def test_partner_answers_kept_apart():
    state = AssessmentState()
    state.set_response_for("partner", TaskResponse("daily_cooking", "me"))
    assert state.task_responses == []
    assert state.response_for("partner", "daily_cooking").assignment == "me"
    assert state.response_for("me", "daily_cooking") is None


def test_responder_validation_and_solo_reset():
    state = AssessmentState()
    state.set_household_setup(HouseholdSetup.for_type("couple", assessment_mode="together"))
    state.set_current_responder("partner")
    assert state.current_responder == "partner"

    with pytest.raises(ValueError):
        state.set_current_responder("grandma")

    state.set_household_setup(HouseholdSetup.for_type("couple"))
    assert state.current_responder == "me"


def test_completion_counts_answered_tasks():
    state = AssessmentState()
    tasks = [TASK_LOOKUP["daily_cooking"], TASK_LOOKUP["ironing"]]
    assert state.completion([]) == 0.0
    state.set_task_response(TaskResponse("ironing", "me", not_applicable=True))
    assert state.completion(tasks) == 0.5


def test_insights_and_notes():
    state = AssessmentState()
    entry = InsightEntry.new("disagreement", "Who books the dentist?")
    state.add_insight(entry)
    state.add_discussion_note("Planning", "Alternate weeks.")
    assert state.insights == [entry]
    assert state.discussion_notes == {"Planning": "Alternate weeks."}

    state.remove_insight(entry.id)
    assert state.insights == []


def test_reset_clears_everything():
    state = AssessmentState()
    state.load_profile(HouseholdSetup.for_type("couple", assessment_mode="together"),
                       [TaskResponse("daily_cooking", "me")], [TaskResponse("daily_cooking", "partner")])
    state.set_current_responder("partner")
    state.reset()
    assert state == AssessmentState()


def test_share_slider_keeps_zero_share():
    zero = TaskResponse("daily_cooking", "shared", my_share_percentage=0)
    assert share_slider_value(zero) == 0
    assert share_slider_value(TaskResponse("daily_cooking", "shared")) == 50
    assert share_slider_value(None) == 50


def test_resaving_untouched_zero_share_keeps_it():
    state = AssessmentState()
    state.set_task_response(TaskResponse("daily_cooking", "shared", my_share_percentage=0,
                                         time_adjustment="about_right", likert_rating=LikertRating()))
    prev = state.response_for("me", "daily_cooking")
    resubmitted = TaskResponse("daily_cooking", prev.assignment, my_share_percentage=share_slider_value(prev),
                               time_adjustment="about_right", likert_rating=LikertRating(3, 3))
    state.save_answers("me", [resubmitted])
    assert state.response_for("me", "daily_cooking").my_share_percentage == 0


def test_save_answers_skips_untouched_tasks():
    state = AssessmentState()
    tasks = [TASK_LOOKUP["daily_cooking"], TASK_LOOKUP["ironing"]]
    drafts = [
        blank_form_response("daily_cooking"),
        TaskResponse("ironing", "partner", time_adjustment="about_right", likert_rating=LikertRating()),
    ]
    assert state.save_answers("me", drafts) == 1
    assert state.response_for("me", "daily_cooking") is None
    assert state.completion(tasks) == 0.5


def test_save_answers_keeps_existing_answers_reset_to_defaults():
    state = AssessmentState()
    state.set_partner_task_response(TaskResponse("daily_cooking", "partner"))
    assert state.save_answers("partner", [blank_form_response("daily_cooking")]) == 1
    assert state.response_for("partner", "daily_cooking").assignment == "me"
    assert state.task_responses == []
