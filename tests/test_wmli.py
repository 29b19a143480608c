from models import HouseholdSetup, LikertRating, TaskResponse
from wmli import calculate_wmli, interpret

COUPLE = HouseholdSetup.for_type("couple")
SINGLE = HouseholdSetup.for_type("single")


def _rated(task_id, assignment, burden, fairness, **kw):
    return TaskResponse(task_id, assignment, likert_rating=LikertRating(burden, fairness), **kw)


def test_strain_and_fairness_flags():
    out = calculate_wmli([_rated("household_planning", "me", 5, 1)], COUPLE)
    flags = out.my_flags
    assert flags.high_subjective_strain
    assert flags.fairness_risk
    assert flags.equity_priority
    assert flags.strain_tasks == ["household_planning"]
    assert flags.unfairness_tasks == ["household_planning"]
    assert out.my_wmli == 100
    assert out.my_unfairness == 100


def test_flags_require_majority_ownership():
    out = calculate_wmli([_rated("household_planning", "shared", 5, 1)], COUPLE)
    assert not out.my_flags.high_subjective_strain
    assert not out.my_flags.fairness_risk
    assert not out.partner_flags.high_subjective_strain


def test_partner_owned_tasks_flag_partner_only():
    out = calculate_wmli([_rated("daily_cooking", "partner", 4, 2)], COUPLE)
    assert not out.my_flags.equity_priority
    assert out.partner_flags.equity_priority
    assert out.partner_flags.strain_tasks == ["daily_cooking"]


def test_index_is_share_weighted_burden():
    out = calculate_wmli([_rated("household_planning", "shared", 3, 3)], COUPLE)
    assert out.my_wmli == 30
    assert out.partner_wmli == 30


def test_couple_disparity():
    responses = [
        _rated("household_planning", "me", 4, 4),
        _rated("daily_cooking", "partner", 2, 4),
    ]
    out = calculate_wmli(responses, COUPLE)

    assert out.my_wmli == 53
    assert out.partner_wmli == 13
    assert out.my_wmli_share == 80
    assert out.partner_wmli_share == 20

    d = out.disparity
    assert d.mental_load_gap == 60
    assert d.mental_load_ratio == 4.0
    assert d.overburdened == "me"
    assert d.high_equity_risk

    assert out.my_flags.high_subjective_strain
    assert not out.my_flags.fairness_risk
    assert not out.partner_flags.high_subjective_strain


def test_balanced_couple():
    responses = [
        _rated("household_planning", "shared", 3, 4),
        _rated("daily_cooking", "shared", 2, 4),
    ]
    d = calculate_wmli(responses, COUPLE).disparity
    assert d.mental_load_gap == 0
    assert d.mental_load_ratio == 1.0
    assert d.overburdened == "none"
    assert not d.high_equity_risk


def test_zero_load_couple():
    out = calculate_wmli([], COUPLE)
    assert out.my_wmli == 0
    assert out.partner_wmli == 0
    assert out.disparity.mental_load_gap == 0
    assert out.disparity.mental_load_ratio == 0.0
    assert out.disparity.overburdened == "none"


def test_single_adult_has_no_partner_fields():
    out = calculate_wmli([_rated("household_planning", "me", 4, 2)], SINGLE)
    assert out.partner_wmli is None
    assert out.partner_flags is None
    assert out.disparity is None
    assert out.my_wmli_share is None
    assert out.my_flags.equity_priority


def test_no_setup_treated_as_single():
    out = calculate_wmli([_rated("household_planning", "me", 4, 2)])
    assert out.disparity is None


def test_not_applicable_ignored():
    out = calculate_wmli([_rated("household_planning", "me", 5, 1, not_applicable=True)], COUPLE)
    assert out.my_wmli == 0
    assert not out.my_flags.high_subjective_strain


def test_interpretation_bands():
    assert interpret(0)[0] == "low"
    assert interpret(24)[0] == "low"
    assert interpret(25)[0] == "moderate"
    assert interpret(60)[0] == "high"
    assert interpret(80)[0] == "very-high"
    assert interpret(100)[0] == "very-high"


def test_minority_share_on_me_task_raises_no_flags():
    out = calculate_wmli([_rated("household_planning", "me", 5, 1, my_share_percentage=40)], COUPLE)
    assert not out.my_flags.high_subjective_strain
    assert not out.my_flags.fairness_risk
    assert not out.my_flags.equity_priority
    assert out.partner_flags.equity_priority
    assert out.my_wmli_share == 40
