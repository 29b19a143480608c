from datetime import date

from benchmarks import applicable_benchmarks, compare_to_research_average
from models import HouseholdSetup, InsightEntry, LikertRating, TaskResponse
from pdf_export import report_to_pdf_bytes
from prompts import PRIORITY_ORDER, generate_conversation_prompts
from reporting import build_headlines, build_markdown_report, find_imbalances, wmli_next_steps
from scoring import calculate_results
from wmli import calculate_wmli

COUPLE = HouseholdSetup.for_type("couple", is_employed=True, partner_employed=True)
TOGETHER = HouseholdSetup.for_type("couple", assessment_mode="together")
SINGLE = HouseholdSetup.for_type("single")


def _mine(assignment="me", burden=4, fairness=2):
    ids = ["daily_cooking", "general_cleaning", "household_planning", "emotional_support", "major_decisions"]
    return [TaskResponse(t, assignment, time_adjustment="about_right",
                         likert_rating=LikertRating(burden, fairness)) for t in ids]


def _analyse(setup, responses, partner=None):
    return calculate_results(setup, responses, partner), calculate_wmli(responses, setup)


# -------------------- imbalances --------------------
def test_imbalances_for_overloaded_couple():
    results, wmli = _analyse(COUPLE, _mine())
    items = find_imbalances(results, wmli, _mine())
    assert {i["type"] for i in items} == {"High Responsibility Gap", "Mental Load Imbalance"}


def test_balanced_couple_has_no_imbalances():
    responses = _mine("shared", burden=2, fairness=4)
    results, wmli = _analyse(COUPLE, responses)
    assert find_imbalances(results, wmli, responses) == []
    assert wmli_next_steps(wmli)[0]["title"] == "Maintain Current Approach"


def test_single_adult_imbalances_are_heavy_tasks():
    responses = _mine(burden=5)
    results, wmli = _analyse(SINGLE, responses)
    items = find_imbalances(results, wmli, responses)
    assert len(items) == 3
    assert all(i["type"] == "High Burden" for i in items)


def test_next_steps_follow_flags():
    results, wmli = _analyse(COUPLE, _mine())
    titles = [s["title"] for s in wmli_next_steps(wmli)]
    assert titles == ["Address High-Strain Tasks", "Improve Recognition", "Urgent Renegotiation"]


def test_headlines_rank_categories():
    results, _ = _analyse(COUPLE, _mine())
    headlines = build_headlines(results)
    assert headlines["overall"] == results.display_score
    assert all(pct == 100 for _, pct in headlines["top"])


# -------------------- prompts --------------------
def test_overloaded_prompts_start_critical():
    responses = _mine()
    results, wmli = _analyse(COUPLE, responses)
    prompts = generate_conversation_prompts(results, wmli, responses, COUPLE)
    ids = [p.id for p in prompts]

    assert prompts[0].priority == "critical"
    assert "mental_load_imbalance" in ids
    assert "equity_priority" in ids
    assert ids[-1] in ("emotional_checkin", "future_planning")
    ranks = [PRIORITY_ORDER[p.priority] for p in prompts]
    assert ranks == sorted(ranks)


def test_partner_carries_most_prompt():
    responses = _mine("partner", burden=2, fairness=4)
    results, wmli = _analyse(COUPLE, responses)
    ids = [p.id for p in generate_conversation_prompts(results, wmli, responses, COUPLE)]
    assert "partner_carries_most" in ids
    assert "mental_load_imbalance" not in ids


def test_single_adult_gets_generic_prompts():
    responses = _mine(burden=2, fairness=4)
    results, wmli = _analyse(SINGLE, responses)
    prompts = generate_conversation_prompts(results, wmli, responses, SINGLE)
    ids = {p.id for p in prompts}
    assert {"emotional_checkin", "fair_distribution", "future_planning"} <= ids
    assert "mental_load_imbalance" not in ids


def test_time_discrepancy_prompt():
    responses = [TaskResponse("daily_cooking", "shared", time_adjustment="much_more")]
    results, wmli = _analyse(COUPLE, responses)
    ids = [p.id for p in generate_conversation_prompts(results, wmli, responses, COUPLE)]
    assert "time_discrepancies" in ids


# -------------------- benchmarks --------------------
def test_research_comparison():
    assert compare_to_research_average(68, 67)["interpretation"] == "typical"
    assert compare_to_research_average(90, 67)["interpretation"] == "much_higher"
    assert compare_to_research_average(55, 67)["interpretation"] == "lower"


def test_benchmarks_depend_on_household():
    ids = {b.id for b in applicable_benchmarks(SINGLE)}
    assert ids == {"global_unpaid_care_division"}
    ids = {b.id for b in applicable_benchmarks(COUPLE)}
    assert "weekly_household_time_dual_earner" in ids


# -------------------- exports --------------------
def test_markdown_report_for_couple():
    responses = _mine()
    partner = [TaskResponse("daily_cooking", "shared", time_adjustment="about_right")]
    results, wmli = _analyse(TOGETHER, responses, partner)
    insight = InsightEntry.new("surprise", "Planning takes longer than we thought")
    md = build_markdown_report(results, TOGETHER, [insight], {"Meals": "Swap planning weekly"},
                               wmli, generated_on=date(2024, 5, 1))

    assert md.startswith("# Household Work Discussion Report")
    assert "Generated on 2024-05-01" in md
    assert "- Assessment Mode: Together" in md
    assert "Partner's visible work" in md
    assert "### Perception Gaps" in md
    assert "**Surprise**: Planning takes longer than we thought" in md
    assert "### Meals" in md


def test_markdown_report_for_single_adult():
    responses = _mine()
    results, wmli = _analyse(SINGLE, responses)
    md = build_markdown_report(results, SINGLE, wmli=wmli)
    assert "Partner's" not in md
    assert "No specific insights captured" in md
    assert "No discussion notes recorded yet." in md


def test_pdf_export_produces_pdf():
    responses = _mine()
    results, wmli = _analyse(COUPLE, responses)
    pdf = report_to_pdf_bytes(results, COUPLE, wmli, [InsightEntry.new("breakthrough", "R&D <ok>")],
                              {"Chores": "Rota"})
    assert pdf.startswith(b"%PDF")
