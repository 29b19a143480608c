from models import HouseholdSetup, LikertRating, TaskResponse
from reporting import METRIC_LABELS
from results_ui import distribution_figure, flag_rows
from scoring import calculate_results
from wmli import calculate_wmli

COUPLE = HouseholdSetup.for_type("couple")
SINGLE = HouseholdSetup.for_type("single")


def _rated(burden, fairness):
    return [TaskResponse("household_planning", "me", likert_rating=LikertRating(burden, fairness))]


def _labels(rows):
    return [row[0] for row in rows]


def test_solo_equity_priority_shown_when_raised():
    wmli = calculate_wmli(_rated(5, 1), SINGLE)
    rows = flag_rows(wmli, single_adult=True)
    assert "Equity priority" in _labels(rows)
    assert rows[-1][1] is True


def test_solo_equity_priority_hidden_when_clear():
    wmli = calculate_wmli(_rated(2, 4), SINGLE)
    assert _labels(flag_rows(wmli, single_adult=True)) == ["High subjective strain", "Fairness risk"]


def test_couple_always_sees_equity_line():
    wmli = calculate_wmli(_rated(2, 4), COUPLE)
    rows = flag_rows(wmli, single_adult=False)
    assert _labels(rows)[-1] == "Equity priority"
    assert rows[-1][1] is False


def test_distribution_figure_uses_metric_labels():
    results = calculate_results(COUPLE, _rated(3, 3))
    fig = distribution_figure(results)
    assert len(fig.data) == 2
    assert list(fig.data[0].y) == [METRIC_LABELS["visible"], METRIC_LABELS["mental"]]


def test_single_adult_distribution_has_one_trace():
    fig = distribution_figure(calculate_results(SINGLE, _rated(3, 3)))
    assert len(fig.data) == 1
