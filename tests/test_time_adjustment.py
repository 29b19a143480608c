from models import TaskResponse
from time_adjustment import adjusted_minutes, effective_minutes, format_minutes, label, variation_explanation


def _resp(**kw):
    return TaskResponse(task_id="daily_cooking", assignment="me", **kw)


def test_adjustment_table():
    assert effective_minutes(_resp(time_adjustment="much_more"), 200) == 300
    assert effective_minutes(_resp(time_adjustment="much_less"), 200) == 100
    assert effective_minutes(_resp(time_adjustment="less"), 200) == 150
    assert effective_minutes(_resp(time_adjustment="more"), 200) == 250
    assert effective_minutes(_resp(time_adjustment="about_right"), 200) == 200


def test_rounds_to_nearest_minute():
    # 119 * 1.5 = 178.5 rounds up
    assert adjusted_minutes(119, "much_more") == 179
    # 45 * 0.75 = 33.75
    assert adjusted_minutes(45, "less") == 34


def test_adjustment_takes_precedence_over_estimate():
    r = _resp(time_adjustment="much_less", estimated_minutes=999)
    assert effective_minutes(r, 60) == 30


def test_estimate_used_when_no_adjustment():
    assert effective_minutes(_resp(estimated_minutes=42), 60) == 42
    assert effective_minutes(_resp(estimated_minutes=0), 60) == 0


def test_falls_back_to_baseline():
    assert effective_minutes(_resp(), 60) == 60


def test_unknown_tag_treated_as_about_right():
    assert effective_minutes(_resp(time_adjustment="way_more"), 80) == 80


def test_labels_and_formatting():
    assert label("much_more") == "Much More (+50%)"
    assert label("bogus", short=True) == "Baseline"
    assert format_minutes(45) == "45min"
    assert format_minutes(120) == "2h"
    assert format_minutes(329) == "5h 29min"


def test_variation_explanation():
    assert variation_explanation("much_more") == (
        "This task takes significantly more time in your household than typical research estimates.")
    assert variation_explanation(None) == "This task takes about the same time as typical research estimates."
