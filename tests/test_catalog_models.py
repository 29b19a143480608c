import pytest

from catalog import (
    ALL_TASKS,
    COGNITIVE_TASK_LOOKUP,
    PHYSICAL_TASK_LOOKUP,
    TASK_LOOKUP,
    CognitiveTask,
    PhysicalTask,
    _validate_catalog,
    mental_weight,
    relevant_tasks,
    task_name,
    tasks_by_category,
)
from models import HouseholdSetup, InsightEntry, LikertRating, TaskResponse, normalize_response, split_share


# -------------------- catalog --------------------
def test_lookups_cover_catalog():
    assert len(TASK_LOOKUP) == len(ALL_TASKS)
    assert set(PHYSICAL_TASK_LOOKUP).isdisjoint(COGNITIVE_TASK_LOOKUP)
    assert all(t.baseline_minutes_per_week > 0 for t in ALL_TASKS)


def test_mental_weights():
    assert mental_weight(TASK_LOOKUP["daily_cooking"]) == 1.0
    for task in COGNITIVE_TASK_LOOKUP.values():
        assert mental_weight(task) >= 1.0
    with pytest.raises(TypeError):
        mental_weight("daily_cooking")


def test_catalog_validation_rejects_bad_entries():
    with pytest.raises(ValueError):
        _validate_catalog([PhysicalTask("a", "A", "X", 10), PhysicalTask("a", "B", "X", 10)])
    with pytest.raises(ValueError):
        _validate_catalog([CognitiveTask("c", "C", "X", 10, 0.5)])
    with pytest.raises(ValueError):
        _validate_catalog([PhysicalTask("p", "P", "X", 10, condition_trigger=("has_boat",))])


def test_relevant_tasks_for_single_adult():
    ids = {t.id for t in relevant_tasks(HouseholdSetup.for_type("single"))}
    assert "daily_cooking" in ids
    assert "childcare_basic" not in ids
    assert "family_transport" not in ids
    assert "task_coordination" not in ids
    assert "pet_care" not in ids
    assert "work_family_juggling" not in ids


def test_relevant_tasks_follow_household():
    setup = HouseholdSetup.for_type("couple_with_children", children=2, has_pets=True,
                                    has_garden=True, partner_employed=True)
    ids = {t.id for t in relevant_tasks(setup)}
    assert {"childcare_basic", "family_awareness", "family_transport", "pet_care",
            "garden_upkeep", "work_family_juggling"} <= ids
    assert len(ids) == len(ALL_TASKS)


def test_tasks_by_category_and_names():
    grouped = tasks_by_category()
    assert sum(len(v) for v in grouped.values()) == len(ALL_TASKS)
    assert task_name("ironing") == "Ironing and garment care"
    assert task_name("nope") == "Unknown task"


# -------------------- models --------------------
def test_split_share_defaults():
    assert split_share("me") == (1.0, 0.0)
    assert split_share("partner") == (0.0, 1.0)
    assert split_share("shared") == (0.5, 0.5)
    assert split_share("shared", 30)[0] == pytest.approx(0.3)
    assert split_share("shared", 150) == (1.0, 0.0)
    assert split_share("someone") == (0.0, 0.0)


def test_normalize_response_applies_defaults():
    nr = normalize_response(TaskResponse("household_planning", "shared"))
    assert nr.my_share == 0.5
    assert nr.minutes == 90
    assert nr.weight == 2.0
    assert (nr.burden, nr.fairness) == (3, 3)


def test_normalize_response_clamps_ratings():
    nr = normalize_response(TaskResponse("daily_cooking", "me", likert_rating=LikertRating(9, 0)))
    assert (nr.burden, nr.fairness) == (5, 1)


def test_normalize_response_skips():
    assert normalize_response(TaskResponse("daily_cooking", "me", not_applicable=True)) is None
    assert normalize_response(TaskResponse("missing", "me")) is None
    assert normalize_response(TaskResponse("daily_cooking", "neighbour")) is None


def test_household_setup_validation():
    with pytest.raises(ValueError):
        HouseholdSetup(adults=3)
    with pytest.raises(ValueError):
        HouseholdSetup(children=-1)
    with pytest.raises(ValueError):
        HouseholdSetup(assessment_mode="together")
    with pytest.raises(ValueError):
        HouseholdSetup(household_type="commune")


def test_for_type_derives_adults():
    single = HouseholdSetup.for_type("single_parent", children=1)
    assert single.adults == 1 and not single.has_partner
    couple = HouseholdSetup.for_type("couple", adults=1, assessment_mode="together")
    assert couple.adults == 2 and couple.is_together
    other = HouseholdSetup.for_type("other", adults=1)
    assert not other.has_partner


def test_insight_entry_new():
    entry = InsightEntry.new("surprise", "  we both plan meals  ")
    assert entry.description == "we both plan meals"
    assert entry.id
    assert InsightEntry.new("rant", "x").kind == "breakthrough"
