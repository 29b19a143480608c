# Canonical task catalog for LoadShare.
# Keep IDs stable: responses reference tasks by id.
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

# -------------------- CATEGORIES --------------------
PHYSICAL_CATEGORIES = {
    "COOKING": "Cooking & Food Prep",
    "CLEANING": "Cleaning & Housework",
    "LAUNDRY": "Laundry",
    "CHILDCARE_BASIC": "Basic Childcare",
    "CHILDCARE_EDUCATIONAL": "Educational Childcare",
    "SHOPPING": "Shopping",
    "TRAVEL": "Family Travel & Transport",
    "PETS": "Pet Care",
    "GARDEN": "Garden & Outdoor",
}

COGNITIVE_CATEGORIES = {
    "ANTICIPATION": "Anticipation",
    "IDENTIFICATION": "Identification",
    "DECISION_MAKING": "Decision-making",
    "MONITORING": "Monitoring",
    "EMOTIONAL_LABOUR": "Emotional Labour",
}

CONDITION_TRIGGERS = ("all", "two_adults", "has_children", "has_pets", "has_garden", "is_employed")

PHYSICAL_WEIGHT = 1.0


@dataclass(frozen=True)
class PhysicalTask:
    id: str
    name: str
    category: str
    baseline_minutes_per_week: int
    condition_trigger: Tuple[str, ...] = ("all",)
    description: str = ""
    source: str = "UK Time Use Survey 2024"
    measurement_type: str = "time"


@dataclass(frozen=True)
class CognitiveTask:
    id: str
    name: str
    category: str
    baseline_minutes_per_week: int
    mental_load_weight: float
    condition_trigger: Tuple[str, ...] = ("all",)
    description: str = ""
    source: str = "Mental Load Research"
    measurement_type: str = "likert"


Task = Union[PhysicalTask, CognitiveTask]


def mental_weight(task: Task) -> float:
    """Catalog-declared mental load multiplier (physical tasks are fixed at 1.0)."""
    if isinstance(task, CognitiveTask):
        return float(task.mental_load_weight)
    if isinstance(task, PhysicalTask):
        return PHYSICAL_WEIGHT
    raise TypeError(f"Unknown task variant: {task!r}")


def is_cognitive(task: Task) -> bool:
    return isinstance(task, CognitiveTask)


_P = PHYSICAL_CATEGORIES
_C = COGNITIVE_CATEGORIES

PHYSICAL_TASKS: List[PhysicalTask] = [
    # ---- Cooking & shopping ----
    PhysicalTask(
        "daily_cooking", "Daily cooking and meal preparation", _P["COOKING"], 329,  # ~47 min/day
        description="Preparing meals, cooking, serving food, and basic food preparation tasks.",
    ),
    PhysicalTask(
        "food_shopping", "Grocery shopping and food purchasing", _P["SHOPPING"], 119,  # ~17 min/day
        description="Shopping for groceries, food items, and household consumables.",
    ),
    # ---- Cleaning ----
    PhysicalTask(
        "general_cleaning", "General housework and cleaning", _P["CLEANING"], 203,  # ~29 min/day
        description="Vacuuming, dusting, tidying, and general upkeep of living spaces.",
    ),
    PhysicalTask(
        "kitchen_cleanup", "Kitchen cleaning and dish washing", _P["CLEANING"], 140,  # ~20 min/day
        description="Washing dishes, loading the dishwasher, wiping surfaces after meals.",
    ),
    PhysicalTask(
        "bathroom_cleaning", "Bathroom cleaning and maintenance", _P["CLEANING"], 60,
        description="Cleaning toilets, sinks, showers, and restocking bathroom supplies.",
    ),
    # ---- Laundry ----
    PhysicalTask(
        "laundry_washing", "Washing, drying, and folding laundry", _P["LAUNDRY"], 84,  # ~12 min/day
        description="Sorting, washing, drying, folding, and putting away clothes and linens.",
    ),
    PhysicalTask(
        "ironing", "Ironing and garment care", _P["LAUNDRY"], 45,
        description="Ironing, mending, and caring for garments.",
    ),
    # ---- Childcare ----
    PhysicalTask(
        "childcare_basic", "Basic childcare (feeding, bathing, dressing)", _P["CHILDCARE_BASIC"], 455,
        condition_trigger=("has_children",),
        description="Feeding, bathing, dressing, and putting children to bed.",
    ),
    PhysicalTask(
        "childcare_transport", "Transporting children to activities", _P["TRAVEL"], 168,
        condition_trigger=("has_children",),
        description="School runs, driving to clubs, playdates, and appointments.",
    ),
    PhysicalTask(
        "childcare_educational", "Educational activities and play with children", _P["CHILDCARE_EDUCATIONAL"], 252,
        condition_trigger=("has_children",),
        description="Reading, homework help, and play with children.",
    ),
    # ---- Errands & travel ----
    PhysicalTask(
        "household_shopping", "Non-food shopping and errands", _P["SHOPPING"], 90,
        description="Buying clothes, household goods, and running errands.",
    ),
    PhysicalTask(
        "family_transport", "Family-related travel and transportation", _P["TRAVEL"], 120,
        condition_trigger=("two_adults",),
        description="Travel for family purposes beyond childcare transport.",
    ),
    # ---- Pets & garden ----
    PhysicalTask(
        "pet_care", "Feeding, walking, and grooming pets", _P["PETS"], 180,
        condition_trigger=("has_pets",),
        description="Daily feeding, walks, litter, grooming, and vet visits.",
    ),
    PhysicalTask(
        "garden_upkeep", "Gardening and outdoor maintenance", _P["GARDEN"], 90,
        condition_trigger=("has_garden",),
        description="Mowing, weeding, planting, and keeping outdoor spaces tidy.",
    ),
]

COGNITIVE_TASKS: List[CognitiveTask] = [
    # ---- Anticipation & planning ----
    CognitiveTask(
        "household_planning", "Planning meals, schedules, and household logistics", _C["ANTICIPATION"], 90, 2.0,
        description="Planning weekly meals, coordinating family schedules, booking appointments, "
                    "and thinking ahead about household needs.",
        source="Daminger (2019) - The Cognitive Dimension of Household Labor",
    ),
    CognitiveTask(
        "seasonal_planning", "Seasonal and special event planning", _C["ANTICIPATION"], 30, 1.5,
        description="Planning for seasonal changes, holidays, special events, and future household needs.",
        source="Offer (2006) - The Challenge of Affluence",
    ),
    # ---- Identification ----
    CognitiveTask(
        "household_monitoring", "Noticing household needs and supply levels", _C["IDENTIFICATION"], 60, 2.0,
        description="Scanning for what needs attention: supplies running low, cleanliness, repairs.",
        source="Ciciolla & Luthar (2019) - Invisible Household Labor",
    ),
    CognitiveTask(
        "family_awareness", "Monitoring family members' needs and changes", _C["IDENTIFICATION"], 60, 2.5,
        condition_trigger=("has_children",),
        description="Tracking children's development, moods, health, friendships, and school needs.",
        source="Ciciolla & Luthar (2019) - Invisible Household Labor",
    ),
    # ---- Decision-making ----
    CognitiveTask(
        "major_decisions", "Making major household and family decisions", _C["DECISION_MAKING"], 30, 2.0,
        description="Researching and deciding on finances, schools, large purchases, and moves.",
        source="Daminger (2019) - The Cognitive Dimension of Household Labor",
    ),
    CognitiveTask(
        "daily_priorities", "Managing daily priorities and task coordination", _C["DECISION_MAKING"], 60, 1.5,
        description="Deciding what needs doing today and who does it.",
        source="Daminger (2019) - The Cognitive Dimension of Household Labor",
    ),
    # ---- Monitoring ----
    CognitiveTask(
        "administrative_management", "Managing appointments, deadlines, and administration", _C["MONITORING"], 45, 2.0,
        description="Bills, forms, renewals, appointments, and paperwork deadlines.",
        source="Mental Load Studies",
    ),
    CognitiveTask(
        "task_coordination", "Following up on delegated tasks and projects", _C["MONITORING"], 30, 1.5,
        condition_trigger=("two_adults",),
        description="Reminding, checking, and following through on tasks handed to others.",
        source="Mental Load Studies",
    ),
    CognitiveTask(
        "work_family_juggling", "Juggling paid work around household needs", _C["MONITORING"], 45, 2.0,
        condition_trigger=("is_employed",),
        description="Rearranging work commitments for sick days, school closures, and deliveries.",
        source="Mental Load Studies",
    ),
    # ---- Emotional labour ----
    CognitiveTask(
        "emotional_support", "Providing emotional support to family members", _C["EMOTIONAL_LABOUR"], 90, 2.5,
        description="Listening, reassuring, and managing the emotional climate of the household.",
        source="Hochschild (1983) - The Managed Heart",
    ),
    CognitiveTask(
        "social_coordination", "Managing social relationships and celebrations", _C["EMOTIONAL_LABOUR"], 45, 1.5,
        description="Remembering birthdays, buying gifts, and keeping in touch with family and friends.",
        source="Hochschild (1983) - The Managed Heart",
    ),
]

ALL_TASKS: List[Task] = [*PHYSICAL_TASKS, *COGNITIVE_TASKS]


def _validate_catalog(tasks: List[Task]):
    seen = set()
    for t in tasks:
        if t.id in seen:
            raise ValueError(f"Duplicate task id: {t.id}")
        seen.add(t.id)
        if t.baseline_minutes_per_week <= 0:
            raise ValueError(f"Task {t.id} must have a positive baseline")
        if isinstance(t, CognitiveTask) and t.mental_load_weight < 1:
            raise ValueError(f"Task {t.id} mental_load_weight must be >= 1")
        for trig in t.condition_trigger:
            if trig not in CONDITION_TRIGGERS:
                raise ValueError(f"Task {t.id} has unknown condition trigger: {trig}")


_validate_catalog(ALL_TASKS)

PHYSICAL_TASK_LOOKUP: Dict[str, PhysicalTask] = {t.id: t for t in PHYSICAL_TASKS}
COGNITIVE_TASK_LOOKUP: Dict[str, CognitiveTask] = {t.id: t for t in COGNITIVE_TASKS}
TASK_LOOKUP: Dict[str, Task] = {t.id: t for t in ALL_TASKS}


def _trigger_matches(trigger: str, setup) -> bool:
    if trigger == "all":
        return True
    if trigger == "two_adults":
        return setup.adults == 2
    if trigger == "has_children":
        return setup.children > 0
    if trigger == "has_pets":
        return setup.has_pets
    if trigger == "has_garden":
        return setup.has_garden
    if trigger == "is_employed":
        return setup.is_employed or setup.partner_employed
    return False


def relevant_tasks(setup, tasks: List[Task] | None = None) -> List[Task]:
    """Tasks whose condition triggers apply to this household."""
    pool = ALL_TASKS if tasks is None else tasks
    return [t for t in pool if any(_trigger_matches(c, setup) for c in t.condition_trigger)]


def tasks_by_category(tasks: List[Task] | None = None) -> Dict[str, List[Task]]:
    grouped: Dict[str, List[Task]] = {}
    for t in (ALL_TASKS if tasks is None else tasks):
        grouped.setdefault(t.category, []).append(t)
    return grouped


def task_name(task_id: str) -> str:
    t = TASK_LOOKUP.get(task_id)
    return t.name if t else "Unknown task"
