# Published findings used to put a household's numbers in context.
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class ResearchBenchmark:
    id: str
    description: str
    finding: str
    source: str
    year: int
    conditions: Tuple[str, ...] = ()


RESEARCH_BENCHMARKS: List[ResearchBenchmark] = [
    ResearchBenchmark(
        "global_unpaid_care_division", "Global unpaid care work division",
        "Women spend 4.3 hours/day on unpaid care work, men spend 1.6 hours/day",
        "UN Women & Pardee Center (2023)", 2023,
    ),
    ResearchBenchmark(
        "childcare_time_division", "Weekly childcare time division",
        "Women spend 31 hours/week on childcare, men spend 24 hours/week",
        "UN Women (2020) - Whose Time to Care?", 2020, ("has_children",),
    ),
    ResearchBenchmark(
        "household_division_after_childbirth", "Household task division after childbirth",
        "Women perform ~80% of household tasks after having children",
        "Régnier-Loilier (2009)", 2009, ("has_children",),
    ),
    ResearchBenchmark(
        "weekly_household_time_dual_earner", "Weekly household task time in dual-earner couples",
        "Women average 15 hrs/week, men average 6.8 hrs/week",
        "Stevens, Kiger, & Riley (2001)", 2001, ("dual_earner",),
    ),
    ResearchBenchmark(
        "invisible_labor_mothers", "Mental load and invisible household labor",
        'Mothers serve as "captains of households" carrying disproportionate cognitive labor',
        "Ciciolla & Luthar (2019)", 2019, ("has_children",),
    ),
]

# Stevens, Kiger, & Riley (2001), dual-earner couples.
RESEARCH_TIME_AVERAGES = {
    "higher_share_household_weekly": 15 * 60,
    "lower_share_household_weekly": int(6.8 * 60),
    "higher_share_percentage": 67,
    "lower_share_percentage": 33,
}


def applicable_benchmarks(setup) -> List[ResearchBenchmark]:
    dual_earner = setup.adults == 2 and setup.is_employed and setup.partner_employed
    out = []
    for b in RESEARCH_BENCHMARKS:
        if "has_children" in b.conditions and setup.children <= 0:
            continue
        if "dual_earner" in b.conditions and not dual_earner:
            continue
        out.append(b)
    return out


def compare_to_research_average(user_pct: float, research_pct: float) -> Dict[str, object]:
    difference = user_pct - research_pct
    if abs(difference) <= 5:
        interpretation, phrase = "typical", "aligns closely with"
    elif difference > 15:
        interpretation, phrase = "much_higher", "is significantly higher than"
    elif difference > 5:
        interpretation, phrase = "higher", "is moderately higher than"
    elif difference < -15:
        interpretation, phrase = "much_lower", "is significantly lower than"
    else:
        interpretation, phrase = "lower", "is moderately lower than"
    return {
        "difference": difference,
        "interpretation": interpretation,
        "message": f"Your {user_pct:g}% {phrase} research averages ({research_pct:g}%)",
    }
