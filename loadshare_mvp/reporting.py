from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from benchmarks import RESEARCH_TIME_AVERAGES, compare_to_research_average
from catalog import task_name
from models import HouseholdSetup, InsightEntry, TaskResponse
from scoring import CalculatedResults, normalize_all
from wmli import WMLIResults

IMBALANCE_GAP = 15
STRAIN_BURDEN = 4

METRIC_LABELS = {
    "visible": "Visible work",
    "mental": "Mental load",
    "wmli": "Weighted Mental Load Index",
}

INSIGHT_LABELS = {
    "breakthrough": "Breakthrough",
    "disagreement": "Disagreement",
    "surprise": "Surprise",
}

MAINTENANCE_PROMPT = "What's working well for us right now that we want to make sure we keep?"


def _split_phrase(pct: float) -> tuple:
    higher, lower = max(pct, 100 - pct), min(pct, 100 - pct)
    return round(higher), round(lower)


def find_imbalances(
    results: CalculatedResults,
    wmli: Optional[WMLIResults],
    responses: Sequence[TaskResponse] = (),
) -> List[Dict[str, Any]]:
    """Biggest imbalances between partners, or heaviest tasks for one adult."""
    items: List[Dict[str, Any]] = []

    if not results.has_partner:
        heavy = [nr for nr in normalize_all(responses) if nr.my_share > 0 and nr.burden >= STRAIN_BURDEN]
        heavy.sort(key=lambda nr: (nr.burden, -nr.fairness), reverse=True)
        for nr in heavy[:3]:
            items.append({
                "task_name": nr.task.name,
                "type": "High Burden",
                "insight": f"You rated this task {nr.burden:g}/5 for burden and {nr.fairness:g}/5 for recognition.",
                "prompt": "Could this task be simplified, outsourced, or done less often?",
                "priority": nr.burden,
            })
        return items

    if results.total_visible_time > 0:
        visible_gap = abs(results.my_visible_percentage - 50)
        if visible_gap >= IMBALANCE_GAP:
            who = "You" if results.my_visible_percentage > 50 else "Your partner"
            hi, lo = _split_phrase(results.my_visible_percentage)
            items.append({
                "task_name": "Overall Visible Work Distribution",
                "type": "High Responsibility Gap",
                "insight": f"{who} handle {hi}% of visible household work while the other partner "
                           f"handles {lo}%. This {visible_gap}-point gap creates significant imbalance.",
                "prompt": "How could we redistribute some visible tasks to create a more balanced split?",
                "priority": visible_gap,
            })

    if wmli is not None and wmli.my_wmli_share is not None and wmli.partner_wmli_share is not None \
            and (wmli.my_wmli_share + wmli.partner_wmli_share) > 0:
        mental_gap = abs(wmli.my_wmli_share - 50)
        if mental_gap >= IMBALANCE_GAP:
            who = "You" if wmli.my_wmli_share > 50 else "Your partner"
            hi, lo = _split_phrase(wmli.my_wmli_share)
            items.append({
                "task_name": "Overall Mental Load Distribution",
                "type": "Mental Load Imbalance",
                "insight": f"{who} carry {hi}% of the mental load while the other carries {lo}%. "
                           "This invisible work imbalance can create stress.",
                "prompt": "What planning and organizing tasks could be shared or redistributed?",
                "priority": mental_gap,
            })

    items.sort(key=lambda x: x["priority"], reverse=True)
    return items


def wmli_next_steps(wmli: WMLIResults) -> List[Dict[str, str]]:
    steps = []
    if wmli.my_flags.high_subjective_strain:
        steps.append({
            "title": "Address High-Strain Tasks",
            "text": "Focus on redistributing or reducing burden for tasks where you have high "
                    "responsibility and high burden ratings.",
        })
    if wmli.my_flags.fairness_risk:
        steps.append({
            "title": "Improve Recognition",
            "text": "Discuss how household contributions can be better acknowledged and appreciated.",
        })
    if wmli.disparity is not None and wmli.disparity.high_equity_risk:
        steps.append({
            "title": "Urgent Renegotiation",
            "text": "Schedule dedicated time to redistribute household responsibilities "
                    "and address fairness concerns.",
        })
    if not steps:
        steps.append({
            "title": "Maintain Current Approach",
            "text": "No major risk indicators detected. Continue regular check-ins to maintain balance.",
        })
    return steps


def build_headlines(results: CalculatedResults) -> Dict[str, Any]:
    """Categories where I carry the most and least of the mental load."""
    items = [(cat, s.my_percentage) for cat, s in results.categories.items() if s.task_count > 0]
    items.sort(key=lambda x: x[1], reverse=True)
    top = items[:3]
    bottom = list(reversed(items[-3:])) if len(items) >= 3 else items[-3:]
    return {"top": top, "bottom": bottom, "overall": results.display_score}


def research_comparison(results: CalculatedResults) -> Optional[Dict[str, object]]:
    if not results.has_partner or results.total_visible_time <= 0:
        return None
    if results.my_visible_percentage >= 50:
        reference = RESEARCH_TIME_AVERAGES["higher_share_percentage"]
    else:
        reference = RESEARCH_TIME_AVERAGES["lower_share_percentage"]
    return compare_to_research_average(results.my_visible_percentage, reference)


# -------------------- MARKDOWN EXPORT --------------------
def build_markdown_report(
    results: CalculatedResults,
    setup: HouseholdSetup,
    insights: Sequence[InsightEntry] = (),
    discussion_notes: Optional[Dict[str, str]] = None,
    wmli: Optional[WMLIResults] = None,
    generated_on: Optional[date] = None,
) -> str:
    generated_on = generated_on or date.today()
    notes = discussion_notes or {}
    lines: List[str] = [
        "# Household Work Discussion Report",
        f"Generated on {generated_on.isoformat()}",
        "",
        "## Your Household Overview",
        f"- Assessment Mode: {'Together' if setup.is_together else 'Solo'}",
        f"- Household Type: {setup.household_type.replace('_', ' ')}",
        f"- Applicable tasks: {results.applicable_tasks}",
        "",
        "## Key Findings",
        "",
        "### Visible Work Distribution",
        f"- Your visible work: {results.my_visible_time} min/week ({results.my_visible_percentage}%)",
    ]
    if results.has_partner:
        lines.append(f"- Partner's visible work: {results.partner_visible_time} min/week "
                     f"({results.partner_visible_percentage}%)")

    lines += [
        "",
        "### Mental Load Distribution",
        f"- Your mental load: {results.my_mental_load} points/week ({results.my_mental_percentage}%)",
    ]
    if results.has_partner:
        lines.append(f"- Partner's mental load: {results.partner_mental_load} points/week "
                     f"({results.partner_mental_percentage}%)")
        lines += [
            "",
            "### Workload Balance Analysis",
            f"- Mental load difference: {abs(results.my_mental_percentage - results.partner_mental_percentage)} point gap",
            f"- Visible work difference: {abs(results.my_visible_percentage - results.partner_visible_percentage)} point gap",
        ]

    if results.perception_gaps is not None:
        g = results.perception_gaps
        lines += [
            "",
            "### Perception Gaps (partner's view minus yours)",
            f"- Your visible time: {g.my_visible_time_gap:+d} min/week",
            f"- Your mental load: {g.my_mental_load_gap:+d} points/week",
            f"- Partner's visible time: {g.partner_visible_time_gap:+d} min/week",
            f"- Partner's mental load: {g.partner_mental_load_gap:+d} points/week",
        ]

    if wmli is not None:
        lines += [
            "",
            "### Weighted Mental Load Index",
            f"- Your WMLI: {wmli.my_wmli}/100 ({wmli.interpretation_level})",
            f"- {wmli.interpretation_context}",
        ]
        if wmli.partner_wmli is not None:
            lines.append(f"- Partner's WMLI: {wmli.partner_wmli}/100")
        if wmli.my_flags.strain_tasks:
            lines.append("- High-strain tasks: " + ", ".join(task_name(t) for t in wmli.my_flags.strain_tasks))
        if wmli.my_flags.unfairness_tasks:
            lines.append("- Fairness concerns: " + ", ".join(task_name(t) for t in wmli.my_flags.unfairness_tasks))
        if wmli.my_flags.equity_priority:
            lines.append("- **Equity priority:** time for a household conversation.")

    lines += ["", "## Discussion Insights"]
    if insights:
        for i in insights:
            suffix = f" ({i.task_name})" if i.task_name else ""
            lines.append(f"- **{INSIGHT_LABELS.get(i.kind, i.kind)}**: {i.description}{suffix}")
    else:
        lines.append("No specific insights captured during assessment.")

    lines += ["", "## Conversation Notes"]
    if notes:
        for key, note in notes.items():
            lines += [f"### {key}", note, ""]
    else:
        lines.append("No discussion notes recorded yet.")

    lines += [
        "",
        "## Ongoing Conversation Starters",
        '- "When you think about all the planning and organizing for our household, what feels most overwhelming?"',
        '- "What would \'fair\' distribution look like, considering our different schedules and preferences?"',
        '- "What\'s one task we could completely eliminate or simplify?"',
        "",
        "---",
        "*This report is designed to support ongoing conversations about household work. "
        "Revisit and update it regularly as your situation changes.*",
    ]
    return "\n".join(lines)
