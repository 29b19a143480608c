from __future__ import annotations
from typing import List, Sequence, Tuple

import plotly.graph_objects as go
import streamlit as st

from catalog import task_name
from models import TaskResponse
from prompts import ConversationPrompt, SHARED_VOCABULARY
from reporting import MAINTENANCE_PROMPT, METRIC_LABELS, find_imbalances, research_comparison, wmli_next_steps
from scoring import CalculatedResults
from time_adjustment import format_minutes
from wmli import WMLIResults

ME_COLOR = "#4C6EF5"
PARTNER_COLOR = "#F59F00"


# -------------------- Small helpers --------------------
def _mini_bar(label: str, value_0_100: int, help_text: str = ""):
    filled = max(0, min(10, int(value_0_100) // 10))
    blocks = "▓" * filled + "░" * (10 - filled)
    st.markdown(f"**{label}**  {blocks}  {value_0_100}/100")
    if help_text:
        st.caption(help_text)


def _flag_line(label: str, detected: bool, task_ids: Sequence[str], help_text: str):
    icon = "🔴" if detected else "🟢"
    st.markdown(f"{icon} **{label}** — {'Detected' if detected else 'Not detected'}")
    st.caption(help_text)
    if detected and task_ids:
        st.markdown(", ".join(f"`{task_name(t)}`" for t in task_ids))


def distribution_figure(results: CalculatedResults) -> go.Figure:
    metrics = [METRIC_LABELS["visible"], METRIC_LABELS["mental"]]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        name="You", y=metrics, orientation="h", marker_color=ME_COLOR,
        x=[results.my_visible_percentage, results.my_mental_percentage],
    ))
    if results.has_partner:
        fig.add_trace(go.Bar(
            name="Partner", y=metrics, orientation="h", marker_color=PARTNER_COLOR,
            x=[results.partner_visible_percentage, results.partner_mental_percentage],
        ))
    fig.update_layout(barmode="stack", height=220, margin=dict(l=10, r=10, t=10, b=10),
                      xaxis=dict(range=[0, 100], title="% of household total"))
    return fig


def category_figure(results: CalculatedResults) -> go.Figure:
    cats = list(results.categories)
    fig = go.Figure()
    fig.add_trace(go.Bar(name="You", x=cats, marker_color=ME_COLOR,
                         y=[results.categories[c].my_mental_load for c in cats]))
    if results.has_partner:
        fig.add_trace(go.Bar(name="Partner", x=cats, marker_color=PARTNER_COLOR,
                             y=[results.categories[c].partner_mental_load for c in cats]))
    fig.update_layout(barmode="group", height=340, margin=dict(l=10, r=10, t=10, b=10),
                      yaxis=dict(title="Mental load points/week"))
    return fig


# -------------------- Sections --------------------
def flag_rows(wmli: WMLIResults, single_adult: bool) -> List[Tuple[str, bool, List[str], str]]:
    """Flag lines for the WMLI section as (label, detected, task ids, help)."""
    flags = wmli.my_flags
    rows = [
        ("High subjective strain", flags.high_subjective_strain, flags.strain_tasks,
         "A task you mostly own rated 4/5 or more for burden."),
        ("Fairness risk", flags.fairness_risk, flags.unfairness_tasks,
         "A task you mostly own rated 2/5 or less for recognition."),
    ]
    # Solo respondents only see equity priority once it is raised.
    if not single_adult or flags.equity_priority:
        rows.append(("Equity priority", flags.equity_priority, [],
                     "Both flags at once. Time for a household conversation."))
    return rows


def render_results(results: CalculatedResults):
    st.subheader("Where things stand right now")
    if results.applicable_tasks == 0:
        st.info("Answer a few tasks to see your results.")
        return

    c1, c2 = st.columns(2)
    with c1:
        st.metric("Your visible time", format_minutes(results.my_visible_time) + "/week",
                  f"{results.my_visible_percentage}% of household" if results.has_partner else None,
                  delta_color="off")
    with c2:
        st.metric("Your mental load", f"{results.my_mental_load} pts/week",
                  f"{results.my_mental_percentage}% of household" if results.has_partner else None,
                  delta_color="off")

    if results.has_partner:
        c1, c2 = st.columns(2)
        with c1:
            st.metric("Partner visible time", format_minutes(results.partner_visible_time) + "/week")
        with c2:
            st.metric("Partner mental load", f"{results.partner_mental_load} pts/week")
        st.plotly_chart(distribution_figure(results), use_container_width=True)
        st.caption("Visible and mental shares don't have to match. When they diverge, that's invisible work.")

        comparison = research_comparison(results)
        if comparison:
            st.caption(str(comparison["message"]))

    _mini_bar("Overall load intensity", results.display_score,
              "Average of the time-based and rating-based task scores, each type counted once.")

    if results.categories:
        st.markdown("#### By category")
        st.plotly_chart(category_figure(results), use_container_width=True)

    gaps = results.perception_gaps
    if gaps is not None:
        st.markdown("#### Perception gaps")
        st.caption("How your partner's answers differ from yours (positive = partner thinks it's higher).")
        c1, c2 = st.columns(2)
        c1.metric("Your visible time", f"{gaps.my_visible_time_gap:+d} min")
        c1.metric("Your mental load", f"{gaps.my_mental_load_gap:+d} pts")
        c2.metric("Partner visible time", f"{gaps.partner_visible_time_gap:+d} min")
        c2.metric("Partner mental load", f"{gaps.partner_mental_load_gap:+d} pts")


def render_wmli(wmli: WMLIResults, single_adult: bool):
    st.subheader(METRIC_LABELS["wmli"])
    st.caption("Burden ratings weighted by how much of each task you own.")

    _mini_bar("Your WMLI", wmli.my_wmli)
    if wmli.partner_wmli is not None:
        _mini_bar("Partner's WMLI", wmli.partner_wmli)
    st.markdown(f"**Interpretation:** {wmli.interpretation_context}")

    for row in flag_rows(wmli, single_adult):
        _flag_line(*row)

    d = wmli.disparity
    if d is not None:
        st.markdown("#### Couple disparity")
        c1, c2 = st.columns(2)
        c1.metric("Mental load gap", f"{d.mental_load_gap:.0f} pts")
        c2.metric("Load ratio", f"{d.mental_load_ratio:.1f}:1" if d.mental_load_ratio else "—")
        st.caption({
            "me": "You carry more mental load.",
            "partner": "Your partner carries more mental load.",
            "none": "Reasonably balanced distribution.",
        }[d.overburdened])
        if d.high_equity_risk:
            st.error("High equity risk: large disparity. Priority for conversation and renegotiation.")

    st.markdown("#### Next steps")
    for step in wmli_next_steps(wmli):
        st.markdown(f"**{step['title']}** — {step['text']}")


def render_imbalances(results: CalculatedResults, wmli: WMLIResults, responses: List[TaskResponse]):
    single = not results.has_partner
    st.subheader("Tasks adding most to your mental load" if single else "Biggest imbalances between partners")
    items = find_imbalances(results, wmli, responses)
    if not items:
        st.success("Well-managed tasks!" if single else "Excellent partnership balance!")
        st.markdown(f"> {MAINTENANCE_PROMPT}")
        return
    for i, item in enumerate(items, start=1):
        with st.container(border=True):
            st.markdown(f"**#{i} {item['task_name']}**  ·  _{item['type']}_")
            st.info(item["insight"])
            st.markdown(f"> {item['prompt']}")


def render_prompts(prompts: List[ConversationPrompt]):
    st.subheader("Conversation prompts")
    for p in prompts:
        with st.expander(f"[{p.priority}] {p.title}", expanded=p.priority == "critical"):
            st.markdown(f"**{p.question}**")
            st.caption(p.context)
            for s in p.discussion_starters:
                st.markdown(f"- {s}")
            if p.action_prompts:
                st.markdown("**Try:**")
                for a in p.action_prompts:
                    st.markdown(f"- {a}")
            if p.shared_vocabulary:
                st.caption(" · ".join(p.shared_vocabulary))


def render_vocabulary():
    st.subheader("Shared vocabulary")
    for entry in SHARED_VOCABULARY.values():
        st.markdown(f"**{entry['term']}** — {entry['definition']}")
        st.caption("e.g. " + "; ".join(entry["examples"]))
