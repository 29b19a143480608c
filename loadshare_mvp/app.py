import logging
import sys
from pathlib import Path

# -------------------------------------------------------------------
# Ensure local modules are importable when launched via `streamlit run`
# -------------------------------------------------------------------
APP_DIR = Path(__file__).resolve().parent
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))

import streamlit as st

from settings import DEFAULT_APP_TITLE, configure_logging, get_bool_setting, get_setting
from catalog import is_cognitive, relevant_tasks, tasks_by_category
from models import HOUSEHOLD_TYPES, INSIGHT_KINDS, HouseholdSetup, InsightEntry, LikertRating, TaskResponse
from state import AssessmentState, share_slider_value
from scoring import calculate_results
from wmli import calculate_wmli
from prompts import generate_conversation_prompts
from reporting import INSIGHT_LABELS, build_markdown_report
from pdf_export import report_to_pdf_bytes
from profiles import DEMO_PROFILES, get_profile
from time_adjustment import TIME_ADJUSTMENT_ORDER, format_minutes, label, variation_explanation
from results_ui import render_imbalances, render_prompts, render_results, render_vocabulary, render_wmli


# -------------------- CONFIG --------------------
configure_logging()
logger = logging.getLogger("loadshare.app")

APP_TITLE = get_setting("LOADSHARE_APP_TITLE", DEFAULT_APP_TITLE)
SHOW_DEV_PROFILES = get_bool_setting("LOADSHARE_DEV_PROFILES", False)

st.set_page_config(page_title=APP_TITLE, layout="centered")

ASSIGNMENT_LABELS = {"me": "Me", "shared": "Shared", "partner": "Partner"}
HOUSEHOLD_LABELS = {
    "single": "Single adult",
    "single_parent": "Single parent",
    "couple": "Couple",
    "couple_with_children": "Couple with children",
    "other": "Other",
}


# -------------------- HELPERS --------------------
def get_state() -> AssessmentState:
    if "assessment" not in st.session_state:
        st.session_state["assessment"] = AssessmentState()
    return st.session_state["assessment"]


def _default_index(options, value, fallback=0):
    try:
        return options.index(value)
    except ValueError:
        return fallback


# -------------------- PAGES --------------------
def render_setup(state: AssessmentState):
    st.header("Your household")
    current = state.household_setup

    with st.form("household_setup"):
        household_type = st.selectbox(
            "Household type", HOUSEHOLD_TYPES,
            index=_default_index(HOUSEHOLD_TYPES, current.household_type),
            format_func=HOUSEHOLD_LABELS.get,
        )
        adults = st.radio("Adults (only used for 'Other')", [1, 2], index=current.adults - 1, horizontal=True)
        children = st.number_input("Children", min_value=0, max_value=12, value=current.children)
        c1, c2 = st.columns(2)
        has_pets = c1.checkbox("Pets", value=current.has_pets)
        has_garden = c2.checkbox("Garden", value=current.has_garden)
        is_employed = c1.checkbox("I'm employed", value=current.is_employed)
        partner_employed = c2.checkbox("Partner employed", value=current.partner_employed)
        together = st.checkbox(
            "Assess together (both adults answer separately)",
            value=current.is_together,
            help="Only available for two-adult households.",
        )

        if st.form_submit_button("Save household"):
            try:
                setup = HouseholdSetup.for_type(
                    household_type,
                    adults=adults,
                    children=int(children),
                    has_pets=has_pets,
                    has_garden=has_garden,
                    is_employed=is_employed,
                    partner_employed=partner_employed,
                    assessment_mode="together" if together else "solo",
                )
            except ValueError as e:
                st.error(str(e))
            else:
                state.set_household_setup(setup)
                st.success("Saved.")
                st.rerun()

    if SHOW_DEV_PROFILES:
        with st.expander("Demo profiles"):
            choice = st.selectbox("Profile", [p.id for p in DEMO_PROFILES],
                                  format_func=lambda pid: get_profile(pid).name)
            st.caption(get_profile(choice).description)
            if st.button("Load profile"):
                profile = get_profile(choice)
                mine, theirs = profile.generate()
                state.load_profile(profile.setup, mine, theirs)
                st.rerun()


def render_tasks(state: AssessmentState):
    setup = state.household_setup
    tasks = relevant_tasks(setup)

    responder = "me"
    if setup.is_together:
        responder = st.radio("Answering as", ["me", "partner"], horizontal=True,
                             index=0 if state.current_responder == "me" else 1,
                             format_func={"me": "Me", "partner": "My partner"}.get)
        state.set_current_responder(responder)

    st.header("Who does what?")
    st.progress(state.completion(tasks, responder), text="Tasks answered")

    assignments = ["me", "shared", "partner"] if setup.has_partner else ["me"]

    for category, cat_tasks in tasks_by_category(tasks).items():
        with st.expander(category):
            with st.form(f"tasks_{responder}_{category}"):
                drafts = {}
                for task in cat_tasks:
                    prev = state.response_for(responder, task.id)
                    rating = (prev.likert_rating if prev and prev.likert_rating else LikertRating())
                    st.markdown(f"**{task.name}**")
                    st.caption(f"{task.description} Typical: {format_minutes(task.baseline_minutes_per_week)}/week.")

                    na = st.checkbox("Not applicable", value=bool(prev and prev.not_applicable),
                                     key=f"{responder}_{task.id}_na")
                    assignment = st.radio(
                        "Who does it?", assignments,
                        index=_default_index(assignments, prev.assignment if prev else "me"),
                        horizontal=True, format_func=ASSIGNMENT_LABELS.get, key=f"{responder}_{task.id}_who",
                    )
                    share = None
                    if setup.has_partner:
                        share = st.slider("My share if shared (%)", 0, 100,
                                          share_slider_value(prev),
                                          step=5, key=f"{responder}_{task.id}_share")
                    adjustment = st.select_slider(
                        "Time compared to typical", TIME_ADJUSTMENT_ORDER,
                        value=(prev.time_adjustment if prev and prev.time_adjustment else "about_right"),
                        format_func=label, key=f"{responder}_{task.id}_time",
                    )
                    if prev and prev.time_adjustment not in (None, "about_right"):
                        st.caption(variation_explanation(prev.time_adjustment))
                    c1, c2 = st.columns(2)
                    burden = c1.slider("Burden (1-5)", 1, 5, int(rating.burden), key=f"{responder}_{task.id}_b")
                    fairness = c2.slider("Acknowledged (1-5)", 1, 5, int(rating.fairness),
                                         key=f"{responder}_{task.id}_f")
                    if is_cognitive(task):
                        st.caption("Invisible work: weighted as mental load.")

                    if assignment != "shared":
                        share = prev.my_share_percentage if prev and prev.assignment == assignment else None
                    drafts[task.id] = TaskResponse(
                        task_id=task.id,
                        assignment=assignment,
                        my_share_percentage=share,
                        time_adjustment=adjustment,
                        not_applicable=na,
                        likert_rating=LikertRating(burden=burden, fairness=fairness),
                    )
                    st.divider()

                if st.form_submit_button("Save answers"):
                    saved = state.save_answers(responder, list(drafts.values()))
                    st.success(f"Saved {saved} answers.")
                    st.rerun()


def render_results_page(state: AssessmentState):
    setup = state.household_setup
    results = calculate_results(setup, state.task_responses, state.partner_task_responses)
    wmli = calculate_wmli(state.task_responses, setup)

    st.header("Your mental load analysis")
    render_results(results)
    st.divider()
    if results.applicable_tasks:
        render_wmli(wmli, single_adult=not setup.has_partner)
        st.divider()
        render_imbalances(results, wmli, state.task_responses)


def render_discuss(state: AssessmentState):
    setup = state.household_setup
    results = calculate_results(setup, state.task_responses, state.partner_task_responses)
    wmli = calculate_wmli(state.task_responses, setup)

    st.header("Talk it through")
    render_prompts(generate_conversation_prompts(results, wmli, state.task_responses, setup))
    st.divider()

    st.subheader("Capture insights")
    with st.form("insight_capture"):
        kind = st.radio("Type", INSIGHT_KINDS, horizontal=True, format_func=INSIGHT_LABELS.get)
        description = st.text_area("What did you notice?", height=100)
        if st.form_submit_button("Add insight"):
            if description.strip():
                state.add_insight(InsightEntry.new(kind, description))
                st.rerun()
            else:
                st.info("Nothing to save.")

    for insight in reversed(state.insights):
        c1, c2 = st.columns([6, 1])
        c1.markdown(f"**{INSIGHT_LABELS.get(insight.kind, insight.kind)}** · {insight.description}")
        if c2.button("Remove", key=f"rm_{insight.id}"):
            state.remove_insight(insight.id)
            st.rerun()

    st.subheader("Discussion notes")
    with st.form("discussion_note"):
        topic = st.text_input("Topic")
        note = st.text_area("Notes", height=100)
        if st.form_submit_button("Save note"):
            if topic.strip() and note.strip():
                state.add_discussion_note(topic.strip(), note.strip())
                st.rerun()
            else:
                st.error("Topic and notes required.")

    st.divider()
    st.subheader("Export")
    markdown = build_markdown_report(results, setup, state.insights, state.discussion_notes, wmli)
    st.download_button("Download report (Markdown)", markdown,
                       file_name="household-discussion-report.md", mime="text/markdown")
    try:
        pdf = report_to_pdf_bytes(results, setup, wmli, state.insights, state.discussion_notes)
    except Exception as e:
        logger.exception("PDF export failed")
        st.error(f"Could not build the PDF: {e}")
    else:
        st.download_button("Download report (PDF)", pdf,
                           file_name="household-discussion-report.pdf", mime="application/pdf")


# -------------------- SIDEBAR --------------------
state = get_state()

with st.sidebar:
    st.header("LoadShare")
    page = st.radio(
        "Go to",
        ["Household", "Tasks", "Results", "Discuss", "Learn"],
        index=0
    )
    st.divider()
    if st.button("Start over"):
        state.reset()
        st.rerun()


# -------------------- HEADER --------------------
st.title(APP_TITLE)


# -------------------- ROUTING --------------------
if page == "Household":
    render_setup(state)
elif page == "Tasks":
    render_tasks(state)
elif page == "Results":
    render_results_page(state)
elif page == "Discuss":
    render_discuss(state)
else:
    render_vocabulary()
