from __future__ import annotations
import logging
import os
import streamlit as st
import pandas as pd
from datetime import date
from dotenv import load_dotenv

from calendar_export import plan_to_ics
from calendar_import import parse_ics_unavailable_dates
from calendar_view import CalendarView, DayCell, REASON_OVERRIDE
from errors import InvalidRange, PreconditionViolation
from exams import (
    PRIORITIES,
    average_progress,
    countdown_label,
    days_until,
    new_exam,
    next_exam,
    remove_exam,
    set_progress,
    sort_exams,
)
from learning_style import QUESTIONS, STYLE_INFO, score_assessment, style_label
from models import LearningStyleResult, Preferences, ProfileState, Weekday
from pdf_export import study_plan_to_pdf
from planner import generate_study_plan, plan_horizon_end
from profiles import (
    create_profile,
    delete_profile,
    list_profiles,
    load_profile,
    save_profile,
)

load_dotenv()
logging.basicConfig(
    level=os.environ.get("STUDY_CALENDAR_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

GRID_HEADER = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

st.set_page_config(page_title="Study Calendar", page_icon="📅", layout="wide")


def _ensure_session_state() -> list[str]:
    profiles = list_profiles()

    if "profile_name" not in st.session_state or st.session_state.profile_name not in profiles:
        st.session_state.profile_name = profiles[0]

    if "state" not in st.session_state:
        st.session_state.state = load_profile(st.session_state.profile_name)

    # The plan is session-only and replaced wholesale on each generation
    st.session_state.setdefault("events", [])
    st.session_state.setdefault("plan_start", None)
    st.session_state.setdefault("view_month", (date.today().year, date.today().month))
    return profiles


def _switch_profile(name: str) -> None:
    logger.info("Switching to profile %r", name)
    st.session_state.profile_name = name
    st.session_state.state = load_profile(name)
    st.session_state.events = []
    st.session_state.plan_start = None


def _queue_toast(message: str) -> None:
    st.session_state.toast_message = message


def _flush_toast() -> None:
    message = st.session_state.pop("toast_message", None)
    if message:
        st.toast(message)


def _save(message: str | None = None) -> None:
    save_profile(current_profile, st.session_state.state)
    if message:
        st.toast(message)


def _render_subjects(prefs: Preferences) -> None:
    st.subheader("Subjects to study")
    with st.form("add_subject_form", clear_on_submit=True):
        col_name, col_add = st.columns([4, 1])
        with col_name:
            name = st.text_input("Subject", placeholder="e.g. Maths Paper 2")
        with col_add:
            submitted = st.form_submit_button("Add subject")
        if submitted:
            if not name.strip():
                st.warning("Subject name is required.")
            elif name.strip() in prefs.subjects:
                st.info("That subject is already in the list.")
            else:
                prefs.add_subject(name)
                _save("Subject added.")

    if not prefs.subjects:
        st.info("No subjects yet.")
        return

    st.caption("Subjects rotate in this order, one per available day.")
    for subject in list(prefs.subjects):
        col_label, col_remove = st.columns([4, 1])
        col_label.write(subject)
        if col_remove.button("Remove", key=f"remove_subject_{subject}"):
            prefs.remove_subject(subject)
            _save()
            _queue_toast(f"Removed {subject}.")
            st.rerun()


def _render_availability(prefs: Preferences) -> None:
    st.subheader("Weekly availability")
    for day in Weekday:
        slot = prefs.slot_for(day)
        col_check, col_start, col_end = st.columns([1, 1, 1])
        with col_check:
            enabled = st.checkbox(day.value, value=slot is not None, key=f"avail_{current_profile}_{day.value}")
        if enabled != (slot is not None):
            prefs.toggle_weekday_availability(day, enabled)
            _save()
            st.rerun()
        if slot is None:
            continue
        with col_start:
            start = st.time_input("Start", value=slot.start, key=f"start_{current_profile}_{day.value}", step=900)
        with col_end:
            end = st.time_input("End", value=slot.end, key=f"end_{current_profile}_{day.value}", step=900)
        if (start, end) != (slot.start, slot.end):
            try:
                prefs.set_availability(day, start, end)
            except InvalidRange as e:
                st.error(str(e))
            else:
                _save()


def _render_unavailable_dates(prefs: Preferences) -> None:
    st.subheader("Unavailable dates")
    st.caption("Blocked dates are skipped even when the weekday is available.")
    with st.form("add_unavailable_form", clear_on_submit=True):
        col_date, col_add = st.columns([4, 1])
        with col_date:
            blocked = st.date_input("Date", value=date.today())
        with col_add:
            if st.form_submit_button("Block date"):
                prefs.add_unavailable_date(blocked)
                _save("Date blocked.")

    uploaded = st.file_uploader("Import busy days from .ics", type=["ics"], key="ics_upload")
    if uploaded and st.button("Block imported days"):
        try:
            imported = parse_ics_unavailable_dates(uploaded.read())
        except ValueError as e:
            st.error(f"Could not read ICS file: {e}")
        else:
            if not imported:
                st.warning("No events found in this file.")
            else:
                before = len(prefs.unavailable_dates)
                for d in imported:
                    prefs.add_unavailable_date(d)
                _save(f"Blocked {len(prefs.unavailable_dates) - before} new dates.")

    if not prefs.unavailable_dates:
        st.info("No blocked dates.")
        return

    for d in sorted(prefs.unavailable_dates):
        col_label, col_remove = st.columns([4, 1])
        col_label.write(d.strftime("%a %d %b %Y"))
        if col_remove.button("Remove", key=f"remove_date_{d.isoformat()}"):
            prefs.remove_unavailable_date(d)
            _save()
            st.rerun()


def render_setup(prefs: Preferences) -> None:
    st.header("Setup your study plan")

    _render_subjects(prefs)
    st.divider()

    st.subheader("Daily study duration")
    hours = st.number_input("Hours per day", min_value=1, max_value=12, value=max(1, min(12, prefs.study_duration)))
    if int(hours) != prefs.study_duration:
        prefs.set_daily_duration(int(hours))
        _save()
    st.divider()

    _render_availability(prefs)
    st.divider()
    _render_unavailable_dates(prefs)
    st.divider()

    start_date = st.date_input("Plan start", value=st.session_state.plan_start or date.today())
    st.caption(f"Plan runs {start_date.isoformat()} to {plan_horizon_end(start_date).isoformat()}.")
    if st.button("Generate my study calendar", type="primary", disabled=not prefs.can_generate()):
        try:
            events = generate_study_plan(prefs, start_date)
        except PreconditionViolation as e:
            st.error(str(e))
        else:
            st.session_state.events = events
            st.session_state.plan_start = start_date
            st.session_state.view_month = (start_date.year, start_date.month)
            st.session_state.goto_page = "Calendar"
            _queue_toast(f"Plan generated: {len(events)} study sessions.")
            st.rerun()


def _cell_label(cell: DayCell) -> str:
    if cell.day is None:
        return ""
    lines = [f"**{cell.day.day}**"]
    if cell.unavailable:
        lines.append("Unavailable" if cell.reason == REASON_OVERRIDE else "Day off")
    else:
        lines.extend(f"{ev.subject.split(' ')[0]} study" for ev in cell.events)
    if cell.overflow:
        lines.append(f"+{cell.overflow} more")
    return "  \n".join(lines)


def _shift_month(delta: int) -> None:
    year, month = st.session_state.view_month
    index = year * 12 + (month - 1) + delta
    st.session_state.view_month = (index // 12, index % 12 + 1)


def _render_day_detail(view: CalendarView, selected: date) -> None:
    st.subheader(selected.strftime("%A, %d %B %Y"))
    events = view.events_for_date(selected)
    if events:
        for ev in events:
            st.markdown(f"**{ev.subject}**")
            st.caption(f"{ev.time_window} ({ev.duration}h)")
            for task in ev.tasks:
                st.write(f"- {task}")
        return

    reason = view.unavailable_reason(selected)
    if reason == REASON_OVERRIDE:
        st.error("You marked this day as unavailable.")
    elif reason is not None:
        st.error("This day of the week is not in your available schedule.")
    else:
        st.info("No study sessions scheduled for this date.")


def render_calendar(prefs: Preferences) -> None:
    st.header("Your study calendar")
    events = st.session_state.events
    if st.session_state.plan_start is None:
        st.info("Generate a plan on the Setup page first.")
        return

    view = CalendarView(prefs, events)
    year, month = st.session_state.view_month

    col_prev, col_title, col_next = st.columns([1, 4, 1])
    if col_prev.button("◀ Prev"):
        _shift_month(-1)
        st.rerun()
    col_title.subheader(date(year, month, 1).strftime("%B %Y"))
    if col_next.button("Next ▶"):
        _shift_month(1)
        st.rerun()

    header = st.columns(7)
    for col, label in zip(header, GRID_HEADER):
        col.markdown(f"**{label}**")
    for week in view.weeks(year, month):
        cols = st.columns(7)
        for col, cell in zip(cols, week):
            if cell.day is None:
                col.write("")
                continue
            with col.container(border=True):
                st.markdown(_cell_label(cell))
                if st.button("View", key=f"view_{cell.day.isoformat()}"):
                    st.session_state.selected_date = cell.day

    st.divider()
    selected = st.session_state.get("selected_date")
    if selected:
        _render_day_detail(view, selected)

    with st.expander("All sessions this month", expanded=False):
        rows = [
            {
                "Date": ev.day,
                "Day": ev.day.strftime("%a"),
                "Subject": ev.subject,
                "Time": ev.time_window,
                "Hours": ev.duration,
                "Tasks": ", ".join(ev.tasks),
            }
            for ev in events
            if (ev.day.year, ev.day.month) == (year, month)
        ]
        if rows:
            st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)
        else:
            st.info("No sessions this month.")


def render_exports(prefs: Preferences) -> None:
    st.header("Exports")
    events = st.session_state.events
    plan_start = st.session_state.plan_start
    if not events or plan_start is None:
        st.info("No plan to export yet.")
        return

    ics_bytes, ics_warnings = plan_to_ics(events)
    st.download_button(
        "Download ICS",
        data=ics_bytes,
        file_name=f"study_plan_{plan_start.isoformat()}.ics",
        mime="text/calendar",
    )
    if ics_warnings:
        st.warning(" | ".join(ics_warnings[:5]) + (" ..." if len(ics_warnings) > 5 else ""))

    pdf_bytes = study_plan_to_pdf(events, prefs, plan_start)
    st.download_button(
        "Download PDF",
        data=pdf_bytes,
        file_name=f"study_plan_{plan_start.isoformat()}.pdf",
        mime="application/pdf",
    )


def render_exams(state: ProfileState) -> None:
    st.header("Exams")
    today = date.today()

    with st.form("add_exam_form", clear_on_submit=True):
        col1, col2, col3, col4 = st.columns([2, 1, 1, 1])
        with col1:
            subject = st.text_input("Subject", placeholder="Maths Paper 1")
        with col2:
            exam_day = st.date_input("Date", value=today)
        with col3:
            kind = st.text_input("Type", placeholder="Final")
        with col4:
            priority = st.selectbox("Priority", PRIORITIES, index=1)
        if st.form_submit_button("Add exam", type="primary"):
            try:
                exam = new_exam(subject, exam_day, kind, priority)
            except ValueError as e:
                st.warning(str(e))
            else:
                state.exams.append(exam)
                _save("Exam added.")

    if not state.exams:
        st.info("No exams yet.")
        return

    upcoming = next_exam(state.exams, today)
    m1, m2, m3 = st.columns(3)
    m1.metric("Total exams", len(state.exams))
    m2.metric("Average progress", f"{average_progress(state.exams)}%")
    m3.metric("Next exam", countdown_label(days_until(upcoming, today)) if upcoming else "None")

    st.divider()
    for exam in sort_exams(state.exams):
        col_info, col_progress, col_remove = st.columns([3, 2, 1])
        with col_info:
            st.markdown(f"**{exam.subject}** ({exam.priority} priority)")
            st.caption(
                f"{exam.kind + ' • ' if exam.kind else ''}{exam.day.strftime('%d %b %Y')}"
                f" • {countdown_label(days_until(exam, today))}"
            )
        with col_progress:
            progress = st.slider("Progress", 0, 100, exam.study_progress, 5, key=f"progress_{exam.id}")
        if progress != exam.study_progress:
            set_progress(exam, progress)
            _save()
        if col_remove.button("Remove", key=f"remove_exam_{exam.id}"):
            state.exams = remove_exam(state.exams, exam.id)
            _save()
            _queue_toast(f"Removed {exam.subject}.")
            st.rerun()


def _render_style_result(result: LearningStyleResult) -> None:
    info = STYLE_INFO[result.dominant_style]
    st.subheader(info["title"])
    st.write(info["description"])
    st.caption(f"Assessed on {result.assessed_on.isoformat()}")
    st.bar_chart(pd.Series({style_label(s): p for s, p in result.style_percentages.items()}, name="%"))
    st.markdown("**Study tips for you**")
    for tip in info["tips"]:
        st.write(f"- {tip}")


def render_learning_style(state: ProfileState) -> None:
    st.header("Learning style")
    if state.learning_style:
        _render_style_result(state.learning_style)
        st.divider()
        st.subheader("Retake the assessment")

    with st.form("learning_style_form"):
        answers = []
        for n, (question, options) in enumerate(QUESTIONS):
            labels = {text: style for style, text in options}
            choice = st.radio(f"{n + 1}. {question}", list(labels), index=None, key=f"ls_q{n}")
            if choice is not None:
                answers.append(labels[choice])
        if st.form_submit_button("See my learning style", type="primary"):
            try:
                result = score_assessment(answers, date.today())
            except PreconditionViolation as e:
                st.warning(str(e))
            else:
                state.learning_style = result
                pct = result.style_percentages[result.dominant_style]
                _save()
                _queue_toast(f"You're a {style_label(result.dominant_style)} learner ({pct}% match).")
                st.rerun()



profiles = _ensure_session_state()
state: ProfileState = st.session_state.state
prefs: Preferences = state.preferences
current_profile = st.session_state.profile_name

st.title("Study Calendar")
st.caption("Rotate your subjects across the days you are free.")
_flush_toast()

if "nav_page" not in st.session_state:
    st.session_state.nav_page = "Setup"
if "goto_page" in st.session_state:
    st.session_state.nav_page = st.session_state.pop("goto_page")

with st.sidebar:
    st.header("Profile")
    selected_profile = st.selectbox(
        "Active profile",
        options=profiles,
        index=profiles.index(current_profile) if current_profile in profiles else 0,
    )
    if selected_profile != current_profile:
        _switch_profile(selected_profile)
        st.rerun()

    with st.form("create_profile_form"):
        new_profile_name = st.text_input("New profile name", placeholder="e.g. Mock exams")
        if st.form_submit_button("Create profile"):
            try:
                new_state = create_profile(new_profile_name)
            except ValueError as e:
                st.error(str(e))
            else:
                _queue_toast(f"Profile '{new_profile_name.strip()}' created.")
                st.session_state.profile_name = new_profile_name.strip()
                st.session_state.state = new_state
                st.session_state.events = []
                st.session_state.plan_start = None
                st.rerun()

    if st.button("Delete profile", disabled=len(profiles) <= 1):

        @st.dialog("Delete profile?")
        def _confirm_delete_profile() -> None:
            st.write(f"Delete profile '{current_profile}' and its saved data?")
            if st.button("Delete", type="primary"):
                delete_profile(current_profile)
                _switch_profile(list_profiles()[0])
                _queue_toast("Profile deleted.")
                st.rerun()

        _confirm_delete_profile()

    st.divider()
    st.header("Navigate")
    page = st.radio("Page", ["Setup", "Calendar", "Exports", "Exams", "Learning style"], key="nav_page", label_visibility="collapsed")
    st.caption("Generated plans are kept for this session only.")

if page == "Setup":
    render_setup(prefs)
elif page == "Calendar":
    render_calendar(prefs)
elif page == "Exports":
    render_exports(prefs)
elif page == "Exams":
    render_exams(state)
elif page == "Learning style":
    render_learning_style(state)
