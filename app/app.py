"""
UI layer
Purpose: Streamlit-only glue. Renders the question card, collects answers, and
delegates all work to the controller. Keeps UI concerns (layout/state widgets)
separate from decision logic so logic can be unit tested without Streamlit.
"""

import streamlit as st

from garden_advisor.config import Settings
from garden_advisor.controller import QuestionnaireController
from garden_advisor.errors import GardenAdvisorError
from garden_advisor.log import configure_logging
from garden_advisor.models import Question, QuestionType
from garden_advisor.persistence.session_store import InMemorySessionStore, JsonSessionStore


# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="Garden Style Advisor",
    page_icon="🌿",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
st_session.setdefault("settings", None)
st_session.setdefault("controller", None)
st_session.setdefault("question", None)
st_session.setdefault("reason", "")
st_session.setdefault("summary", "")
st_session.setdefault("flash", "")


# ---------------------------
# Helpers
# ---------------------------
def get_settings() -> Settings:
    """Load settings once per browser session."""
    if st_session.settings is None:
        st_session.settings = Settings.from_env()
        configure_logging(st_session.settings.log_level)
    return st_session.settings


def get_controller() -> QuestionnaireController:
    """Return the controller, creating it (and resuming saved state) if needed."""
    if st_session.controller is None:
        settings = get_settings()
        store = (
            JsonSessionStore(settings.session_file)
            if settings.session_file
            else InMemorySessionStore()
        )
        st_session.controller = QuestionnaireController.from_settings(
            settings, store=store
        )
    return st_session.controller


def ask_next() -> None:
    """Fetch the next question (or completion) from the controller."""
    result = get_controller().next_question()
    st_session.question = result.question
    st_session.reason = result.reason


def widget_key(q: Question) -> str:
    return f"answer_{q.id}"


def render_question(q: Question, current):
    """Draw the card for one question and return the widget value."""
    st.subheader(q.title)
    if q.description:
        st.caption(q.description)

    key = widget_key(q)
    labels = {o.id: o.label for o in q.options}
    hints = {o.id: o.hint for o in q.options if o.hint}

    if q.type == QuestionType.MULTI:
        return st.multiselect(
            "Choose all that apply",
            options=list(labels),
            default=current if isinstance(current, list) else [],
            format_func=lambda oid: labels[oid],
            key=key,
        )

    if q.type == QuestionType.SINGLE:
        ids = list(labels)
        return st.radio(
            "Choose one",
            options=ids,
            index=ids.index(current) if current in ids else None,
            format_func=lambda oid: f"{labels[oid]}  ·  {hints[oid]}" if oid in hints else labels[oid],
            key=key,
        )

    if q.type == QuestionType.SCALE:
        lo, hi = int(q.min), int(q.max)
        step = int(q.step or 1)
        default = current if isinstance(current, (int, float)) else (lo + hi) // 2
        value = st.slider("Low → High", min_value=lo, max_value=hi, value=int(default), step=step, key=key)
        return value

    return st.text_area(
        "Your thoughts",
        value=current if isinstance(current, str) else "",
        placeholder="Type your thoughts...",
        key=key,
    )


def has_value(value) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, str)):
        return bool(value)
    return True


def on_next(q: Question) -> None:
    """Store the answer (if any), mark the question asked, fetch the next one."""
    controller = get_controller()
    value = st_session.get(widget_key(q))
    if has_value(value):
        try:
            controller.record_answer(q.id, value)
        except GardenAdvisorError as e:
            st_session.flash = e.message
            return
    result = controller.advance(q.id)
    st_session.question = result.question
    st_session.reason = result.reason


def on_back() -> None:
    """Reopen the last asked question with its stored answer."""
    previous = get_controller().back()
    if previous is not None:
        st_session.pop(widget_key(previous), None)
        st_session.question = previous
        st_session.reason = "Revisiting your previous answer"
        st_session.summary = ""


def on_reset() -> None:
    """Wipe the session: answers, asked questions and summary."""
    get_controller().reset()
    for key in [k for k in st_session.keys() if str(k).startswith("answer_")]:
        del st_session[key]
    st_session.question = None
    st_session.reason = ""
    st_session.summary = ""


def on_export() -> None:
    """Build the garden concept (LLM narrative when available)."""
    with st.spinner("Drafting your garden concept..."):
        st_session.summary = get_controller().finish()


# ---------------------------
# Sidebar
# ---------------------------
settings = get_settings()
controller = get_controller()

with st.sidebar:
    st.markdown("### Settings")
    st.write(f"Model: `{settings.model}`")
    st.write(
        "LLM narrative: "
        + ("enabled" if settings.use_llm_summary else "off (deterministic summary)")
    )
    st.write(f"Question limit: {controller.engine.max_questions}")
    if controller.tokens_in or controller.tokens_out:
        st.write(f"Tokens: {controller.tokens_in} in / {controller.tokens_out} out")
    if controller.last_summary_source:
        st.caption(f"Last summary source: {controller.last_summary_source}")

# ---------------------------
# Header
# ---------------------------
st.title("Your Garden Brief")
st.caption(
    "An adaptive agent helps refine your ideal garden style, plants, usage, and feel."
)

col_reset, col_export = st.columns(2)
with col_reset:
    st.button("Reset", on_click=on_reset, use_container_width=True)
with col_export:
    st.button(
        "Export Plan",
        on_click=on_export,
        disabled=not controller.state.asked,
        type="primary",
        use_container_width=True,
    )

if st_session.question is None and not controller.state.completed:
    ask_next()

st.progress(controller.progress())

if st_session.flash:
    st.error(st_session.flash)
    st_session.flash = ""

# ---------------------------
# Question card
# ---------------------------
question = st_session.question
if question is not None and not controller.state.completed:
    with st.container(border=True):
        render_question(question, controller.answer_for(question.id))

    col_back, col_reason, col_next = st.columns([1, 3, 1])
    with col_back:
        st.button("Back", on_click=on_back, disabled=not controller.state.asked)
    with col_reason:
        if st_session.reason:
            st.caption(st_session.reason)
    with col_next:
        st.button("Next", on_click=on_next, args=(question,), type="primary")

elif controller.state.completed and not st_session.summary:
    with st.container(border=True):
        st.markdown("**You're all set**")
        st.caption("Export a tailored plan now, or go back to refine your answers.")
    st.button("Back", on_click=on_back, disabled=not controller.state.asked)

# ---------------------------
# Summary
# ---------------------------
if st_session.summary:
    with st.container(border=True):
        st.markdown("#### Concept Summary")
        st.markdown(st_session.summary)
    st.download_button(
        "Download garden-concept.md",
        data=st_session.summary,
        file_name="garden-concept.md",
        mime="text/markdown",
    )
