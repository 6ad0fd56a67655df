import streamlit as st
from core.config import get_settings
from core.logging_utils import configure_logging
from core.models import ScenarioInputs
from core.pricing import price_batch
from core.version import __version__
from ui.exports import render_exports
from ui.results import render_results
from ui.scenario import render_scenario_form
from ui.sidebar import matrix_store, render_matrix_editor
from ui.upload import render_upload

st.set_page_config(page_title="BATCH REFINANCE PRICING", layout="wide")
configure_logging()


def init_state():
    ss = st.session_state
    ss.setdefault("matrix_store_path", get_settings().matrix_store_path)
    if "matrix" not in ss:
        ss["matrix"] = matrix_store().load()


def current_scenario() -> ScenarioInputs:
    return ScenarioInputs(**st.session_state.get("scenario", {}))


def render_pricing():
    scenario = render_scenario_form()
    borrowers = st.session_state.get("borrowers")
    if not borrowers:
        st.info("Upload a borrower file and confirm the column mapping first.")
        return
    if st.button("Calculate Pricing", type="primary"):
        st.session_state["results"] = price_batch(borrowers, scenario, st.session_state["matrix"])
    results = st.session_state.get("results")
    if results:
        render_results(results, scenario)


init_state()

if "theme" not in st.session_state:
    st.session_state.theme = "light"
dark_on = st.sidebar.toggle("Dark mode", value=st.session_state.theme == "dark")
st.session_state.theme = "dark" if dark_on else "light"
if st.session_state.theme == "dark":
    st.markdown(
        """
        <style>
        [data-testid=\"stAppViewContainer\"]{background-color:#0e1117;color:#fafafa;}
        </style>
        """,
        unsafe_allow_html=True,
    )

steps = ["Upload", "Pricing", "LLPA Matrix", "Exports"]
completed = {
    "Upload": bool(st.session_state.get("borrowers")),
    "Pricing": bool(st.session_state.get("results")),
    "LLPA Matrix": False,
    "Exports": False,
}
nav = st.sidebar.radio(
    "Navigate",
    steps,
    format_func=lambda x: ("✅ " if completed.get(x) else "") + x,
)
st.sidebar.caption(f"v{__version__}")

st.title("BATCH REFINANCE PRICING")
st.caption("Upload borrowers • Apply LLPAs • Compare payments • Export")

if nav == "Upload":
    render_upload()
elif nav == "Pricing":
    render_pricing()
elif nav == "LLPA Matrix":
    render_matrix_editor()
elif nav == "Exports":
    render_exports(st.session_state.get("results") or [], current_scenario())
