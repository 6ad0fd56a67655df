import streamlit as st
from core.config import get_settings
from core.models import ScenarioInputs
from core.presets import LOAN_PROGRAMS, REFINANCE_TYPES, SCENARIO_DEFAULTS


def render_scenario_form():
    """Global scenario inputs shared by every borrower in the batch."""
    settings = get_settings()
    sc = dict(SCENARIO_DEFAULTS)
    sc["base_rate"] = settings.default_base_rate
    sc["break_even_threshold"] = settings.default_break_even_threshold
    sc.update(st.session_state.get("scenario", {}))

    st.header("Scenario")
    c1, c2, c3 = st.columns(3)
    base_rate = c1.number_input("Base Rate %", min_value=0.001, value=float(sc["base_rate"]), step=0.125, format="%.3f")
    starting_points = c2.number_input("Starting Points", value=float(sc["starting_points"]), step=0.125, format="%.3f")
    threshold = c3.number_input(
        "Break-even Threshold (months)", min_value=1, value=int(sc["break_even_threshold"]), step=1
    )
    c1, c2, c3 = st.columns(3)
    program = c1.selectbox(
        "New Loan Program",
        LOAN_PROGRAMS,
        index=LOAN_PROGRAMS.index(sc["new_loan_program"]) if sc["new_loan_program"] in LOAN_PROGRAMS else 0,
    )
    refi_keys = list(REFINANCE_TYPES.keys())
    refi = c2.selectbox(
        "Refinance Type",
        refi_keys,
        format_func=lambda k: REFINANCE_TYPES[k],
        index=refi_keys.index(sc["new_refinance_type"]) if sc["new_refinance_type"] in refi_keys else 0,
    )
    home_ready = c3.toggle("HomeReady® Eligible", value=bool(sc["home_ready_eligible"]))

    scenario = ScenarioInputs(
        base_rate=base_rate,
        starting_points=starting_points,
        new_loan_program=program,
        new_refinance_type=refi,
        home_ready_eligible=home_ready,
        break_even_threshold=int(threshold),
    )
    if scenario.model_dump() != st.session_state.get("scenario"):
        st.session_state.pop("results", None)
    st.session_state["scenario"] = scenario.model_dump()
    return scenario
