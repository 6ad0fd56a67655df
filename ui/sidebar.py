import json
import pandas as pd
import streamlit as st
from core.config import get_settings
from core.errors import MatrixValidationError
from core.matrix_store import MatrixStore


def matrix_store() -> MatrixStore:
    """The session's matrix store; rebuilt only when the store path changes."""
    path = st.session_state.get("matrix_store_path") or get_settings().matrix_store_path
    store = st.session_state.get("matrix_store")
    if store is None or store.path != path:
        store = MatrixStore(path)
        st.session_state["matrix_store"] = store
    return store


def render_change_history(store: MatrixStore, limit: int = 10):
    entries = store.audit.latest(limit)
    with st.expander(f"Change History ({len(store.audit.entries)})"):
        if not entries:
            st.caption("No matrix changes recorded yet.")
            return
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "When (UTC)": e.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                        "User": e.user,
                        "Action": e.action,
                        "Program": e.program,
                        "Changed": ", ".join(e.changes) if e.action == "save" else "",
                    }
                    for e in entries
                ]
            ),
            use_container_width=True,
            hide_index=True,
        )


def render_matrix_editor():
    """Editable LLPA matrix, one loan program at a time."""
    store = matrix_store()
    if "matrix" not in st.session_state:
        st.session_state["matrix"] = store.load()
    matrix = st.session_state["matrix"]
    user = st.session_state.get("user", "local")

    st.header("LLPA Matrix")
    program = st.selectbox("Matrix Loan Program", list(matrix.keys()), key="matrix_program")
    text = st.text_area(
        f"{program} Adjustments (JSON)",
        value=json.dumps(matrix[program], indent=2),
        height=420,
    )
    c1, c2 = st.columns(2)
    if c1.button("Save Matrix"):
        try:
            st.session_state["matrix"] = store.save_program(matrix, program, text, user=user)
            st.session_state.pop("results", None)
            st.success(f"Saved {program} matrix. Changes will persist across sessions.")
        except MatrixValidationError as e:
            st.error(f"Error: {e}")
    if c2.button("Reset to Defaults"):
        st.session_state["matrix"] = store.reset(user=user)
        st.session_state.pop("results", None)
        st.info("Matrix reset to default values.")
    render_change_history(store)
