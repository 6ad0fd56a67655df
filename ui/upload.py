import hashlib
import streamlit as st
from core.errors import IngestionError
from core.ingest import EXPECTED_FIELDS, SUPPORTED_EXTENSIONS, auto_detect_mapping, build_borrowers, read_table

NOT_MAPPED = "-- Not Mapped --"


def upload_fingerprint(name: str, data: bytes) -> str:
    """Identity of an upload; a changed file under the same name is a new upload."""
    return f"{name}:{hashlib.sha256(data).hexdigest()}"


def render_upload():
    """File upload, column mapping and borrower record construction."""
    st.header("Borrower File")
    up = st.file_uploader("Upload CSV or Excel", type=list(SUPPORTED_EXTENSIONS))
    if up is not None:
        data = up.getvalue()
        fingerprint = upload_fingerprint(up.name, data)
        if st.session_state.get("upload_fingerprint") != fingerprint:
            try:
                df = read_table(up.name, data)
            except IngestionError as e:
                st.error(f"Error: {e}")
                return
            st.session_state["upload_fingerprint"] = fingerprint
            st.session_state["upload_name"] = up.name
            st.session_state["raw_rows"] = df
            st.session_state["mapping"] = auto_detect_mapping(list(df.columns))
            st.session_state.pop("borrowers", None)
            st.session_state.pop("results", None)

    df = st.session_state.get("raw_rows")
    if df is None:
        st.caption("Upload a borrower list to begin.")
        return
    st.success(f"Loaded: {st.session_state.get('upload_name', '')} ({len(df)} borrowers)")
    render_column_mapping(list(df.columns))


def render_column_mapping(headers):
    st.subheader("Column Mapping")
    mapping = dict(st.session_state.get("mapping", {}))
    options = [NOT_MAPPED] + headers
    cols = st.columns(3)
    for idx, (field, (label, required)) in enumerate(EXPECTED_FIELDS.items()):
        current = mapping.get(field)
        choice = cols[idx % 3].selectbox(
            label + (" *" if required else ""),
            options,
            index=options.index(current) if current in options else 0,
            key=f"map_{field}",
        )
        if choice == NOT_MAPPED:
            mapping.pop(field, None)
        else:
            mapping[field] = choice
    st.session_state["mapping"] = mapping
    if st.button("Confirm Mapping"):
        try:
            st.session_state["borrowers"] = build_borrowers(st.session_state["raw_rows"], mapping)
        except IngestionError as e:
            st.error(f"Error: {e}")
            return
        st.session_state.pop("results", None)
        st.success(f"Mapped {len(st.session_state['borrowers'])} borrowers.")
