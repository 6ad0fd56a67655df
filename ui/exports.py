import streamlit as st
from core.presets import DISCLAIMER
from core.pricing import summarize_results
from core.rules import highlight_break_even
from export.pdf_export import build_pricing_pdf
from export.tabular import CSV_FILE_NAME, EXCEL_FILE_NAME, to_csv_bytes, to_excel_bytes


def render_exports(results, scenario):
    st.header("Exports")
    st.caption(DISCLAIMER)
    if not results:
        st.info("Run pricing before exporting.")
        return
    c1, c2, c3 = st.columns(3)
    c1.download_button("Download CSV", data=to_csv_bytes(results), file_name=CSV_FILE_NAME, mime="text/csv")
    c2.download_button(
        "Download Excel",
        data=to_excel_bytes(results),
        file_name=EXCEL_FILE_NAME,
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    highlight = {i for i, r in enumerate(results) if highlight_break_even(r, scenario)}
    pdf = build_pricing_pdf(
        scenario=scenario,
        summary=summarize_results(results),
        results=results,
        highlight=highlight,
    )
    c3.download_button("Download PDF Report", data=pdf, file_name="batch-pricing-report.pdf", mime="application/pdf")
