import streamlit as st
from core.models import ScenarioInputs
from core.pricing import summarize_results
from core.report import (
    SORTABLE_COLUMNS,
    breakdown_frame,
    filter_results,
    fmt_money,
    fmt_percent,
    fmt_points,
    results_frame,
    sort_results,
)
from core.rules import evaluate_result_rules, has_blocking, highlight_break_even


def render_stats(results):
    summary = summarize_results(results)
    cols = st.columns(5)
    cols[0].metric("Total Loans", f"{summary['total_loans']}")
    cols[1].metric("Saving Money", f"{summary['loans_saving']}")
    cols[2].metric("Total Volume", fmt_money(summary["total_volume"]))
    cols[3].metric("Avg Adjustment", fmt_percent(summary["avg_adjustment"]))
    cols[4].metric("Avg Payment Change", fmt_money(summary["avg_payment_change"]))
    return summary


def render_results(results, scenario: ScenarioInputs):
    """Stats strip, searchable/sortable table and per-borrower breakdowns."""
    st.header("Results")
    render_stats(results)

    blocked = [r.client_name for r in results if has_blocking(evaluate_result_rules(r, scenario))]
    if blocked:
        st.error(
            f"{len(blocked)} borrower(s) cannot be priced reliably (missing loan amount or property value): "
            + ", ".join(blocked)
        )

    c1, c2, c3 = st.columns([2, 1, 1])
    query = c1.text_input("Search client name", key="results_search")
    column = c2.selectbox("Sort by", ["(none)"] + SORTABLE_COLUMNS, key="results_sort")
    descending = c3.checkbox("Descending", key="results_desc")
    shown = sort_results(filter_results(results, query), None if column == "(none)" else column, descending)

    df = results_frame(shown)
    highlighted = [highlight_break_even(r, scenario) for r in shown]
    st.dataframe(
        df.style.apply(
            lambda row: ["background-color: #e6f4ea" if highlighted[row.name] else "" for _ in row],
            axis=1,
        ),
        use_container_width=True,
    )
    st.caption(f"{sum(highlighted)} of {len(shown)} borrowers break even within {scenario.break_even_threshold} months")

    for r in shown:
        with st.expander(f"{r.client_name} | {fmt_points(r.total_adjustments)} pts"):
            c = st.columns(4)
            c[0].metric("Starting Points", fmt_points(r.starting_points))
            c[1].metric("Total Adjustments", fmt_points(r.total_adjustments))
            c[2].metric("Final Points", fmt_points(r.final_points))
            c[3].metric("Point Cost", fmt_money(r.point_cost))
            if r.adjustments:
                st.table(breakdown_frame(r))
            else:
                st.caption("No adjustments applied")
            for rule in evaluate_result_rules(r, scenario):
                if rule.severity == "critical":
                    st.error(f"[{rule.code}] {rule.message}")
                elif rule.severity == "warn":
                    st.warning(f"[{rule.code}] {rule.message}")
                else:
                    st.info(f"[{rule.code}] {rule.message}")
