
from __future__ import annotations
import io
from reportlab.lib.pagesizes import LETTER, landscape
from reportlab.lib import colors
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.styles import getSampleStyleSheet
from core.presets import DISCLAIMER, REFINANCE_TYPES
from core.report import fmt_money, fmt_percent, fmt_points

GRID = TableStyle([('BACKGROUND',(0,0),(-1,0), colors.lightgrey),('BOX',(0,0),(-1,-1),1,colors.black),('INNERGRID',(0,0),(-1,-1),0.5,colors.grey),('FONTSIZE',(0,0),(-1,-1),8)])

def build_pricing_pdf(out=None, branding: dict | None = None, scenario=None, summary: dict | None = None, results: list | None = None, highlight: set | None = None) -> bytes:
    """Render a batch pricing report.

    ``highlight`` holds the indexes of rows to shade (break-even within the
    threshold).  Writes to ``out`` (path or file) when given and returns the
    PDF bytes.
    """
    branding = branding or {}
    summary = summary or {}
    results = results or []
    highlight = highlight or set()
    styles = getSampleStyleSheet()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=landscape(LETTER), leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36)
    story = []
    title = branding.get("title","Batch Refinance Pricing")
    story += [Paragraph(f"<b>{title}</b>", styles['Title']), Spacer(1,6)]
    if branding.get("mlo"): story.append(Paragraph(f"MLO: {branding['mlo']}  |  NMLS: {branding.get('nmls','')}", styles['Normal']))
    story += [Spacer(1, 12)]
    if scenario is not None:
        sc_rows = [["Base Rate", fmt_percent(scenario.base_rate)],["Starting Points", fmt_points(scenario.starting_points)],
                   ["Loan Program", scenario.new_loan_program or "Borrower's program"],
                   ["Refinance Type", REFINANCE_TYPES.get(scenario.new_refinance_type, scenario.new_refinance_type)],
                   ["HomeReady Waiver", "Yes" if scenario.home_ready_eligible else "No"],
                   ["Break-even Threshold", f"{scenario.break_even_threshold} mo"]]
        t = Table([["Scenario",""]] + sc_rows, hAlign='LEFT', colWidths=[200, 320])
        t.setStyle(GRID)
        story += [t, Spacer(1, 12)]
    if summary:
        tot_rows = [["Total Loans", f"{summary.get('total_loans', 0)}"],["Loans Saving Money", f"{summary.get('loans_saving', 0)}"],
                    ["Total Volume", fmt_money(summary.get("total_volume"))],["Avg Adjustment", fmt_points(summary.get("avg_adjustment"))],
                    ["Avg Payment Change", fmt_money(summary.get("avg_payment_change"))]]
        t = Table([["Summary",""]] + tot_rows, hAlign='LEFT', colWidths=[200, 320])
        t.setStyle(GRID)
        story += [t, Spacer(1, 12)]
    if results:
        rows = [["Client","Loan Amount","LTV","Credit","Current","New","Change","Adj. Pts","Final Pts","Point Cost","Break-even"]]
        for r in results:
            be = f"{r.break_even_months:.0f} mo" if r.break_even_months is not None else "N/A"
            rows.append([r.client_name, fmt_money(r.loan_amount), fmt_percent(r.ltv, 2), r.credit_score,
                         f"{fmt_percent(r.current_rate)} / {fmt_money(r.current_payment)}",
                         f"{fmt_percent(r.adjusted_rate)} / {fmt_money(r.new_payment)}",
                         fmt_money(r.payment_diff), fmt_points(r.total_adjustments), fmt_points(r.final_points),
                         fmt_money(r.point_cost), be])
        t = Table(rows, hAlign='LEFT', repeatRows=1)
        style = TableStyle(GRID.getCommands())
        for i, r in enumerate(results, start=1):
            if i - 1 in highlight:
                style.add('BACKGROUND', (0,i), (-1,i), colors.HexColor("#e6f4ea"))
        t.setStyle(style)
        story += [Paragraph("<b>Borrowers</b>", styles['Heading3']), Spacer(1,6), t, Spacer(1,12)]
    story += [Spacer(1, 12), Paragraph(f"<font size=8>{DISCLAIMER}</font>", styles['Normal'])]
    doc.build(story)
    data = buf.getvalue()
    if out is not None:
        if hasattr(out, "write"):
            out.write(data)
        else:
            with open(out, "wb") as f:
                f.write(data)
    return data
