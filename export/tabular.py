"""CSV and Excel downloads of a priced batch."""
from __future__ import annotations
import io
from typing import List

from core.models import PricingResult
from core.report import export_frame

CSV_FILE_NAME = "batch-pricing-results.csv"
EXCEL_FILE_NAME = "batch-pricing-results.xlsx"
EXCEL_SHEET_NAME = "Pricing Results"


def to_csv_bytes(results: List[PricingResult]) -> bytes:
    buf = io.StringIO()
    export_frame(results).to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


def to_excel_bytes(results: List[PricingResult]) -> bytes:
    buf = io.BytesIO()
    export_frame(results).to_excel(buf, index=False, sheet_name=EXCEL_SHEET_NAME, engine="openpyxl")
    return buf.getvalue()
