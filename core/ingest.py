"""Borrower file ingestion: read CSV / Excel, map columns, build records."""
from __future__ import annotations
import io
import re
import zipfile
from typing import Dict, List, Union

import pandas as pd

from core.errors import IngestionError
from core.logging_utils import get_logger
from core.models import BorrowerRecord
from core.utils import credit_score_to_tier, parse_money

logger = get_logger(__name__)

# Field key -> (label, required)
EXPECTED_FIELDS: Dict[str, tuple] = {
    "client_name": ("Client Name", True),
    "loan_amount": ("Loan Amount", True),
    "property_value": ("Property Value", True),
    "income": ("Income", False),
    "zip_code": ("Zip Code", False),
    "credit_score": ("Credit Score", True),
    "loan_program": ("Loan Program", False),
    "product_type": ("Product Type", False),
    "property_type": ("Property Type", False),
    "occupancy": ("Occupancy", False),
    "current_payment": ("Current Payment", True),
    "units": ("Units", False),
}
REQUIRED_FIELDS = [k for k, (_, required) in EXPECTED_FIELDS.items() if required]

HEADER_PATTERNS = {
    "client_name": re.compile(r"^(client|name|borrower|customer).*name", re.I),
    "loan_amount": re.compile(r"^(loan.*amount|amount|principal)", re.I),
    "property_value": re.compile(r"^(property.*value|home.*value|value|appraisal)", re.I),
    "income": re.compile(r"^(income|borrower.*income|annual.*income)", re.I),
    "zip_code": re.compile(r"^(zip.*code|zip|postal)", re.I),
    "credit_score": re.compile(r"^(credit.*score|fico|score)", re.I),
    "loan_program": re.compile(r"^(loan.*program|program|loan.*type)", re.I),
    "product_type": re.compile(r"^(product.*type|product|mortgage.*type)", re.I),
    "property_type": re.compile(r"^(property.*type|home.*type|type)", re.I),
    "occupancy": re.compile(r"^(occupancy|occupancy.*type)", re.I),
    "current_payment": re.compile(r"^(current.*payment|payment|monthly.*payment)", re.I),
    "units": re.compile(r"^(units|number.*units)", re.I),
}

SUPPORTED_EXTENSIONS = ("csv", "xlsx")

TEXT_DEFAULTS = {
    "zip_code": "",
    "loan_program": "Conventional",
    "product_type": "Fixed",
    "property_type": "Single Family",
    "occupancy": "Primary",
    "units": "1",
}


def read_table(file_name: str, data: Union[bytes, str]) -> pd.DataFrame:
    """Read an uploaded CSV or Excel file into a frame of trimmed strings."""

    ext = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not data or not data.strip():
        raise IngestionError("File is empty")
    if ext not in SUPPORTED_EXTENSIONS:
        raise IngestionError("Unsupported file format. Please upload CSV or Excel files.")
    try:
        if ext == "csv":
            df = pd.read_csv(io.BytesIO(data), dtype=str, keep_default_na=False, skipinitialspace=True)
        else:
            df = pd.read_excel(io.BytesIO(data), dtype=str, keep_default_na=False, engine="openpyxl")
    except pd.errors.EmptyDataError as e:
        raise IngestionError("File is empty") from e
    except (ValueError, UnicodeDecodeError, pd.errors.ParserError, zipfile.BadZipFile, KeyError) as e:
        logger.warning("unreadable borrower file", extra={"context": {"file": file_name, "error": str(e)}})
        raise IngestionError(f"Could not read file: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    df = df.fillna("").astype(str).apply(lambda col: col.str.strip())
    df = df[(df != "").any(axis=1)].reset_index(drop=True)
    if df.empty:
        raise IngestionError("No data found in file")
    logger.info("read borrower file", extra={"context": {"file": file_name, "rows": len(df)}})
    return df


def auto_detect_mapping(headers: List[str]) -> Dict[str, str]:
    """Guess which column feeds each borrower field from its header text."""

    mapping: Dict[str, str] = {}
    for header in headers:
        normalized = str(header).strip().lower()
        for key, pattern in HEADER_PATTERNS.items():
            if pattern.match(normalized):
                mapping[key] = header
    return mapping


def validate_mapping(mapping: Dict[str, str]) -> None:
    missing = [f for f in REQUIRED_FIELDS if not mapping.get(f)]
    if missing:
        raise IngestionError(f"Required fields not mapped: {', '.join(missing)}")


def _cell(row, mapping, key):
    col = mapping.get(key)
    if not col:
        return ""
    value = row.get(col, "")
    return "" if value is None else str(value).strip()


def transform_row(row, mapping: Dict[str, str]) -> BorrowerRecord:
    """Build a borrower record from one raw row, applying field defaults."""

    fields = {
        "client_name": _cell(row, mapping, "client_name") or "Unknown",
        "loan_amount": max(0.0, parse_money(_cell(row, mapping, "loan_amount") or 0)),
        "property_value": max(0.0, parse_money(_cell(row, mapping, "property_value") or 0)),
        "income": max(0.0, parse_money(_cell(row, mapping, "income") or 0)),
        "credit_score": credit_score_to_tier(_cell(row, mapping, "credit_score") or "780"),
        "current_payment": max(0.0, parse_money(_cell(row, mapping, "current_payment") or 0)),
    }
    for key, default in TEXT_DEFAULTS.items():
        fields[key] = _cell(row, mapping, key) or default
    return BorrowerRecord(**fields)


def build_borrowers(df: pd.DataFrame, mapping: Dict[str, str]) -> List[BorrowerRecord]:
    """Validate the column mapping and convert every row."""

    validate_mapping(mapping)
    return [transform_row(row, mapping) for row in df.to_dict(orient="records")]
