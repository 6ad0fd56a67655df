"""Persistence for adjustment matrix overrides.

The whole matrix is stored as one JSON document under a fixed key.  It is read
entirely when the app starts and written entirely after each accepted edit.
"""
from __future__ import annotations
import copy
import json
import os
from typing import Optional, Union

from pydantic import ValidationError

from core.audit import AuditLog
from core.config import get_settings
from core.errors import MatrixValidationError
from core.logging_utils import get_logger
from core.models import AdjustmentMatrix, ProgramAdjustments
from core.presets import LLPA_ADJUSTMENTS

logger = get_logger(__name__)

MATRIX_STORE_KEY = "llpa-adjustments"
AUDIT_STORE_KEY = "llpa-audit"
RESET_PROGRAM = "All programs"


def default_matrix() -> AdjustmentMatrix:
    return copy.deepcopy(LLPA_ADJUSTMENTS)


def validate_program_matrix(data: Union[str, dict]) -> dict:
    """Check one program's adjustment table and return it normalized.

    ``data`` may be the JSON text typed into the editor or an already parsed
    dict.  Raises :class:`MatrixValidationError` when the JSON is malformed or
    the ``creditScore``, ``ltv`` and ``productType`` tables are missing.
    """

    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise MatrixValidationError(f"Invalid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise MatrixValidationError("Matrix must be a JSON object")
    missing = [k for k in ("creditScore", "ltv", "productType") if data.get(k) is None]
    if missing:
        raise MatrixValidationError("Matrix must contain creditScore, ltv, and productType fields")
    try:
        return ProgramAdjustments(**data).model_dump()
    except ValidationError as e:
        raise MatrixValidationError(str(e)) from e


class MatrixStore:
    """JSON file key-value store holding the adjustment matrix override.

    The matrix lives under ``llpa-adjustments`` and its change history under
    ``llpa-audit``; both are rewritten on every save or reset.
    """

    def __init__(self, path: Optional[str] = None, audit: Optional[AuditLog] = None) -> None:
        self.path = path or get_settings().matrix_store_path
        if audit is None:
            audit = AuditLog.from_rows(self._read_payload().get(AUDIT_STORE_KEY))
        self.audit = audit

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, payload: dict) -> None:
        payload[AUDIT_STORE_KEY] = self.audit.as_dict()
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

    def load(self) -> AdjustmentMatrix:
        """Default matrix with any persisted program overrides applied."""
        matrix = default_matrix()
        try:
            stored = self._read().get(MATRIX_STORE_KEY)
        except (OSError, ValueError, AttributeError) as e:
            logger.error("failed to read matrix overrides: %s", e, extra={"context": {"path": self.path}})
            return matrix
        if not isinstance(stored, dict):
            return matrix
        for program, table in stored.items():
            if program not in matrix:
                continue
            try:
                matrix[program] = validate_program_matrix(table)
            except MatrixValidationError as e:
                logger.warning(
                    "ignoring invalid stored matrix", extra={"context": {"program": program, "error": str(e)}}
                )
        logger.info("loaded custom matrix overrides", extra={"context": {"path": self.path}})
        return matrix

    def save_program(
        self,
        matrix: AdjustmentMatrix,
        program: str,
        data: Union[str, dict],
        user: str = "local",
    ) -> AdjustmentMatrix:
        """Validate and persist a program's table; returns the updated matrix.

        ``matrix`` itself is never modified.  On a validation error nothing is
        written, no history is recorded and the error propagates to the caller.
        """

        table = validate_program_matrix(data)
        updated = copy.deepcopy(matrix)
        old = updated.get(program)
        updated[program] = table
        payload = self._read_payload()
        payload[MATRIX_STORE_KEY] = updated
        entry = self.audit.record(user, program, old, table)
        self._write(payload)
        logger.info(
            "saved matrix",
            extra={"context": {"program": program, "user": user, "changes": len(entry.changes)}},
        )
        return updated

    def _read_payload(self) -> dict:
        try:
            payload = self._read()
        except (OSError, ValueError) as e:
            logger.warning("overwriting unreadable matrix store: %s", e)
            return {}
        return payload if isinstance(payload, dict) else {}

    def reset(self, user: str = "local") -> AdjustmentMatrix:
        """Drop the persisted override and return the defaults."""
        payload = self._read_payload()
        stored = payload.pop(MATRIX_STORE_KEY, None)
        if stored is not None:
            self.audit.record(user, RESET_PROGRAM, None, None, action="reset")
            self._write(payload)
        logger.info("reset matrix to defaults", extra={"context": {"path": self.path}})
        return default_matrix()
