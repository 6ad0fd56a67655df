import io
import json
import logging

import pytest
from pydantic import ValidationError

from core.config import Settings
from core.logging_utils import HANDLER_NAME, LOGGER_ROOTS, JsonLogFormatter, configure_logging
from core.models import BorrowerRecord, ScenarioInputs
from core.presets import LLPA_ADJUSTMENTS
from core.pricing import price_batch


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("REFI_DEFAULT_BASE_RATE", "7.25%")
    monkeypatch.setenv("REFI_LOG_LEVEL", "debug")
    monkeypatch.setenv("REFI_MAX_WORKERS", "4")
    s = Settings(_env_file=None)
    assert s.default_base_rate == 7.25
    assert s.log_level == "DEBUG"
    assert s.max_workers == 4


def test_defaults(monkeypatch):
    for var in ("REFI_DEFAULT_BASE_RATE", "REFI_MAX_WORKERS", "REFI_TERM_YEARS", "REFI_MATRIX_STORE_PATH"):
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert s.default_base_rate == 6.75
    assert s.default_break_even_threshold == 18
    assert s.term_years == 30
    assert s.matrix_store_path == "llpa_matrix.json"


@pytest.mark.parametrize("var,value", [("REFI_DEFAULT_BASE_RATE", "0"), ("REFI_MAX_WORKERS", "0"), ("REFI_TERM_YEARS", "-1")])
def test_invalid_values_rejected(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_json_log_formatter_includes_context():
    record = logging.LogRecord("core.pricing", logging.INFO, __file__, 1, "priced batch", None, None)
    record.context = {"borrowers": 3}
    payload = json.loads(JsonLogFormatter().format(record))
    assert payload["message"] == "priced batch"
    assert payload["level"] == "INFO"
    assert payload["borrowers"] == 3


def test_batch_logging_reaches_caplog(caplog):
    with caplog.at_level(logging.INFO, logger="core.pricing"):
        price_batch([BorrowerRecord(loan_amount=100000, property_value=200000)], ScenarioInputs(), LLPA_ADJUSTMENTS)
    record = next(r for r in caplog.records if r.getMessage() == "priced batch")
    assert record.context["borrowers"] == 1


def test_configure_logging_attaches_one_json_handler():
    stream = io.StringIO()
    handler = configure_logging("info", stream=stream)
    try:
        assert configure_logging("debug") is handler
        for name in LOGGER_ROOTS:
            logger = logging.getLogger(name)
            assert [h.get_name() for h in logger.handlers].count(HANDLER_NAME) == 1
            assert logger.level == logging.DEBUG
            assert logger.propagate
        logging.getLogger("core.ingest").info("read borrower file", extra={"context": {"rows": 2}})
        line = json.loads(stream.getvalue().splitlines()[-1])
        assert line["logger"] == "core.ingest"
        assert line["rows"] == 2
    finally:
        for name in LOGGER_ROOTS:
            logging.getLogger(name).removeHandler(handler)
            logging.getLogger(name).setLevel(logging.NOTSET)
