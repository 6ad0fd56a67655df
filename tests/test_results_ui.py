from streamlit.testing.v1 import AppTest


def results_app():
    from core.models import BorrowerRecord, ScenarioInputs
    from core.presets import LLPA_ADJUSTMENTS
    from core.pricing import price_batch
    from ui.results import render_results

    scenario = ScenarioInputs(base_rate=6.5, starting_points=1.0, new_loan_program="Conventional")
    borrowers = [
        BorrowerRecord(client_name="Alpha", loan_amount=300000, property_value=600000, current_payment=2500),
        BorrowerRecord(
            client_name="Beta", loan_amount=200000, property_value=250000, credit_score="700-719", current_payment=1000
        ),
    ]
    render_results(price_batch(borrowers, scenario, LLPA_ADJUSTMENTS), scenario)


def _metric(at, label):
    return next(m.value for m in at.metric if m.label == label)


def test_stats_and_break_even_caption():
    at = AppTest.from_function(results_app)
    at.run()
    assert not at.exception
    assert _metric(at, "Total Loans") == "2"
    assert _metric(at, "Saving Money") == "1"
    assert _metric(at, "Total Volume") == "$500,000"
    assert any(c.value == "1 of 2 borrowers break even within 18 months" for c in at.caption)


def test_search_filters_rows():
    at = AppTest.from_function(results_app)
    at.run()
    at.text_input(key="results_search").set_value("bet").run()
    assert any(c.value == "0 of 1 borrowers break even within 18 months" for c in at.caption)
    assert [e.label for e in at.expander] == ["Beta | 1.125 pts"]


def test_breakdown_warns_on_payment_increase():
    at = AppTest.from_function(results_app)
    at.run()
    assert any("[PAYMENT_INCREASE]" in w.value for w in at.warning)


def blocked_app():
    from core.models import BorrowerRecord, ScenarioInputs
    from core.presets import LLPA_ADJUSTMENTS
    from core.pricing import price_batch
    from ui.results import render_results

    scenario = ScenarioInputs(base_rate=6.5)
    borrowers = [
        BorrowerRecord(client_name="Alpha", loan_amount=300000, property_value=600000, current_payment=2500),
        BorrowerRecord(client_name="Ghost", loan_amount=0, property_value=250000, current_payment=1000),
    ]
    render_results(price_batch(borrowers, scenario, LLPA_ADJUSTMENTS), scenario)


def test_blocked_borrowers_flagged():
    at = AppTest.from_function(blocked_app)
    at.run()
    assert at.error[0].value.startswith("1 borrower(s) cannot be priced reliably")
    assert at.error[0].value.endswith("Ghost")
    assert any("[MISSING_LOAN_DATA]" in e.value for e in at.error)


def test_no_blocking_banner_for_complete_rows():
    at = AppTest.from_function(results_app)
    at.run()
    assert not at.error
