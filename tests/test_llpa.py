import copy

import pytest
from hypothesis import assume, given, strategies as st

from core.llpa import effective_program, evaluate_adjustments, lookup, ltv_tier, program_adjustments
from core.models import BorrowerRecord, ScenarioInputs
from core.presets import CREDIT_TIERS, LLPA_ADJUSTMENTS, LOWEST_CREDIT_TIER


def _names(result):
    return [i.name for i in result.line_items]


@pytest.mark.parametrize(
    "ltv,tier",
    [(0, "<=60"), (60, "<=60"), (60.5, "60.01-70"), (80, "75.01-80"), (85.71, "85.01-90"), (97, "95.01-97"), (97.5, ">97")],
)
def test_ltv_tier_boundaries(ltv, tier):
    assert ltv_tier(ltv) == tier


def test_lookup_is_permissive():
    assert lookup({"a": 0.5}, "a") == 0.5
    assert lookup({"a": 0.5}, "b") == 0.0
    assert lookup(None, "a") == 0.0
    assert lookup("garbage", "a") == 0.0


def test_conventional_example_itemizes_ltv_and_credit():
    b = BorrowerRecord(client_name="A", loan_amount=300000, property_value=350000, credit_score="720-739")
    sc = ScenarioInputs(base_rate=6.5, new_loan_program="Conventional")
    res = evaluate_adjustments(b, sc, LLPA_ADJUSTMENTS)
    assert [(i.name, i.points) for i in res.line_items] == [("LTV 85.01-90", 0.5), ("Credit 720-739", 0.5)]
    assert res.total == pytest.approx(1.0)
    assert res.ltv == pytest.approx(85.7142857)


def test_category_order_is_fixed():
    b = BorrowerRecord(
        loan_amount=300000,
        property_value=350000,
        credit_score="660-679",
        product_type="ARM",
        occupancy="Investment",
        property_type="Condo",
        units="2",
    )
    sc = ScenarioInputs(new_loan_program="Conventional", new_refinance_type="CashOut")
    res = evaluate_adjustments(b, sc, LLPA_ADJUSTMENTS)
    assert _names(res) == [
        "LTV 85.01-90",
        "Credit 660-679",
        "Product ARM",
        "Occupancy Investment",
        "Refi CashOut",
        "Condo",
        "2 Units",
    ]


def test_scenario_program_overrides_borrower_program():
    b = BorrowerRecord(loan_amount=100000, property_value=400000, loan_program="FHA")
    sc = ScenarioInputs(new_loan_program="Jumbo")
    assert effective_program(b, sc) == "Jumbo"
    res = evaluate_adjustments(b, sc, LLPA_ADJUSTMENTS)
    assert [(i.name, i.points) for i in res.line_items] == [("LTV <=60", -0.25)]


def test_borrower_program_used_without_scenario_program():
    b = BorrowerRecord(loan_amount=100000, property_value=400000, loan_program="FHA")
    res = evaluate_adjustments(b, ScenarioInputs(), LLPA_ADJUSTMENTS)
    assert res.total == pytest.approx(-0.25)


def test_unknown_program_falls_back_to_conventional():
    b = BorrowerRecord(loan_amount=300000, property_value=350000, credit_score="700-719")
    unknown = evaluate_adjustments(b, ScenarioInputs(new_loan_program="Portfolio"), LLPA_ADJUSTMENTS)
    conv = evaluate_adjustments(b, ScenarioInputs(new_loan_program="Conventional"), LLPA_ADJUSTMENTS)
    assert unknown == conv
    assert program_adjustments(LLPA_ADJUSTMENTS, "Portfolio") is LLPA_ADJUSTMENTS["Conventional"]


def test_unknown_buckets_contribute_nothing():
    b = BorrowerRecord(
        loan_amount=100000,
        property_value=400000,
        credit_score="n/a",
        product_type="Balloon",
        occupancy="Timeshare",
        units="7",
    )
    res = evaluate_adjustments(b, ScenarioInputs(new_refinance_type="Reverse"), LLPA_ADJUSTMENTS)
    assert res.line_items == ()
    assert res.total == 0.0


def test_condo_recorded_even_when_zero():
    matrix = copy.deepcopy(LLPA_ADJUSTMENTS)
    matrix["Conventional"]["propertyType"]["Condo"] = 0.0
    b = BorrowerRecord(loan_amount=100000, property_value=400000, property_type="High-rise condo")
    res = evaluate_adjustments(b, ScenarioInputs(), matrix)
    assert [(i.name, i.points) for i in res.line_items] == [("Condo", 0.0)]


def test_condo_recorded_when_property_type_table_missing():
    matrix = copy.deepcopy(LLPA_ADJUSTMENTS)
    del matrix["Conventional"]["propertyType"]
    b = BorrowerRecord(loan_amount=100000, property_value=400000, property_type="Condo")
    res = evaluate_adjustments(b, ScenarioInputs(), matrix)
    assert _names(res) == ["Condo"]
    assert res.total == 0.0


def test_condo_and_manufactured_both_apply():
    b = BorrowerRecord(loan_amount=100000, property_value=400000, property_type="Manufactured Condo")
    res = evaluate_adjustments(b, ScenarioInputs(), LLPA_ADJUSTMENTS)
    assert [(i.name, i.points) for i in res.line_items] == [("Condo", 0.75), ("Manufactured Home", 0.5)]


def test_single_unit_label_and_multi_unit_label():
    matrix = copy.deepcopy(LLPA_ADJUSTMENTS)
    matrix["Conventional"]["units"]["1"] = 0.125
    one = evaluate_adjustments(BorrowerRecord(loan_amount=1, property_value=100), ScenarioInputs(), matrix)
    assert _names(one) == ["1 Unit"]
    three = evaluate_adjustments(
        BorrowerRecord(loan_amount=1, property_value=100, units="3"), ScenarioInputs(), LLPA_ADJUSTMENTS
    )
    assert _names(three) == ["3 Units"]


def test_home_ready_waiver_cancels_positive_total():
    b = BorrowerRecord(loan_amount=300000, property_value=350000, credit_score="640-659", property_type="Condo")
    res = evaluate_adjustments(b, ScenarioInputs(home_ready_eligible=True), LLPA_ADJUSTMENTS)
    waiver = res.line_items[-1]
    assert waiver.name == "HomeReady® Waiver"
    assert waiver.points == pytest.approx(-3.0)
    assert res.total == 0.0
    assert sum(i.points for i in res.line_items) == pytest.approx(0.0)


def test_home_ready_waiver_skipped_for_credit_total():
    b = BorrowerRecord(loan_amount=100000, property_value=400000)
    res = evaluate_adjustments(b, ScenarioInputs(new_loan_program="FHA", home_ready_eligible=True), LLPA_ADJUSTMENTS)
    assert "HomeReady® Waiver" not in _names(res)
    assert res.total == pytest.approx(-0.25)


_credit = st.sampled_from([t for _, t in CREDIT_TIERS] + [LOWEST_CREDIT_TIER])


@given(
    program=st.sampled_from(list(LLPA_ADJUSTMENTS)),
    credit=_credit,
    loan=st.floats(min_value=10_000, max_value=2_000_000),
    value=st.floats(min_value=10_000, max_value=3_000_000),
    product=st.sampled_from(["Fixed", "ARM", "InterestOnly"]),
    occupancy=st.sampled_from(["Primary", "SecondHome", "Investment"]),
    units=st.sampled_from(["1", "2", "3", "4"]),
    refi=st.sampled_from(["RateTerm", "CashOut", "Streamline"]),
)
def test_total_is_sum_of_independent_categories(program, credit, loan, value, product, occupancy, units, refi):
    b = BorrowerRecord(
        loan_amount=loan,
        property_value=value,
        credit_score=credit,
        product_type=product,
        occupancy=occupancy,
        units=units,
    )
    sc = ScenarioInputs(new_loan_program=program, new_refinance_type=refi)
    res = evaluate_adjustments(b, sc, LLPA_ADJUSTMENTS)
    table = LLPA_ADJUSTMENTS[program]
    parts = [
        lookup(table["units"], units),
        lookup(table["refinanceType"], refi),
        lookup(table["occupancy"], occupancy),
        lookup(table["productType"], product),
        lookup(table["creditScore"], credit),
        lookup(table["ltv"], ltv_tier(res.ltv)),
    ]
    assert res.total == pytest.approx(sum(parts))
    assert all(i.points != 0 for i in res.line_items)


@given(
    program=st.sampled_from(list(LLPA_ADJUSTMENTS)),
    credit=_credit,
    loan=st.floats(min_value=10_000, max_value=2_000_000),
    value=st.floats(min_value=10_000, max_value=3_000_000),
    product=st.sampled_from(["Fixed", "ARM", "InterestOnly"]),
    occupancy=st.sampled_from(["Primary", "SecondHome", "Investment"]),
    property_type=st.sampled_from(["Single Family", "Condo", "Manufactured Home", "manufactured condo"]),
    units=st.sampled_from(["1", "2", "3", "4"]),
    refi=st.sampled_from(["RateTerm", "CashOut", "Streamline"]),
)
def test_home_ready_waiver_offsets_any_positive_total(
    program, credit, loan, value, product, occupancy, property_type, units, refi
):
    b = BorrowerRecord(
        loan_amount=loan,
        property_value=value,
        credit_score=credit,
        product_type=product,
        occupancy=occupancy,
        property_type=property_type,
        units=units,
    )
    plain = evaluate_adjustments(b, ScenarioInputs(new_loan_program=program, new_refinance_type=refi), LLPA_ADJUSTMENTS)
    assume(plain.total > 0)

    waived = evaluate_adjustments(
        b, ScenarioInputs(new_loan_program=program, new_refinance_type=refi, home_ready_eligible=True), LLPA_ADJUSTMENTS
    )
    assert waived.line_items[:-1] == plain.line_items
    assert waived.line_items[-1].name == "HomeReady® Waiver"
    assert waived.line_items[-1].points == -plain.total
    assert waived.total == 0.0
