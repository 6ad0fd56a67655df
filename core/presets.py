
DISCLAIMER = ("Loan-level price adjustments shown here are illustrative and do not reproduce any agency or investor "
"LLPA matrix. Quoted rates, points and break-even estimates are scenario estimates only; current rates are "
"approximated from the borrower's current payment. Confirm pricing with the lender's live rate sheet before "
"quoting a borrower.")

SCENARIO_DEFAULTS = {"base_rate":6.75,"starting_points":0.0,"new_loan_program":"Conventional",
"new_refinance_type":"RateTerm","home_ready_eligible":False,"break_even_threshold":18}

LOAN_PROGRAMS = ["Conventional","FHA","VA","Jumbo"]
REFINANCE_TYPES = {"RateTerm":"Rate/Term","CashOut":"Cash-Out","Streamline":"Streamline"}
PRODUCT_TYPES = ["Fixed","ARM","InterestOnly"]
OCCUPANCY_TYPES = ["Primary","SecondHome","Investment"]

# Credit tiers in descending order; the last tier catches everything below 640.
CREDIT_TIERS = [(780,">=780"),(760,"760-779"),(740,"740-759"),(720,"720-739"),(700,"700-719"),
(680,"680-699"),(660,"660-679"),(640,"640-659")]
LOWEST_CREDIT_TIER = "<640"

# Upper bound (inclusive) of each LTV tier; anything higher falls in ">97".
LTV_TIERS = [(60,"<=60"),(70,"60.01-70"),(75,"70.01-75"),(80,"75.01-80"),(85,"80.01-85"),
(90,"85.01-90"),(95,"90.01-95"),(97,"95.01-97")]
TOP_LTV_TIER = ">97"

RATE_SOLVER = {"start_rate":6.0,"step":0.01,"tolerance":0.001,"max_iterations":100,"floor_rate":0.1}

# Point adjustments per loan program. Positive values are a cost to the
# borrower, negative values a credit. Matrix categories mirror the borrower
# attributes the evaluator looks up.
LLPA_ADJUSTMENTS = {
    "Conventional": {
        "ltv": {"<=60": 0.0, "60.01-70": 0.125, "70.01-75": 0.25, "75.01-80": 0.375, "80.01-85": 0.5,
                "85.01-90": 0.5, "90.01-95": 0.625, "95.01-97": 0.75, ">97": 1.0},
        "creditScore": {">=780": 0.0, "760-779": 0.0, "740-759": 0.25, "720-739": 0.5, "700-719": 0.75,
                        "680-699": 1.0, "660-679": 1.375, "640-659": 1.75, "<640": 2.25},
        "productType": {"Fixed": 0.0, "ARM": 0.25, "InterestOnly": 0.5},
        "occupancy": {"Primary": 0.0, "SecondHome": 1.125, "Investment": 2.125},
        "refinanceType": {"RateTerm": 0.0, "CashOut": 0.75},
        "propertyType": {"Condo": 0.75, "ManufacturedHome": 0.5},
        "units": {"1": 0.0, "2": 1.0, "3": 1.0, "4": 1.0},
    },
    "FHA": {
        "ltv": {"<=60": 0.0, "60.01-70": 0.0, "70.01-75": 0.0, "75.01-80": 0.0, "80.01-85": 0.125,
                "85.01-90": 0.125, "90.01-95": 0.25, "95.01-97": 0.25, ">97": 0.375},
        "creditScore": {">=780": -0.25, "760-779": -0.25, "740-759": -0.125, "720-739": 0.0, "700-719": 0.0,
                        "680-699": 0.25, "660-679": 0.5, "640-659": 0.75, "<640": 1.25},
        "productType": {"Fixed": 0.0, "ARM": 0.25},
        "occupancy": {"Primary": 0.0, "SecondHome": 0.5, "Investment": 1.0},
        "refinanceType": {"RateTerm": 0.0, "CashOut": 0.5, "Streamline": -0.25},
        "propertyType": {"Condo": 0.25, "ManufacturedHome": 0.5},
        "units": {"1": 0.0, "2": 0.25, "3": 0.5, "4": 0.5},
    },
    "VA": {
        "ltv": {"<=60": 0.0, "60.01-70": 0.0, "70.01-75": 0.0, "75.01-80": 0.0, "80.01-85": 0.0,
                "85.01-90": 0.125, "90.01-95": 0.125, "95.01-97": 0.25, ">97": 0.25},
        "creditScore": {">=780": -0.25, "760-779": -0.125, "740-759": 0.0, "720-739": 0.0, "700-719": 0.125,
                        "680-699": 0.25, "660-679": 0.5, "640-659": 0.75, "<640": 1.0},
        "productType": {"Fixed": 0.0, "ARM": 0.125},
        "occupancy": {"Primary": 0.0, "SecondHome": 0.5, "Investment": 1.0},
        "refinanceType": {"RateTerm": 0.0, "CashOut": 0.5, "Streamline": -0.25},
        "propertyType": {"Condo": 0.125, "ManufacturedHome": 0.75},
        "units": {"1": 0.0, "2": 0.25, "3": 0.5, "4": 0.5},
    },
    "Jumbo": {
        "ltv": {"<=60": -0.25, "60.01-70": 0.0, "70.01-75": 0.25, "75.01-80": 0.5, "80.01-85": 0.875,
                "85.01-90": 1.25, "90.01-95": 1.75, "95.01-97": 2.25, ">97": 2.75},
        "creditScore": {">=780": 0.0, "760-779": 0.125, "740-759": 0.375, "720-739": 0.75, "700-719": 1.25,
                        "680-699": 1.75, "660-679": 2.5, "640-659": 3.0, "<640": 3.5},
        "productType": {"Fixed": 0.0, "ARM": -0.125, "InterestOnly": 0.375},
        "occupancy": {"Primary": 0.0, "SecondHome": 0.75, "Investment": 1.5},
        "refinanceType": {"RateTerm": 0.0, "CashOut": 1.0},
        "propertyType": {"Condo": 0.5, "ManufacturedHome": 1.0},
        "units": {"1": 0.0, "2": 0.5, "3": 0.75, "4": 0.75},
    },
}
