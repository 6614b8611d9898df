import logging

from backend.schemas.risk import BiologicalSex, RiskCategory, RiskFactors, SmokingStatus
from backend.services.risk_aggregator import calculate_risk_profile


def test_smoker_without_scorable_factors():
    profile = calculate_risk_profile(RiskFactors(smoking_status=SmokingStatus.CURRENT))

    assert profile.health_score == 85
    assert profile.cardiovascular is None
    assert profile.diabetes is None


def test_no_factors_keeps_perfect_score():
    assert calculate_risk_profile(RiskFactors()).health_score == 100


def test_former_smoker_deduction():
    assert calculate_risk_profile(RiskFactors(smoking_status=SmokingStatus.FORMER)).health_score == 95


def test_missing_cardiovascular_inputs_are_logged_not_raised(caplog):
    with caplog.at_level(logging.INFO, logger="backend.services.risk_aggregator"):
        profile = calculate_risk_profile(RiskFactors(age=45, weight=70, height=175))

    assert profile.cardiovascular is None
    assert profile.diabetes is not None
    assert "not applicable" in caplog.text


def test_diabetes_requires_age_and_weight_or_glucose():
    assert calculate_risk_profile(RiskFactors(weight=90, height=170)).diabetes is None
    assert calculate_risk_profile(RiskFactors(age=50)).diabetes is None
    assert calculate_risk_profile(RiskFactors(age=50, fasting_glucose=110)).diabetes is not None


def test_combined_deductions():
    factors = RiskFactors(
        age=52,
        biological_sex=BiologicalSex.MALE,
        total_cholesterol=250,
        hdl_cholesterol=38,
        systolic_bp=150,
        smoking_status=SmokingStatus.CURRENT,
        hypertension_treated=True,
        weight=95,
        height=175,
        fasting_glucose=105,
    )

    profile = calculate_risk_profile(factors)

    # CVD: 3 + 2 + 1 + 3 + 4 = 13 -> HIGH (-20)
    assert profile.cardiovascular.risk_category == RiskCategory.HIGH
    # diabetes: age 2 + BMI 31 -> 3 + SBP 2 + glucose 3 = 10 -> VERY_HIGH (-25)
    assert profile.diabetes.risk_category == RiskCategory.VERY_HIGH
    assert profile.health_score == 100 - 20 - 25 - 15


def test_worst_case_stays_within_bounds():
    factors = RiskFactors(
        age=80,
        biological_sex=BiologicalSex.FEMALE,
        total_cholesterol=300,
        hdl_cholesterol=30,
        systolic_bp=180,
        smoking_status=SmokingStatus.CURRENT,
        diabetes_status=True,
        hypertension_treated=True,
        weight=120,
        height=160,
        waist_circumference=110,
        family_history_cvd=True,
        fasting_glucose=120,
        hba1c=6.2,
    )

    profile = calculate_risk_profile(factors)

    assert profile.cardiovascular.risk_category == RiskCategory.VERY_HIGH
    assert profile.health_score == 100 - 35 - 25 - 15
    assert 0 <= profile.health_score <= 100
