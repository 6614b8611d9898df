import pytest

from backend.schemas.risk import (
    AssessmentType,
    BiologicalSex,
    RiskCategory,
    RiskFactors,
    SmokingStatus,
)
from backend.services.risk_scoring import (
    AGE_POINTS,
    HDL_POINTS,
    SYSTOLIC_POINTS_TREATED,
    SYSTOLIC_POINTS_UNTREATED,
    MissingRiskFactorsError,
    band_points,
    cardiovascular_category,
    cardiovascular_percentage,
    score_cardiovascular,
    score_diabetes,
)


def _reference_patient(**overrides) -> RiskFactors:
    values = dict(
        age=52,
        biological_sex=BiologicalSex.MALE,
        total_cholesterol=195,
        hdl_cholesterol=48,
        systolic_bp=135,
        smoking_status=SmokingStatus.FORMER,
        hypertension_treated=False,
    )
    values.update(overrides)
    return RiskFactors(**values)


def test_reference_patient_score_is_reproducible():
    first = score_cardiovascular(_reference_patient())
    second = score_cardiovascular(_reference_patient())

    # age 50-54 (+3), TC 160-199 (0), HDL 45-49 (0), untreated SBP 130-139 (+1)
    assert first.score == 4
    assert first.risk_category == RiskCategory.LOW
    assert first.percentage_risk == pytest.approx(9.0)
    assert first.assessment_type == AssessmentType.FRAMINGHAM_CVD
    assert first.validity_period == 365
    assert first == second


def test_interpretation_reports_percent_and_category():
    result = score_cardiovascular(_reference_patient())

    assert "9.0% risk" in result.interpretation
    assert "LOW risk category" in result.interpretation


@pytest.mark.parametrize(
    "field",
    ["age", "total_cholesterol", "hdl_cholesterol", "systolic_bp"],
)
def test_missing_required_factor_raises(field):
    factors = _reference_patient(**{field: None})

    with pytest.raises(MissingRiskFactorsError) as excinfo:
        score_cardiovascular(factors)

    assert excinfo.value.missing == [field]


def test_zero_required_factor_counts_as_missing():
    with pytest.raises(MissingRiskFactorsError):
        score_cardiovascular(_reference_patient(age=0))


@pytest.mark.parametrize(
    "age, male, female",
    [(29, 0, 0), (30, -1, -9), (34.9, -1, -9), (35, 0, -4), (44, 1, 0), (50, 3, 6), (74, 7, 10), (75, 8, 11), (90, 8, 11)],
)
def test_age_band_boundaries(age, male, female):
    assert band_points(AGE_POINTS[BiologicalSex.MALE], age) == male
    assert band_points(AGE_POINTS[BiologicalSex.FEMALE], age) == female


@pytest.mark.parametrize("hdl, points", [(34, 2), (35, 1), (45, 0), (50, -1), (59.9, -1), (60, -2)])
def test_hdl_bands_are_inverse(hdl, points):
    assert band_points(HDL_POINTS, hdl) == points


@pytest.mark.parametrize(
    "sbp, treated, untreated",
    [(119, 0, 0), (125, 1, 1), (135, 2, 1), (150, 3, 2), (160, 4, 3)],
)
def test_treated_blood_pressure_scores_higher(sbp, treated, untreated):
    assert band_points(SYSTOLIC_POINTS_TREATED, sbp) == treated
    assert band_points(SYSTOLIC_POINTS_UNTREATED, sbp) == untreated


def test_female_cholesterol_table_differs_below_160():
    male = score_cardiovascular(_reference_patient(total_cholesterol=150, smoking_status=None))
    female = score_cardiovascular(
        _reference_patient(total_cholesterol=150, smoking_status=None, biological_sex=BiologicalSex.FEMALE)
    )

    # male: 3 - 3 + 0 + 1, female: 6 - 2 + 0 + 1
    assert male.score == 1
    assert female.score == 5


def test_smoking_and_diabetes_add_points_and_recommendations():
    result = score_cardiovascular(
        _reference_patient(smoking_status=SmokingStatus.CURRENT, diabetes_status=True, systolic_bp=150)
    )

    # 3 + 0 + 0 + 2 + 4 + 3
    assert result.score == 12
    assert result.risk_category == RiskCategory.HIGH
    assert result.percentage_risk == pytest.approx(26.0)
    assert result.recommendations == [
        "Smoking cessation is the single most important step to reduce cardiovascular risk",
        "Work with your doctor to manage high blood pressure through medication and lifestyle changes",
        "Maintain tight glycemic control through diet, exercise, and medication as prescribed",
        "Aim for 150 minutes of moderate-intensity aerobic exercise per week",
        "Follow a heart-healthy diet (Mediterranean or DASH diet)",
        "Schedule regular follow-ups with your cardiologist",
        "Discuss aspirin therapy and statin use with your doctor",
    ]


@pytest.mark.parametrize(
    "points, percent, category",
    [
        (-4, 2.0, RiskCategory.LOW),
        (0, 2.0, RiskCategory.LOW),
        (5, 10.5, RiskCategory.LOW),
        (6, 12.0, RiskCategory.MODERATE),
        (10, 20.0, RiskCategory.MODERATE),
        (15, 35.0, RiskCategory.HIGH),
        (16, 37.0, RiskCategory.VERY_HIGH),
        (30, 60.0, RiskCategory.VERY_HIGH),
    ],
)
def test_points_to_percentage_and_category(points, percent, category):
    assert cardiovascular_percentage(points) == pytest.approx(percent)
    assert cardiovascular_category(points) == category


def test_diabetes_age_only():
    result = score_diabetes(RiskFactors(age=45))

    assert result.score == 2
    assert result.risk_category == RiskCategory.LOW
    assert result.percentage_risk == 5.0
    assert result.interpretation.endswith("Continue healthy lifestyle practices.")


def test_diabetes_with_no_data_scores_zero():
    result = score_diabetes(RiskFactors())

    assert result.score == 0
    assert result.factors["bmi"] is None


def test_diabetes_full_risk_profile():
    factors = RiskFactors(
        age=50,
        biological_sex=BiologicalSex.FEMALE,
        weight=90,
        height=165,
        waist_circumference=95,
        family_history_cvd=True,
        systolic_bp=145,
        fasting_glucose=110,
        hba1c=6.0,
    )

    result = score_diabetes(factors)

    # age 2, BMI 33 -> 3, waist 2, family 2, SBP 2, glucose 3, HbA1c 3
    assert result.score == 17
    assert result.risk_category == RiskCategory.VERY_HIGH
    assert result.percentage_risk == 50.0
    assert "Consider screening" in result.interpretation
    assert result.recommendations == [
        "Aim to lose 6 kg (7% of body weight) through diet and exercise",
        "Request a glucose tolerance test or HbA1c screening from your doctor",
        "Adopt a low-glycemic index diet rich in vegetables, whole grains, and lean protein",
        "Engage in at least 150 minutes of moderate physical activity per week",
        "Discuss metformin therapy or a diabetes prevention program with your doctor",
        "Monitor blood glucose levels regularly",
    ]


def test_diabetes_prediabetic_bands_are_half_open():
    assert score_diabetes(RiskFactors(fasting_glucose=126)).score == 0
    assert score_diabetes(RiskFactors(fasting_glucose=100)).score == 3
    assert score_diabetes(RiskFactors(hba1c=6.5)).score == 0
    assert score_diabetes(RiskFactors(hba1c=5.7)).score == 3


def test_waist_threshold_depends_on_sex():
    male = score_diabetes(RiskFactors(waist_circumference=95, biological_sex=BiologicalSex.MALE))
    female = score_diabetes(RiskFactors(waist_circumference=95, biological_sex=BiologicalSex.FEMALE))

    assert male.score == 0
    assert female.score == 2


@pytest.mark.parametrize("age, points", [(39.9, 0), (40, 1), (44.9, 1), (45, 2)])
def test_diabetes_age_bands(age, points):
    assert score_diabetes(RiskFactors(age=age)).score == points


@pytest.mark.parametrize(
    "weight, height, points",
    [(99.6, 200, 0), (100, 200, 2), (80, 175, 2), (119.6, 200, 2), (120, 200, 3)],
)
def test_diabetes_bmi_bands(weight, height, points):
    # 200 cm keeps the BMI exact: 100 kg -> 25.0, 120 kg -> 30.0
    assert score_diabetes(RiskFactors(weight=weight, height=height)).score == points
