"""Deterministic clinical risk scores.

Cardiovascular risk follows the points form of the Framingham general CVD
score; diabetes risk is an additive heuristic over ADA/CDC screening factors.
Point tables are half-open ``[low, high)`` bands.
"""

import math

from backend.schemas.risk import (
    AssessmentType,
    BiologicalSex,
    RiskAssessmentResult,
    RiskCategory,
    RiskFactors,
    SmokingStatus,
)
from backend.services.recommendations import (
    cardiovascular_recommendations,
    compute_bmi,
    diabetes_recommendations,
)

Band = tuple[float, float, int]

VALIDITY_DAYS = 365

AGE_POINTS: dict[BiologicalSex, tuple[Band, ...]] = {
    BiologicalSex.MALE: (
        (-math.inf, 30, 0),
        (30, 35, -1),
        (35, 40, 0),
        (40, 45, 1),
        (45, 50, 2),
        (50, 55, 3),
        (55, 60, 4),
        (60, 65, 5),
        (65, 70, 6),
        (70, 75, 7),
        (75, math.inf, 8),
    ),
    BiologicalSex.FEMALE: (
        (-math.inf, 30, 0),
        (30, 35, -9),
        (35, 40, -4),
        (40, 45, 0),
        (45, 50, 3),
        (50, 55, 6),
        (55, 60, 7),
        (60, 65, 8),
        (65, 70, 9),
        (70, 75, 10),
        (75, math.inf, 11),
    ),
}

TOTAL_CHOLESTEROL_POINTS: dict[BiologicalSex, tuple[Band, ...]] = {
    BiologicalSex.MALE: (
        (-math.inf, 160, -3),
        (160, 200, 0),
        (200, 240, 1),
        (240, 280, 2),
        (280, math.inf, 3),
    ),
    BiologicalSex.FEMALE: (
        (-math.inf, 160, -2),
        (160, 200, 0),
        (200, 240, 1),
        (240, 280, 2),
        (280, math.inf, 3),
    ),
}

HDL_POINTS: tuple[Band, ...] = (
    (-math.inf, 35, 2),
    (35, 45, 1),
    (45, 50, 0),
    (50, 60, -1),
    (60, math.inf, -2),
)

SYSTOLIC_POINTS_TREATED: tuple[Band, ...] = (
    (-math.inf, 120, 0),
    (120, 130, 1),
    (130, 140, 2),
    (140, 160, 3),
    (160, math.inf, 4),
)

SYSTOLIC_POINTS_UNTREATED: tuple[Band, ...] = (
    (-math.inf, 120, 0),
    (120, 140, 1),
    (140, 160, 2),
    (160, math.inf, 3),
)

SMOKER_POINTS = 4
DIABETES_POINTS = 3
MAX_CVD_PERCENT = 60.0

# (highest score in tier, category, percent risk)
DIABETES_TIERS: tuple[tuple[int, RiskCategory, float], ...] = (
    (2, RiskCategory.LOW, 5.0),
    (5, RiskCategory.MODERATE, 15.0),
    (8, RiskCategory.HIGH, 30.0),
)
DIABETES_TOP_TIER = (RiskCategory.VERY_HIGH, 50.0)

WAIST_THRESHOLD_CM = {BiologicalSex.MALE: 102, BiologicalSex.FEMALE: 88}


class MissingRiskFactorsError(ValueError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required parameters for Framingham calculation: {', '.join(missing)}")


def band_points(bands: tuple[Band, ...], value: float) -> int:
    for low, high, points in bands:
        if low <= value < high:
            return points
    raise ValueError(f"{value} falls outside every band")


def _category_label(category: RiskCategory) -> str:
    return category.value.replace("_", " ")


def cardiovascular_percentage(points: int) -> float:
    if points <= 0:
        percent = 2.0
    elif points <= 5:
        percent = 3 + points * 1.5
    elif points <= 10:
        percent = 10 + (points - 5) * 2
    elif points <= 15:
        percent = 20 + (points - 10) * 3
    else:
        percent = 35 + (points - 15) * 2
    return min(float(percent), MAX_CVD_PERCENT)


def cardiovascular_category(points: int) -> RiskCategory:
    if points <= 5:
        return RiskCategory.LOW
    if points <= 10:
        return RiskCategory.MODERATE
    if points <= 15:
        return RiskCategory.HIGH
    return RiskCategory.VERY_HIGH


def missing_cardiovascular_factors(factors: RiskFactors) -> list[str]:
    required = ("age", "total_cholesterol", "hdl_cholesterol", "systolic_bp")
    return [name for name in required if getattr(factors, name) is None or getattr(factors, name) <= 0]


def score_cardiovascular(factors: RiskFactors) -> RiskAssessmentResult:
    """10-year cardiovascular risk from the Framingham points tables.

    Raises MissingRiskFactorsError when age, total cholesterol, HDL or
    systolic blood pressure is absent.
    """
    missing = missing_cardiovascular_factors(factors)
    if missing:
        raise MissingRiskFactorsError(missing)

    sex = factors.biological_sex
    systolic_bands = SYSTOLIC_POINTS_TREATED if factors.hypertension_treated else SYSTOLIC_POINTS_UNTREATED

    points = band_points(AGE_POINTS[sex], factors.age)
    points += band_points(TOTAL_CHOLESTEROL_POINTS[sex], factors.total_cholesterol)
    points += band_points(HDL_POINTS, factors.hdl_cholesterol)
    points += band_points(systolic_bands, factors.systolic_bp)
    if factors.smoking_status == SmokingStatus.CURRENT:
        points += SMOKER_POINTS
    if factors.diabetes_status:
        points += DIABETES_POINTS

    percent = cardiovascular_percentage(points)
    category = cardiovascular_category(points)

    return RiskAssessmentResult(
        assessment_type=AssessmentType.FRAMINGHAM_CVD,
        score=points,
        risk_category=category,
        percentage_risk=percent,
        factors={
            "age": factors.age,
            "sex": sex.value,
            "total_cholesterol": factors.total_cholesterol,
            "hdl_cholesterol": factors.hdl_cholesterol,
            "systolic_bp": factors.systolic_bp,
            "smoking": factors.smoking_status.value if factors.smoking_status else None,
            "diabetes": factors.diabetes_status,
            "hypertension_treated": factors.hypertension_treated,
        },
        recommendations=cardiovascular_recommendations(category, factors),
        interpretation=(
            f"Based on the Framingham Risk Score, you have a {percent:.1f}% risk of developing "
            f"cardiovascular disease in the next 10 years. This places you in the "
            f"{_category_label(category)} risk category."
        ),
        validity_period=VALIDITY_DAYS,
    )


def diabetes_tier(points: int) -> tuple[RiskCategory, float]:
    for ceiling, category, percent in DIABETES_TIERS:
        if points <= ceiling:
            return category, percent
    return DIABETES_TOP_TIER


def score_diabetes(factors: RiskFactors) -> RiskAssessmentResult:
    """Type 2 diabetes risk; each factor only counts when it is present."""
    points = 0
    bmi = compute_bmi(factors.weight, factors.height)

    if factors.age is not None:
        if factors.age >= 45:
            points += 2
        elif factors.age >= 40:
            points += 1

    if bmi is not None:
        if bmi >= 30:
            points += 3
        elif bmi >= 25:
            points += 2

    if factors.waist_circumference is not None:
        if factors.waist_circumference >= WAIST_THRESHOLD_CM[factors.biological_sex]:
            points += 2

    if factors.family_history_cvd:
        points += 2

    if factors.systolic_bp is not None and factors.systolic_bp >= 140:
        points += 2

    # prediabetic ranges
    if factors.fasting_glucose is not None and 100 <= factors.fasting_glucose < 126:
        points += 3
    if factors.hba1c is not None and 5.7 <= factors.hba1c < 6.5:
        points += 3

    category, percent = diabetes_tier(points)
    advice = "Consider screening for prediabetes or diabetes." if points >= 5 else "Continue healthy lifestyle practices."

    return RiskAssessmentResult(
        assessment_type=AssessmentType.DIABETES_RISK,
        score=points,
        risk_category=category,
        percentage_risk=percent,
        factors={
            "age": factors.age,
            "bmi": round(bmi, 1) if bmi is not None else None,
            "waist_circumference": factors.waist_circumference,
            "family_history": factors.family_history_cvd,
            "fasting_glucose": factors.fasting_glucose,
            "hba1c": factors.hba1c,
            "systolic_bp": factors.systolic_bp,
        },
        recommendations=diabetes_recommendations(category, factors),
        interpretation=(
            f"Your Type 2 Diabetes risk assessment indicates {_category_label(category)} risk "
            f"(approximately {percent:g}% likelihood). {advice}"
        ),
        validity_period=VALIDITY_DAYS,
    )
