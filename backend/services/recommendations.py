"""Recommendation rule tables attached to risk assessments.

Each table is evaluated in order: factor-specific rules, then universal
lifestyle advice, then rules gated on the resulting risk category.
"""

from collections.abc import Callable

from backend.schemas.risk import RiskCategory, RiskFactors, SmokingStatus

ELEVATED_CATEGORIES = frozenset({RiskCategory.HIGH, RiskCategory.VERY_HIGH})

Rule = tuple[Callable[[RiskFactors], bool], str]


def compute_bmi(weight: float | None, height: float | None) -> float | None:
    """BMI from weight in kg and height in cm."""
    if weight is None or height is None or height <= 0:
        return None
    height_m = height / 100
    return weight / (height_m * height_m)


CARDIOVASCULAR_FACTOR_RULES: tuple[Rule, ...] = (
    (
        lambda f: f.smoking_status == SmokingStatus.CURRENT,
        "Smoking cessation is the single most important step to reduce cardiovascular risk",
    ),
    (
        lambda f: f.systolic_bp is not None and f.systolic_bp >= 140,
        "Work with your doctor to manage high blood pressure through medication and lifestyle changes",
    ),
    (
        lambda f: f.total_cholesterol is not None and f.total_cholesterol >= 240,
        "Consider dietary changes and possibly statin therapy to lower cholesterol",
    ),
    (
        lambda f: bool(f.diabetes_status),
        "Maintain tight glycemic control through diet, exercise, and medication as prescribed",
    ),
)

CARDIOVASCULAR_LIFESTYLE = (
    "Aim for 150 minutes of moderate-intensity aerobic exercise per week",
    "Follow a heart-healthy diet (Mediterranean or DASH diet)",
)

CARDIOVASCULAR_ELEVATED = (
    "Schedule regular follow-ups with your cardiologist",
    "Discuss aspirin therapy and statin use with your doctor",
)

DIABETES_LIFESTYLE = (
    "Adopt a low-glycemic index diet rich in vegetables, whole grains, and lean protein",
    "Engage in at least 150 minutes of moderate physical activity per week",
)

DIABETES_ELEVATED = (
    "Discuss metformin therapy or a diabetes prevention program with your doctor",
    "Monitor blood glucose levels regularly",
)


def _weight_loss_advice(factors: RiskFactors) -> str | None:
    bmi = compute_bmi(factors.weight, factors.height)
    if bmi is None or bmi < 25:
        return None
    target = round(factors.weight * 0.07)
    return f"Aim to lose {target} kg (7% of body weight) through diet and exercise"


def _glucose_screening_advice(factors: RiskFactors) -> str | None:
    if factors.fasting_glucose is not None and factors.fasting_glucose >= 100:
        return "Request a glucose tolerance test or HbA1c screening from your doctor"
    return None


DIABETES_FACTOR_RULES: tuple[Callable[[RiskFactors], str | None], ...] = (
    _weight_loss_advice,
    _glucose_screening_advice,
)


def cardiovascular_recommendations(category: RiskCategory, factors: RiskFactors) -> list[str]:
    recommendations = [text for applies, text in CARDIOVASCULAR_FACTOR_RULES if applies(factors)]
    recommendations.extend(CARDIOVASCULAR_LIFESTYLE)
    if category in ELEVATED_CATEGORIES:
        recommendations.extend(CARDIOVASCULAR_ELEVATED)
    return recommendations


def diabetes_recommendations(category: RiskCategory, factors: RiskFactors) -> list[str]:
    recommendations = [text for text in (rule(factors) for rule in DIABETES_FACTOR_RULES) if text]
    recommendations.extend(DIABETES_LIFESTYLE)
    if category in ELEVATED_CATEGORIES:
        recommendations.extend(DIABETES_ELEVATED)
    return recommendations
