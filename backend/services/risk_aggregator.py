import logging

from backend.schemas.risk import RiskCategory, RiskFactors, RiskProfile, SmokingStatus
from backend.services.risk_scoring import MissingRiskFactorsError, score_cardiovascular, score_diabetes

logger = logging.getLogger(__name__)

BASE_HEALTH_SCORE = 100

CARDIOVASCULAR_DEDUCTIONS = {
    RiskCategory.MODERATE: 10,
    RiskCategory.HIGH: 20,
    RiskCategory.VERY_HIGH: 35,
}

DIABETES_DEDUCTIONS = {
    RiskCategory.MODERATE: 8,
    RiskCategory.HIGH: 15,
    RiskCategory.VERY_HIGH: 25,
}

SMOKING_DEDUCTIONS = {
    SmokingStatus.CURRENT: 15,
    SmokingStatus.FORMER: 5,
}


def _diabetes_applicable(factors: RiskFactors) -> bool:
    return factors.age is not None and (factors.weight is not None or factors.fasting_glucose is not None)


def calculate_risk_profile(factors: RiskFactors) -> RiskProfile:
    """Run every applicable scorer and fold the results into a 0-100 health score."""
    health_score = BASE_HEALTH_SCORE

    try:
        cardiovascular = score_cardiovascular(factors)
    except MissingRiskFactorsError as exc:
        logger.info("Cardiovascular score not applicable: missing %s", ", ".join(exc.missing))
        cardiovascular = None
    else:
        health_score -= CARDIOVASCULAR_DEDUCTIONS.get(cardiovascular.risk_category, 0)

    diabetes = None
    if _diabetes_applicable(factors):
        diabetes = score_diabetes(factors)
        health_score -= DIABETES_DEDUCTIONS.get(diabetes.risk_category, 0)

    if factors.smoking_status is not None:
        health_score -= SMOKING_DEDUCTIONS.get(factors.smoking_status, 0)

    return RiskProfile(
        cardiovascular=cardiovascular,
        diabetes=diabetes,
        health_score=max(0, min(100, health_score)),
    )
