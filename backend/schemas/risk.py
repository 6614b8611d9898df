from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BiologicalSex(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class SmokingStatus(str, Enum):
    NEVER = "NEVER"
    FORMER = "FORMER"
    CURRENT = "CURRENT"


class RiskCategory(str, Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"


class AssessmentType(str, Enum):
    FRAMINGHAM_CVD = "FRAMINGHAM_CVD"
    DIABETES_RISK = "DIABETES_RISK"


class RiskFactors(BaseModel):
    """Risk-factor snapshot for one assessment. Absent values are None, never zero."""
    model_config = ConfigDict(allow_inf_nan=False)

    age: float | None = Field(default=None, description="Age in years")
    biological_sex: BiologicalSex = BiologicalSex.MALE
    total_cholesterol: float | None = Field(default=None, description="mg/dL")
    hdl_cholesterol: float | None = Field(default=None, description="mg/dL")
    ldl_cholesterol: float | None = Field(default=None, description="mg/dL")
    systolic_bp: float | None = Field(default=None, description="mmHg")
    diastolic_bp: float | None = Field(default=None, description="mmHg")
    smoking_status: SmokingStatus | None = None
    diabetes_status: bool | None = None
    hypertension_treated: bool | None = None
    family_history_cvd: bool | None = None
    weight: float | None = Field(default=None, description="kg")
    height: float | None = Field(default=None, description="cm")
    waist_circumference: float | None = Field(default=None, description="cm")
    fasting_glucose: float | None = Field(default=None, description="mg/dL")
    hba1c: float | None = Field(default=None, description="%")
    triglycerides: float | None = Field(default=None, description="mg/dL")


class RiskAssessmentResult(BaseModel):
    assessment_type: AssessmentType
    score: int
    risk_category: RiskCategory
    percentage_risk: float | None = None
    factors: dict[str, Any]
    recommendations: list[str]
    interpretation: str
    validity_period: int = Field(description="Days until reassessment is needed")


class RiskProfile(BaseModel):
    cardiovascular: RiskAssessmentResult | None = None
    diabetes: RiskAssessmentResult | None = None
    health_score: int


class PatientProfilePayload(BaseModel):
    age: float | None = Field(default=None, ge=0)
    biological_sex: BiologicalSex | None = None
    weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    waist_circumference: float | None = Field(default=None, gt=0)
    smoking_status: SmokingStatus | None = None
    diabetes_status: bool | None = None
    hypertension_treated: bool | None = None
    family_history_cvd: bool | None = None


class PatientProfileResponse(PatientProfilePayload):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    health_score: int | None = None
    updated_at: datetime


class StoredRiskAssessment(BaseModel):
    id: int
    assessment_type: AssessmentType
    score: int
    risk_category: RiskCategory
    percentage_risk: float | None
    factors: dict[str, Any]
    recommendations: list[str]
    interpretation: str
    calculated_at: datetime
    valid_until: datetime
