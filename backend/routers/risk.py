import json
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.models.biomarker import BiomarkerObservationRecord
from backend.models.patient import PatientProfile
from backend.models.risk_assessment import RiskAssessmentRecord
from backend.routers.deps import get_user_id
from backend.schemas.risk import (
    PatientProfilePayload,
    PatientProfileResponse,
    RiskAssessmentResult,
    RiskFactors,
    StoredRiskAssessment,
)
from backend.services.risk_aggregator import calculate_risk_profile

router = APIRouter(prefix="/api/risk", tags=["risk"])

PROFILE_FIELDS = (
    "age",
    "biological_sex",
    "weight",
    "height",
    "waist_circumference",
    "smoking_status",
    "diabetes_status",
    "hypertension_treated",
    "family_history_cvd",
)

# biomarker type -> risk factor it feeds
BIOMARKER_FACTORS = {
    "cholesterol_total": "total_cholesterol",
    "cholesterol_hdl": "hdl_cholesterol",
    "cholesterol_ldl": "ldl_cholesterol",
    "bp_systolic": "systolic_bp",
    "bp_diastolic": "diastolic_bp",
    "glucose_fasting": "fasting_glucose",
    "hba1c": "hba1c",
    "triglycerides": "triglycerides",
}

MAX_ASSESSMENTS = 10


def _profile_factors(profile: PatientProfile | None) -> dict:
    if profile is None:
        return {}
    values = {name: getattr(profile, name) for name in PROFILE_FIELDS}
    return {name: value for name, value in values.items() if value is not None}


def _latest_biomarker_factors(db: Session, user_id: str) -> dict:
    rows = (
        db.query(BiomarkerObservationRecord)
        .filter(
            BiomarkerObservationRecord.user_id == user_id,
            BiomarkerObservationRecord.biomarker_type.in_(list(BIOMARKER_FACTORS)),
        )
        .order_by(BiomarkerObservationRecord.recorded_at.desc(), BiomarkerObservationRecord.id.desc())
        .all()
    )
    factors = {}
    for row in rows:
        factors.setdefault(BIOMARKER_FACTORS[row.biomarker_type], row.value)
    return factors


def _store_assessment(db: Session, user_id: str, result: RiskAssessmentResult, now: datetime) -> RiskAssessmentRecord:
    record = RiskAssessmentRecord(
        user_id=user_id,
        assessment_type=result.assessment_type.value,
        score=result.score,
        risk_category=result.risk_category.value,
        percentage_risk=result.percentage_risk,
        factors=json.dumps(result.factors),
        recommendations="\n".join(result.recommendations),
        interpretation=result.interpretation,
        calculated_at=now,
        valid_until=now + timedelta(days=result.validity_period),
    )
    db.add(record)
    return record


def _serialize_assessment(record: RiskAssessmentRecord) -> StoredRiskAssessment:
    return StoredRiskAssessment(
        id=record.id,
        assessment_type=record.assessment_type,
        score=record.score,
        risk_category=record.risk_category,
        percentage_risk=record.percentage_risk,
        factors=json.loads(record.factors or "{}"),
        recommendations=[line for line in record.recommendations.split("\n") if line],
        interpretation=record.interpretation,
        calculated_at=record.calculated_at,
        valid_until=record.valid_until,
    )


@router.get("/profile", response_model=PatientProfileResponse)
def get_profile(db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    profile = db.query(PatientProfile).filter(PatientProfile.user_id == user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Patient profile not found")
    return profile


@router.put("/profile", response_model=PatientProfileResponse)
def update_profile(
    payload: PatientProfilePayload,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    profile = db.query(PatientProfile).filter(PatientProfile.user_id == user_id).first()
    if not profile:
        profile = PatientProfile(user_id=user_id)
        db.add(profile)

    for name, value in payload.model_dump(exclude_unset=True, mode="json").items():
        setattr(profile, name, value)
    db.commit()
    db.refresh(profile)
    return profile


@router.post("/assessment")
def create_assessment(
    payload: RiskFactors,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    profile = db.query(PatientProfile).filter(PatientProfile.user_id == user_id).first()

    merged = _profile_factors(profile)
    merged.update(_latest_biomarker_factors(db, user_id))
    merged.update(payload.model_dump(exclude_unset=True))
    factors = RiskFactors.model_validate(merged)

    risk_profile = calculate_risk_profile(factors)

    now = datetime.utcnow()
    records = [
        _store_assessment(db, user_id, result, now)
        for result in (risk_profile.cardiovascular, risk_profile.diabetes)
        if result is not None
    ]

    if not profile:
        profile = PatientProfile(user_id=user_id)
        db.add(profile)
    profile.health_score = risk_profile.health_score
    db.commit()
    for record in records:
        db.refresh(record)

    return {
        "statusCode": 200,
        "message": "Risk assessment calculated successfully",
        "data": {
            "risk_profile": risk_profile.model_dump(mode="json"),
            "factors": factors.model_dump(mode="json"),
            "assessments": [_serialize_assessment(r).model_dump(mode="json") for r in records],
        },
    }


@router.get("/assessment")
def list_assessments(db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    rows = (
        db.query(RiskAssessmentRecord)
        .filter(
            RiskAssessmentRecord.user_id == user_id,
            RiskAssessmentRecord.valid_until >= datetime.utcnow(),
        )
        .order_by(RiskAssessmentRecord.calculated_at.desc(), RiskAssessmentRecord.id.desc())
        .limit(MAX_ASSESSMENTS)
        .all()
    )
    profile = db.query(PatientProfile).filter(PatientProfile.user_id == user_id).first()

    return {
        "statusCode": 200,
        "message": "Success",
        "data": {
            "risk_assessments": [_serialize_assessment(r).model_dump(mode="json") for r in rows],
            "health_score": profile.health_score if profile else None,
        },
    }
