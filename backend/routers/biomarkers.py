from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from backend.config import settings
from backend.database import get_db
from backend.models.biomarker import BiomarkerObservationRecord
from backend.routers.deps import get_user_id
from backend.schemas.biomarker import (
    BiomarkerEntryRequest,
    BiomarkerObservation,
    BiomarkerObservationResponse,
    FindingsExtractionRequest,
)
from backend.services.classifier import default_unit, resolve_biomarker_type
from backend.services.extractor import extract_biomarkers

router = APIRouter(prefix="/api/biomarkers", tags=["biomarkers"])


def as_naive_utc(value: datetime | None) -> datetime:
    if value is None:
        return datetime.utcnow()
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _record_from_observation(user_id: str, observation: BiomarkerObservation) -> BiomarkerObservationRecord:
    return BiomarkerObservationRecord(
        user_id=user_id,
        biomarker_type=observation.biomarker_type,
        value=observation.value,
        unit=observation.unit,
        recorded_at=as_naive_utc(observation.recorded_at),
        source_report_id=observation.source_report_id,
    )


@router.post("")
def add_biomarker(
    payload: BiomarkerEntryRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    biomarker_type = resolve_biomarker_type(payload.biomarker_type)
    if not biomarker_type:
        raise HTTPException(status_code=400, detail="Biomarker type must contain letters or digits")
    unit = payload.unit or default_unit(biomarker_type)
    if not unit:
        raise HTTPException(status_code=400, detail=f"Unit is required for biomarker '{biomarker_type}'")

    record = BiomarkerObservationRecord(
        user_id=user_id,
        biomarker_type=biomarker_type,
        value=payload.value,
        unit=unit,
        recorded_at=as_naive_utc(payload.recorded_at),
        source_report_id=payload.source_report_id,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return {
        "statusCode": 200,
        "message": "Biomarker data added successfully",
        "data": BiomarkerObservationResponse.model_validate(record).model_dump(mode="json"),
    }


@router.post("/extract")
def extract_from_findings(
    payload: FindingsExtractionRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    observations = extract_biomarkers(
        payload.findings,
        payload.report_category,
        recorded_at=payload.recorded_at,
        source_report_id=payload.source_report_id,
    )
    records = [_record_from_observation(user_id, observation) for observation in observations]
    db.add_all(records)
    db.commit()
    for record in records:
        db.refresh(record)

    return {
        "statusCode": 200,
        "message": f"Extracted {len(records)} biomarker(s)",
        "data": [BiomarkerObservationResponse.model_validate(r).model_dump(mode="json") for r in records],
    }


@router.get("/summary", response_model=list[BiomarkerObservationResponse])
def summary(db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    rows = (
        db.query(BiomarkerObservationRecord)
        .filter(BiomarkerObservationRecord.user_id == user_id)
        .order_by(BiomarkerObservationRecord.recorded_at.desc(), BiomarkerObservationRecord.id.desc())
        .all()
    )

    latest_by_type: dict[str, BiomarkerObservationRecord] = {}
    for row in rows:
        latest_by_type.setdefault(row.biomarker_type, row)
    return sorted(latest_by_type.values(), key=lambda r: r.biomarker_type)


@router.get("/{biomarker_type}/history", response_model=list[BiomarkerObservationResponse])
def history(
    biomarker_type: str,
    limit: int | None = Query(default=None, ge=1, le=100),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    return (
        db.query(BiomarkerObservationRecord)
        .filter(
            BiomarkerObservationRecord.user_id == user_id,
            BiomarkerObservationRecord.biomarker_type == biomarker_type,
        )
        .order_by(BiomarkerObservationRecord.recorded_at.desc(), BiomarkerObservationRecord.id.desc())
        .limit(limit or settings.trend_history_limit)
        .all()
    )
