from collections import defaultdict

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backend.config import settings
from backend.database import get_db
from backend.models.biomarker import BiomarkerObservationRecord
from backend.routers.deps import get_user_id
from backend.schemas.biomarker import BiomarkerObservation, TrendResult, TrendSummary
from backend.services.trend_analyzer import MAX_TREND_POINTS, classify_trend, summarize_trends

router = APIRouter(prefix="/api/trends", tags=["trends"])


def _to_observation(record: BiomarkerObservationRecord) -> BiomarkerObservation:
    return BiomarkerObservation(
        biomarker_type=record.biomarker_type,
        value=record.value,
        unit=record.unit,
        recorded_at=record.recorded_at,
        source_report_id=record.source_report_id,
    )


@router.get("/overview", response_model=TrendSummary)
def overview(db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    rows = (
        db.query(BiomarkerObservationRecord)
        .filter(BiomarkerObservationRecord.user_id == user_id)
        .order_by(BiomarkerObservationRecord.recorded_at.desc(), BiomarkerObservationRecord.id.desc())
        .all()
    )

    grouped = defaultdict(list)
    for row in rows:
        if len(grouped[row.biomarker_type]) < MAX_TREND_POINTS:
            grouped[row.biomarker_type].append(_to_observation(row))

    trends = [
        classify_trend(biomarker_type, history, settings.trend_min_data_points)
        for biomarker_type, history in sorted(grouped.items())
    ]
    return summarize_trends(trends)


@router.get("/{biomarker_type}", response_model=TrendResult)
def biomarker_trend(
    biomarker_type: str,
    min_data_points: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    rows = (
        db.query(BiomarkerObservationRecord)
        .filter(
            BiomarkerObservationRecord.user_id == user_id,
            BiomarkerObservationRecord.biomarker_type == biomarker_type,
        )
        .order_by(BiomarkerObservationRecord.recorded_at.desc(), BiomarkerObservationRecord.id.desc())
        .limit(MAX_TREND_POINTS)
        .all()
    )
    required = min_data_points if min_data_points is not None else settings.trend_min_data_points
    return classify_trend(biomarker_type, [_to_observation(r) for r in rows], required)
