from datetime import datetime

from sqlalchemy import BIGINT, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from backend.database import USER_ID_MAX_LENGTH, Base


class BiomarkerObservationRecord(Base):
    __tablename__ = "biomarker_observations"

    id: Mapped[int] = mapped_column(BIGINT().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(USER_ID_MAX_LENGTH), index=True, nullable=False)
    biomarker_type: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(DateTime, index=True, nullable=False)
    source_report_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
