from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from backend.database import USER_ID_MAX_LENGTH, Base


class PatientProfile(Base):
    __tablename__ = "patient_profiles"

    user_id: Mapped[str] = mapped_column(String(USER_ID_MAX_LENGTH), primary_key=True)
    age: Mapped[float | None] = mapped_column(Float, nullable=True)
    biological_sex: Mapped[str | None] = mapped_column(String(10), nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    height: Mapped[float | None] = mapped_column(Float, nullable=True)
    waist_circumference: Mapped[float | None] = mapped_column(Float, nullable=True)
    smoking_status: Mapped[str | None] = mapped_column(String(10), nullable=True)
    diabetes_status: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    hypertension_treated: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    family_history_cvd: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    health_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
