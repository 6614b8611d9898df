from datetime import datetime

from sqlalchemy import BIGINT, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backend.database import USER_ID_MAX_LENGTH, Base


class RiskAssessmentRecord(Base):
    __tablename__ = "risk_assessments"

    id: Mapped[int] = mapped_column(BIGINT().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(USER_ID_MAX_LENGTH), index=True, nullable=False)
    assessment_type: Mapped[str] = mapped_column(String(30), nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    risk_category: Mapped[str] = mapped_column(String(20), nullable=False)
    percentage_risk: Mapped[float | None] = mapped_column(Float, nullable=True)
    factors: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    recommendations: Mapped[str] = mapped_column(Text, nullable=False, default="")
    interpretation: Mapped[str] = mapped_column(Text, nullable=False)
    calculated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    valid_until: Mapped[datetime] = mapped_column(DateTime, index=True, nullable=False)
