from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ReportCategory(str, Enum):
    BLOOD_TEST = "BLOOD_TEST"
    ECG = "ECG"
    XRAY = "XRAY"
    CT_SCAN = "CT_SCAN"
    MRI = "MRI"
    PATHOLOGY = "PATHOLOGY"
    OTHER = "OTHER"


class TrendClassification(str, Enum):
    IMPROVING = "IMPROVING"
    WORSENING = "WORSENING"
    STABLE = "STABLE"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"


class BiomarkerObservation(BaseModel):
    """A single unit-bearing measurement of one biomarker for one patient."""
    model_config = ConfigDict(frozen=True)

    biomarker_type: str = Field(description="Canonical biomarker identifier, e.g. cholesterol_ldl")
    value: float = Field(allow_inf_nan=False)
    unit: str
    recorded_at: datetime
    source_report_id: str | None = None


class BiomarkerThreshold(BaseModel):
    """Healthy range and directionality for one biomarker type."""
    model_config = ConfigDict(frozen=True)

    low: float
    high: float
    lower_is_better: bool = True


class TrendDataPoint(BaseModel):
    recorded_at: datetime
    value: float


class TrendResult(BaseModel):
    biomarker_type: str
    current_value: float
    previous_value: float | None = None
    change_percent: float | None = None
    trend_direction: float | None = Field(
        default=None, description="Regression slope as percent of the mean value per measurement"
    )
    classification: TrendClassification
    interpretation: str
    alert: str | None = None
    unit: str | None = None
    data_points: list[TrendDataPoint] = Field(default_factory=list)


class TrendSummary(BaseModel):
    trends: list[TrendResult]
    summary: str
    alerts: list[str]


class BiomarkerEntryRequest(BaseModel):
    biomarker_type: str = Field(min_length=1, description="Biomarker type or a common name such as 'LDL'")
    value: float = Field(allow_inf_nan=False)
    unit: str | None = Field(default=None, description="Defaults to the catalog unit for known biomarkers")
    recorded_at: datetime | None = None
    source_report_id: str | None = None


class FindingsExtractionRequest(BaseModel):
    findings: str = Field(description="Structured JSON findings or free report text")
    report_category: ReportCategory
    recorded_at: datetime | None = None
    source_report_id: str | None = None


class BiomarkerObservationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    biomarker_type: str
    value: float
    unit: str
    recorded_at: datetime
    source_report_id: str | None = None
