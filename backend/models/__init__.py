from backend.models.biomarker import BiomarkerObservationRecord
from backend.models.patient import PatientProfile
from backend.models.risk_assessment import RiskAssessmentRecord

__all__ = [
    "BiomarkerObservationRecord",
    "PatientProfile",
    "RiskAssessmentRecord",
]
