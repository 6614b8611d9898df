"""Healthy ranges and directionality for the biomarkers tracked over time."""

import math
from types import MappingProxyType

from backend.schemas.biomarker import BiomarkerThreshold

DEFAULT_THRESHOLD = BiomarkerThreshold(low=0.0, high=math.inf, lower_is_better=True)

BIOMARKER_THRESHOLDS = MappingProxyType(
    {
        "cholesterol_total": BiomarkerThreshold(low=125, high=200, lower_is_better=True),
        "cholesterol_ldl": BiomarkerThreshold(low=0, high=100, lower_is_better=True),
        "cholesterol_hdl": BiomarkerThreshold(low=40, high=200, lower_is_better=False),
        "triglycerides": BiomarkerThreshold(low=0, high=150, lower_is_better=True),
        "glucose_fasting": BiomarkerThreshold(low=70, high=100, lower_is_better=True),
        "hba1c": BiomarkerThreshold(low=4, high=5.7, lower_is_better=True),
        "bp_systolic": BiomarkerThreshold(low=90, high=120, lower_is_better=True),
        "bp_diastolic": BiomarkerThreshold(low=60, high=80, lower_is_better=True),
        "heart_rate": BiomarkerThreshold(low=60, high=100, lower_is_better=True),
        "creatinine": BiomarkerThreshold(low=0.6, high=1.2, lower_is_better=True),
    }
)


def get_threshold(biomarker_type: str) -> BiomarkerThreshold:
    return BIOMARKER_THRESHOLDS.get(biomarker_type, DEFAULT_THRESHOLD)
