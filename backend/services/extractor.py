"""Turns report findings into biomarker observations.

Findings arrive either as a JSON object produced by the report analysis step or
as free text. JSON objects are read field by field according to the report
category; anything else goes through a fixed list of labelled numeric patterns.
"""

import json
import logging
import math
import re
from datetime import datetime, timezone
from typing import Any

from backend.schemas.biomarker import BiomarkerObservation, ReportCategory

logger = logging.getLogger(__name__)

# (path into the findings object, biomarker type, unit)
STRUCTURED_FIELDS: dict[ReportCategory, tuple[tuple[tuple[str, ...], str, str], ...]] = {
    ReportCategory.BLOOD_TEST: (
        (("cholesterol", "total"), "cholesterol_total", "mg/dL"),
        (("cholesterol", "hdl"), "cholesterol_hdl", "mg/dL"),
        (("cholesterol", "ldl"), "cholesterol_ldl", "mg/dL"),
        (("cholesterol", "triglycerides"), "triglycerides", "mg/dL"),
        (("glucose",), "glucose_fasting", "mg/dL"),
        (("hba1c",), "hba1c", "%"),
        (("creatinine",), "creatinine", "mg/dL"),
    ),
    ReportCategory.ECG: (
        (("heartRate",), "heart_rate", "bpm"),
        (("intervals", "QTc"), "qtc_interval", "ms"),
    ),
}

_NUM = r"(\d+(?:\.\d+)?)"
# a single signed decimal, optionally followed by a unit such as "mg/dL" or "%"
_MEASUREMENT = re.compile(r"\s*([-+]?\d+(?:\.\d+)?)\s*(?:[A-Za-z%\u00b5][\w%\u00b5/^]*)?\s*")
_SEP = r"[:\s]+"

# (pattern, biomarker types filled from the capture groups in order, unit)
TEXT_PATTERNS: tuple[tuple[re.Pattern, tuple[str, ...], str], ...] = (
    (re.compile(rf"total\s+cholesterol{_SEP}{_NUM}\s*mg/dl", re.IGNORECASE), ("cholesterol_total",), "mg/dL"),
    (re.compile(rf"(?<![\w-])HDL(?:[\s-]*c(?:holesterol)?)?{_SEP}{_NUM}\s*mg/dl", re.IGNORECASE), ("cholesterol_hdl",), "mg/dL"),
    (re.compile(rf"(?<![\w-])LDL(?:[\s-]*c(?:holesterol)?)?{_SEP}{_NUM}\s*mg/dl", re.IGNORECASE), ("cholesterol_ldl",), "mg/dL"),
    (re.compile(rf"glucose{_SEP}{_NUM}\s*mg/dl", re.IGNORECASE), ("glucose_fasting",), "mg/dL"),
    (re.compile(rf"HbA1c{_SEP}{_NUM}\s*%", re.IGNORECASE), ("hba1c",), "%"),
    (re.compile(rf"heart\s+rate{_SEP}{_NUM}\s*bpm", re.IGNORECASE), ("heart_rate",), "bpm"),
    (re.compile(rf"blood\s+pressure{_SEP}(\d+)\s*/\s*(\d+)", re.IGNORECASE), ("bp_systolic", "bp_diastolic"), "mmHg"),
)


def _parse_structured(findings: str) -> dict | None:
    try:
        payload = json.loads(findings)
    except (json.JSONDecodeError, TypeError):
        return None
    return payload if isinstance(payload, dict) else None


def _lookup(payload: dict, path: tuple[str, ...]) -> Any:
    node: Any = payload
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _coerce_number(raw: Any) -> float | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        match = _MEASUREMENT.fullmatch(raw)
        if not match:
            return None
        value = float(match.group(1))
    else:
        return None
    if not math.isfinite(value):
        return None
    return value


def _extract_structured(
    payload: dict,
    report_category: ReportCategory,
    recorded_at: datetime,
    source_report_id: str | None,
) -> list[BiomarkerObservation]:
    observations = []
    for path, biomarker_type, unit in STRUCTURED_FIELDS.get(report_category, ()):
        raw = _lookup(payload, path)
        if raw is None:
            continue
        value = _coerce_number(raw)
        if value is None:
            logger.debug("Skipping non-numeric %s value %r", biomarker_type, raw)
            continue
        observations.append(
            BiomarkerObservation(
                biomarker_type=biomarker_type,
                value=value,
                unit=unit,
                recorded_at=recorded_at,
                source_report_id=source_report_id,
            )
        )
    return observations


def _extract_from_text(
    text: str,
    recorded_at: datetime,
    source_report_id: str | None,
) -> list[BiomarkerObservation]:
    observations = []
    for pattern, biomarker_types, unit in TEXT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        values = [_coerce_number(group) for group in match.groups()]
        if any(value is None for value in values):
            logger.debug("Skipping unparseable match %r for %s", match.group(0), biomarker_types)
            continue
        for biomarker_type, value in zip(biomarker_types, values):
            observations.append(
                BiomarkerObservation(
                    biomarker_type=biomarker_type,
                    value=value,
                    unit=unit,
                    recorded_at=recorded_at,
                    source_report_id=source_report_id,
                )
            )
    return observations


def extract_biomarkers(
    findings: str,
    report_category: ReportCategory | str,
    recorded_at: datetime | None = None,
    source_report_id: str | None = None,
) -> list[BiomarkerObservation]:
    """Extract every recognised biomarker from a findings payload.

    Never raises for bad input: an unknown category or unreadable findings
    simply produce fewer observations.
    """
    if not findings:
        return []
    timestamp = recorded_at or datetime.now(timezone.utc)

    payload = _parse_structured(findings)
    if payload is not None:
        try:
            category = ReportCategory(report_category)
        except ValueError:
            return []
        return _extract_structured(payload, category, timestamp, source_report_id)

    logger.debug("Findings are not a JSON object, falling back to text patterns")
    return _extract_from_text(findings, timestamp, source_report_id)
