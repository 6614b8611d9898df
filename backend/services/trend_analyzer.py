from collections.abc import Sequence

from backend.schemas.biomarker import (
    BiomarkerObservation,
    TrendClassification,
    TrendDataPoint,
    TrendResult,
    TrendSummary,
)
from backend.services.thresholds import get_threshold

MAX_TREND_POINTS = 12
STABLE_BAND_PERCENT = 5.0


def compute_delta(prev: float | None, curr: float | None) -> float | None:
    if prev is None or curr is None or prev == 0:
        return None
    return ((curr - prev) / prev) * 100.0


def calculate_trend_direction(values: Sequence[float]) -> float:
    """Least-squares slope of value against measurement index, as percent of the mean per step.

    ``values`` run oldest first.
    """
    n = len(values)
    if n < 2:
        return 0.0

    sum_x = n * (n - 1) / 2
    sum_y = sum(values)
    sum_xy = sum(i * v for i, v in enumerate(values))
    sum_x2 = sum(i * i for i in range(n))

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
    mean = sum_y / n
    if mean == 0:
        return 0.0
    return (slope / mean) * 100.0


def _display_name(biomarker_type: str) -> str:
    return biomarker_type.replace("_", " ")


def _change_clause(change_percent: float | None) -> str:
    if change_percent is None:
        return ""
    return f" ({change_percent:+.1f}% change from last measurement)"


def classify_trend(
    biomarker_type: str,
    history: Sequence[BiomarkerObservation],
    min_data_points: int = 2,
) -> TrendResult:
    """Classify the recent trajectory of one biomarker.

    ``history`` is ordered most recent first; only the latest
    ``MAX_TREND_POINTS`` observations are considered.
    """
    recent = list(history)[:MAX_TREND_POINTS]
    data_points = [TrendDataPoint(recorded_at=o.recorded_at, value=o.value) for o in recent]
    unit = recent[0].unit if recent else None
    name = _display_name(biomarker_type)

    required = max(min_data_points, 2)
    if len(recent) < required:
        return TrendResult(
            biomarker_type=biomarker_type,
            current_value=recent[0].value if recent else 0.0,
            classification=TrendClassification.INSUFFICIENT_DATA,
            interpretation=(
                f"Not enough historical data to determine trend. Need at least {required} measurements."
            ),
            unit=unit,
            data_points=data_points,
        )

    current_value = recent[0].value
    previous_value = recent[1].value
    change_percent = compute_delta(previous_value, current_value)
    trend_direction = calculate_trend_direction([o.value for o in reversed(recent)])
    threshold = get_threshold(biomarker_type)

    alert = None
    if threshold.lower_is_better:
        improving = trend_direction < -STABLE_BAND_PERCENT
        worsening = trend_direction > STABLE_BAND_PERCENT
        if worsening and current_value > threshold.high:
            alert = f"Current {name} ({current_value:g}) is above healthy range (>{threshold.high:g} {unit})"
    else:
        improving = trend_direction > STABLE_BAND_PERCENT
        worsening = trend_direction < -STABLE_BAND_PERCENT
        if worsening and current_value < threshold.low:
            alert = f"Current {name} ({current_value:g}) is below healthy range (<{threshold.low:g} {unit})"

    moving = "increasing" if trend_direction > 0 else "decreasing"
    if improving:
        classification = TrendClassification.IMPROVING
        interpretation = f"{name} is {moving} over time{_change_clause(change_percent)}."
    elif worsening:
        classification = TrendClassification.WORSENING
        interpretation = f"{name} is {moving} over time{_change_clause(change_percent)}."
    else:
        classification = TrendClassification.STABLE
        interpretation = f"{name} remains relatively stable."

    return TrendResult(
        biomarker_type=biomarker_type,
        current_value=current_value,
        previous_value=previous_value,
        change_percent=change_percent,
        trend_direction=trend_direction,
        classification=classification,
        interpretation=interpretation,
        alert=alert,
        unit=unit,
        data_points=data_points,
    )


def summarize_trends(trends: Sequence[TrendResult]) -> TrendSummary:
    worsening = sum(1 for t in trends if t.classification == TrendClassification.WORSENING)
    improving = sum(1 for t in trends if t.classification == TrendClassification.IMPROVING)

    parts = []
    if worsening:
        parts.append(f"{worsening} biomarker(s) showing worsening trends.")
    if improving:
        parts.append(f"{improving} biomarker(s) showing improvement.")
    summary = " ".join(parts) if parts else "All tracked biomarkers remain stable."

    return TrendSummary(
        trends=list(trends),
        summary=summary,
        alerts=[t.alert for t in trends if t.alert],
    )
