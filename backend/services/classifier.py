import re

from rapidfuzz import fuzz

from backend.config import settings
from backend.seed.biomarker_catalog import BIOMARKERS


def _normalize(text: str) -> str:
    return re.sub(r"[^a-z0-9]", "", text.lower())


def slugify_biomarker_type(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")


def _candidate_names(entry: dict) -> list[str]:
    names = [entry["type"], entry["name"]]
    names.extend(entry["aliases"])
    return names


def _exact_match(name_norm: str) -> str | None:
    for entry in BIOMARKERS:
        if any(_normalize(candidate) == name_norm for candidate in _candidate_names(entry)):
            return entry["type"]
    return None


def _fuzzy_match_biomarker(name_norm: str, threshold: int) -> tuple[str | None, float]:
    best_score = -1.0
    best_type = None

    for entry in BIOMARKERS:
        for candidate in _candidate_names(entry):
            score = fuzz.ratio(name_norm, _normalize(candidate))
            if score > best_score:
                best_score = score
                best_type = entry["type"]

    if best_score >= threshold:
        return best_type, best_score
    return None, best_score


def classify_biomarker_name(name: str, threshold: int | None = None) -> str | None:
    name_norm = _normalize(name)
    if not name_norm:
        return None

    exact = _exact_match(name_norm)
    if exact is not None:
        return exact

    score_threshold = threshold if threshold is not None else settings.classifier_fuzzy_threshold
    match_type, _ = _fuzzy_match_biomarker(name_norm, score_threshold)
    return match_type


def resolve_biomarker_type(name: str) -> str:
    """Canonical type for a user-supplied biomarker name; unknown names keep a slug of their own."""
    return classify_biomarker_name(name) or slugify_biomarker_type(name)


def default_unit(biomarker_type: str) -> str | None:
    for entry in BIOMARKERS:
        if entry["type"] == biomarker_type:
            return entry["unit"]
    return None
