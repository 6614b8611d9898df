from datetime import datetime, timedelta

from backend.models.biomarker import BiomarkerObservationRecord
from backend.models.patient import PatientProfile
from backend.models.risk_assessment import RiskAssessmentRecord


def test_profile_roundtrip(client, auth_headers):
    missing = client.get("/api/risk/profile", headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json()["error"] == "NotFound"

    response = client.put(
        "/api/risk/profile",
        json={"age": 52, "biological_sex": "MALE", "smoking_status": "FORMER", "weight": 82, "height": 178},
        headers=auth_headers,
    )
    assert response.status_code == 200

    fetched = client.get("/api/risk/profile", headers=auth_headers).json()
    assert fetched["age"] == 52
    assert fetched["smoking_status"] == "FORMER"
    assert fetched["health_score"] is None


def test_assessment_merges_profile_biomarkers_and_overrides(client, db_session, auth_headers):
    client.put(
        "/api/risk/profile",
        json={"age": 52, "biological_sex": "MALE", "smoking_status": "FORMER", "hypertension_treated": False},
        headers=auth_headers,
    )
    db_session.add_all(
        [
            BiomarkerObservationRecord(
                user_id="patient-1", biomarker_type="cholesterol_total", value=240, unit="mg/dL",
                recorded_at=datetime(2024, 6, 1),
            ),
            BiomarkerObservationRecord(
                user_id="patient-1", biomarker_type="cholesterol_total", value=195, unit="mg/dL",
                recorded_at=datetime(2025, 6, 1),
            ),
            BiomarkerObservationRecord(
                user_id="patient-1", biomarker_type="cholesterol_hdl", value=48, unit="mg/dL",
                recorded_at=datetime(2025, 6, 1),
            ),
        ]
    )
    db_session.commit()

    response = client.post("/api/risk/assessment", json={"systolic_bp": 135}, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["factors"]["total_cholesterol"] == 195
    assert data["factors"]["systolic_bp"] == 135
    cardiovascular = data["risk_profile"]["cardiovascular"]
    assert cardiovascular["score"] == 4
    assert cardiovascular["risk_category"] == "LOW"
    assert data["risk_profile"]["diabetes"] is None
    assert data["risk_profile"]["health_score"] == 95
    assert [a["assessment_type"] for a in data["assessments"]] == ["FRAMINGHAM_CVD"]

    stored = db_session.query(RiskAssessmentRecord).one()
    assert stored.valid_until - stored.calculated_at == timedelta(days=365)
    assert db_session.query(PatientProfile).one().health_score == 95


def test_assessment_without_profile_creates_one(client, db_session, auth_headers):
    response = client.post(
        "/api/risk/assessment",
        json={"age": 45, "weight": 70, "height": 175, "smoking_status": "CURRENT"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    risk_profile = response.json()["data"]["risk_profile"]
    assert risk_profile["cardiovascular"] is None
    assert risk_profile["diabetes"]["score"] == 2
    assert risk_profile["health_score"] == 85
    assert db_session.query(PatientProfile).one().health_score == 85


def test_list_assessments_skips_expired(client, db_session, auth_headers):
    now = datetime.utcnow()
    db_session.add_all(
        [
            RiskAssessmentRecord(
                user_id="patient-1", assessment_type="DIABETES_RISK", score=3, risk_category="MODERATE",
                percentage_risk=15.0, factors="{}", recommendations="Eat well\nMove more",
                interpretation="old", calculated_at=now - timedelta(days=400), valid_until=now - timedelta(days=35),
            ),
            RiskAssessmentRecord(
                user_id="patient-1", assessment_type="DIABETES_RISK", score=1, risk_category="LOW",
                percentage_risk=5.0, factors='{"age": 45}', recommendations="Eat well\nMove more",
                interpretation="current", calculated_at=now, valid_until=now + timedelta(days=365),
            ),
        ]
    )
    db_session.commit()

    response = client.get("/api/risk/assessment", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert [a["interpretation"] for a in data["risk_assessments"]] == ["current"]
    assert data["risk_assessments"][0]["recommendations"] == ["Eat well", "Move more"]
    assert data["risk_assessments"][0]["factors"] == {"age": 45}
    assert data["health_score"] is None


def test_invalid_risk_factor_is_rejected(client, auth_headers):
    response = client.post("/api/risk/assessment", json={"smoking_status": "SOMETIMES"}, headers=auth_headers)

    assert response.status_code == 422
    assert response.json()["error"] == "ValidationError"
