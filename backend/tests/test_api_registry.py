"""등기부 분석 API 엔드포인트 테스트

FastAPI TestClient로 실제 파이프라인을 통과시킨다.
"""

import pytest
from fastapi.testclient import TestClient

from deungi.api.dependencies import get_pipeline
from deungi.main import app


@pytest.fixture()
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================
# TestHealthCheck
# ============================================================


class TestHealthCheck:
    """헬스 체크"""

    def test_health(self, client: TestClient) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


# ============================================================
# TestAnalyze
# ============================================================


class TestAnalyze:
    """POST /api/registry/analyze"""

    def test_apt(self, client: TestClient, apt_text: str) -> None:
        resp = client.post(
            "/api/registry/analyze",
            json={"raw_text": apt_text, "estimated_price": 850_000_000},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["risk_score"]["total_score"] == 40
        assert data["risk_score"]["grade"] == "D"
        assert data["validation"]["is_valid"] is True
        assert data["pre_validation_score"] == 100
        assert data["parsed"]["summary"]["total_claims_amount"] == 1_030_000_000
        assert data["parsed"]["eulgu"][0]["purpose"] == "근저당권설정"

    def test_short_text_400(self, client: TestClient) -> None:
        resp = client.post("/api/registry/analyze", json={"raw_text": "짧음"})
        assert resp.status_code == 400
        assert "최소 20자" in resp.json()["detail"]

    def test_negative_price_422(self, client: TestClient, apt_text: str) -> None:
        resp = client.post(
            "/api/registry/analyze", json={"raw_text": apt_text, "estimated_price": -1}
        )
        assert resp.status_code == 422

    def test_overlong_digit_run_200(self, client: TestClient) -> None:
        raw = "【 을 구 】\n1 근저당권설정 2020년1월1일 금 " + "9" * 5000 + "원"
        resp = client.post("/api/registry/analyze", json={"raw_text": raw})
        assert resp.status_code == 200
        assert resp.json()["parsed"]["eulgu"][0]["amount"] == 0

    def test_missing_text_422(self, client: TestClient) -> None:
        assert client.post("/api/registry/analyze", json={}).status_code == 422

    def test_pipeline_dependency_used(self, client: TestClient, apt_text: str) -> None:
        real = get_pipeline()
        calls = []

        class _Spy:
            def analyze(self, *args, **kwargs):
                calls.append(kwargs)
                return real.analyze(*args, **kwargs)

        app.dependency_overrides[get_pipeline] = lambda: _Spy()
        resp = client.post("/api/registry/analyze", json={"raw_text": apt_text})
        assert resp.status_code == 200
        assert calls[0]["require_min_length"] is True


# ============================================================
# TestValidate
# ============================================================


class TestValidate:
    """POST /api/registry/validate"""

    def test_round_trip_valid(self, client: TestClient, parser, apt_text: str) -> None:
        parsed = parser.parse_text(apt_text).model_dump(mode="json")
        resp = client.post("/api/registry/validate", json={"parsed": parsed})
        assert resp.status_code == 200
        data = resp.json()
        assert data["is_valid"] is True
        assert data["summary"]["total_checks"] == 51

    def test_edited_summary_detected(self, client: TestClient, parser, apt_text: str) -> None:
        parsed = parser.parse_text(apt_text).model_dump(mode="json")
        parsed["summary"]["has_seizure"] = True
        resp = client.post("/api/registry/validate", json={"parsed": parsed})
        data = resp.json()
        assert data["is_valid"] is False
        assert any(i["id"] == "XCHK_FLAG_HAS_SEIZURE" for i in data["issues"])

    def test_with_risk_score(self, client: TestClient, parser, scorer, apt_text: str) -> None:
        parsed = parser.parse_text(apt_text)
        risk = scorer.score(parsed, 850_000_000)
        resp = client.post(
            "/api/registry/validate",
            json={
                "parsed": parsed.model_dump(mode="json"),
                "estimated_price": 850_000_000,
                "risk_score": risk.model_dump(mode="json"),
            },
        )
        assert resp.json()["summary"]["total_checks"] == 54
