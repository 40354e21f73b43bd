"""
报酬计算 API 测试
"""
from io import BytesIO

import pytest
from docx import Document

API = "/api/v1/fee-calculation"


class TestCalculate:

    def test_civil(self, client):
        response = client.post(f"{API}/calculate", json={"category": "civil", "amount": 500})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["code"] == "SUCCESS"
        assert body["data"]["retainer_fee"] == 340000
        assert body["data"]["success_fee"] == 680000
        assert body["data"]["details"] == ["経済的利益: 500万円"]

    def test_bankruptcy_note(self, client):
        response = client.post(f"{API}/calculate", json={"category": "bankruptcy"})
        data = response.json()["data"]
        assert data["retainer_fee"] == 200000
        assert data["success_fee"] == 0
        assert data["explanatory_note"] == "報酬金は免責決定を受けたときに限り発生"

    def test_invalid_amount_is_zero(self, client):
        response = client.post(f"{API}/calculate", json={"category": "civil", "amount": "abc"})
        assert response.status_code == 200
        assert response.json()["data"]["retainer_fee"] == 0

    def test_unknown_category(self, client):
        response = client.post(f"{API}/calculate", json={"category": "tax_audit"})
        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_unknown_selector(self, client):
        response = client.post(f"{API}/calculate", json={"category": "criminal", "stage": "retrial"})
        assert response.status_code == 422


class TestSummary:

    def test_summary_with_default_tax(self, client):
        response = client.post(f"{API}/summary", json={"options": {"category": "civil", "amount": 500}})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["summary"]["grand_total"] == 1122000
        assert data["copy_text"].startswith("【弁護士報酬計算結果】")

    def test_negative_tax_rate_rejected(self, client):
        response = client.post(
            f"{API}/summary",
            json={"options": {"category": "civil", "amount": 500}, "tax_rate": -0.1},
        )
        assert response.status_code == 422
        assert response.json()["details"][0]["field"] == "tax_rate"

    @pytest.mark.parametrize("path", ["summary", "estimate", "estimate/export"])
    @pytest.mark.parametrize("tax_rate", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_tax_rate_rejected(self, client, path, tax_rate):
        body = '{"options": {"category": "civil", "amount": 500}, "tax_rate": ' + tax_rate + "}"
        response = client.post(
            f"{API}/{path}",
            content=body,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert response.json()["details"][0]["field"] == "tax_rate"


class TestEstimate:

    def test_estimate_document(self, client):
        response = client.post(
            f"{API}/estimate",
            json={
                "options": {"category": "payment_order", "amount": 5000, "may_escalate_to_litigation": True},
                "tax_rate": 0.08,
                "details": {"client_name": "株式会社テスト 御中"},
            },
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["subtotal"] == 2620000
        assert data["tax"] == 209600
        assert data["tax_label"] == "消費税（8%）"
        assert data["client_name"] == "株式会社テスト 御中"

    def test_export_docx(self, client):
        response = client.post(f"{API}/estimate/export", json={"options": {"category": "civil", "amount": 500}})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        )
        assert "Estimate_" in response.headers["content-disposition"]
        doc = Document(BytesIO(response.content))
        assert "御 見 積 書" in [p.text for p in doc.paragraphs]


class TestReferenceEndpoints:

    def test_schedule(self, client):
        data = client.get(f"{API}/schedule").json()["data"]
        assert len(data["litigation"]["tiers"]) == 4
        assert data["litigation"]["tiers"][-1]["upper_bound"] is None
        assert data["payment_order_min_retainer"] == 5

    def test_categories(self, client):
        categories = client.get(f"{API}/categories").json()["data"]["categories"]
        assert {"code": "civil", "label": "民事事件"} in categories
        assert len(categories) == 9

    def test_health(self, client):
        body = client.get(f"{API}/health").json()
        assert body["status"] == "healthy"
        assert body["service"] == "fee-calculation"

    def test_system_health_reports_settings(self, client):
        body = client.get("/api/v1/health/system").json()
        assert body["default_tax_rate"] == 0.10
        assert body["logging_configured"] is True
        assert body["log_level"] == "INFO"

    def test_root_and_security_headers(self, client):
        response = client.get("/")
        assert response.json()["api_base"] == "/api/v1"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
