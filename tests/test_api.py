from fastapi.testclient import TestClient

from expense_insights.core.config import settings
from expense_insights.main import app
from expense_insights.routers import insights

client = TestClient(app)

payload = {
    "reference_date": "2025-11-19",
    "expenses": [
        {"title": "Groceries", "category": "GROCERIES", "amount": 800, "date": "2025-11-03"},
        {"title": "Metro card", "category": "TRANSPORTATION", "amount": 200, "date": "2025-11-04"},
        {"title": "Dinner", "category": "FOOD", "amount": 400, "date": "2025-10-12"},
    ],
}


def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert settings.PROJECT_NAME in response.json()["message"]


def test_health_check():
    response = client.get(f"{settings.API_PREFIX}/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_generate_insights_report():
    response = client.post(f"{settings.API_PREFIX}/insights", json=payload)
    assert response.status_code == 200

    data = response.json()
    assert set(data) == {"summary", "patterns", "suggestions", "budgetTips", "concerns"}
    assert data["summary"] == (
        "You've spent ₹1,400 across 3 transactions. "
        "Your spending increased by 150.0% compared to last month."
    )
    assert data["patterns"][0] == "Your highest spending is in Groceries category"
    assert data["concerns"][0].startswith("⚠️ Spending increased by more than 30%")


def test_generate_insights_for_empty_list():
    response = client.post(f"{settings.API_PREFIX}/insights", json={"expenses": []})
    assert response.status_code == 200
    assert response.json()["concerns"] == []


def test_invalid_amount_is_rejected():
    bad = {"expenses": [{"category": "FOOD", "amount": "lots", "date": "2025-11-03"}]}
    response = client.post(f"{settings.API_PREFIX}/insights", json=bad)
    assert response.status_code == 422


def test_too_many_expenses(monkeypatch):
    monkeypatch.setattr(settings, "MAX_EXPENSES", 2)
    response = client.post(f"{settings.API_PREFIX}/insights", json=payload)
    assert response.status_code == 413


def test_fallback_report_when_generation_fails(monkeypatch):
    def _boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(insights.insights_engine, "generate", _boom)
    response = client.post(f"{settings.API_PREFIX}/insights", json=payload)
    assert response.status_code == 200
    assert response.json() == {
        "summary": "Basic analysis provided.",
        "patterns": ["Track expenses regularly"],
        "suggestions": ["Set monthly spending limits"],
        "budgetTips": ["Create a realistic budget"],
        "concerns": [],
    }
