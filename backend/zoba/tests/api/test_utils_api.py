from zoba.core.config import settings


def test_health_check_reports_model_and_renderer(client):
    response = client.get("/api/utils/health-check/")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["model"] == settings.MODEL_DEFAULT
    assert body["renderer"] in {"remote", "structural"}
