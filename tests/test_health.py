def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["data"]["status"] == "ok"
    assert payload["data"]["trace_id"]
    assert response.headers["X-Trace-ID"] == payload["data"]["trace_id"]


def test_health_echoes_incoming_trace_id(client):
    response = client.get("/health", headers={"X-Trace-ID": "trace-abc"})
    assert response.headers["X-Trace-ID"] == "trace-abc"
    assert response.json()["data"]["trace_id"] == "trace-abc"


def test_ready(client):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "ready"


def test_metrics_endpoint(client):
    response = client.get("/ops/metrics")
    assert response.status_code == 200
