"""
Tests for health, info and metrics endpoints
"""


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "Content Service"


def test_readiness(client):
    response = client.get("/health/readiness")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["media_host_configured"] is False


def test_liveness(client):
    response = client.get("/health/liveness")
    assert response.json()["status"] == "alive"


def test_api_info(client):
    response = client.get("/api")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "running"
    assert data["api_prefix"] == "/api/v1"


def test_request_id_header_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


def test_request_id_header_is_generated(client):
    response = client.get("/health")
    assert response.headers.get("X-Request-ID")


def test_metrics_exposes_http_and_content_counters(client, user_id):
    client.post("/api/v1/communities", json={"user_id": user_id, "name": "Metric Makers"})

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    text = response.text
    assert "http_requests_total" in text
    assert 'content_entities_created_total{entity="community"}' in text
    assert 'endpoint="/api/v1/communities"' in text


def test_metrics_normalizes_uuid_paths(client, community):
    client.get(f"/api/v1/communities/{community['id']}")

    text = client.get("/metrics").text
    assert 'endpoint="/api/v1/communities/{id}"' in text
    assert community["id"] not in text


def test_log_metrics(client):
    response = client.get("/metrics/logs")

    assert response.status_code == 200
    assert "INFO" in response.json()


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/v1/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not Found", "errors": None}


def test_openapi_documents_error_envelope(client):
    schema = client.get("/openapi.json").json()

    responses = schema["paths"]["/api/v1/posts/{post_id}"]["get"]["responses"]
    for code in ("400", "404", "409", "500"):
        ref = responses[code]["content"]["application/json"]["schema"]["$ref"]
        assert ref.endswith("/ErrorResponse")
    assert "errors" in schema["components"]["schemas"]["ErrorResponse"]["properties"]
