"""
API Tests - Health and Info Endpoints
"""


def test_liveness(api_client):
    response = api_client.get("/api/v1/health/live")

    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


def test_readiness_without_database(api_client):
    """Test readiness fails while no database is configured"""
    response = api_client.get("/api/v1/health/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


def test_health_degraded_without_database(api_client):
    response = api_client.get("/api/v1/health")

    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "degraded"
    assert body["checks"]["database"]["status"] == "unhealthy"


def test_info(api_client):
    response = api_client.get("/api/v1/info")

    assert response.status_code == 200
    assert response.json()["name"] == "Order Analytics API"


def test_request_id_echoed(api_client):
    """Test the request id header is returned with timing"""
    response = api_client.get("/api/v1/health/live", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert response.headers["X-Response-Time"].endswith("ms")
