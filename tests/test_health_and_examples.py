from sqlalchemy import exc as sa_exc

from app.common.codes import ApiCode
from app.infra.db import get_db


class _BrokenSession:
    def execute(self, *args, **kwargs):
        raise sa_exc.OperationalError("SELECT 1", {}, Exception("connection refused"))

    def close(self):
        pass


def _broken_db():
    yield _BrokenSession()


# ---------- health ----------

def test_health_up(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "UP"
    assert data["database"] == {"status": "UP", "dialect": "sqlite"}


def test_health_reports_database_down(app, client):
    app.dependency_overrides[get_db] = _broken_db

    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json()["data"]["database"] == {"status": "DOWN"}


def test_ready(client):
    resp = client.get("/api/health/ready")

    assert resp.status_code == 200
    assert resp.json()["data"] == {"status": "READY"}


def test_not_ready_when_database_down(app, client):
    app.dependency_overrides[get_db] = _broken_db

    resp = client.get("/api/health/ready")

    assert resp.status_code == 503
    body = resp.json()
    assert body["success"] is False
    assert body["code"] == ApiCode.SERVICE_UNAVAILABLE.code
    assert body["message"] == "service not ready"


def test_live(client):
    assert client.get("/api/health/live").json()["data"] == {"status": "ALIVE"}


def test_log_test_endpoint(client):
    resp = client.get("/api/trace/log-test")

    assert resp.status_code == 200
    assert resp.json()["data"] == "log test done"


# ---------- examples ----------

def test_success_example(client):
    body = client.get("/api/examples/success").json()

    assert body["success"] is True
    assert body["data"]["data"] == ["item1", "item2", "item3"]


def test_success_with_custom_code(client):
    body = client.get("/api/examples/success-with-custom-code").json()

    assert body["code"] == ApiCode.CREATED.code
    assert body["message"] == "custom success message"
    assert body["data"] == "resource created"


def test_error_example_raises_validation_error(client):
    resp = client.get("/api/examples/error")

    assert resp.status_code == 400
    assert resp.json()["code"] == ApiCode.VALIDATION_ERROR.code


def test_business_error_example(client):
    resp = client.get("/api/examples/business-error")

    assert resp.status_code == 404
    body = resp.json()
    assert body["code"] == ApiCode.USER_NOT_FOUND.code
    assert "123" in body["message"]


def test_error_envelopes_returned_with_200(client):
    cases = {
        "not-found": ApiCode.NOT_FOUND,
        "unauthorized": ApiCode.UNAUTHORIZED,
        "forbidden": ApiCode.FORBIDDEN,
        "validation-error": ApiCode.VALIDATION_ERROR,
    }
    for path, code in cases.items():
        resp = client.get(f"/api/examples/{path}")
        assert resp.status_code == 200
        assert resp.json()["success"] is False
        assert resp.json()["code"] == code.code


def test_page_example(client):
    body = client.get("/api/examples/page", params={"page": 1, "size": 10}).json()

    content = body["data"]["content"]
    pagination = body["data"]["pagination"]
    assert len(content) == 10
    assert content[0]["id"] == 11
    assert pagination == {
        "page": 1,
        "size": 10,
        "total": 100,
        "totalPages": 10,
        "hasNext": True,
        "hasPrevious": True,
    }


def test_last_page_has_no_next(client):
    pagination = client.get("/api/examples/page", params={"page": 9, "size": 10}).json()["data"]["pagination"]
    assert pagination["hasNext"] is False


def test_validate_example(client):
    ok = client.post("/api/examples/validate", json={"name": "Ann", "email": "ann@example.com", "age": 30})
    assert ok.status_code == 200
    assert ok.json()["data"] == {"name": "Ann", "email": "ann@example.com", "age": 30}

    bad = client.post("/api/examples/validate", json={"name": " ", "email": "ann@example.com", "age": 200})
    assert bad.status_code == 400
    assert "age" in bad.json()["message"]
    assert "name" in bad.json()["message"]


def test_codes_listing(client):
    codes = client.get("/api/examples/codes").json()["data"]

    assert len(codes) == len(ApiCode)
    by_name = {c["name"]: c for c in codes}
    assert by_name["SUCCESS"]["isSuccess"] is True
    assert by_name["USER_NOT_FOUND"]["isBusinessError"] is True
    assert by_name["INTERNAL_ERROR"]["isServerError"] is True


def test_batch_operation_example(client):
    data = client.post("/api/examples/batch-operation", json=[1, 2, 3]).json()["data"]

    assert data["processedCount"] == 3
    assert data["successCount"] == 2
    assert data["failedIds"] == [3]
