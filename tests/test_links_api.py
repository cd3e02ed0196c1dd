from datetime import datetime

from fastapi.testclient import TestClient

from links_app.app_factory import create_app
from links_app.config import Settings


class TestCreateLink:
    """POST /api/links"""

    def test_create_with_generated_code(self, client: TestClient):
        response = client.post("/api/links", json={"target_url": "https://www.google.com/"})
        assert response.status_code == 201

        data = response.json()
        assert set(data) == {"id", "code", "target_url", "total_clicks", "last_clicked", "created_at"}
        assert len(data["code"]) == 6
        assert data["code"].isalnum()
        assert data["target_url"] == "https://www.google.com/"
        assert data["total_clicks"] == 0
        assert data["last_clicked"] is None
        datetime.fromisoformat(data["created_at"].replace("Z", "+00:00"))

    def test_create_with_custom_code(self, client: TestClient):
        response = client.post(
            "/api/links",
            json={"target_url": "https://www.python.org", "custom_code": "python1"},
        )
        assert response.status_code == 201
        assert response.json()["code"] == "python1"

    def test_trailing_slash_is_accepted(self, client: TestClient):
        response = client.post("/api/links/", json={"target_url": "https://www.python.org"})
        assert response.status_code == 201

    def test_invalid_url(self, client: TestClient):
        response = client.post("/api/links", json={"target_url": "not-a-url"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid URL"}

    def test_missing_url(self, client: TestClient):
        response = client.post("/api/links", json={})
        assert response.status_code == 400

    def test_custom_code_too_short(self, client: TestClient):
        response = client.post(
            "/api/links", json={"target_url": "https://www.python.org", "custom_code": "ab"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Code must be 6-8 alphanumeric characters"}

    def test_custom_code_too_long(self, client: TestClient):
        response = client.post(
            "/api/links",
            json={"target_url": "https://www.python.org", "custom_code": "toolongcode123"},
        )
        assert response.status_code == 400

    def test_custom_code_invalid_character(self, client: TestClient):
        response = client.post(
            "/api/links", json={"target_url": "https://www.python.org", "custom_code": "my-code"}
        )
        assert response.status_code == 400

    def test_duplicate_custom_code(self, client: TestClient):
        body = {"target_url": "https://www.python.org", "custom_code": "dupe123"}

        assert client.post("/api/links", json=body).status_code == 201

        response = client.post("/api/links", json=body)
        assert response.status_code == 409
        assert response.json() == {"error": "Code already exists"}

    def test_malformed_body(self, client: TestClient):
        response = client.post(
            "/api/links", content="{not json", headers={"content-type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}


class TestReadAndDelete:
    """GET and DELETE /api/links"""

    def test_get_link(self, client: TestClient):
        created = client.post(
            "/api/links", json={"target_url": "https://www.google.com/"}
        ).json()

        response = client.get(f"/api/links/{created['code']}")
        assert response.status_code == 200
        assert response.json() == created

    def test_get_nonexistent_link(self, client: TestClient):
        response = client.get("/api/links/nope123")
        assert response.status_code == 404
        assert response.json() == {"error": "Link not found"}

    def test_list_newest_first(self, client: TestClient):
        first = client.post("/api/links", json={"target_url": "https://a.example.com/"}).json()
        second = client.post("/api/links", json={"target_url": "https://b.example.com/"}).json()

        response = client.get("/api/links")
        assert response.status_code == 200
        assert [link["code"] for link in response.json()] == [second["code"], first["code"]]

    def test_list_empty(self, client: TestClient):
        assert client.get("/api/links").json() == []

    def test_delete_link(self, client: TestClient):
        code = client.post(
            "/api/links", json={"target_url": "https://www.python.org"}
        ).json()["code"]

        response = client.delete(f"/api/links/{code}")
        assert response.status_code == 200
        assert response.json() == {"message": "Link deleted", "code": code}

        assert client.get(f"/api/links/{code}").status_code == 404
        assert client.get(f"/{code}", follow_redirects=False).status_code == 404

    def test_delete_nonexistent_link(self, client: TestClient):
        response = client.delete("/api/links/nope123")
        assert response.status_code == 404


class TestRedirect:
    """GET /{code}"""

    def test_redirect(self, client: TestClient):
        code = client.post(
            "/api/links", json={"target_url": "https://www.github.com/"}
        ).json()["code"]

        response = client.get(f"/{code}", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://www.github.com/"

        link = client.get(f"/api/links/{code}").json()
        assert link["total_clicks"] == 1
        assert link["last_clicked"] is not None

    def test_every_redirect_is_counted(self, client: TestClient):
        code = client.post(
            "/api/links", json={"target_url": "https://www.github.com/"}
        ).json()["code"]

        for _ in range(5):
            client.get(f"/{code}", follow_redirects=False)

        assert client.get(f"/api/links/{code}").json()["total_clicks"] == 5

    def test_redirect_nonexistent_code(self, client: TestClient):
        response = client.get("/nope123", follow_redirects=False)
        assert response.status_code == 404

    def test_reserved_segments_are_not_codes(self, client: TestClient):
        assert client.get("/api", follow_redirects=False).status_code == 404

        response = client.post(
            "/api/links", json={"target_url": "https://www.python.org", "custom_code": "healthz"}
        )
        assert response.status_code == 400

        # /healthz stays the health endpoint
        assert client.get("/healthz").json()["ok"] is True

    def test_code_differing_from_reserved_only_by_case(self, client: TestClient):
        response = client.post(
            "/api/links", json={"target_url": "https://www.python.org", "custom_code": "HealthZ"}
        )
        assert response.status_code == 201
        assert response.json()["code"] == "HealthZ"

        response = client.get("/HealthZ", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://www.python.org"
        assert client.get("/api/links/HealthZ").json()["total_clicks"] == 1


class TestHealth:

    def test_health_check(self, client: TestClient):
        response = client.get("/healthz")
        assert response.status_code == 200

        data = response.json()
        assert data["ok"] is True
        assert data["version"] == "1.0"
        assert isinstance(data["uptime"], int)
        assert data["uptime"] >= 0
        datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))


class TestStoreFailures:

    def test_unreachable_store_is_500_without_details(self, tmp_path):
        settings = Settings(
            database_url=f"sqlite:///{tmp_path / 'missing' / 'dir' / 'x.db'}"
        )
        app = create_app(settings)

        # No lifespan: the schema can't be created against a missing directory
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/api/links")

        assert response.status_code == 500
        assert response.json() == {"error": "Server error"}


class TestErrorBodies:
    """Framework-level errors use the same body as the service's errors"""

    def test_unknown_path(self, client: TestClient):
        response = client.get("/a/b/c")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_method_not_allowed(self, client: TestClient):
        response = client.put("/api/links", json={})
        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}
        assert "allow" in response.headers
