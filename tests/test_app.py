"""
Tests for the HTTP API.

The app is built around a container of fakes and a temporary SQLite
database; TestClient runs the lifespan so the store is opened on the
client's event loop.
"""

from unittest.mock import AsyncMock, patch

import pytest
import yaml
from fastapi.testclient import TestClient

from app import create_app
from synapse.config import Config, ServerConfig
from synapse.core.embeddings.vectorizer import Vectorizer
from synapse.core.note_store.sqlite_store import SQLiteNoteStore
from synapse.services.container import ServiceContainer
from synapse.utils.exceptions import StorageError


@pytest.fixture
def services(tmp_path, embedder, extractor) -> ServiceContainer:
    store = SQLiteNoteStore(db_path=str(tmp_path / "api.db"))
    return ServiceContainer.from_components(
        store=store,
        vectorizer=Vectorizer(embedder, dimension=4),
        extractor=extractor,
    )


@pytest.fixture
def client(services):
    app = create_app(services=services)
    with TestClient(app) as test_client:
        yield test_client


class TestSave:
    """Test POST /api/save."""

    def test_save_note(self, client):
        response = client.post("/api/save", json={"text": "blue bag"})

        assert response.status_code == 200
        assert response.text == "Saved successfully"

    def test_save_then_search(self, client):
        client.post("/api/save", json={"text": "Buy a red shoe"})

        response = client.get("/api/search", params={"q": "RED"})

        assert response.status_code == 200
        [note] = response.json()
        assert note["text"] == "Buy a red shoe"
        assert set(note["tags"]) == {"red", "shoe"}
        assert note["id"].startswith("note_")
        assert "createdAt" in note
        assert "embedding" not in note

    @pytest.mark.parametrize("body", [{"text": ""}, {"text": "   "}, {}])
    def test_empty_text_rejected(self, client, body):
        response = client.post("/api/save", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Cannot save empty note."}

    def test_malformed_body(self, client):
        response = client.post(
            "/api/save", content="not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_saved_when_embedder_fails(self, client, embedder):
        embedder.fail = True

        response = client.post("/api/save", json={"text": "green bike"})

        assert response.status_code == 200
        assert len(client.get("/api/search", params={"q": "green"}).json()) == 1

    def test_storage_failure(self, client, services):
        with patch.object(
            services.store, "insert", new=AsyncMock(side_effect=StorageError("disk full"))
        ):
            response = client.post("/api/save", json={"text": "blue bag"})

        assert response.status_code == 500
        assert response.json() == {"error": "disk full"}


class TestSemanticSearch:
    """Test GET /api/semantic-search."""

    def test_result_shape(self, client):
        client.post("/api/save", json={"text": "pink phone"})

        response = client.get("/api/semantic-search", params={"q": "phone"})

        assert response.status_code == 200
        [result] = response.json()
        assert set(result) == {"text", "tags", "image", "score"}
        assert result["score"] == pytest.approx(1.0)

    def test_at_most_five(self, client):
        for i in range(7):
            client.post("/api/save", json={"text": f"note {i}"})

        response = client.get("/api/semantic-search", params={"q": "note"})

        assert len(response.json()) == 5

    @pytest.mark.parametrize("params", [{"q": ""}, {}])
    def test_empty_query(self, client, params):
        response = client.get("/api/semantic-search", params=params)

        assert response.status_code == 400
        assert response.json() == {"error": "Empty search query."}


class TestUploadImage:
    """Test POST /api/upload-image."""

    def test_upload_with_text(self, client, extractor):
        extractor.text = "red shoe"

        response = client.post("/api/upload-image", json={"imageBase64": "aW1hZ2U="})

        assert response.status_code == 200
        assert response.json() == {"message": "Image saved", "text": "red shoe", "tags": ["red", "shoe"]}

    def test_upload_without_text(self, client, extractor):
        extractor.text = ""

        response = client.post("/api/upload-image", json={"imageBase64": "aW1hZ2U="})

        assert response.json() == {"message": "Image saved", "text": "", "tags": []}
        [note] = client.get("/api/search", params={"q": "Image content"}).json()
        assert note["image"] == "aW1hZ2U="

    @pytest.mark.parametrize("body", [{}, {"imageBase64": ""}])
    def test_no_image(self, client, body):
        response = client.post("/api/upload-image", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "No image provided"}


class TestAnalyticsAndFilter:
    """Test GET /api/analytics and GET /api/filter."""

    def test_analytics(self, client):
        for text in ["red shoe", "red cap", "blue bag"]:
            client.post("/api/save", json={"text": text})

        response = client.get("/api/analytics")

        assert response.status_code == 200
        body = response.json()
        assert body["totalNotes"] == 3
        assert body["thisMonthNotes"] == 3
        assert body["topTags"][0] == "red"

    def test_analytics_empty(self, client):
        assert client.get("/api/analytics").json() == {
            "totalNotes": 0,
            "thisMonthNotes": 0,
            "topTags": [],
        }

    def test_filter_by_tag(self, client):
        client.post("/api/save", json={"text": "red shoe"})
        client.post("/api/save", json={"text": "blue bag"})

        response = client.get("/api/filter", params={"tag": "blue"})

        assert response.status_code == 200
        assert [n["text"] for n in response.json()] == ["blue bag"]

    def test_filter_range_excludes_other_days(self, client):
        client.post("/api/save", json={"text": "today"})

        response = client.get("/api/filter", params={"start": "01-01-1990", "end": "31-01-1990"})

        assert response.json() == []

    def test_filter_bad_date(self, client):
        response = client.get("/api/filter", params={"start": "1990-01-01"})

        assert response.status_code == 400
        assert "DD-MM-YYYY" in response.json()["error"]


class TestInfoEndpoints:
    """Test health and root endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["servicesInitialized"] is True
        assert body["noteStore"] == "SQLiteNoteStore"
        assert body["embeddingModel"] == "fake-embedding"

    def test_root(self, client):
        body = client.get("/").json()

        assert body["name"] == "Synapse API"
        assert body["docs"] == "/docs"


class TestAppConfiguration:
    """Test configuration applied when the app is created."""

    def test_cors_origins_from_config_file(self, tmp_path, monkeypatch, services):
        config_file = tmp_path / "synapse.yaml"
        config_file.write_text(yaml.dump({"server": {"cors_origins": ["https://only.example"]}}))
        monkeypatch.setenv("SYNAPSE_CONFIG_FILE", str(config_file))

        app = create_app(services=services)
        with TestClient(app) as client:
            allowed = client.get("/", headers={"Origin": "https://only.example"})
            other = client.get("/", headers={"Origin": "https://elsewhere.example"})

        assert app.state.config.server.cors_origins == ["https://only.example"]
        assert allowed.headers["access-control-allow-origin"] == "https://only.example"
        assert "access-control-allow-origin" not in other.headers

    def test_explicit_config_wins(self, services):
        config = Config(server=ServerConfig(cors_origins=["https://given.example"]))

        app = create_app(services=services, config=config)

        assert app.state.config is config


class TestErrorBodies:
    """Test that framework errors share the {"error": ...} shape."""

    def test_services_not_initialized(self):
        # No lifespan run: the container is never built
        client = TestClient(create_app(config=Config()))

        response = client.get("/api/analytics")

        assert response.status_code == 503
        assert response.json() == {"error": "Services not initialized"}

    def test_unknown_route(self, client):
        response = client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}
