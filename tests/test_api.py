"""
Tests for the HTTP API.
"""

import fitz
import pytest
from fastapi.testclient import TestClient

from memorial.api.app import create_app
from memorial.core.errors import StorageError
from memorial.core.media import extract_youtube_video_id
from memorial.storage import StorageProvider
from memorial.storage.local import InMemoryMetadataStorage


class FailingMetadataStorage(InMemoryMetadataStorage):
    async def query(self, collection):
        raise StorageError("database unreachable")


def create(client, category, **body):
    response = client.post(f"/api/content/{category}", json=body)
    assert response.status_code == 201, response.text
    return response.json()


# =============================================================================
# Content
# =============================================================================


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy", "service": "memorial-api"}


def test_categories(client):
    r = client.get("/api/categories")
    assert r.status_code == 200
    body = r.json()
    assert [c["key"] for c in body] == ["readings", "gospels", "music", "prayers", "poems"]
    assert body[2]["required_field"] == "link"
    assert body[0]["max_selected"] == 2


def test_list_empty(client):
    r = client.get("/api/content/readings")
    assert r.status_code == 200
    assert r.json() == []


def test_unknown_category(client):
    r = client.get("/api/content/hymns")
    assert r.status_code == 404
    assert r.json() == {"message": "Content type 'hymns' not found."}

    assert client.post("/api/content/hymns", json={"title": "x"}).status_code == 404
    assert client.delete(f"/api/content/hymns/{'a' * 24}").status_code == 404


def test_create_then_list(client):
    first = create(client, "readings", title="Wisdom 3:1-9", content="The souls of the just")
    second = create(client, "readings", title="Isaiah 25:6-9", content="On this mountain")

    assert set(first) == {"id", "title", "content", "createdAt", "updatedAt"}

    r = client.get("/api/content/readings")
    assert [i["id"] for i in r.json()] == [first["id"], second["id"]]
    assert r.json()[1]["title"] == "Isaiah 25:6-9"


def test_category_path_is_case_insensitive(client):
    item = create(client, "Poems", title="Do not stand at my grave", content="and weep")
    r = client.get("/api/content/POEMS")
    assert [i["id"] for i in r.json()] == [item["id"]]


def test_music_example(client):
    item = create(client, "music", title="Ave Maria", link="https://youtu.be/abc12345678")

    assert item["link"] == "https://youtu.be/abc12345678"
    assert "content" not in item
    assert extract_youtube_video_id(item["link"]) == "abc12345678"


@pytest.mark.parametrize(
    "category, body, message",
    [
        ("readings", {"content": "text"}, "Missing required field: title"),
        ("readings", {"title": "Psalm 23"}, "Missing required field: content"),
        ("music", {"title": "Hymn", "content": "words"}, "Missing required field: link"),
        ("music", {"title": "   ", "link": "https://youtu.be/abc12345678"},
         "Missing required field: title"),
    ],
)
def test_create_missing_fields(client, category, body, message):
    r = client.post(f"/api/content/{category}", json=body)
    assert r.status_code == 400
    assert r.json() == {"message": message}


def test_create_malformed_body(client):
    r = client.post("/api/content/readings", json={"title": ["a"], "content": "x"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request body"


def test_delete(client):
    item = create(client, "prayers", title="Eternal rest", content="Grant unto them")

    r = client.delete(f"/api/content/prayers/{item['id']}")
    assert r.status_code == 200
    assert r.json() == {
        "message": "prayers item deleted successfully",
        "deletedItemId": item["id"],
    }
    assert client.get("/api/content/prayers").json() == []

    again = client.delete(f"/api/content/prayers/{item['id']}")
    assert again.status_code == 404
    assert again.json() == {"message": f"prayers item with ID {item['id']} not found."}


def test_delete_malformed_id(client):
    r = client.delete("/api/content/prayers/12345")
    assert r.status_code == 400
    assert r.json() == {"message": "Invalid ID format: 12345"}


def test_storage_failure_is_generic_500(settings, template):
    app = create_app(
        settings=settings,
        storage=StorageProvider(metadata=FailingMetadataStorage()),
        template=template,
    )
    r = TestClient(app).get("/api/content/readings")

    assert r.status_code == 500
    assert r.json() == {"message": "Something went wrong on the server!"}


# =============================================================================
# PDF generation
# =============================================================================


def test_generate_pdf(client):
    reading = create(client, "readings", title="Wisdom 3:1-9", content="The souls of the just")
    song = create(client, "music", title="Ave Maria", link="https://youtu.be/abc12345678")

    r = client.post(
        "/api/pdf/generate",
        json={"wishlist": {"readings": [reading["id"]], "music": [song["id"]], "poems": []}},
    )

    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert r.headers["content-disposition"] == 'attachment; filename="funeral_plan.pdf"'

    with fitz.open(stream=r.content, filetype="pdf") as doc:
        text = "".join(page.get_text() for page in doc)
    assert "Wisdom 3:1-9" in text
    assert "Ave Maria" in text


def test_generate_skips_deleted_items(client):
    live = create(client, "poems", title="Remember", content="Remember me when I am gone")
    gone = create(client, "poems", title="Crossing the Bar", content="Sunset and evening star")
    client.delete(f"/api/content/poems/{gone['id']}")

    r = client.post("/api/pdf/generate", json={"wishlist": {"poems": [gone["id"], live["id"]]}})
    assert r.status_code == 200

    with fitz.open(stream=r.content, filetype="pdf") as doc:
        text = "".join(page.get_text() for page in doc)
    assert "Remember" in text
    assert "Crossing the Bar" not in text


@pytest.mark.parametrize(
    "body",
    [
        {"wishlist": {}},
        {"wishlist": {"readings": [], "music": []}},
        {},
    ],
)
def test_generate_empty_selection(client, body):
    r = client.post("/api/pdf/generate", json=body)
    assert r.status_code == 400
    assert "empty" in r.json()["message"]
    assert r.headers["content-type"].startswith("application/json")


def test_generate_only_deleted_items_is_empty(client):
    item = create(client, "prayers", title="A", content="a")
    client.delete(f"/api/content/prayers/{item['id']}")

    r = client.post("/api/pdf/generate", json={"wishlist": {"prayers": [item["id"]]}})
    assert r.status_code == 400


def test_generate_prints_at_most_two_per_category(client):
    ids = [
        create(client, "poems", title=title, content="v")["id"]
        for title in ("Remember", "Crossing the Bar", "Do not stand")
    ]

    r = client.post("/api/pdf/generate", json={"wishlist": {"poems": ids}})
    assert r.status_code == 200

    with fitz.open(stream=r.content, filetype="pdf") as doc:
        text = "".join(page.get_text() for page in doc)
    assert "Crossing the Bar" in text
    assert "Do not stand" not in text


def test_generate_with_mostly_deleted_items(client):
    ids = [create(client, "poems", title=f"P{n}", content="v")["id"] for n in range(3)]
    for item_id in ids[:2]:
        client.delete(f"/api/content/poems/{item_id}")

    r = client.post("/api/pdf/generate", json={"wishlist": {"poems": ids}})
    assert r.status_code == 200
    assert r.content.startswith(b"%PDF")
