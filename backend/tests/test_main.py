import asyncio

from digitizer.core.config import UPLOAD_DIR
from digitizer.routers import dependencies
from digitizer.services.database import MemoryAdapter


class UnwritableStore(MemoryAdapter):
    """Memory store whose writes fail once ``broken`` is set."""

    def __init__(self, broken: bool = True):
        super().__init__()
        self.broken = broken

    async def _after_write(self):
        if self.broken:
            raise OSError("disk full")


def client_with_store(app_with_provider, provider, store):
    client = app_with_provider(provider)
    dependencies.db_service = store
    asyncio.run(dependencies.initialize_services(provider=provider))
    return client


def upload(client, png_bytes, path="/api/upload", name="page.png", content_type="image/png"):
    return client.post(path, files={"newspaper": (name, png_bytes, content_type)})


def test_api_banner(client):
    response = client.get("/api")
    assert response.status_code == 200
    body = response.json()
    assert body["message_english"] == "Bengali Newspaper Digitizer API is running!"
    assert "POST /api/upload" in body["endpoints"]


def test_health_and_ready(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/ready").json() == {"ready": True}


def test_request_id_header(client):
    response = client.get("/api/documents", headers={"X-Request-ID": "trace-1"})
    assert response.headers["X-Request-ID"] == "trace-1"


def test_documents_initially_empty(client):
    response = client.get("/api/documents")
    assert response.status_code == 200
    assert response.json() == []


def test_upload_processes_image(client, scripted_provider, png_bytes):
    response = upload(client, png_bytes)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["headlinesFound"] == 2
    assert body["summariesGenerated"] is True
    assert body["extractionMethod"] == "ai_structured"
    assert body["summaryMethod"] == "ai_generated"
    assert body["overallSummary"] == "নির্বাচন ও যোগাযোগ নিয়ে প্রধান খবর।"

    document = body["document"]
    assert document["originalName"] == "page.png"
    assert document["filename"] == f"{document['id']}-page.png"
    assert document["imagePath"] == f"/uploads/{document['filename']}"
    assert document["processedImagePath"] == f"/uploads/{document['id']}-page_processed.jpg"
    assert document["status"] == "processed"
    assert document["language"] == "bengali"
    assert document["uploadDate"].endswith("Z")
    assert document["extractedData"]["allText"].startswith("LARGE_TEXT:")
    assert document["rawExtractedText"] == document["extractedData"]["allText"]
    assert document["summaryData"]["importantTopics"] == ["নির্বাচন", "যোগাযোগ"]

    assert scripted_provider.stages() == ["extract", "structure", "summary"]
    assert scripted_provider.calls[0]["image"].mime_type == "image/jpeg"
    assert (UPLOAD_DIR / document["filename"]).exists()
    assert (UPLOAD_DIR / f"{document['id']}-page_processed.jpg").exists()


def test_uploaded_images_are_served(client, png_bytes):
    document = upload(client, png_bytes).json()["document"]

    original = client.get(document["imagePath"])
    assert original.status_code == 200
    assert original.content == png_bytes
    assert client.get(document["processedImagePath"]).status_code == 200


def test_upload_at_root_path(client, png_bytes):
    assert upload(client, png_bytes, path="/upload").status_code == 200
    assert len(client.get("/documents").json()) == 1


def test_upload_with_regex_fallback(app_with_provider, make_provider, fail, png_bytes):
    client = app_with_provider(make_provider(structure=fail()))
    body = upload(client, png_bytes).json()

    assert body["extractionMethod"] == "regex_fallback"
    assert body["document"]["extractedData"]["headlines"] == ["নির্বাচনে নতুন সরকার", "Padma Bridge traffic doubles"]
    assert body["headlinesFound"] == 2


def test_upload_with_every_fallback(app_with_provider, make_provider, fail, png_bytes):
    client = app_with_provider(make_provider(extract="no markers at all", structure=fail(), summary=fail()))
    response = upload(client, png_bytes)

    assert response.status_code == 200
    body = response.json()
    assert body["extractionMethod"] == "fallback"
    assert body["summaryMethod"] == "fallback"
    assert body["headlinesFound"] == 0
    assert body["document"]["extractedData"]["headlines"] == []
    assert body["document"]["summaryData"]["overallSummary"]
    assert body["summariesGenerated"] is True


def test_upload_extraction_failure_is_fatal(app_with_provider, make_provider, fail, png_bytes):
    client = app_with_provider(make_provider(extract=fail()))
    response = upload(client, png_bytes)

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to process Bengali image"
    assert body["details"]
    assert body["bangla_error"]
    assert client.get("/api/documents").json() == []


def test_upload_corrupt_image_is_fatal(client, png_bytes):
    response = upload(client, b"not really a png")
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to process Bengali image"


def test_upload_rejects_non_image(client):
    response = client.post("/api/upload", files={"newspaper": ("notes.txt", b"hello", "text/plain")})
    assert response.status_code == 400
    assert response.json() == {"error": "Only image files are allowed!"}


def test_upload_without_file(client):
    response = client.post("/api/upload")
    assert response.status_code == 400
    assert response.json() == {"error": "No file uploaded"}


def test_get_document_and_summary(client, png_bytes):
    document = upload(client, png_bytes).json()["document"]
    doc_id = document["id"]

    fetched = client.get(f"/api/documents/{doc_id}")
    assert fetched.status_code == 200
    assert fetched.json() == document

    summary = client.get(f"/api/documents/{doc_id}/summary").json()
    assert summary == {
        "id": doc_id,
        "originalName": "page.png",
        "uploadDate": document["uploadDate"],
        "summaryData": document["summaryData"],
        "headlinesCount": 2,
        "articlesCount": 2,
    }


def test_unknown_document_is_404(client):
    for response in [
        client.get("/api/documents/nope"),
        client.get("/api/documents/nope/summary"),
        client.delete("/api/documents/nope"),
        client.post("/api/documents/nope/generate-summary"),
    ]:
        assert response.status_code == 404
        assert response.json() == {"error": "Document not found"}


def test_documents_listed_in_upload_order(client, png_bytes):
    first = upload(client, png_bytes, name="first.png").json()["document"]["id"]
    second = upload(client, png_bytes, name="second.png").json()["document"]["id"]

    assert [doc["id"] for doc in client.get("/api/documents").json()] == [first, second]
    assert first != second


def test_search(client, png_bytes):
    doc_id = upload(client, png_bytes).json()["document"]["id"]

    assert [d["id"] for d in client.get("/api/search", params={"q": "নির্বাচনে"}).json()] == [doc_id]
    assert [d["id"] for d in client.get("/search", params={"q": "padma BRIDGE"}).json()] == [doc_id]
    assert client.get("/api/search", params={"q": "অনুপস্থিত"}).json() == []
    assert client.get("/api/search", params={"q": "  "}).json() == []
    assert client.get("/api/search").json() == []


def test_regenerate_summary_replaces_only_summary(app_with_provider, make_provider, fail, png_bytes):
    provider = make_provider(summary=fail())
    client = app_with_provider(provider)
    before = upload(client, png_bytes).json()["document"]
    assert before["summaryData"]["overallSummary"] != "নতুন সারাংশ"

    provider.replies["summary"] = '{"overallSummary": "নতুন সারাংশ", "importantTopics": ["নতুন"]}'
    response = client.post(f"/api/documents/{before['id']}/generate-summary")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Summary regenerated successfully"
    assert body["summaryData"]["overallSummary"] == "নতুন সারাংশ"

    after = client.get(f"/api/documents/{before['id']}").json()
    assert after["summaryData"] == body["summaryData"]
    assert after["extractedData"] == before["extractedData"]
    assert after["id"] == before["id"]


def test_regenerate_summary_failure_leaves_document(app_with_provider, make_provider, png_bytes):
    provider = make_provider()
    client = app_with_provider(provider)
    before = upload(client, png_bytes).json()["document"]

    provider.replies["summary"] = "I could not summarize this."
    response = client.post(f"/api/documents/{before['id']}/generate-summary")

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to regenerate summary"
    assert client.get(f"/api/documents/{before['id']}").json() == before


def test_regenerate_summary_unexpected_error_uses_same_body(app_with_provider, make_provider, png_bytes):
    provider = make_provider()
    client = app_with_provider(provider)
    before = upload(client, png_bytes).json()["document"]

    provider.replies["summary"] = RuntimeError("client bug")
    response = client.post(f"/api/documents/{before['id']}/generate-summary")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to regenerate summary", "details": "client bug"}
    assert client.get(f"/api/documents/{before['id']}").json() == before


def test_regenerate_summary_store_failure_leaves_document(app_with_provider, scripted_provider, png_bytes):
    store = UnwritableStore(broken=False)
    client = client_with_store(app_with_provider, scripted_provider, store)
    before = upload(client, png_bytes).json()["document"]

    store.broken = True
    scripted_provider.replies["summary"] = '{"overallSummary": "নতুন সারাংশ"}'
    response = client.post(f"/api/documents/{before['id']}/generate-summary")

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to regenerate summary"
    assert client.get(f"/api/documents/{before['id']}").json() == before


def test_upload_store_failure_removes_files(app_with_provider, scripted_provider, png_bytes):
    client = client_with_store(app_with_provider, scripted_provider, UnwritableStore())
    files_before = set(UPLOAD_DIR.iterdir())

    response = upload(client, png_bytes)

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to process Bengali image"
    assert client.get("/api/documents").json() == []
    assert set(UPLOAD_DIR.iterdir()) == files_before


def test_delete_document_removes_record_and_files(client, png_bytes):
    document = upload(client, png_bytes).json()["document"]
    doc_id = document["id"]

    response = client.delete(f"/api/documents/{doc_id}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Document and associated files deleted."}

    assert client.get(f"/api/documents/{doc_id}").status_code == 404
    assert client.get("/api/documents").json() == []
    assert not (UPLOAD_DIR / document["filename"]).exists()
    assert not (UPLOAD_DIR / f"{doc_id}-page_processed.jpg").exists()


def test_delete_survives_missing_files(client, png_bytes):
    document = upload(client, png_bytes).json()["document"]
    (UPLOAD_DIR / document["filename"]).unlink()

    assert client.delete(f"/api/documents/{document['id']}").status_code == 200


def test_404_handler(client):
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_cors_headers(client):
    response = client.options(
        "/api/documents",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"}
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in ("*", "http://localhost:3000")
