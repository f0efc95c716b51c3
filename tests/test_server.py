import os
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from exam_review.config import get_settings
from exam_review.pipeline import analyze_text, build_report
from exam_review.server import app
from exam_review.storage import save_report


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fake_engine(monkeypatch, fake_engine_cls):
    def _use(texts):
        engine = fake_engine_cls(texts)
        monkeypatch.setattr("exam_review.pipeline.get_ocr_engine", lambda name, languages=None: engine)
        return engine

    return _use


def _upload(client, data, filename="shots.zip", content_type="application/zip", **kwargs):
    return client.post("/api/ocr/upload", files={"zip": (filename, data, content_type)}, **kwargs)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["ocrEngine"] == "tesseract"
    assert isinstance(body["ocrAvailable"], bool)


def test_upload_then_fetch_results(client, fake_engine, make_zip, sample_text):
    engine = fake_engine([sample_text, "unreadable"])
    resp = _upload(client, make_zip({"q1.png": None, "q2.png": None}))

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["processedCount"] == 2
    assert body["quickStats"]["accuracy"] == "50.0%"
    assert body["questions"][0]["file"] == "q1.png"
    assert body["questions"][0]["isCorrect"] is True
    assert body["summary"]["categoryBreakdown"]["S3"]["total"] == 1
    assert body["heatmap"][0]["category"] == "S3"
    assert engine.close_count == 1

    latest = client.get("/api/results/latest")
    assert latest.status_code == 200
    assert latest.json()["file"].startswith("results-")
    assert latest.json()["processedCount"] == 2

    listing = client.get("/api/results/list").json()
    assert listing["count"] == 1
    assert listing["files"][0]["name"] == latest.json()["file"]


def test_upload_rejects_non_zip(client):
    resp = _upload(client, b"hello", filename="notes.txt", content_type="text/plain")
    assert resp.status_code == 415


def test_upload_too_large(client, monkeypatch, make_zip):
    monkeypatch.setenv("MAX_UPLOAD_MB", "0")
    get_settings.cache_clear()
    resp = _upload(client, make_zip({"q1.png": None}))
    assert resp.status_code == 413


def test_upload_without_images(client, fake_engine, make_zip):
    engine = fake_engine([])
    resp = _upload(client, make_zip({"readme.txt": b"nothing here"}))

    assert resp.status_code == 400
    assert resp.json()["detail"]["error"] == "No image files found in ZIP"
    assert engine.open_count == 0


def test_upload_corrupt_zip(client):
    resp = _upload(client, b"definitely not a zip")
    assert resp.status_code == 400


def test_upload_engine_unavailable(client, monkeypatch, fake_engine_cls, make_zip):
    class BrokenEngine(fake_engine_cls):
        def _initialize(self):
            raise RuntimeError("tesseract binary not found")

    monkeypatch.setattr(
        "exam_review.pipeline.get_ocr_engine", lambda name, languages=None: BrokenEngine()
    )
    resp = _upload(client, make_zip({"q1.png": None}))
    assert resp.status_code == 503
    assert "tesseract binary not found" in resp.json()["detail"]


def test_latest_without_results(client):
    resp = client.get("/api/results/latest")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "No results found. Upload a ZIP file first."


def test_list_without_results(client):
    assert client.get("/api/results/list").json() == {"success": True, "count": 0, "files": []}


def test_export_markdown(client, sample_text):
    question = analyze_text("q1.png", sample_text).to_record()
    resp = client.post("/api/export/markdown", json={"questions": [question]})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert "## Question 1 (CORRECT)" in body["formattedText"]
    assert "formattedText" in body["hint"]


def test_api_key_required_when_configured(client, monkeypatch):
    monkeypatch.setenv("API_KEYS", "key-one, key-two")
    get_settings.cache_clear()

    assert client.get("/api/results/list").status_code == 401
    assert client.get("/api/results/list", headers={"X-API-Key": "wrong"}).status_code == 401
    assert client.get("/api/results/list", headers={"X-API-Key": "key-one"}).status_code == 200
    assert client.get("/api/results/list", params={"api_key": "key-two"}).status_code == 200
    # health stays open
    assert client.get("/health").status_code == 200


def test_latest_uses_file_time_as_timestamp(client, sample_text):
    report = build_report([analyze_text("q1.png", sample_text)], "tesseract")
    path = save_report(report, get_settings().RESULTS_DIR)
    os.utime(path, (1_700_000_000, 1_700_000_000))

    body = client.get("/api/results/latest").json()
    assert body["file"] == path.name
    assert body["timestamp"] == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc).isoformat()
    assert body["timestamp"] != report.timestamp
