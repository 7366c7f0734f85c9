import base64

from qrshield.ai.groq_client import ForensicServiceError


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["engine_version"] == "2024.1"
    assert body["pattern_table_version"] == "2024.1"


def test_analyze_content(client):
    resp = client.post("/analyze", json={"content": "https://www.google.com/maps"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["risk_level"] == "LOW"
    assert body["payload_type"] == "url"
    assert body["probabilities"] == {"malicious": 10, "fake": 5, "authentic": 90}
    assert body["matched_patterns"] == []
    assert body["signals"] == []
    assert body["degraded"] is False
    assert body["engine_version"] == "2024.1"
    assert "X-Request-ID" in resp.headers


def test_analyze_flagged_content_explains_signals(client):
    resp = client.post("/analyze", json={"content": "https://bit.ly/3xYz"})
    body = resp.json()
    assert body["risk_level"] in ("HIGH", "CRITICAL")
    assert body["matched_patterns"] == ["bit.ly"]
    assert len(body["signals"]) == 1
    assert "shortener" in body["signals"][0]


def test_analyze_image_data_url(client, fake_assessment):
    data = "data:image/png;base64," + base64.b64encode(b"not really a png").decode()
    resp = client.post("/analyze", json={"image_base64": data})
    assert resp.status_code == 200
    assert resp.json()["original_content"] == "IMAGE_FORENSICS_ONLY"
    assert resp.json()["payload_type"] is None
    assert fake_assessment.calls == [(None, b"not really a png")]


def test_analyze_requires_input(client):
    resp = client.post("/analyze", json={"content": "  "})
    assert resp.status_code == 400


def test_analyze_rejects_bad_base64(client):
    resp = client.post("/analyze", json={"image_base64": "***"})
    assert resp.status_code == 400


def test_analyze_rejects_oversized_content(client):
    resp = client.post("/analyze", json={"content": "a" * 10_001})
    assert resp.status_code == 413


def test_analyze_upstream_failure_is_still_renderable(client, fake_assessment):
    fake_assessment.error = ForensicServiceError("UNAUTHORIZED")
    resp = client.post("/analyze", json={"content": "https://example.com"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["degraded"] is True
    assert body["error_code"] == "UNAUTHORIZED"
    assert body["risk_level"] == "SUSPICIOUS"
    assert body["explanation"]


def test_qr_upload_without_decodable_code_runs_image_only_scan(client, fake_assessment):
    files = {"image": ("scan.png", b"definitely not an image", "image/png")}
    resp = client.post("/qr", files=files)
    assert resp.status_code == 200
    assert resp.json()["original_content"] == "IMAGE_FORENSICS_ONLY"
    assert fake_assessment.calls == [(None, b"definitely not an image")]


def test_qr_upload_scans_decoded_payload_with_image(client, fake_assessment, qr_png):
    files = {"image": ("scan.png", qr_png, "image/png")}
    resp = client.post("/qr", files=files)
    assert resp.status_code == 200
    body = resp.json()
    assert fake_assessment.calls == [("https://bit.ly/x", qr_png)]
    assert body["original_content"] == "https://bit.ly/x"
    assert body["matched_patterns"] == ["bit.ly"]
    assert body["risk_level"] in ("HIGH", "CRITICAL")


def test_qr_upload_rejects_empty_file(client):
    resp = client.post("/qr", files={"image": ("scan.png", b"", "image/png")})
    assert resp.status_code == 400


def test_chat(client, monkeypatch):
    import qrshield.main as main

    monkeypatch.setattr(main, "assistant_reply", lambda message, context=None: f"echo: {message}")
    resp = client.post("/chat", json={"message": "Is bit.ly safe?"})
    assert resp.status_code == 200
    assert resp.json() == {"reply": "echo: Is bit.ly safe?"}


def test_chat_rejects_empty_message(client):
    assert client.post("/chat", json={"message": " "}).status_code == 400


def test_invalid_body_returns_json_422(client):
    resp = client.post("/chat", json={"context": "no message"})
    assert resp.status_code == 422
    assert resp.json()["error"] == "Invalid request."
