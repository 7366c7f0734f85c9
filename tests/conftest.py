"""
Pytest fixtures for QRShield tests. The forensic model call is always
replaced; no test talks to the network.
"""

from __future__ import annotations

import pytest

from qrshield.engine import AnalysisEngine, ProbabilityTriple


@pytest.fixture
def engine():
    return AnalysisEngine()


@pytest.fixture
def triple():
    def make(malicious=0, fake=0, authentic=0):
        return ProbabilityTriple(malicious=malicious, fake=fake, authentic=authentic)

    return make


@pytest.fixture
def fake_assessment(monkeypatch):
    """
    Replace the forensic call made by the scan service.

    Set `.response` to the dict the model should "return", or `.error` to a
    ForensicServiceError to raise. Calls are recorded in `.calls`.
    """
    import qrshield.scan_service as scan_service

    class FakeAssessment:
        def __init__(self):
            self.response = {
                "malicious_score": 10,
                "fake_score": 5,
                "authentic_score": 90,
                "explanation": "Direct link to a well-known domain.",
                "recommendations": ["Safe to open."],
            }
            self.error = None
            self.calls = []

        def __call__(self, payload, image_bytes=None):
            self.calls.append((payload, image_bytes))
            if self.error is not None:
                raise self.error
            return self.response

    fake = FakeAssessment()
    monkeypatch.setattr(scan_service, "request_assessment", fake)
    return fake


@pytest.fixture
def client(fake_assessment):
    """FastAPI TestClient with the forensic call stubbed out."""
    from fastapi.testclient import TestClient

    from qrshield.main import app

    return TestClient(app)


QR_TEXT = "https://bit.ly/x"


@pytest.fixture
def qr_png():
    """PNG bytes of a real QR code for QR_TEXT, scaled up with a quiet zone."""
    import cv2

    modules = cv2.QRCodeEncoder.create().encode(QR_TEXT)
    img = cv2.resize(modules, None, fx=8, fy=8, interpolation=cv2.INTER_NEAREST)
    img = cv2.copyMakeBorder(img, 32, 32, 32, 32, cv2.BORDER_CONSTANT, value=255)
    ok, buf = cv2.imencode(".png", img)
    assert ok
    return buf.tobytes()
