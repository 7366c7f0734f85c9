# qrshield/models.py

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from qrshield.engine import AnalysisResult
from qrshield.engine.types import IMAGE_ONLY_SENTINEL
from qrshield.qr_scanner.payload import describe_payload
from qrshield.utils.reason_cleaner import clean_reasons


class AnalyzeRequest(BaseModel):
    content: Optional[str] = Field(None, description="Decoded QR payload, if any.")
    image_base64: Optional[str] = Field(
        None, description="Captured image, raw base64 or a data URL."
    )


class ChatRequest(BaseModel):
    message: str
    context: Optional[str] = None


class ChatResponse(BaseModel):
    reply: str


class Probabilities(BaseModel):
    malicious: float
    fake: float
    authentic: float


class AnalysisResponse(BaseModel):
    risk_score: int = Field(..., ge=0, le=100)
    risk_level: Literal["LOW", "MODERATE", "SUSPICIOUS", "HIGH", "CRITICAL"]
    probabilities: Probabilities
    explanation: str
    recommendations: List[str]
    original_content: str
    payload_type: Optional[str] = None
    matched_patterns: List[str] = []
    signals: List[str] = []
    degraded: bool = False
    error_code: Optional[str] = None
    engine_version: str

    @classmethod
    def from_result(cls, result: AnalysisResult, engine_version: str) -> "AnalysisResponse":
        payload_type = None
        if result.original_content != IMAGE_ONLY_SENTINEL:
            payload_type = describe_payload(result.original_content).qr_type

        return cls(
            risk_score=result.risk_score,
            risk_level=result.risk_level.value,
            probabilities=Probabilities(**result.probabilities.as_dict()),
            explanation=result.explanation,
            recommendations=list(result.recommendations),
            original_content=result.original_content,
            payload_type=payload_type,
            matched_patterns=list(result.matched_patterns),
            signals=clean_reasons(result.matched_rules),
            degraded=result.degraded,
            error_code=result.error_code,
            engine_version=engine_version,
        )
